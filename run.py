#!/usr/bin/env python3
"""
Entry point for the feature flag tenant editor.
Wraps flag_tenants/cli.py so it can run from a source checkout.
"""
import os
import sys

# Ensure project root is in python path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from flag_tenants.config.dotenv_loader import load_dotenv_files

# Explicit dotenv loading for local/dev. In prod this is a no-op.
load_dotenv_files()

from flag_tenants.cli import app

if __name__ == "__main__":
    app()

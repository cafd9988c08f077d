"""
Explicit dotenv loader.

Rules:
- In production (`ENVIRONMENT=prod`): do not load `.env` / `.env.local`.
- Otherwise: load `.env` then `.env.local` (local overrides).

This must remain dependency-light and MUST NOT import `flag_tenants.config.config`.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv


def _env(name: str, default: str | None = None) -> str | None:
    v = os.getenv(name)
    return v if v is not None else default


def _is_prod_env() -> bool:
    return str(_env("ENVIRONMENT", "local") or "local").strip().lower() == "prod"


def load_dotenv_files(*, root: Path | None = None) -> None:
    """
    Load dotenv files from the working directory (or `root`).

    In prod, this is a no-op.
    """
    if _is_prod_env():
        return

    root = root or Path.cwd()
    env_path = root / ".env"
    env_local_path = root / ".env.local"

    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)

    if env_local_path.exists():
        load_dotenv(dotenv_path=env_local_path, override=True)

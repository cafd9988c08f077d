"""
Entrypoint guard: the modules the console script and run.py depend on
must import cleanly.
"""
import importlib
import importlib.util
import os

import pytest


ENTRYPOINTS = [
    "flag_tenants.cli",
    "flag_tenants.workflow",
]


@pytest.mark.parametrize("module_path", ENTRYPOINTS)
def test_entrypoint_imports(module_path: str):
    try:
        mod = importlib.import_module(module_path)
        assert mod is not None, f"{module_path} imported as None"
    except Exception as e:
        pytest.fail(f"Entrypoint '{module_path}' failed to import: {e}")


def test_run_py_present():
    """run.py is the source-checkout entrypoint."""
    spec = importlib.util.spec_from_file_location(
        "run",
        os.path.join(os.path.dirname(__file__), "..", "..", "run.py"),
    )
    assert spec is not None, "run.py not found at repo root"

"""Pytest fixtures for infrastructure tests."""

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent

# Components import the package absolutely (lamp_iac.*)
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def iac_project_root():
    """Return the lamp_iac package directory."""
    return PROJECT_ROOT / "lamp_iac"


@pytest.fixture
def python_files_in_iac(iac_project_root):
    """Return all Python files in the lamp_iac package."""
    return [f for f in iac_project_root.rglob("*.py") if "__pycache__" not in str(f)]


@pytest.fixture
def stack_config():
    """Stack configuration built from the defaults."""
    from lamp_iac.configs.environment import default_config

    return default_config("test")

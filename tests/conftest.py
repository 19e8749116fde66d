"""
Pytest configuration and shared fixtures for appendtree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_tree = _common.make_tree


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def empty_tree():
    """Provide a tree with no keys appended."""
    return make_tree(())


@pytest.fixture
def demo_tree():
    """Provide a tree with keys 5, 10, 30 appended."""
    return make_tree((5, 10, 30))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep APPENDTREE_* variables from the outer environment out of tests."""
    for name in (
        "APPENDTREE_LOG_LEVEL",
        "APPENDTREE_LOG_FILE",
        "APPENDTREE_HEX_PREFIX",
        "APPENDTREE_OUTPUT_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_default_config():
    """Drop any process-wide config a test (or the CLI) installed."""
    from core.config.runtime import set_default_config

    set_default_config(None)
    yield
    set_default_config(None)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )

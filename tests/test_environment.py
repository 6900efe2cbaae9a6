"""Environment validation tests for dre-extract."""

import sys


def test_python_version() -> None:
    """Verify Python version is 3.12 or higher."""
    assert sys.version_info >= (3, 12), f"Python 3.12+ required, got {sys.version}"


def test_core_imports() -> None:
    """Verify core packages can be imported."""
    import dotenv  # noqa: F401
    import httpx  # noqa: F401
    import pandas as pd  # noqa: F401


def test_project_structure() -> None:
    """Verify project module structure."""
    from dre_extract import __version__, get_version
    from dre_extract.config import CONFIG_DIR, PROJECT_ROOT

    assert __version__ == "0.1.0"
    assert get_version() == __version__
    assert PROJECT_ROOT.exists()
    assert CONFIG_DIR.exists()


def test_config_loads() -> None:
    """Verify config.json can be loaded."""
    from dre_extract.config import get_config

    config = get_config()
    assert "source" in config
    assert "extraction" in config
    assert "report" in config


def test_logs_directory_exists() -> None:
    """Verify the log directory is created on import."""
    from dre_extract.config import LOGS_DIR

    assert LOGS_DIR.exists()


def test_public_api() -> None:
    """Verify the package exposes the service entry points."""
    import dre_extract

    assert callable(dre_extract.create_service)
    assert dre_extract.DREDataService is not None

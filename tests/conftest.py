"""Shared test fixtures for the QingCloud config test suite."""

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog


@pytest.fixture
def home_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the home directory at an empty temporary directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("QINGCLOUD_CONFIG_FILE", raising=False)
    return home


@pytest.fixture
def write_yaml(tmp_path: Path) -> Callable[[str, str], Path]:
    """Factory fixture to create YAML files in a temporary directory.

    Usage:
        def test_something(write_yaml):
            path = write_yaml("config.yaml", "host: example.com")
    """

    def _write_yaml(filename: str, content: str) -> Path:
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write_yaml


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the loader settings cache before and after each test.

    This ensures test isolation for environment-driven settings.
    """
    from qingcloud.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Restore structlog defaults and the package logger after each test."""
    yield
    structlog.reset_defaults()
    package_logger = logging.getLogger("qingcloud")
    for handler in list(package_logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True

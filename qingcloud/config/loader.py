"""YAML configuration document loading and user file management."""

from pathlib import Path
from typing import Any

import yaml

from qingcloud.config.defaults import DEFAULT_CONFIG_FILE_CONTENT
from qingcloud.config.exceptions import DecodeError, FileIOError
from qingcloud.config.settings import get_settings
from qingcloud.observability.logging import get_logger

logger = get_logger(__name__)


def expand_home(path: str | Path) -> Path:
    """Expand a leading '~/' to the current user's home directory.

    Only the '~/' shorthand is expanded; '~user' forms are left alone.
    """
    raw = str(path)
    if raw.startswith("~/"):
        return Path.home() / raw[2:]
    return Path(raw)


def get_user_config_file_path() -> Path:
    """Get the per-user configuration file path.

    Defaults to ~/.qingcloud/config.yaml and can be overridden with the
    QINGCLOUD_CONFIG_FILE env var.
    """
    return expand_home(get_settings().config_file)


def decode_yaml(content: bytes | str) -> dict[str, Any]:
    """Decode a YAML configuration document into a dictionary.

    Keys with a null value are dropped so they do not overwrite values
    from a lower layer. An empty document decodes to an empty dict.

    Args:
        content: Raw YAML document

    Returns:
        Mapping of document keys to values

    Raises:
        DecodeError: If the YAML syntax is invalid or the document is not
            a mapping
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        logger.error("config_parse_failed", error=str(exc))
        raise DecodeError(f"Invalid YAML configuration: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.error("config_parse_failed", error="document is not a mapping")
        raise DecodeError(
            f"Configuration document must be a mapping, got {type(data).__name__}"
        )

    return {str(key): value for key, value in data.items() if value is not None}


def read_config_file(path: str | Path) -> bytes:
    """Read a configuration file, expanding a leading '~/'.

    Raises:
        FileIOError: If the file doesn't exist or can't be read
    """
    file_path = expand_home(path)
    try:
        return file_path.read_bytes()
    except OSError as exc:
        logger.error("config_file_unreadable", path=str(file_path), error=str(exc))
        raise FileIOError(
            f"Configuration file not readable: {file_path}", path=file_path
        ) from exc


def ensure_user_config_exists(path: str | Path | None = None) -> Path:
    """Install the built-in default document at the user config path.

    Existing files are never overwritten.

    Args:
        path: Target file, defaults to the per-user configuration file

    Returns:
        The path of the (possibly newly written) configuration file

    Raises:
        FileIOError: If the file or its parent directory can't be created
    """
    file_path = expand_home(path) if path is not None else get_user_config_file_path()
    if file_path.exists():
        return file_path

    logger.warning("default_config_installed", path=str(file_path))
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(DEFAULT_CONFIG_FILE_CONTENT, encoding="utf-8")
    except OSError as exc:
        raise FileIOError(
            f"Could not install default configuration at {file_path}", path=file_path
        ) from exc

    return file_path

"""Configuration exception hierarchy.

All configuration errors inherit from ConfigError, which keeps the
human-readable message on the instance so callers can report it without
string-formatting the exception.
"""

from pathlib import Path


class ConfigError(Exception):
    """Base exception for all configuration errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class URLParseError(ConfigError):
    """Raised when an endpoint string is not a usable URL."""


class MissingPortError(URLParseError):
    """Raised when an endpoint URL has no explicit port."""


class DecodeError(ConfigError):
    """Raised when a document cannot be decoded into a Config."""


class FileIOError(ConfigError):
    """Raised when a configuration file cannot be read or written."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = path

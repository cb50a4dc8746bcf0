"""QingCloud SDK configuration.

Usage:
    from qingcloud import Config

    config = Config.from_credentials("ACCESS_KEY_ID", "SECRET_ACCESS_KEY")
"""

from qingcloud.config import (
    Config,
    ConfigError,
    DecodeError,
    FileIOError,
    MissingPortError,
    URLParseError,
    ensure_user_config_exists,
)

__all__ = [
    "Config",
    "ConfigError",
    "DecodeError",
    "FileIOError",
    "MissingPortError",
    "URLParseError",
    "ensure_user_config_exists",
]

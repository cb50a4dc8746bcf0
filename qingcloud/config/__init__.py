"""Configuration loading for the QingCloud SDK.

Configuration is resolved in layers, later layers replacing earlier ones:
1. The built-in default document
2. A user file (~/.qingcloud/config.yaml) or any other YAML file/content
3. Explicit credentials and endpoint passed to a constructor

Usage:
    from qingcloud.config import Config, ensure_user_config_exists

    ensure_user_config_exists()
    config = Config.default()
    config.load_from_user_path()

    config = Config.from_endpoint("AKID", "SECRET", "https://api.example.com:443/iaas")
"""

from qingcloud.config.defaults import DEFAULT_CONFIG_FILE_CONTENT, DEFAULT_USER_CONFIG_FILE
from qingcloud.config.exceptions import (
    ConfigError,
    DecodeError,
    FileIOError,
    MissingPortError,
    URLParseError,
)
from qingcloud.config.loader import (
    decode_yaml,
    ensure_user_config_exists,
    expand_home,
    get_user_config_file_path,
    read_config_file,
)
from qingcloud.config.models import Config, Endpoint, LogLevel, Protocol, parse_endpoint
from qingcloud.config.settings import LoaderSettings, get_settings, reload_settings

__all__ = [
    "DEFAULT_CONFIG_FILE_CONTENT",
    "DEFAULT_USER_CONFIG_FILE",
    "Config",
    "ConfigError",
    "DecodeError",
    "Endpoint",
    "FileIOError",
    "LoaderSettings",
    "LogLevel",
    "MissingPortError",
    "Protocol",
    "URLParseError",
    "decode_yaml",
    "ensure_user_config_exists",
    "expand_home",
    "get_settings",
    "get_user_config_file_path",
    "parse_endpoint",
    "read_config_file",
    "reload_settings",
]

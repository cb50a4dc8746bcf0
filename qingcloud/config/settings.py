"""Loader settings read from QINGCLOUD_* environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from qingcloud.config.defaults import DEFAULT_USER_CONFIG_FILE

LogFormat = Literal["console", "json"]


class LoaderSettings(BaseSettings):
    """Settings that control where and how configuration is loaded.

    These never hold SDK connection values themselves; those come from the
    YAML documents handled by Config.
    """

    model_config = SettingsConfigDict(
        env_prefix="QINGCLOUD_",
        case_sensitive=False,
        extra="ignore",
    )

    config_file: str = Field(
        default=DEFAULT_USER_CONFIG_FILE,
        description="Per-user configuration file, '~/' is expanded",
    )
    log_format: LogFormat = Field(
        default="console",
        description="Log output format - 'console' for humans, 'json' for collectors",
    )
    redact_secrets: bool = Field(
        default=True,
        description="Replace credential values in log events",
    )


@lru_cache(maxsize=1)
def get_settings() -> LoaderSettings:
    """Get the singleton loader settings instance.

    The result is cached for the lifetime of the process.
    Call `get_settings.cache_clear()` or `reload_settings()` to re-read
    the environment.
    """
    return LoaderSettings()


def reload_settings() -> LoaderSettings:
    """Clear the settings cache and read the environment again."""
    get_settings.cache_clear()
    return get_settings()

"""SDK connection configuration model.

A Config is built from layered YAML documents: the built-in default
document always forms the base, and a user file or in-memory content is
decoded on top of it. Every load replaces all fields at once, so a Config
never exposes a half-applied document.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal
from urllib.parse import urlsplit

import httpx
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    SecretStr,
    ValidationError,
    field_validator,
)

from qingcloud.config.connection import build_connection
from qingcloud.config.defaults import DEFAULT_CONFIG_FILE_CONTENT
from qingcloud.config.exceptions import DecodeError, MissingPortError, URLParseError
from qingcloud.config.loader import decode_yaml, get_user_config_file_path, read_config_file
from qingcloud.observability.logging import get_logger

logger = get_logger(__name__)

LogLevel = Literal["debug", "info", "warn", "error", "fatal"]
Protocol = Literal["http", "https"]

_LOG_LEVEL_ALIASES = {"warning": "warn", "critical": "fatal"}
_SUPPORTED_SCHEMES = ("http", "https")


@dataclass(frozen=True)
class Endpoint:
    """Connection target extracted from an endpoint URL."""

    protocol: str
    host: str
    port: int
    uri: str


def parse_endpoint(endpoint: str) -> Endpoint:
    """Split an endpoint URL of the form scheme://host:port[/path].

    Args:
        endpoint: Endpoint URL, the port is mandatory

    Returns:
        The parsed Endpoint

    Raises:
        MissingPortError: If the URL has no port segment
        URLParseError: If the URL can't be parsed or has an invalid port,
            no host, or a scheme other than http/https
    """
    try:
        parts = urlsplit(endpoint)
    except ValueError as exc:
        raise URLParseError(f"Invalid endpoint URL {endpoint!r}: {exc}") from exc

    try:
        port = parts.port
    except ValueError as exc:
        raise URLParseError(f"Invalid port in endpoint URL {endpoint!r}: {exc}") from exc

    if port is None:
        raise MissingPortError(
            f"Endpoint URL {endpoint!r} must include a port number, e.g. https://host:443"
        )
    if port < 1:
        raise URLParseError(f"Port in endpoint URL {endpoint!r} must be between 1 and 65535")
    if not parts.hostname:
        raise URLParseError(f"Endpoint URL {endpoint!r} has no host")
    if parts.scheme not in _SUPPORTED_SCHEMES:
        raise URLParseError(
            f"Endpoint URL {endpoint!r} must use one of {', '.join(_SUPPORTED_SCHEMES)}"
        )

    return Endpoint(
        protocol=parts.scheme,
        host=_netloc_host(parts.netloc),
        port=port,
        uri=parts.path,
    )


def _netloc_host(netloc: str) -> str:
    """Host part of a netloc in its original case, IPv6 brackets removed."""
    host_port = netloc.rpartition("@")[2]
    if host_port.startswith("["):
        return host_port[1 : host_port.index("]")]
    return host_port.rpartition(":")[0]


class Config(BaseModel):
    """Connection configuration for the QingCloud SDK.

    Field aliases match the keys of the YAML document. The attached HTTP
    client is owned by the Config and replaced whenever a load changes the
    connection timeout.

    Usage:
        config = Config.default()
        config.load_from_file("~/.qingcloud/config.yaml")
        configure_logging(config.log_level)
        response = config.connection.get(config.base_url)
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        validate_assignment=True,
        coerce_numbers_to_str=True,
    )

    access_key_id: SecretStr = Field(
        default=SecretStr(""),
        alias="qy_access_key_id",
        description="Access key ID",
    )
    secret_access_key: SecretStr = Field(
        default=SecretStr(""),
        alias="qy_secret_access_key",
        description="Secret access key",
    )

    host: str = Field(default="", description="API host name")
    port: int = Field(default=443, ge=1, le=65535, description="API port")
    protocol: Protocol = Field(default="https", description="URL scheme")
    uri: str = Field(default="", description="URI path prefix")
    connection_retries: int = Field(
        default=0,
        ge=0,
        description="Retry count, consumed by the request layer",
    )
    connection_timeout: int = Field(
        default=0,
        ge=0,
        description="Connect timeout in seconds, 0 disables it",
    )

    log_level: LogLevel = Field(default="warn", description="Log level")

    zone: str = Field(default="", description="Zone identifier")

    _connection: httpx.Client | None = PrivateAttr(default=None)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            lowered = value.strip().lower()
            return _LOG_LEVEL_ALIASES.get(lowered, lowered)
        return value

    @field_validator("protocol", mode="before")
    @classmethod
    def normalize_protocol(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    # Constructors

    @classmethod
    def default(cls) -> "Config":
        """Create a Config from the built-in defaults.

        The client enforces the default connect timeout.

        Raises:
            DecodeError: If the built-in document is malformed
        """
        config = cls()
        config.load_default()
        config._replace_connection(build_connection(config.connection_timeout))
        return config

    @classmethod
    def from_credentials(cls, access_key_id: str, secret_access_key: str) -> "Config":
        """Create a Config from the built-in defaults and the given credentials.

        The client uses httpx default transport settings without timeouts.
        """
        config = cls()
        config.load_default()
        config.access_key_id = SecretStr(access_key_id)
        config.secret_access_key = SecretStr(secret_access_key)
        config._replace_connection(build_connection())
        return config

    @classmethod
    def from_endpoint(
        cls,
        access_key_id: str,
        secret_access_key: str,
        endpoint: str,
    ) -> "Config":
        """Create a Config for an explicit endpoint URL.

        Host, port, protocol and URI come from the endpoint; everything
        else comes from the built-in defaults.

        Args:
            access_key_id: Access key ID
            secret_access_key: Secret access key
            endpoint: URL of the form scheme://host:port[/path]

        Raises:
            MissingPortError: If the endpoint has no port
            URLParseError: If the endpoint is not a valid URL
        """
        target = parse_endpoint(endpoint)

        config = cls.from_credentials(access_key_id, secret_access_key)
        config.host = target.host
        config.port = target.port
        config.protocol = target.protocol  # type: ignore[assignment]
        config.uri = target.uri
        return config

    # Loaders

    def load_default(self) -> None:
        """Replace all fields with the built-in defaults.

        Raises:
            DecodeError: If the built-in document is malformed
        """
        previous_timeout = self.connection_timeout
        self._apply(self._resolve(DEFAULT_CONFIG_FILE_CONTENT))

        if self._connection is not None and self.connection_timeout != previous_timeout:
            self._replace_connection(build_connection(self.connection_timeout))

    def load_from_user_path(self) -> None:
        """Load the per-user configuration file.

        This only reads; call `ensure_user_config_exists()` first to
        install the default file on a fresh machine.

        Raises:
            FileIOError: If the user file is missing or unreadable
            DecodeError: If the file content is malformed
        """
        self.load_from_file(get_user_config_file_path())

    def load_from_file(self, path: str | Path) -> None:
        """Load configuration from a file path, expanding a leading '~/'.

        Raises:
            FileIOError: If the file can't be read
            DecodeError: If the file content is malformed
        """
        self.load_from_content(read_config_file(path))

    def load_from_content(self, content: bytes | str) -> None:
        """Load configuration from a YAML document held in memory.

        The built-in defaults are applied first and the document on top of
        them, so keys missing from the document take their default values.
        The HTTP client is rebuilt with the resolved connect timeout.

        Raises:
            DecodeError: If the content is not a valid configuration
        """
        self._apply(self._resolve(DEFAULT_CONFIG_FILE_CONTENT, content))
        self._replace_connection(build_connection(self.connection_timeout))

        logger.debug(
            "config_loaded",
            host=self.host,
            port=self.port,
            zone=self.zone,
            connection_timeout=self.connection_timeout,
        )

    # Connection

    @property
    def connection(self) -> httpx.Client | None:
        """HTTP client configured for this Config."""
        return self._connection

    @property
    def base_url(self) -> str:
        """Root URL of the API, e.g. https://api.qingcloud.com:443/iaas."""
        return f"{self.protocol}://{self.host}:{self.port}{self.uri}"

    def close(self) -> None:
        """Close the HTTP client."""
        self._replace_connection(None)

    def __enter__(self) -> "Config":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # Internals

    def _resolve(self, *documents: bytes | str) -> "Config":
        """Decode documents in order into a fresh, validated Config."""
        values: dict[str, Any] = {}
        for document in documents:
            values.update(decode_yaml(document))

        try:
            return type(self).model_validate(values)
        except ValidationError as exc:
            logger.error("config_validation_failed", error_count=exc.error_count())
            raise DecodeError(f"Invalid configuration values: {exc}") from exc

    def _apply(self, resolved: "Config") -> None:
        for name in type(self).model_fields:
            setattr(self, name, getattr(resolved, name))

    def _replace_connection(self, client: httpx.Client | None) -> None:
        previous, self._connection = self._connection, client
        if previous is not None and previous is not client:
            previous.close()

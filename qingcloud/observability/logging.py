"""Structured logging configuration using structlog.

Provides console logging for development and JSON logging for collectors,
with credential redaction so access keys never reach log output.
"""

import logging
import sys
from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Any, cast

import structlog
from structlog.types import EventDict, WrappedLogger

if TYPE_CHECKING:
    from qingcloud.config.settings import LoaderSettings

PACKAGE_LOGGER = "qingcloud"

# Silent unless the application or setup_logging adds a handler
logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())

# Sensitive key names (O(1) lookup)
SENSITIVE_KEYS: frozenset[str] = frozenset({
    "qy_access_key_id",
    "qy_secret_access_key",
    "access_key_id",
    "secret_access_key",
    "access_key",
    "secret_key",
    "secret",
    "password",
    "passwd",
    "token",
    "authorization",
    "signature",
    "credential",
    "credentials",
})

REDACTED = "[REDACTED]"

# Accepts the SDK's own level names alongside the stdlib spellings
LEVELS: dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "WARN": 30,
    "WARNING": 30,
    "ERROR": 40,
    "FATAL": 50,
    "CRITICAL": 50,
}


class SecretRedactor:
    """Processor that redacts credential values from log events.

    Matching is by key name only; values under a sensitive key are
    replaced wherever they appear, including nested dicts and lists.
    """

    def __call__(
        self,
        _logger: WrappedLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        """Redact secrets from event dictionary."""
        return cast(EventDict, self._redact_dict(event_dict))

    def _redact_dict(self, data: MutableMapping[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, value in data.items():
            if key.lower() in SENSITIVE_KEYS:
                result[key] = REDACTED
            elif isinstance(value, dict):
                result[key] = self._redact_dict(value)
            elif isinstance(value, list):
                result[key] = self._redact_list(value)
            else:
                result[key] = value
        return result

    def _redact_list(self, items: list[Any]) -> list[Any]:
        result: list[Any] = []
        for item in items:
            if isinstance(item, dict):
                result.append(self._redact_dict(item))
            elif isinstance(item, list):
                result.append(self._redact_list(item))
            else:
                result.append(item)
        return result


def level_number(level: str) -> int:
    """Convert a level name to its numeric value, defaulting to INFO."""
    return LEVELS.get(level.upper(), 20)


class _StreamHandler(logging.StreamHandler):
    """Handler installed by setup_logging, replaced on reconfiguration."""


def setup_logging(
    level: str = "WARN",
    format: str = "console",
    redact_secrets: bool = True,
) -> None:
    """Configure structured logging.

    Events are rendered by structlog and written to stderr through the
    stdlib "qingcloud" logger. Calling this again replaces the previous
    handler and level.

    Args:
        level: Minimum log level (debug, info, warn, error, fatal)
        format: Output format - "json" for collectors, "console" for humans
        redact_secrets: Whether to redact credentials from logs
    """
    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if redact_secrets:
        processors.append(SecretRedactor())

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if isinstance(handler, _StreamHandler):
            package_logger.removeHandler(handler)

    handler = _StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level_number(level))
    package_logger.propagate = False


def configure_logging(level: str, settings: "LoaderSettings | None" = None) -> None:
    """Configure logging at an explicitly supplied level.

    The level normally comes from `Config.log_level`; format and redaction
    come from the loader settings.

    Args:
        level: Level resolved by the caller
        settings: Loader settings, defaults to the cached instance
    """
    if settings is None:
        from qingcloud.config.settings import get_settings

        settings = get_settings()

    setup_logging(
        level=level,
        format=settings.log_format,
        redact_secrets=settings.redact_secrets,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance bound to the given name.

    The logger writes through the stdlib logger of the same name, so
    nothing is emitted until setup_logging (or the application's own
    logging setup) attaches a handler.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        A bound structlog logger
    """
    return cast(
        structlog.stdlib.BoundLogger,
        structlog.wrap_logger(
            logging.getLogger(name),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        ),
    )

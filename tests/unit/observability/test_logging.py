"""Tests for structured logging."""

import json

import pytest
import structlog

from qingcloud.config.settings import LoaderSettings
from qingcloud.observability.logging import (
    REDACTED,
    SecretRedactor,
    configure_logging,
    get_logger,
    level_number,
    setup_logging,
)


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_json_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should emit one JSON object per event."""
        setup_logging(level="info", format="json", redact_secrets=False)
        get_logger("qingcloud.test").info("test_message", zone="pek3a")

        event = json.loads(capsys.readouterr().err.strip())
        assert event["event"] == "test_message"
        assert event["zone"] == "pek3a"
        assert event["level"] == "info"

    def test_setup_console_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should write human-readable output."""
        setup_logging(level="debug", format="console", redact_secrets=False)
        get_logger("qingcloud.test").debug("test_message")

        assert "test_message" in capsys.readouterr().err

    def test_level_filters_events(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Events below the configured level are dropped."""
        setup_logging(level="warn", format="json")
        logger = get_logger("qingcloud.test")
        logger.info("dropped")
        logger.warning("kept")

        output = capsys.readouterr().err
        assert "dropped" not in output
        assert "kept" in output

    def test_secrets_redacted(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Credential values never reach the output when redaction is on."""
        setup_logging(level="info", format="json", redact_secrets=True)
        get_logger("qingcloud.test").info("loaded", qy_secret_access_key="TOPSECRET")

        output = capsys.readouterr().err
        assert "TOPSECRET" not in output
        assert json.loads(output.strip())["qy_secret_access_key"] == REDACTED


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_uses_explicit_level(self, capsys: pytest.CaptureFixture[str]) -> None:
        """The supplied level controls filtering."""
        configure_logging("error", LoaderSettings(log_format="json"))
        logger = get_logger("qingcloud.test")
        logger.warning("dropped")
        logger.error("kept")

        output = capsys.readouterr().err
        assert "dropped" not in output
        assert json.loads(output.strip())["event"] == "kept"

    def test_defaults_to_cached_settings(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Without settings the environment-driven ones are used."""
        monkeypatch.setenv("QINGCLOUD_LOG_FORMAT", "json")
        configure_logging("info")
        get_logger("qingcloud.test").info("from_env")

        assert json.loads(capsys.readouterr().err.strip())["event"] == "from_env"


class TestLevelNumber:
    """Tests for level_number function."""

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("debug", 10),
            ("INFO", 20),
            ("warn", 30),
            ("WARNING", 30),
            ("error", 40),
            ("fatal", 50),
            ("critical", 50),
            ("unknown", 20),
        ],
    )
    def test_level_names(self, level: str, expected: int) -> None:
        """SDK and stdlib level names map to numeric levels."""
        assert level_number(level) == expected


class TestSecretRedactor:
    """Tests for SecretRedactor processor."""

    def test_redacts_sensitive_keys(self) -> None:
        """Values under sensitive key names are replaced."""
        redactor = SecretRedactor()
        result = redactor(
            None,
            "info",
            {"event": "x", "qy_access_key_id": "AKID", "Secret_Access_Key": "S", "host": "h"},
        )
        assert result["qy_access_key_id"] == REDACTED
        assert result["Secret_Access_Key"] == REDACTED
        assert result["host"] == "h"

    def test_redacts_nested_structures(self) -> None:
        """Nested dicts and lists are redacted recursively."""
        redactor = SecretRedactor()
        result = redactor(
            None,
            "info",
            {
                "event": "x",
                "config": {"password": "p", "zone": "pek3a"},
                "items": [{"token": "t"}, [{"secret": "s"}], "plain"],
            },
        )
        assert result["config"] == {"password": REDACTED, "zone": "pek3a"}
        assert result["items"] == [{"token": REDACTED}, [{"secret": REDACTED}], "plain"]

    def test_non_sensitive_values_untouched(self) -> None:
        """Ordinary values pass through unchanged."""
        redactor = SecretRedactor()
        event = {"event": "config_loaded", "host": "api.qingcloud.com", "port": 443}
        assert redactor(None, "info", event) == event


class TestGetLogger:
    """Tests for get_logger before and after setup."""

    def test_silent_until_configured(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Nothing is written at any level without setup_logging."""
        structlog.reset_defaults()
        logger = get_logger("qingcloud.test")
        logger.debug("debug_event")
        logger.error("error_event")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_module_logger_follows_later_setup(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A logger created before setup_logging uses the new configuration."""
        logger = get_logger("qingcloud.test.early")
        setup_logging(level="info", format="json")
        logger.info("after_setup")

        event = json.loads(capsys.readouterr().err.strip())
        assert event["event"] == "after_setup"
        assert event["logger"] == "qingcloud.test.early"

    def test_reconfigure_replaces_handler(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Calling setup_logging twice doesn't duplicate output."""
        setup_logging(level="info", format="json")
        setup_logging(level="info", format="json")
        get_logger("qingcloud.test").info("once")

        lines = capsys.readouterr().err.strip().splitlines()
        assert len(lines) == 1

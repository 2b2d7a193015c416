"""Tests for monitoring logging module."""

from logging import getLogger
from logging.handlers import RotatingFileHandler
from pathlib import Path

from structlog.contextvars import get_contextvars
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer

from wanderplan.configs import Settings
from wanderplan.monitoring import bind_request_id, clear_context, configure_logging
from wanderplan.monitoring.logging import (
    get_renderer,
    redact_secrets,
    sanitize_event_dict,
    sanitize_headers,
    sanitize_log_message,
)


class TestSanitizers:
    """Tests for log sanitization helpers."""

    def test_escapes_control_characters(self) -> None:
        assert sanitize_log_message("line1\nline2\r\tend\x00") == "line1\\nline2\\r\\tend"

    def test_redacts_google_api_key(self) -> None:
        key = "AIza" + "A" * 35
        assert redact_secrets(f"using {key} now") == "using [REDACTED_API_KEY] now"

    def test_redacts_key_query_param(self) -> None:
        url = "https://generativelanguage.googleapis.com/v1beta/models?key=abc123&alt=sse"
        assert redact_secrets(url).endswith("?key=[REDACTED]&alt=sse")

    def test_redacts_email(self) -> None:
        assert redact_secrets("sent to traveler@example.com") == "sent to [REDACTED_EMAIL]"

    def test_sanitize_headers(self) -> None:
        headers = {"X-Goog-Api-Key": "secret", "Content-Type": "application/json"}
        assert sanitize_headers(headers) == {
            "X-Goog-Api-Key": "[REDACTED]",
            "Content-Type": "application/json",
        }

    def test_sanitize_event_dict(self) -> None:
        event = {
            "event": "Calling\nGemini",
            "headers": {"Authorization": "Bearer x"},
            "days": 3,
        }

        result = sanitize_event_dict(None, "info", event)

        assert result["event"] == "Calling\\nGemini"
        assert result["headers"] == {"Authorization": "[REDACTED]"}
        assert result["days"] == 3


class TestConfiguration:
    """Tests for logging setup."""

    def test_renderer_per_environment(self) -> None:
        assert isinstance(get_renderer(Settings(_env_file=None, ENVIRONMENT="development")), ConsoleRenderer)
        assert isinstance(get_renderer(Settings(_env_file=None, ENVIRONMENT="production")), JSONRenderer)

    def test_configure_logging_sets_level(self) -> None:
        configure_logging(Settings(_env_file=None, LOG_LEVEL="warning"))

        root = getLogger()
        assert root.level == 30
        assert len(root.handlers) == 1

    def test_configure_file_logging(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "wanderplan.log"
        configure_logging(Settings(_env_file=None, LOG_TO_FILE=True, LOG_FILE=str(log_file)))

        handlers = getLogger().handlers
        assert any(isinstance(h, RotatingFileHandler) for h in handlers)
        assert log_file.parent.is_dir()

        for handler in handlers:
            handler.close()
        configure_logging(Settings(_env_file=None))

    def test_request_id_context(self) -> None:
        bind_request_id("req-123")
        assert get_contextvars()["request_id"] == "req-123"

        clear_context()
        assert "request_id" not in get_contextvars()

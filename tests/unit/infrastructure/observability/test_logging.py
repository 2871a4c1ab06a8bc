"""Tests for structured logging."""

import json
import logging

from spotify_web_api.config import ObservabilitySettings, Settings
from spotify_web_api.infrastructure.observability.logging import (
    CompactExceptionFormatter,
    CorrelationIdFilter,
    CustomJsonFormatter,
    configure_logging,
    configure_logging_from_settings,
    get_correlation_id,
    set_correlation_id,
)


def make_record(message: str = "hello", exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="spotify_web_api.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=exc_info,
    )


class TestCorrelationId:
    """Test correlation ID functionality."""

    def test_set_and_get_correlation_id(self):
        """Test setting and getting correlation ID."""
        test_id = "test-123-abc"
        result = set_correlation_id(test_id)
        assert result == test_id
        assert get_correlation_id() == test_id

    def test_set_correlation_id_generates_uuid_when_none(self):
        """Test that setting None generates a UUID."""
        result = set_correlation_id(None)
        assert len(result) == 36
        assert get_correlation_id() == result

    def test_filter_adds_correlation_id(self):
        """Test the filter copies the context id onto records."""
        set_correlation_id("abc")
        record = make_record()
        assert CorrelationIdFilter().filter(record) is True
        assert record.correlation_id == "abc"


class TestLoggingConfiguration:
    """Test logging configuration."""

    def test_configure_logging_debug_level(self):
        """Test configuring logging with DEBUG level."""
        configure_logging(log_level="DEBUG", json_format=False, app_name="test-app")
        assert logging.getLogger("test").getEffectiveLevel() <= logging.DEBUG

    def test_configure_logging_replaces_handlers(self):
        """Test repeated configuration keeps a single handler."""
        configure_logging(log_level="INFO")
        configure_logging(log_level="INFO")
        assert len(logging.getLogger().handlers) == 1

    def test_http_libraries_quieted(self):
        """Test httpx and httpcore only log warnings."""
        configure_logging(log_level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_configure_from_settings(self):
        """Test settings select level and JSON output."""
        settings = Settings(
            log_level="WARNING",
            observability=ObservabilitySettings(log_json_format=True),
        )
        configure_logging_from_settings(settings)
        root_logger = logging.getLogger()
        assert root_logger.level == logging.WARNING
        assert isinstance(root_logger.handlers[0].formatter, CustomJsonFormatter)


class TestFormatters:
    """Test log formatters."""

    def test_json_formatter_fields(self):
        """Test JSON output carries level, logger and correlation id."""
        formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
        record = make_record("REST api call me/albums")
        record.correlation_id = "corr-1"
        payload = json.loads(formatter.format(record))
        assert payload["message"] == "REST api call me/albums"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "spotify_web_api.test"
        assert payload["correlation_id"] == "corr-1"

    def test_compact_exception_chain(self):
        """Test exception chains are printed root cause first."""
        try:
            try:
                raise ValueError("root cause")
            except ValueError as e:
                raise RuntimeError("wrapper") from e
        except RuntimeError as e:
            text = CompactExceptionFormatter().formatException((type(e), e, e.__traceback__))

        lines = text.splitlines()
        assert lines[0] == "╰─► ValueError: root cause"
        assert "╰─► RuntimeError: wrapper" in lines

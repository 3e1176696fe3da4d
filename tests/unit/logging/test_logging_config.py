"""Unit tests for logging configuration and the JSON formatter."""

import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from stream_selection.config.models import LoggingConfig
from stream_selection.logging import (
    JSONFormatter,
    SelectionContextFilter,
    configure_logging,
)


@pytest.fixture(autouse=True)
def _restore_root_logger(reset_root_logger):
    """Every test here reconfigures the root logger."""
    yield


def _record(msg="Test message", args=(), name="test.logger", **extra):
    record = logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname="test.py",
        lineno=42,
        msg=msg,
        args=args,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestConfigureLogging:
    """Tests for configure_logging()."""

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("info", logging.INFO),
            ("debug", logging.DEBUG),
            ("warning", logging.WARNING),
            ("error", logging.ERROR),
            ("DEBUG", logging.DEBUG),
        ],
    )
    def test_configure_level(self, level: str, expected: int) -> None:
        """Should set the root level from the config, case-insensitively."""
        configure_logging(LoggingConfig(level=level))

        assert logging.getLogger().level == expected

    def test_configure_stderr_only(self) -> None:
        """Should add a single stderr handler when no file is specified."""
        configure_logging(LoggingConfig(level="info", file=None))

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)
        assert not isinstance(root.handlers[0], RotatingFileHandler)

    def test_configure_file_handler(self, temp_dir: Path) -> None:
        """Should add a rotating file handler when a file is specified."""
        log_file = temp_dir / "test.log"
        configure_logging(
            LoggingConfig(
                level="info",
                file=log_file,
                include_stderr=False,
                max_bytes=1024,
                backup_count=2,
            )
        )

        root = logging.getLogger()
        assert len(root.handlers) == 1
        handler = root.handlers[0]
        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 1024
        assert handler.backupCount == 2

    def test_configure_file_and_stderr(self, temp_dir: Path) -> None:
        """Should add both handlers when file and include_stderr."""
        configure_logging(
            LoggingConfig(
                level="info", file=temp_dir / "test.log", include_stderr=True
            )
        )

        assert len(logging.getLogger().handlers) == 2

    def test_configure_creates_log_directory(self, temp_dir: Path) -> None:
        """Should create the log directory if it doesn't exist."""
        log_dir = temp_dir / "logs" / "nested"
        configure_logging(LoggingConfig(file=log_dir / "app.log"))

        assert log_dir.exists()

    def test_configure_fallback_on_file_error(
        self, temp_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Should fall back to stderr when the log path cannot be created."""
        blocker = temp_dir / "blocker"
        blocker.write_text("not a directory")

        configure_logging(LoggingConfig(file=blocker / "test.log"))

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0], RotatingFileHandler)
        assert "Could not open log file" in capsys.readouterr().err

    def test_configure_formatters(self) -> None:
        """Should pick the formatter matching the configured format."""
        configure_logging(LoggingConfig(format="text"))
        assert not isinstance(logging.getLogger().handlers[0].formatter, JSONFormatter)

        configure_logging(LoggingConfig(format="json"))
        assert isinstance(logging.getLogger().handlers[0].formatter, JSONFormatter)

    def test_configure_clears_existing_handlers(self) -> None:
        """Should not accumulate handlers on reconfiguration."""
        configure_logging(LoggingConfig(level="info"))
        initial_handlers = len(logging.getLogger().handlers)

        configure_logging(LoggingConfig(level="debug"))

        assert len(logging.getLogger().handlers) == initial_handlers

    def test_file_receives_library_records(self, temp_dir: Path) -> None:
        """Records from the package loggers should reach the log file."""
        log_file = temp_dir / "test.log"
        configure_logging(LoggingConfig(level="debug", file=log_file))

        logging.getLogger("stream_selection.session").debug("Filtering new period")
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text()
        assert "stream_selection.session - DEBUG - Filtering new period" in content

    def test_text_output_tags_selection_context(self, temp_dir: Path) -> None:
        """Records with selection fields should carry a compact tag."""
        log_file = temp_dir / "test.log"
        configure_logging(LoggingConfig(level="debug", file=log_file))

        logging.getLogger("stream_selection.capabilities").debug(
            "Dropping variant",
            extra={"period_start": 30.0, "variant_id": 2},
        )
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "DEBUG - [period=30.0 variant=2] Dropping variant" in (
            log_file.read_text()
        )

    def test_reconfigure_closes_replaced_handlers(self, temp_dir: Path) -> None:
        """Should close the log file of a replaced handler."""
        configure_logging(LoggingConfig(file=temp_dir / "first.log"))
        old_handler = logging.getLogger().handlers[0]
        assert isinstance(old_handler, RotatingFileHandler)

        configure_logging(LoggingConfig(file=temp_dir / "second.log"))

        assert old_handler.stream is None
        assert old_handler not in logging.getLogger().handlers


class TestSelectionContextFilter:
    """Tests for SelectionContextFilter."""

    def test_empty_tag_without_selection_fields(self) -> None:
        record = _record()

        assert SelectionContextFilter().filter(record) is True
        assert record.selection_tag == ""

    def test_tag_lists_present_fields_in_order(self) -> None:
        record = _record(reason="no key", stream_id=9, period_start=0.0)

        SelectionContextFilter().filter(record)

        assert record.selection_tag == "[period=0.0 stream=9 reason=no key] "


class TestJSONFormatter:
    """Tests for JSONFormatter output."""

    def test_basic_log_entry(self) -> None:
        """Should produce valid JSON with required fields."""
        data = json.loads(JSONFormatter().format(_record()))

        assert "timestamp" in data
        assert data["level"] == "INFO"
        assert data["message"] == "Test message"
        assert data["logger"] == "test.logger"
        assert "context" not in data

    def test_timestamp_uses_record_created_time(self) -> None:
        """Should render record.created as an ISO-8601 UTC timestamp."""
        from datetime import datetime, timezone

        record = _record()
        record.created = 1577836800.0

        data = json.loads(JSONFormatter().format(record))

        output_dt = datetime.fromisoformat(data["timestamp"])
        assert output_dt == datetime(2020, 1, 1, tzinfo=timezone.utc)

    def test_message_formatting_with_args(self) -> None:
        """Should format message with arguments."""
        record = _record("Dropping variant %s: %s", (3, "unsupported media type"))

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "Dropping variant 3: unsupported media type"

    def test_selection_fields_are_top_level(self) -> None:
        """Should emit period and variant identifiers as top-level keys."""
        record = _record(period_start=12.5, variant_id=7, reason="unsupported")

        data = json.loads(JSONFormatter().format(record))

        assert data["period_start"] == 12.5
        assert data["variant_id"] == 7
        assert data["reason"] == "unsupported"
        assert "stream_id" not in data
        assert "context" not in data

    def test_other_extra_fields_go_to_context(self) -> None:
        """Should collect remaining non-standard attributes under context."""
        record = _record(stream_id=4, dropped=2, _private="hidden")
        SelectionContextFilter().filter(record)

        data = json.loads(JSONFormatter().format(record))

        assert data["stream_id"] == 4
        assert data["context"] == {"dropped": 2}

    def test_root_logger_name_omitted(self) -> None:
        """Should omit the logger field for the root logger."""
        data = json.loads(JSONFormatter().format(_record(name="root")))

        assert "logger" not in data

    def test_exception_included(self) -> None:
        """Should include formatted exception info."""
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record()
            record.exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(record))

        assert "ValueError: boom" in data["exception"]

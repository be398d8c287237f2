"""Tests for error handler."""

import logging
import pytest
from json_utility.error_handler import ErrorHandler
from json_utility.types import ConversionError, ErrorType


class TestErrorHandler:
    """Tests for ErrorHandler class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.error_handler = ErrorHandler()

    def test_report_records_diagnostic(self):
        """Test that a report is retained and returned."""
        cause = ValueError("bad value")
        diagnostic = self.error_handler.report("Failed to decode", "{oops", cause, ErrorType.SYNTAX)

        assert diagnostic.message == "Failed to decode"
        assert diagnostic.failed_input == "{oops"
        assert diagnostic.cause is cause
        assert diagnostic.error_type == ErrorType.SYNTAX
        assert self.error_handler.last_diagnostic is diagnostic

    def test_report_takes_error_type_from_cause(self):
        """Test classification from a ConversionError cause."""
        cause = ConversionError("no encoder", ErrorType.ENCODING)
        diagnostic = self.error_handler.report("Failed to encode", object(), cause)

        assert diagnostic.error_type == ErrorType.ENCODING

    def test_report_without_cause(self):
        """Test reporting a failure without an exception."""
        diagnostic = self.error_handler.report("Nothing to read", "")

        assert diagnostic.cause is None
        assert diagnostic.error_type is None

    def test_report_logs_error(self, caplog):
        """Test that reports are logged with the failed input."""
        with caplog.at_level(logging.ERROR, logger="json_utility.error_handler"):
            self.error_handler.report("Failed to decode", "{oops", ValueError("bad"))

        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelno == logging.ERROR
        assert record.getMessage() == "Failed to decode: {oops"
        assert record.exc_info[1].args == ("bad",)

    def test_injected_logger(self, caplog):
        """Test that an injected logger receives reports."""
        logger = logging.getLogger("custom.diagnostics")
        handler = ErrorHandler(logger=logger)

        with caplog.at_level(logging.ERROR, logger="custom.diagnostics"):
            handler.report("Failed", "x")

        assert caplog.records[0].name == "custom.diagnostics"

    def test_history_is_bounded(self):
        """Test that old diagnostics are dropped."""
        handler = ErrorHandler(history_size=2)
        for i in range(3):
            handler.report(f"failure {i}", i)

        assert [d.message for d in handler.diagnostics] == ["failure 1", "failure 2"]

    def test_clear(self):
        """Test forgetting retained diagnostics."""
        self.error_handler.report("Failed", "x")
        self.error_handler.clear()

        assert self.error_handler.last_diagnostic is None
        assert self.error_handler.diagnostics == []

    def test_preview_truncates_long_input(self):
        """Test truncation of long inputs in log output."""
        handler = ErrorHandler(max_input_preview=5)

        assert handler._preview("abcdefgh") == "abcde... (8 chars)"
        assert handler._preview("abc") == "abc"
        assert handler._preview(["a"]) == "['a']"

    def test_invalid_history_size(self):
        """Test that the history size must be positive."""
        with pytest.raises(ValueError):
            ErrorHandler(history_size=0)

"""Error handling implementation for the JSON Utility."""

import logging
from collections import deque
from typing import Any, List, Optional
from .types import Diagnostic, ErrorType


class ErrorHandler:
    """
    Diagnostic sink for JSON Utility operations.

    Every failure path of the facade reports through ``report`` exactly once.
    The handler logs the failure and keeps a bounded history of recent
    diagnostics so callers can inspect what went wrong after receiving a
    sentinel value.
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 history_size: int = 100,
                 max_input_preview: int = 200):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
            history_size: Number of recent diagnostics to keep
            max_input_preview: Maximum characters of failed input shown in logs
        """
        if history_size <= 0:
            raise ValueError("history_size must be positive")

        self.logger = logger or logging.getLogger(__name__)
        self.max_input_preview = max_input_preview
        self._history = deque(maxlen=history_size)

    def report(self, message: str, failed_input: Any,
               cause: Optional[BaseException] = None,
               error_type: Optional[ErrorType] = None) -> Diagnostic:
        """
        Record a failure.

        Args:
            message: Short description of the failed operation
            failed_input: The input that could not be processed
            cause: Underlying exception, if any
            error_type: Classification of the failure

        Returns:
            The recorded Diagnostic
        """
        if error_type is None:
            error_type = getattr(cause, "error_type", None)

        diagnostic = Diagnostic(
            message=message,
            failed_input=failed_input,
            cause=cause,
            error_type=error_type
        )
        self._history.append(diagnostic)

        self.logger.error(
            f"{message}: {self._preview(failed_input)}",
            exc_info=(type(cause), cause, cause.__traceback__) if cause is not None else None
        )
        return diagnostic

    @property
    def last_diagnostic(self) -> Optional[Diagnostic]:
        """Most recently reported diagnostic, or None."""
        return self._history[-1] if self._history else None

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """Snapshot of the retained diagnostics, oldest first."""
        return list(self._history)

    def clear(self) -> None:
        """Forget all retained diagnostics."""
        self._history.clear()

    def _preview(self, failed_input: Any) -> str:
        """Render failed input for log output, truncating long values."""
        text = failed_input if isinstance(failed_input, str) else repr(failed_input)
        if len(text) > self.max_input_preview:
            return f"{text[:self.max_input_preview]}... ({len(text)} chars)"
        return text

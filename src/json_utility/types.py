"""Core type definitions for the JSON Utility."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional


class ErrorType(Enum):
    """Enumeration of error types."""
    SYNTAX = "syntax"
    SHAPE = "shape"
    ENCODING = "encoding"
    SCHEMA = "schema"
    IO = "io"
    CONVERSION = "conversion"


@dataclass(frozen=True)
class Diagnostic:
    """A failure report: what failed, on which input, and why."""
    message: str
    failed_input: Any
    cause: Optional[BaseException] = None
    error_type: Optional[ErrorType] = None


class ConversionError(Exception):
    """Custom exception for conversion errors."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Any] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context


class MappingError(ConversionError):
    """Raised when a value does not fit the requested target shape."""

    def __init__(self, message: str, path: str = "$", context: Optional[Any] = None):
        super().__init__(f"{message} at {path}", ErrorType.SHAPE, context)
        self.path = path


class XMLConversionError(ConversionError):
    """Raised when a document cannot be converted to or from XML."""

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message, ErrorType.CONVERSION, context)


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of document validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]

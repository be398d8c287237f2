"""
JSON Utility - Serialization facade for JSON, XML and JSON-Schema.

Encodes and decodes typed values as JSON or XML, pretty-prints, validates
and streams JSON documents, and converts between JSON and XML.
"""

from .json_utils import JSONUtils
from .config import MapperConfig
from .converters import ISODate
from .error_handler import ErrorHandler
from .types import ConversionError, Diagnostic, ErrorType, MappingError, XMLConversionError

__version__ = "1.0.0"
__all__ = [
    "JSONUtils",
    "MapperConfig",
    "ISODate",
    "ErrorHandler",
    "ConversionError",
    "Diagnostic",
    "ErrorType",
    "MappingError",
    "XMLConversionError",
]

"""Serialization facade over the JSON, XML and JSON-Schema engines."""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Type, TypeVar, Union
import jsonschema
import pydantic
from .config import MapperConfig
from .error_handler import ErrorHandler
from .mapper import ObjectMapper
from .parser import JSONParser
from .schema import SchemaValidator
from .streaming import StreamingReader
from .types import ConversionError, ErrorType
from .xml_mapper import XMLMapper

T = TypeVar("T")

# JSON engine failures: malformed text (JSONDecodeError is a ValueError),
# non-str input, values with no JSON form
_JSON_ERRORS = (ValueError, TypeError, RecursionError, pydantic.ValidationError, ConversionError)
_XML_ERRORS = (ET.ParseError, ValueError, TypeError, pydantic.ValidationError, ConversionError)


class JSONUtils:
    """
    Uniform facade for JSON and XML serialization and JSON-Schema validation.

    Every operation delegates to one engine call. On failure it reports a
    single diagnostic through the error handler and returns a sentinel
    (None, an empty list, an empty dict or False) instead of raising.
    The one exception is schema validation, which only absorbs schema
    violations; see ``validate_against_schema``.

    Instances hold immutable configuration and read-only engines, so one
    instance can be created at startup and shared.
    """

    def __init__(self, config: Optional[MapperConfig] = None,
                 error_handler: Optional[ErrorHandler] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the facade and its engines.

        Args:
            config: Mapper configuration (defaults to MapperConfig())
            error_handler: Diagnostic sink (defaults to an ErrorHandler on ``logger``)
            logger: Optional logger instance
        """
        self.config = config or MapperConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.error_handler = error_handler or ErrorHandler(self.logger)

        self.parser = JSONParser(self.config, self.logger)
        self.mapper = ObjectMapper(self.config, self.logger)
        self.xml_mapper = XMLMapper(self.config, self.mapper, self.parser, self.logger)
        self.schema_validator = SchemaValidator(self.parser, self.logger)
        self.streaming_reader = StreamingReader(self.config, self.parser, self.logger)

    # JSON

    def encode(self, value: Any) -> Optional[str]:
        """
        Convert a typed value to compact JSON.

        Args:
            value: Dataclass instance or plain tree

        Returns:
            JSON string, or None if the value cannot be encoded
        """
        try:
            return self.parser.serialize(self.mapper.to_plain(value))
        except _JSON_ERRORS as e:
            self._report("Error converting object to JSON", value, e, ErrorType.ENCODING)
            return None

    def decode(self, json_string: str, shape: Type[T]) -> Optional[T]:
        """
        Convert JSON text into an instance of ``shape``.

        Args:
            json_string: JSON text to decode
            shape: Dataclass, pydantic model or typing target (``List[Person]``, ...)

        Returns:
            Decoded instance, or None on parse error or shape mismatch
        """
        try:
            return self.mapper.from_plain(self.parser.parse(json_string), shape)
        except _JSON_ERRORS as e:
            self._report("Error parsing JSON", json_string, e)
            return None

    def pretty_print(self, json_string: str) -> str:
        """
        Re-indent JSON text.

        Returns:
            Pretty-printed JSON, or the input unchanged if it does not parse
        """
        try:
            return self.parser.pretty(self.parser.parse(json_string))
        except _JSON_ERRORS as e:
            self._report("Error pretty-printing JSON", json_string, e)
            return json_string

    def is_valid(self, json_string: str) -> bool:
        """Check whether the text is a single valid JSON document. Never raises."""
        try:
            self.parser.parse(json_string)
            return True
        except (ValueError, TypeError, RecursionError):
            return False

    def decode_list(self, json_string: str, shape: Type[T]) -> List[T]:
        """
        Convert a JSON array into a list of ``shape`` instances.

        Returns:
            Decoded list, or an empty list on error
        """
        try:
            return self.mapper.from_plain(self.parser.parse(json_string), List[shape])
        except _JSON_ERRORS as e:
            self._report("Error parsing JSON to list", json_string, e)
            return []

    def decode_map(self, json_string: str) -> Dict[str, Any]:
        """
        Convert a JSON object into a dict of plain values.

        Returns:
            Decoded dict, or an empty dict on error
        """
        try:
            return self.mapper.from_plain(self.parser.parse(json_string), Dict[str, Any])
        except _JSON_ERRORS as e:
            self._report("Error parsing JSON to map", json_string, e)
            return {}

    def parse_tree(self, json_string: str) -> Any:
        """
        Parse JSON text into a plain tree.

        Returns:
            Root of the tree, or None on parse error. A document that is
            literally ``null`` also yields None.
        """
        try:
            return self.parser.parse(json_string)
        except _JSON_ERRORS as e:
            self._report("Error parsing JSON tree", json_string, e)
            return None

    def get_field(self, json_string: str, key: str) -> Optional[str]:
        """
        Read a top-level field of a JSON object as text.

        Scalars render in their JSON spelling (``24``, ``true``, ``null``),
        objects and arrays as an empty string.

        Returns:
            Field text, or None if the document does not parse, is not an
            object, or has no such key. Only parse failures are reported.
        """
        try:
            tree = self.parser.parse(json_string)
        except _JSON_ERRORS as e:
            self._report(f"Error getting field '{key}' from JSON", json_string, e)
            return None

        if not isinstance(tree, dict) or key not in tree:
            return None
        return self.parser.render_scalar(tree[key])

    # Schema

    def validate_against_schema(self, json_string: str, schema_json: str) -> bool:
        """
        Validate JSON text against a JSON-Schema document.

        Only schema violations are absorbed. A malformed schema
        (``jsonschema.SchemaError``) or malformed JSON in either argument
        (``json.JSONDecodeError``) propagates to the caller.

        Returns:
            True if the document conforms, False on a schema violation
        """
        try:
            self.schema_validator.validate(json_string, schema_json)
            return True
        except jsonschema.ValidationError as e:
            self._report("JSON validation error", json_string, e, ErrorType.SCHEMA)
            return False

    def schema_errors(self, json_string: str, schema_json: str) -> List[str]:
        """
        List every schema violation as ``"<path>: <message>"``.

        Same propagation rules as ``validate_against_schema``; an empty list
        means the document conforms.
        """
        return self.schema_validator.errors(json_string, schema_json)

    # Streaming

    def stream_from_path(self, path: Union[str, Path]) -> Any:
        """
        Read a JSON file in chunks and return its tree.

        Returns:
            Root of the tree, or None on I/O or parse error
        """
        try:
            return self.streaming_reader.read_tree(path)
        except OSError as e:
            self._report("Error streaming JSON file", str(path), e, ErrorType.IO)
            return None
        except (ValueError, RecursionError) as e:
            self._report("Error streaming JSON file", str(path), e, ErrorType.SYNTAX)
            return None

    def iter_stream_items(self, path: Union[str, Path]) -> Iterator[Any]:
        """
        Yield the elements of a top-level JSON array file one at a time.

        Iteration stops early, after one reported diagnostic, on I/O or
        parse error; items yielded before the error stand.
        """
        try:
            yield from self.streaming_reader.iter_items(path)
        except OSError as e:
            self._report("Error streaming JSON items", str(path), e, ErrorType.IO)
        except (ValueError, RecursionError) as e:
            self._report("Error streaming JSON items", str(path), e, ErrorType.SYNTAX)

    # XML

    def encode_xml(self, value: Any) -> Optional[str]:
        """
        Convert a typed value to XML.

        Returns:
            XML string, or None if the value cannot be encoded
        """
        try:
            return self.xml_mapper.encode(value)
        except _XML_ERRORS as e:
            self._report("Error converting object to XML", value, e, ErrorType.ENCODING)
            return None

    def decode_xml(self, xml_string: str, shape: Type[T]) -> Optional[T]:
        """
        Convert XML text into an instance of ``shape``.

        Returns:
            Decoded instance, or None on parse error or shape mismatch
        """
        try:
            return self.xml_mapper.decode(xml_string, shape)
        except _XML_ERRORS as e:
            self._report("Error parsing XML", xml_string, e)
            return None

    def json_to_xml(self, json_string: str) -> Optional[str]:
        """
        Convert a JSON object document to XML.

        Returns:
            XML text, or None on conversion error
        """
        try:
            return self.xml_mapper.json_to_xml(json_string)
        except _XML_ERRORS as e:
            self._report("Error converting JSON to XML", json_string, e, ErrorType.CONVERSION)
            return None

    def xml_to_json(self, xml_string: str) -> Optional[str]:
        """
        Convert an XML document or fragment to compact JSON.

        Returns:
            JSON text, or None on conversion error
        """
        try:
            return self.xml_mapper.xml_to_json(xml_string)
        except _XML_ERRORS as e:
            self._report("Error converting XML to JSON", xml_string, e, ErrorType.CONVERSION)
            return None

    def _report(self, message: str, failed_input: Any, cause: BaseException,
                error_type: Optional[ErrorType] = None) -> None:
        if error_type is None:
            error_type = getattr(cause, "error_type", ErrorType.SYNTAX)
        self.error_handler.report(message, failed_input, cause, error_type)

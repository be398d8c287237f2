"""JSON text engine: parsing and serialization of plain JSON trees."""

import json
import logging
from typing import Any, Optional
from .config import MapperConfig


def reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


class JSONParser:
    """
    Parses JSON text into plain trees and writes trees back to text.

    Parsing is strict RFC 8259: ``NaN``, ``Infinity`` and ``-Infinity``
    literals are rejected, as are trailing characters after the top-level
    value.
    """

    def __init__(self, config: Optional[MapperConfig] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the JSON parser.

        Args:
            config: Mapper configuration (defaults to MapperConfig())
            logger: Optional logger instance
        """
        self.config = config or MapperConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.decoder = json.JSONDecoder(parse_constant=reject_constant)

    def parse(self, json_string: str) -> Any:
        """
        Parse JSON text into a plain tree.

        Args:
            json_string: JSON text to parse

        Returns:
            Parsed tree (dict, list, str, int, float, bool or None)

        Raises:
            json.JSONDecodeError: If the text is not valid JSON
            ValueError: If the text uses non-standard constants
            TypeError: If ``json_string`` is not a string
        """
        if not isinstance(json_string, str):
            raise TypeError(f"JSON input must be str, got {type(json_string).__name__}")
        return self.decoder.decode(json_string)

    def serialize(self, tree: Any) -> str:
        """
        Write a plain tree as compact JSON text.

        Raises:
            TypeError: If the tree contains non-JSON values
            ValueError: If the tree contains NaN/Infinity or circular references
        """
        return json.dumps(
            tree,
            ensure_ascii=False,
            allow_nan=False,
            sort_keys=self.config.sort_keys,
            separators=(",", ":")
        )

    def pretty(self, tree: Any) -> str:
        """Write a plain tree as indented JSON text (``"key" : value`` style)."""
        return json.dumps(
            tree,
            ensure_ascii=False,
            allow_nan=False,
            sort_keys=self.config.sort_keys,
            indent=self.config.indent,
            separators=(",", " : ")
        )

    @staticmethod
    def render_scalar(value: Any) -> str:
        """
        Render a tree value as field text.

        Scalars use their JSON spelling without quotes (``24``, ``true``,
        ``null``); objects and arrays render as an empty string.
        """
        if isinstance(value, str):
            return value
        if isinstance(value, (dict, list)):
            return ""
        return json.dumps(value)

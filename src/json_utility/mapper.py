"""Object mapper between typed values and plain JSON trees, backed by pydantic."""

import dataclasses
import logging
from functools import lru_cache
from typing import Any, Dict, Optional, Sequence
from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticUserError
from pydantic_core import to_jsonable_python
from .config import MapperConfig
from .types import ConversionError, ErrorType, MappingError


@lru_cache(maxsize=256)
def adapter_for(shape: Any) -> TypeAdapter:
    """Return the pydantic adapter for ``shape``, built once per shape."""
    return TypeAdapter(shape)


def format_location(loc: Sequence[Any]) -> str:
    """Render a pydantic error location as ``$.field[index]``."""
    rendered = "$"
    for part in loc:
        rendered += f"[{part}]" if isinstance(part, int) else f".{part}"
    return rendered


class ObjectMapper:
    """
    Maps typed values to plain JSON trees and back.

    Typed values are dataclasses or pydantic models; any type pydantic can
    validate (``List[Person]``, ``Dict[str, int]``, enums, dates, ...) is a
    valid decode target. The adapter built for a shape is its field
    descriptor: names, types and defaults come from the shape's annotations.
    """

    def __init__(self, config: Optional[MapperConfig] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the object mapper.

        Args:
            config: Mapper configuration (defaults to MapperConfig())
            logger: Optional logger instance
        """
        self.config = config or MapperConfig()
        self.logger = logger or logging.getLogger(__name__)

    def adapter(self, shape: Any) -> TypeAdapter:
        """
        Get the adapter for ``shape``.

        Raises:
            MappingError: If pydantic cannot build a schema for ``shape``
        """
        try:
            return adapter_for(shape)
        except (NameError, PydanticUserError) as e:
            raise MappingError(f"Cannot map type {shape!r}: {e}") from e

    def to_plain(self, value: Any) -> Any:
        """
        Convert a typed value into a plain JSON tree.

        Raises:
            ConversionError: If the value (or a nested value) cannot be encoded
        """
        try:
            if dataclasses.is_dataclass(value) and not isinstance(value, type):
                # field annotations may carry custom serializers
                return self.adapter(type(value)).dump_python(value, mode="json")
            return to_jsonable_python(value)
        except (ValueError, PydanticUserError) as e:
            raise ConversionError(str(e), ErrorType.ENCODING, context=value) from e

    def from_plain(self, data: Any, shape: Any) -> Any:
        """
        Convert a plain JSON tree into an instance of ``shape``.

        Unknown object fields are ignored. Scalars are coerced the way
        pydantic's lax mode does (``"24"`` fits an ``int`` field).

        Raises:
            MappingError: If the data does not fit ``shape``
        """
        adapter = self.adapter(shape)
        try:
            return adapter.validate_python(data)
        except ValidationError as e:
            errors = e.errors(include_url=False)
            first = errors[0]
            raise MappingError(
                f"{first['msg']} ({e.error_count()} error(s) decoding {e.title})",
                format_location(first["loc"]),
                context=errors
            ) from e
        except (NameError, PydanticUserError) as e:
            raise MappingError(f"Cannot map type {shape!r}: {e}") from e

    def json_schema(self, shape: Any) -> Dict[str, Any]:
        """
        JSON-Schema (validation mode) describing ``shape``.

        Raises:
            MappingError: If ``shape`` has no JSON-Schema form
        """
        try:
            return self.adapter(shape).json_schema()
        except (NameError, PydanticUserError) as e:
            raise MappingError(f"Cannot describe type {shape!r}: {e}") from e

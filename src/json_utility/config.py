"""Immutable mapper configuration."""

import re
from dataclasses import dataclass, replace
from typing import Optional

_XML_NAME = re.compile(r"[^\W\d][\w.\-]*")


@dataclass(frozen=True)
class MapperConfig:
    """
    Configuration shared by every engine held by a JSONUtils instance.

    Built once at startup and never mutated; use ``with_overrides`` to
    derive a variant.
    """

    indent: int = 2
    xml_root_tag: Optional[str] = None
    stream_chunk_size: int = 65536
    encoding: str = "utf-8"
    sort_keys: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        if self.indent < 0:
            raise ValueError("indent must be non-negative")

        if self.stream_chunk_size <= 0:
            raise ValueError("stream_chunk_size must be positive")

        if self.xml_root_tag is not None and not is_xml_name(self.xml_root_tag):
            raise ValueError(f"xml_root_tag is not a valid XML name: {self.xml_root_tag!r}")

        if not self.encoding:
            raise ValueError("encoding cannot be empty")

    def with_overrides(self, **changes) -> "MapperConfig":
        """Return a copy of this configuration with ``changes`` applied."""
        return replace(self, **changes)


def is_xml_name(name: str) -> bool:
    """Check whether ``name`` can be used as an XML element name."""
    return bool(_XML_NAME.fullmatch(name))

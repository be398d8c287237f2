"""XML mapping for typed values and JSON documents."""

import dataclasses
import logging
import re
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional
from pydantic import BaseModel
from .config import MapperConfig, is_xml_name
from .mapper import ObjectMapper
from .parser import JSONParser
from .types import XMLConversionError

_NUMBER = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?")
_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")
_FRAGMENT_ROOT = "fragment"


class XMLMapper:
    """
    Maps typed values and JSON documents to XML and back.

    Typed values follow the object mapper's field rules: the root element
    is named after the value's class, fields become child elements and
    list fields are wrapped in an element of the same name. Document
    conversion maps JSON object keys to element names, arrays to repeated
    elements and scalars to element text.
    """

    def __init__(self, config: Optional[MapperConfig] = None,
                 object_mapper: Optional[ObjectMapper] = None,
                 parser: Optional[JSONParser] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the XML mapper.

        Args:
            config: Mapper configuration (defaults to MapperConfig())
            object_mapper: Mapper used for typed values
            parser: JSON engine used for document conversion
            logger: Optional logger instance
        """
        self.config = config or MapperConfig()
        self.object_mapper = object_mapper or ObjectMapper(self.config)
        self.parser = parser or JSONParser(self.config)
        self.logger = logger or logging.getLogger(__name__)

    # Typed values

    def encode(self, value: Any) -> str:
        """
        Write a typed value as XML.

        Raises:
            ConversionError: If the value cannot be encoded
        """
        plain = self.object_mapper.to_plain(value)
        if dataclasses.is_dataclass(value) or isinstance(value, BaseModel):
            root_tag = type(value).__name__
        else:
            root_tag = self.config.xml_root_tag or "root"

        root = ET.Element(root_tag)
        if isinstance(plain, dict):
            for key, item in plain.items():
                self._append_field(root, key, item)
        elif isinstance(plain, list):
            for item in plain:
                self._append_field(root, "item", item)
        elif plain is not None:
            root.text = self._text(plain)

        return ET.tostring(root, encoding="unicode")

    def decode(self, xml_string: str, shape: Any) -> Any:
        """
        Read a typed value from XML. The root element name is not checked.

        Element text is passed to the mapper unchanged; list fields are
        recovered from their wrapper elements using the shape's schema.

        Raises:
            ET.ParseError: If the XML is malformed
            MappingError: If the content does not fit ``shape``
        """
        root = ET.fromstring(self._require_text(xml_string))
        tree = self._element_to_tree(root, infer=False)
        schema = self.object_mapper.json_schema(shape)
        tree = self._restore_collections(tree, schema, schema.get("$defs", {}))
        return self.object_mapper.from_plain(tree, shape)

    def _restore_collections(self, data: Any, schema: Dict[str, Any],
                             defs: Dict[str, Any]) -> Any:
        """Turn wrapper elements back into lists where ``schema`` expects an array."""
        schema = self._resolve(schema, defs)

        members = schema.get("anyOf") or schema.get("oneOf")
        if members:
            candidates = [member for member in (self._resolve(m, defs) for m in members)
                          if member.get("type") != "null"]
            if len(candidates) == 1:
                return self._restore_collections(data, candidates[0], defs)
            return data

        kind = schema.get("type")
        if kind == "array":
            prefix = schema.get("prefixItems") or []
            items_schema = schema.get("items")
            if not isinstance(items_schema, dict):
                items_schema = {}
            return [
                self._restore_collections(item, prefix[i] if i < len(prefix) else items_schema, defs)
                for i, item in enumerate(self._as_items(data))
            ]

        if kind == "object":
            if isinstance(data, str) and not data.strip():
                return {}
            if isinstance(data, dict):
                properties = schema.get("properties", {})
                extra = schema.get("additionalProperties")
                if not isinstance(extra, dict):
                    extra = {}
                return {key: self._restore_collections(value, properties.get(key, extra), defs)
                        for key, value in data.items()}
        return data

    @staticmethod
    def _resolve(schema: Dict[str, Any], defs: Dict[str, Any]) -> Dict[str, Any]:
        while True:
            if "$ref" in schema:
                schema = defs.get(schema["$ref"].rsplit("/", 1)[-1], {})
            elif len(schema.get("allOf", ())) == 1:
                schema = schema["allOf"][0]
            else:
                return schema

    @staticmethod
    def _as_items(data: Any) -> List[Any]:
        # <tags><tags>a</tags><tags>b</tags></tags>
        if isinstance(data, list):
            return data
        if data is None or (isinstance(data, str) and not data.strip()):
            return []
        if isinstance(data, dict) and len(data) == 1:
            inner = next(iter(data.values()))
            return inner if isinstance(inner, list) else [inner]
        return [data]

    def _append_field(self, parent: ET.Element, name: str, value: Any) -> None:
        if value is None:
            return
        self._check_name(name)
        element = ET.SubElement(parent, name)
        if isinstance(value, dict):
            for key, item in value.items():
                self._append_field(element, key, item)
        elif isinstance(value, list):
            for item in value:
                self._append_field(element, name, item)
        else:
            element.text = self._text(value)

    # Documents

    def json_to_xml(self, json_string: str) -> str:
        """
        Convert a JSON object document to XML.

        Without a configured root tag the result is a fragment of sibling
        elements, one per top-level key.

        Raises:
            json.JSONDecodeError: If the JSON is malformed
            XMLConversionError: If the document cannot be expressed as XML
        """
        data = self.parser.parse(json_string)
        if not isinstance(data, dict):
            raise XMLConversionError(
                f"JSON document must be an object, got {type(data).__name__}", context=json_string)

        holder = ET.Element(self.config.xml_root_tag or _FRAGMENT_ROOT)
        for key, value in data.items():
            self._append_json_value(holder, key, value)

        if self.config.xml_root_tag:
            return ET.tostring(holder, encoding="unicode")
        return "".join(ET.tostring(child, encoding="unicode") for child in holder)

    def xml_to_json(self, xml_string: str) -> str:
        """
        Convert an XML document or fragment to compact JSON.

        Raises:
            ET.ParseError: If the XML is malformed
        """
        return self.parser.serialize(self.xml_to_tree(xml_string))

    def xml_to_tree(self, xml_string: str) -> Dict[str, Any]:
        """Convert an XML document or fragment to a plain tree with typed scalars."""
        xml_string = self._require_text(xml_string)
        try:
            root = ET.fromstring(xml_string)
        except ET.ParseError as document_error:
            wrapped = f"<{_FRAGMENT_ROOT}>{_DECLARATION.sub('', xml_string)}</{_FRAGMENT_ROOT}>"
            try:
                holder = ET.fromstring(wrapped)
            except ET.ParseError:
                raise document_error
            self.logger.debug("Parsed XML input as a fragment")
            content = self._element_to_tree(holder, infer=True)
            if isinstance(content, dict):
                return content
            return {"content": content} if content != "" else {}

        return {self._local_name(root.tag): self._element_to_tree(root, infer=True)}

    def _append_json_value(self, parent: ET.Element, key: str, value: Any) -> None:
        self._check_name(key)
        if isinstance(value, list):
            for item in value:
                if isinstance(item, list):
                    element = ET.SubElement(parent, key)
                    for nested in item:
                        self._append_json_value(element, "array", nested)
                else:
                    self._append_json_value(parent, key, item)
            return

        element = ET.SubElement(parent, key)
        if isinstance(value, dict):
            for child_key, child_value in value.items():
                self._append_json_value(element, child_key, child_value)
        else:
            element.text = self._text(value)

    # Shared helpers

    def _element_to_tree(self, element: ET.Element, infer: bool) -> Any:
        """
        Convert an element into a plain tree.

        Leaf elements become their text; elements with children or
        attributes become objects, repeated child names become arrays.
        Text is trimmed only when scalars are inferred; otherwise leaf text
        is kept verbatim and whitespace-only text beside children is dropped.
        """
        children = list(element)
        text = element.text or ""
        if infer:
            text = text.strip()

        if not children and not element.attrib:
            return self._infer(text) if infer else text

        node: Dict[str, Any] = {}
        repeated = set()
        for name, raw in element.attrib.items():
            node[self._local_name(name)] = self._infer(raw) if infer else raw

        for child in children:
            name = self._local_name(child.tag)
            value = self._element_to_tree(child, infer)
            if name in node:
                if name in repeated:
                    node[name].append(value)
                else:
                    node[name] = [node[name], value]
                    repeated.add(name)
            else:
                node[name] = value

        if text.strip():
            node["content"] = self._infer(text) if infer else text
        return node

    @staticmethod
    def _infer(text: str) -> Any:
        lowered = text.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        if lowered == "null":
            return None
        if _NUMBER.fullmatch(text):
            if any(marker in text for marker in ".eE"):
                return float(text)
            return int(text)
        return text

    @staticmethod
    def _text(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if value is None:
            return "null"
        return str(value)

    @staticmethod
    def _local_name(tag: str) -> str:
        return tag.rsplit("}", 1)[-1]

    @staticmethod
    def _check_name(name: str) -> None:
        if not is_xml_name(name):
            raise XMLConversionError(f"{name!r} is not a valid XML element name", context=name)

    @staticmethod
    def _require_text(xml_string: Any) -> str:
        if not isinstance(xml_string, str):
            raise XMLConversionError(
                f"XML input must be str, got {type(xml_string).__name__}", context=xml_string)
        return xml_string

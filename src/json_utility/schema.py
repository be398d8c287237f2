"""JSON-Schema validation backed by the ``jsonschema`` package."""

import logging
from typing import Any, List, Optional
import jsonschema
from jsonschema.exceptions import best_match
from jsonschema.protocols import Validator
from jsonschema.validators import validator_for
from .parser import JSONParser


class SchemaValidator:
    """
    Validates JSON documents against JSON-Schema documents.

    The validator class is chosen from the schema's ``$schema`` keyword;
    schemas without one are treated as draft-07. Schemas are checked
    before use, so a malformed schema raises ``jsonschema.SchemaError``.
    """

    DEFAULT_VALIDATOR = jsonschema.Draft7Validator

    def __init__(self, parser: Optional[JSONParser] = None,
                 logger: Optional[logging.Logger] = None):
        self.parser = parser or JSONParser()
        self.logger = logger or logging.getLogger(__name__)

    def build(self, schema_json: str) -> Validator:
        """
        Parse and check a schema document, returning a ready validator.

        Raises:
            json.JSONDecodeError: If the schema is not valid JSON
            jsonschema.SchemaError: If the schema is not a valid JSON-Schema
        """
        schema = self.parser.parse(schema_json)
        validator_class = validator_for(schema, default=self.DEFAULT_VALIDATOR)
        validator_class.check_schema(schema)
        self.logger.debug(f"Validating with {validator_class.__name__}")
        return validator_class(schema, format_checker=validator_class.FORMAT_CHECKER)

    def validate(self, json_string: str, schema_json: str) -> None:
        """
        Validate ``json_string`` against ``schema_json``.

        Raises:
            jsonschema.ValidationError: On the best-matching schema violation
            jsonschema.SchemaError: If the schema is malformed
            json.JSONDecodeError: If either document is not valid JSON
        """
        validator = self.build(schema_json)
        instance = self.parser.parse(json_string)
        error = best_match(validator.iter_errors(instance))
        if error is not None:
            raise error

    def errors(self, json_string: str, schema_json: str) -> List[str]:
        """
        Collect every schema violation as ``"<path>: <message>"``.

        Raises:
            jsonschema.SchemaError: If the schema is malformed
            json.JSONDecodeError: If either document is not valid JSON
        """
        validator = self.build(schema_json)
        instance = self.parser.parse(json_string)
        return [f"{self._format_path(error.absolute_path)}: {error.message}"
                for error in validator.iter_errors(instance)]

    @staticmethod
    def _format_path(path: Any) -> str:
        rendered = "$"
        for part in path:
            rendered += f"[{part}]" if isinstance(part, int) else f".{part}"
        return rendered

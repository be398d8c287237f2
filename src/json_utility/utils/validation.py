"""Validation utilities for JSON documents."""

import json
from typing import Any, List
from ..parser import reject_constant
from ..types import ValidationResult, ValidationError, ErrorType


class ValidationUtils:
    """Utility class for validating JSON documents."""

    MAX_DEPTH_WARNING = 20

    @staticmethod
    def validate_json_string(json_string: str) -> ValidationResult:
        """
        Validate JSON string syntax.

        Args:
            json_string: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not isinstance(json_string, str):
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"JSON input must be a string, got {type(json_string).__name__}",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        # Check if string is empty
        if not json_string.strip():
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message="JSON string is empty",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        # Try to parse JSON
        try:
            data = json.loads(json_string, parse_constant=reject_constant)
        except json.JSONDecodeError as e:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Invalid JSON syntax: {e.msg}",
                location=f"line {e.lineno}, column {e.colno}"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)
        except ValueError as e:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Invalid JSON syntax: {e}",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        max_depth = ValidationUtils._calculate_max_depth(data)
        if max_depth > ValidationUtils.MAX_DEPTH_WARNING:
            warnings.append(f"Deep nesting detected (depth: {max_depth}). This may impact performance.")

        return ValidationResult(
            is_valid=True,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def _calculate_max_depth(data: Any, current_depth: int = 0) -> int:
        """Calculate maximum nesting depth."""
        if not isinstance(data, (dict, list)):
            return current_depth

        max_child_depth = current_depth
        children = data.values() if isinstance(data, dict) else data
        for child in children:
            child_depth = ValidationUtils._calculate_max_depth(child, current_depth + 1)
            max_child_depth = max(max_child_depth, child_depth)

        return max_child_depth

    @staticmethod
    def format_errors(result: ValidationResult) -> List[str]:
        """Render validation errors as human-readable lines."""
        lines = []
        for error in result.errors:
            if error.location:
                lines.append(f"{error.message} ({error.location})")
            else:
                lines.append(error.message)
        return lines

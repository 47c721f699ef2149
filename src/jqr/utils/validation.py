"""Validation utilities for input text and intermediate document data."""

from typing import Any, List, Set, Optional
from ..types import Format, ValidationResult, ValidationError, ErrorType

DEEP_NESTING_THRESHOLD = 64


class ValidationUtils:
    """Utility class for validating raw input and loaded structures."""

    @staticmethod
    def validate_text(text: str, format: Format = Format.JSON) -> ValidationResult:
        """
        Validate raw document text before it reaches a parser.

        JSON requires a non-blank document. A blank YAML stream is valid
        and loads as null.

        Args:
            text: Document text
            format: Format the text is going to be parsed as

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not text.strip():
            if format is Format.YAML:
                warnings.append("YAML input is empty; treating it as null")
            else:
                errors.append(ValidationError(
                    type=ErrorType.PARSE,
                    message="Input is empty",
                    location="input"
                ))

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def validate_structure(data: Any) -> ValidationResult:
        """
        Validate a loaded Python structure before conversion to Value.

        Args:
            data: Output of a JSON or YAML loader

        Returns:
            ValidationResult; circular references are errors, deep nesting a warning
        """
        errors = []
        warnings = []

        if ValidationUtils.has_circular_references(data):
            errors.append(ValidationError(
                type=ErrorType.CONVERSION,
                message="Circular references detected in document structure",
                location="document"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        max_depth = ValidationUtils.calculate_max_depth(data)
        if max_depth > DEEP_NESTING_THRESHOLD:
            warnings.append(f"Deep nesting detected (depth: {max_depth}). This may impact performance.")

        return ValidationResult(is_valid=True, errors=errors, warnings=warnings)

    @staticmethod
    def has_circular_references(data: Any, seen: Optional[Set[int]] = None) -> bool:
        """Check for circular references in data structure."""
        if seen is None:
            seen = set()

        if isinstance(data, (dict, list)):
            obj_id = id(data)
            if obj_id in seen:
                return True
            seen.add(obj_id)

            children: List[Any] = list(data.values()) if isinstance(data, dict) else data
            try:
                for child in children:
                    if ValidationUtils.has_circular_references(child, seen):
                        return True
            finally:
                seen.remove(obj_id)

        return False

    @staticmethod
    def calculate_max_depth(data: Any, current_depth: int = 0) -> int:
        """Calculate maximum nesting depth."""
        if not isinstance(data, (dict, list)):
            return current_depth

        max_child_depth = current_depth + 1
        children = data.values() if isinstance(data, dict) else data
        for child in children:
            max_child_depth = max(max_child_depth,
                                  ValidationUtils.calculate_max_depth(child, current_depth + 1))

        return max_child_depth

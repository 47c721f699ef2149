"""Tests for validation utilities."""

from jqr.utils.validation import ValidationUtils, DEEP_NESTING_THRESHOLD
from jqr.types import ErrorType, Format


class TestValidationUtils:
    """Tests for ValidationUtils class."""

    def test_validate_text(self):
        """Test raw text validation per format."""
        assert ValidationUtils.validate_text("{}").is_valid
        assert not ValidationUtils.validate_text("\n\t ", Format.JSON).is_valid
        assert ValidationUtils.validate_text("", Format.YAML).is_valid

    def test_validate_structure_ok(self):
        """Test plain nested data is valid."""
        result = ValidationUtils.validate_structure({"a": [1, {"b": None}]})

        assert result.is_valid
        assert result.warnings == []

    def test_validate_structure_circular(self):
        """Test self-referencing structures are rejected."""
        data = {"name": "loop"}
        data["self"] = data
        result = ValidationUtils.validate_structure(data)

        assert not result.is_valid
        assert result.errors[0].type == ErrorType.CONVERSION

    def test_validate_structure_deep_nesting_warns(self):
        """Test deeply nested data produces a warning, not an error."""
        data = []
        for _ in range(DEEP_NESTING_THRESHOLD + 5):
            data = [data]
        result = ValidationUtils.validate_structure(data)

        assert result.is_valid
        assert "Deep nesting" in result.warnings[0]

    def test_shared_references_are_not_circular(self):
        """Test the same object reachable twice is not a cycle."""
        shared = {"x": 1}

        assert not ValidationUtils.has_circular_references({"a": shared, "b": [shared]})

    def test_circular_list(self):
        """Test cycles through lists."""
        data = [1]
        data.append(data)

        assert ValidationUtils.has_circular_references(data)

    def test_calculate_max_depth(self):
        """Test depth calculation."""
        assert ValidationUtils.calculate_max_depth("scalar") == 0
        assert ValidationUtils.calculate_max_depth({}) == 1
        assert ValidationUtils.calculate_max_depth({"a": [1]}) == 2
        assert ValidationUtils.calculate_max_depth({"a": {"b": {"c": 1}}}) == 3

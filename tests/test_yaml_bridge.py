"""Tests for the YAML bridge."""

import pytest
from jqr.bridges import YamlBridge
from jqr.models.value import Value
from jqr.types import ConversionError, Format, ParseError


class TestYamlParse:
    """Tests for YamlBridge.parse."""

    def setup_method(self):
        """Set up test fixtures."""
        self.bridge = YamlBridge()

    def test_parse_block_mapping(self, user_yaml):
        """Test parsing a simple block mapping."""
        value = self.bridge.parse(user_yaml)

        assert value == Value.from_python({"user": {"name": "Alice", "age": 30}})

    def test_null_spellings(self):
        """Test every null spelling becomes Null."""
        value = self.bridge.parse("a: null\nb: ~\nc:\nd: Null\n")

        assert all(child.is_null for child in value.children())

    def test_yaml11_booleans(self):
        """Test yes/no/on/off resolve to Bool."""
        value = self.bridge.parse("a: yes\nb: no\nc: on\nd: off\ne: true\n")

        assert value.to_python() == {"a": True, "b": False, "c": True, "d": False, "e": True}

    def test_dates_narrow_to_source_text(self):
        """Test timestamps keep their original spelling as strings."""
        value = self.bridge.parse("day: 2024-01-01\nstamp: 2001-12-14t21:59:43.10-05:00\n")

        assert value.get("day") == Value.string("2024-01-01")
        assert value.get("stamp") == Value.string("2001-12-14t21:59:43.10-05:00")

    def test_binary_narrows_to_base64_text(self):
        """Test !!binary keeps its base64 payload."""
        value = self.bridge.parse("blob: !!binary |\n  R0lG\n  ODlh\n")

        assert value.get("blob") == Value.string("R0lGODlh")

    def test_set_narrows_to_mapping_of_nulls(self):
        """Test !!set becomes a mapping with null values."""
        value = self.bridge.parse("tags: !!set\n  ? red\n  ? blue\n")

        assert value.get("tags").keys() == ["red", "blue"]
        assert all(child.is_null for child in value.get("tags").children())

    def test_omap_narrows_to_mapping(self):
        """Test !!omap becomes an ordered mapping."""
        value = self.bridge.parse("steps: !!omap\n  - b: 1\n  - a: 2\n")

        assert value.get("steps").keys() == ["b", "a"]
        assert value.get("steps").get("a") == Value.number(2)

    def test_non_string_keys_take_json_spelling(self, sample_mixed_yaml):
        """Test numeric, boolean and null keys are stringified."""
        value = self.bridge.parse(sample_mixed_yaml)
        assert value.get("1") == Value.string("numeric key")

        value = self.bridge.parse("true: a\n~: b\n1.5: c\n")
        assert value.keys() == ["true", "null", "1.5"]

    def test_mixed_document(self, sample_mixed_yaml):
        """Test the narrowing rules together."""
        value = self.bridge.parse(sample_mixed_yaml)
        metadata = value.get("metadata")

        assert metadata.get("version") == Value.string("1.0")
        assert metadata.get("created") == Value.string("2024-01-01")
        assert metadata.get("enabled") == Value.boolean(True)
        assert metadata.get("missing").is_null
        assert metadata.get("empty").is_null
        assert value.get("items").to_python() == [1, 2.5, "text"]

    def test_only_first_document_is_read(self):
        """Test later documents are ignored, even malformed ones."""
        value = self.bridge.parse("a: 1\n---\nb: [unclosed\n")

        assert value == Value.from_python({"a": 1})

    def test_empty_stream_is_null(self):
        """Test empty input loads as null."""
        assert self.bridge.parse("") == Value.null()
        assert self.bridge.parse("# only a comment\n") == Value.null()

    def test_malformed_yaml_is_parse_error(self):
        """Test syntax errors carry format and position."""
        with pytest.raises(ParseError) as excinfo:
            self.bridge.parse("a: [1, 2\nb: 3\n")

        assert excinfo.value.format == Format.YAML
        assert excinfo.value.position is not None

    def test_bad_indentation_is_parse_error(self):
        """Test mapping values in the wrong place are rejected."""
        with pytest.raises(ParseError):
            self.bridge.parse("a: b: c\n")

    def test_deep_nesting_is_parse_error(self):
        """Test documents deeper than the recursion limit are rejected cleanly."""
        with pytest.raises(ParseError, match="nested too deeply") as excinfo:
            self.bridge.parse("[" * 2000 + "]" * 2000)

        assert excinfo.value.format == Format.YAML

    def test_recursive_alias_is_conversion_error(self):
        """Test self-referencing anchors cannot be represented."""
        with pytest.raises(ConversionError, match="Circular"):
            self.bridge.parse("a: &loop\n  - *loop\n")

    def test_shared_alias_is_copied(self):
        """Test non-recursive aliases expand to equal subtrees."""
        value = self.bridge.parse("base: &b {x: 1}\ncopy: *b\n")

        assert value.get("base") == value.get("copy")


class TestYamlSerialize:
    """Tests for YamlBridge.serialize."""

    def setup_method(self):
        """Set up test fixtures."""
        self.bridge = YamlBridge()

    def test_block_style_mapping(self, user_json):
        """Test nested mappings use two-space block indentation."""
        value = Value.from_python({"user": {"name": "Alice", "age": 30}})

        assert self.bridge.serialize(value) == "user:\n  name: Alice\n  age: 30\n"

    def test_sequences_indented_under_keys(self):
        """Test sequences are indented below their key."""
        value = Value.from_python({"items": [1, {"a": 2}]})

        assert self.bridge.serialize(value) == "items:\n  - 1\n  - a: 2\n"

    def test_ambiguous_strings_are_quoted(self):
        """Test strings that look like other scalars are quoted."""
        value = Value.from_python(["yes", "null", "123", "2024-01-01", "plain"])
        output = self.bridge.serialize(value)

        assert "- plain" in output
        assert "- 'yes'" in output
        assert "- 'null'" in output
        assert "- '123'" in output
        assert "- '2024-01-01'" in output

    def test_scalar_root_has_no_document_end_marker(self):
        """Test scalar roots serialize without '...'."""
        assert self.bridge.serialize(Value.string("Alice")) == "Alice\n"
        assert self.bridge.serialize(Value.null()) == "null\n"

    def test_unicode_is_kept(self):
        """Test non-ASCII text is emitted as-is."""
        assert self.bridge.serialize(Value.from_python({"city": "Zürich"})) == "city: Zürich\n"

    def test_round_trip(self, sample_mixed_yaml):
        """Test parse -> serialize -> parse yields an equal Value."""
        original = self.bridge.parse(sample_mixed_yaml)

        assert self.bridge.parse(self.bridge.serialize(original)) == original

    def test_round_trip_preserves_key_order(self):
        """Test key order survives serialization."""
        original = self.bridge.parse("z: 1\na: 2\nm: [3, 4]\n")
        again = self.bridge.parse(self.bridge.serialize(original))

        assert again.keys() == ["z", "a", "m"]
        assert again == original

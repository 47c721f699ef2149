"""Integration tests for the jqr pipeline."""

import pytest
from jqr import JQR, ConversionError, Format, OutputMode, ParseError, QueryError, Value


class TestJQRIntegration:
    """End-to-end tests for the JQR facade."""

    def setup_method(self):
        """Set up test fixtures."""
        self.jqr = JQR()

    def test_query_field(self, user_json):
        """Test selecting one string prints it JSON-quoted."""
        result = self.jqr.run(user_json, "$.user.name")

        assert result.output == '"Alice"\n'
        assert result.matched
        assert result.match_count == 1
        assert result.input_format == Format.JSON

    def test_pretty_print_whole_document(self, user_json):
        """Test display output of the whole document."""
        assert self.jqr.pretty_print(user_json) == (
            '{\n  "user": {\n    "name": "Alice",\n    "age": 30\n  }\n}\n'
        )

    def test_convert_json_to_yaml(self, user_json):
        """Test JSON to YAML conversion."""
        assert self.jqr.convert_to_yaml(user_json) == "user:\n  name: Alice\n  age: 30\n"

    def test_convert_yaml_to_json(self, user_yaml):
        """Test YAML to compact JSON conversion."""
        assert self.jqr.convert_to_json(user_yaml) == '{"user":{"name":"Alice","age":30}}\n'

    def test_yaml_input_is_detected(self, user_yaml):
        """Test queries over YAML input."""
        result = self.jqr.run(user_yaml, "$.user.age")

        assert result.input_format == Format.YAML
        assert result.output == "30\n"

    def test_multiple_matches_display(self, store_json):
        """Test each match prints on its own block."""
        output = self.jqr.run(store_json, "$.store.book[?(@.price < 10)].title").output

        assert output == '"Sayings of the Century"\n"Moby Dick"\n'

    def test_query_then_convert(self):
        """Test conversion applies to the query matches."""
        data = '{"a": [1, {"b": "x"}]}'

        assert self.jqr.run(data, "$.a[*]", output=OutputMode.JSON).output == '1\n{"b":"x"}\n'
        assert self.jqr.run(data, "$.a[*]", output=OutputMode.YAML).output == "1\n---\nb: x\n"

    def test_no_match(self, user_json):
        """Test an empty match set is not an error."""
        result = self.jqr.run(user_json, "$.user.email")

        assert not result.matched
        assert result.match_count == 0
        assert result.output == ""

    def test_trailing_comma_is_parse_error(self):
        """Test malformed JSON is a parse error."""
        with pytest.raises(ParseError) as excinfo:
            self.jqr.run('{"a": 1,}', "$.a")

        assert excinfo.value.format == Format.JSON

    def test_query_compiled_before_document_is_read(self):
        """Test a bad path is reported even when the document is bad too."""
        with pytest.raises(QueryError):
            self.jqr.run('{"a": ', "a")

    def test_empty_input(self):
        """Test blank input under auto-detection."""
        with pytest.raises(ParseError, match="empty"):
            self.jqr.run("   ")

    def test_explicit_yaml_empty_input_is_null(self):
        """Test an empty stream read as YAML loads as null."""
        assert self.jqr.run("", input_format=Format.YAML).output == "null\n"

    def test_deeply_nested_yaml_is_parse_error(self):
        """Test over-deep YAML is reported like over-deep JSON."""
        with pytest.raises(ParseError, match="nested too deeply"):
            self.jqr.run("[" * 2000 + "]" * 2000, input_format=Format.YAML)

    def test_non_finite_number_is_conversion_error(self):
        """Test values JSON cannot express fail at render time."""
        with pytest.raises(ConversionError):
            self.jqr.convert_to_json("x: .nan\n")
        with pytest.raises(ConversionError):
            self.jqr.run('{"x": 1e999}', output=OutputMode.JSON)

    def test_bytes_input_with_bom(self):
        """Test UTF-8 bytes, with or without a byte order mark."""
        value, detected = self.jqr.load(b'\xef\xbb\xbf{"city": "Z\xc3\xbcrich"}')

        assert detected == Format.JSON
        assert value.get("city") == Value.string("Zürich")

    def test_invalid_utf8_is_parse_error(self):
        """Test undecodable bytes."""
        with pytest.raises(ParseError, match="UTF-8"):
            self.jqr.load(b'{"a": "\xff"}')

    def test_extract(self, store):
        """Test extract collapses matches."""
        assert self.jqr.extract(store, "$.store.missing") is None
        assert self.jqr.extract(store, "$.expensive") == Value.number(10)
        assert self.jqr.extract(store, "$.store.book[0, 1].price") == Value.from_python([8.95, 12.99])

    def test_raw_output_and_paths(self, user_json):
        """Test raw strings and path prefixes together."""
        jqr = JQR(raw_output=True, show_paths=True)

        assert jqr.run(user_json, "$.user.name").output == "$['user']['name']\tAlice\n"

    def test_compact_display(self, user_json):
        """Test compact display output."""
        assert JQR(compact=True).run(user_json, "$.user").output == '{"name":"Alice","age":30}\n'

    def test_negative_indices_disabled(self):
        """Test the negative index switch reaches the parser."""
        assert not JQR(allow_negative_indices=False).run("[1, 2]", "$[-1]").matched

    def test_profiling_records_stages(self, user_json):
        """Test every pipeline stage is profiled when enabled."""
        jqr = JQR(enable_profiling=True)
        jqr.run(user_json, "$.user")

        names = [m.operation_name for m in jqr.profiler.metrics_history]
        assert names == ["parse_json", "query", "render_display"]

    def test_profiling_disabled_by_default(self):
        """Test no profiler is created unless asked for."""
        assert self.jqr.profiler is None

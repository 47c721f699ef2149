"""Tests for display rendering."""

from jqr.printer import PrettyPrinter
from jqr.models.path import Match
from jqr.models.value import Value
from jqr.types import QueryResult


class TestPrettyPrinter:
    """Tests for PrettyPrinter."""

    def setup_method(self):
        """Set up test fixtures."""
        self.printer = PrettyPrinter()
        self.value = Value.from_python({"name": "Alice", "tags": ["a", "b"], "empty": {}})

    def test_render_mapping_indented(self):
        """Test containers render as indented JSON."""
        assert self.printer.render(self.value) == (
            '{\n'
            '  "name": "Alice",\n'
            '  "tags": [\n'
            '    "a",\n'
            '    "b"\n'
            '  ],\n'
            '  "empty": {}\n'
            '}'
        )

    def test_render_string_keeps_quotes(self):
        """Test scalar strings display JSON-quoted."""
        assert self.printer.render(Value.string("Alice")) == '"Alice"'
        assert self.printer.render(Value.number(30)) == "30"
        assert self.printer.render(Value.null()) == "null"
        assert self.printer.render(Value.boolean(False)) == "false"

    def test_raw_strings(self):
        """Test raw mode prints top-level strings unquoted."""
        printer = PrettyPrinter(raw_strings=True)

        assert printer.render(Value.string("line\ttab")) == "line\ttab"
        assert printer.render(Value.from_python(["x"])) == '[\n  "x"\n]'

    def test_compact(self):
        """Test compact mode renders one line per value."""
        printer = PrettyPrinter(compact=True)

        assert printer.render(self.value) == '{"name":"Alice","tags":["a","b"],"empty":{}}'

    def test_custom_indent(self):
        """Test the indent width is configurable."""
        printer = PrettyPrinter(indent=4)

        assert printer.render(Value.from_python({"a": 1})) == '{\n    "a": 1\n}'

    def test_render_matches_in_order(self):
        """Test one block per match, separated by newlines."""
        result = QueryResult(matches=[
            Match(Value.string("Alice"), "$['users'][0]['name']"),
            Match(Value.string("Bob"), "$['users'][1]['name']"),
        ])

        assert self.printer.render_matches(result) == '"Alice"\n"Bob"'

    def test_render_matches_with_paths(self):
        """Test path prefixes."""
        printer = PrettyPrinter(compact=True, show_paths=True)
        result = QueryResult(matches=[Match(Value.from_python({"a": 1}), "$[0]")])

        assert printer.render_matches(result) == '$[0]\t{"a":1}'

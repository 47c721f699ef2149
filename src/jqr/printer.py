"""Display rendering for values and query results."""

import logging
from typing import Optional

from .types import QueryResult
from .models.value import Value
from .bridges.json_bridge import JsonBridge


class PrettyPrinter:
    """
    Renders Values in JSON display form.

    A single Value renders as one JSON block (scalars as bare JSON
    scalars, so strings keep their quotes). A match set renders one block
    per match, in match order, separated by newlines.
    """

    def __init__(self, indent: int = 2, compact: bool = False,
                 raw_strings: bool = False, show_paths: bool = False,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the printer.

        Args:
            indent: Spaces per nesting level
            compact: Render each block on one line
            raw_strings: Render top-level strings without quotes
            show_paths: Prefix each match with its normalized path and a tab
            logger: Optional logger instance
        """
        self.indent = indent
        self.compact = compact
        self.raw_strings = raw_strings
        self.show_paths = show_paths
        self.logger = logger or logging.getLogger(__name__)
        self.json_bridge = JsonBridge(logger=self.logger)

    def render(self, value: Value) -> str:
        """Render one Value (no trailing newline)."""
        if self.raw_strings and value.is_string:
            return value.data
        indent = None if self.compact else self.indent
        return self.json_bridge.serialize(value, indent=indent)

    def render_matches(self, result: QueryResult) -> str:
        """Render every match of ``result`` (no trailing newline)."""
        blocks = []
        for match in result.matches:
            block = self.render(match.value)
            if self.show_paths:
                block = f"{match.path}\t{block}"
            blocks.append(block)
        return "\n".join(blocks)

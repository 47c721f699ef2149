"""Main jqr pipeline: load, query, convert and print documents."""

import logging
from contextlib import nullcontext
from typing import Optional, Tuple, Union
from .types import (
    Format,
    OutputMode,
    ParseError,
    QueryResult,
    RunResult,
)
from .models.value import Value
from .models.path import PathExpression
from .bridges import JsonBridge, YamlBridge
from .engines import QueryParser, QueryEngine
from .error_handler import ErrorHandler
from .format_detector import FormatDetector
from .printer import PrettyPrinter
from .profiler import PerformanceProfiler


class JQR:
    """
    End-to-end document pipeline.

    Reads JSON or YAML into the Value model, optionally evaluates one path
    query, and renders the result either for display (pretty JSON) or
    converted to JSON/YAML. When a query and a conversion are combined the
    query runs first and its matches are converted.
    """

    def __init__(self, indent: int = 2,
                 compact: bool = False,
                 raw_output: bool = False,
                 show_paths: bool = False,
                 allow_negative_indices: bool = True,
                 enable_profiling: bool = False,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the pipeline.

        Args:
            indent: Indentation for display output and YAML output
            compact: Single-line display output
            raw_output: Print top-level string results without quotes
            show_paths: Prefix query matches with their normalized path
            allow_negative_indices: Whether ``[-1]`` counts from the end
            enable_profiling: Collect per-stage metrics with PerformanceProfiler
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

        self.error_handler = ErrorHandler(self.logger)
        self.detector = FormatDetector(self.logger)
        self.json_bridge = JsonBridge(error_handler=self.error_handler, logger=self.logger)
        self.yaml_bridge = YamlBridge(indent=indent, error_handler=self.error_handler,
                                      logger=self.logger)
        self.parser = QueryParser(allow_negative_indices=allow_negative_indices,
                                  logger=self.logger)
        self.engine = QueryEngine(self.parser, self.logger)
        self.printer = PrettyPrinter(indent=indent, compact=compact, raw_strings=raw_output,
                                     show_paths=show_paths, logger=self.logger)
        self.profiler = PerformanceProfiler(self.logger) if enable_profiling else None

    def _stage(self, name: str, input_size: int = 0):
        if self.profiler is None:
            return nullcontext()
        return self.profiler.profile_operation(name, input_size)

    # Loading

    def decode(self, data: Union[str, bytes], input_format: Format = Format.AUTO) -> str:
        """
        Turn raw input into text.

        Raises:
            ParseError: If bytes are not valid UTF-8
        """
        if isinstance(data, bytes):
            try:
                return data.decode("utf-8-sig")
            except UnicodeDecodeError as e:
                raise ParseError(f"Input is not valid UTF-8: {e.reason} at byte {e.start}",
                                 input_format) from e
        return data.lstrip("\ufeff")

    def load(self, data: Union[str, bytes],
             input_format: Format = Format.AUTO) -> Tuple[Value, Format]:
        """
        Parse a document.

        Args:
            data: Document text or UTF-8 bytes
            input_format: Explicit format, or AUTO to detect from content

        Returns:
            Tuple of (root value, format used)

        Raises:
            ParseError: If the document is malformed
            ConversionError: If the document holds values the model cannot represent
        """
        text = self.decode(data, input_format)
        detected = self.detector.detect(text, input_format)
        bridge = self.json_bridge if detected is Format.JSON else self.yaml_bridge

        with self._stage(f"parse_{detected.value}", len(text.encode("utf-8"))):
            value = bridge.parse(text)

        self.logger.info(f"Loaded {detected.value} document ({value.kind.value} root)")
        return value, detected

    # Querying

    def compile(self, path: str) -> PathExpression:
        """Parse a path expression without evaluating it."""
        return self.parser.parse(path)

    def query(self, value: Value, path: Union[str, PathExpression]) -> QueryResult:
        """Evaluate a path against a loaded document."""
        with self._stage("query"):
            return self.engine.query(value, path)

    def extract(self, value: Value, path: Union[str, PathExpression]) -> Optional[Value]:
        """
        Evaluate a path and collapse the matches into one value.

        Returns:
            None for no match, the matched value for one match, and a
            Sequence of the matched values otherwise
        """
        result = self.query(value, path)
        if result.is_empty:
            return None
        if result.count == 1:
            return result.values[0]
        return Value.sequence(result.values)

    # Rendering

    def render(self, value: Value, output: OutputMode = OutputMode.DISPLAY) -> str:
        """Render one value, newline-terminated."""
        with self._stage(f"render_{output.value}"):
            if output is OutputMode.YAML:
                return self.yaml_bridge.serialize(value)
            if output is OutputMode.JSON:
                return self.json_bridge.serialize(value) + "\n"
            return self.printer.render(value) + "\n"

    def render_result(self, result: QueryResult, output: OutputMode = OutputMode.DISPLAY) -> str:
        """
        Render a non-empty match set, newline-terminated.

        Display output is one pretty block per match; JSON output is one
        compact document per line; YAML output is one document per match
        separated by ``---``.
        """
        with self._stage(f"render_{output.value}"):
            if output is OutputMode.YAML:
                return "---\n".join(self.yaml_bridge.serialize(value) for value in result.values)
            if output is OutputMode.JSON:
                return "".join(self.json_bridge.serialize(value) + "\n" for value in result.values)
            return self.printer.render_matches(result) + "\n"

    # Pipelines

    def run(self, data: Union[str, bytes],
            query: Optional[str] = None,
            input_format: Format = Format.AUTO,
            output: OutputMode = OutputMode.DISPLAY) -> RunResult:
        """
        Run the whole pipeline.

        The query is compiled before the document is read, so a malformed
        path is reported even when the document is malformed too.

        Args:
            data: Document text or UTF-8 bytes
            query: Optional path expression
            input_format: Input format, AUTO to detect
            output: Display, JSON or YAML rendering

        Returns:
            RunResult; ``matched`` is False when a query selected nothing

        Raises:
            ParseError, QueryError, ConversionError
        """
        expression = self.compile(query) if query is not None else None

        value, detected = self.load(data, input_format)

        if expression is None:
            return RunResult(output=self.render(value, output), input_format=detected)

        result = self.query(value, expression)
        if result.is_empty:
            self.logger.info("Query matched nothing")
            return RunResult(output="", input_format=detected, matched=False, match_count=0)

        return RunResult(
            output=self.render_result(result, output),
            input_format=detected,
            matched=True,
            match_count=result.count
        )

    def pretty_print(self, data: Union[str, bytes], query: Optional[str] = None) -> str:
        """Pretty-print a document, or the matches of ``query`` in it."""
        return self.run(data, query).output

    def convert_to_yaml(self, data: Union[str, bytes], input_format: Format = Format.JSON) -> str:
        """Convert a document (JSON unless stated otherwise) to YAML."""
        return self.run(data, input_format=input_format, output=OutputMode.YAML).output

    def convert_to_json(self, data: Union[str, bytes], input_format: Format = Format.YAML) -> str:
        """Convert a document (YAML unless stated otherwise) to compact JSON."""
        return self.run(data, input_format=input_format, output=OutputMode.JSON).output

"""JSON <-> Value bridge."""

import json
import logging
from typing import Any, NoReturn, Optional
from ..types import FormatBridgeInterface, Format, ParseError, ConversionError
from ..error_handler import ErrorHandler
from ..models.value import Value
from ..utils.validation import ValidationUtils


def _reject_constant(name: str) -> NoReturn:
    # json.loads accepts NaN/Infinity unless told otherwise
    raise ValueError(f"Invalid JSON literal: {name}")


class JsonBridge(FormatBridgeInterface):
    """
    Parses JSON text into Values and serializes Values back to JSON.

    Integer and decimal literals stay distinct (``30`` vs ``30.0``), key
    order is preserved in both directions and duplicate keys resolve to
    the last value.
    """

    format = Format.JSON

    def __init__(self, indent: Optional[int] = None,
                 error_handler: Optional[ErrorHandler] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the JSON bridge.

        Args:
            indent: Indentation for serialize(); None gives compact output
            error_handler: Optional ErrorHandler instance
            logger: Optional logger instance
        """
        self.indent = indent
        self.logger = logger or logging.getLogger(__name__)
        self.error_handler = error_handler or ErrorHandler(self.logger)

    def parse(self, text: str) -> Value:
        """
        Parse JSON text into a Value.

        Args:
            text: JSON document

        Returns:
            Root Value of the document

        Raises:
            ParseError: If the text is empty or not well-formed JSON
        """
        validation_result = self.error_handler.validate_input(text, Format.JSON)
        if not validation_result.is_valid:
            error_messages = [error.message for error in validation_result.errors]
            raise ParseError("; ".join(error_messages), Format.JSON)

        try:
            data = json.loads(text, parse_constant=_reject_constant)
        except json.JSONDecodeError as e:
            raise ParseError(e.msg, Format.JSON, (e.lineno, e.colno)) from e
        except ValueError as e:
            raise ParseError(str(e), Format.JSON) from e
        except RecursionError as e:
            raise ParseError("Document is nested too deeply", Format.JSON) from e

        value = self._to_value(data)
        self.logger.debug(f"Parsed JSON document with root kind: {value.kind.value}")
        return value

    def serialize(self, value: Value, indent: Optional[int] = None) -> str:
        """
        Serialize a Value as JSON text (without a trailing newline).

        Args:
            value: Value to serialize
            indent: Overrides the bridge's indentation for this call

        Raises:
            ConversionError: If the value holds NaN or infinite numbers
        """
        if indent is None:
            indent = self.indent
        separators = (",", ":") if indent is None else (",", ": ")

        try:
            return json.dumps(value.to_python(), ensure_ascii=False, allow_nan=False,
                              indent=indent, separators=separators)
        except ValueError as e:
            raise ConversionError(str(e)) from e

    def _to_value(self, data: Any) -> Value:
        try:
            validation_result = ValidationUtils.validate_structure(data)
            for warning in validation_result.warnings:
                self.logger.warning(warning)
            return Value.from_python(data)
        except RecursionError as e:
            raise ParseError("Document is nested too deeply", Format.JSON) from e

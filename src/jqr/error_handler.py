"""Error handling implementation for jqr."""

import logging
import re
from typing import Optional
from .types import (
    ErrorHandlerInterface,
    ValidationResult,
    ValidationError,
    ErrorResponse,
    JQRError,
    ParseError,
    QueryError,
    ErrorType,
    Format,
)
from .utils.validation import ValidationUtils

EXIT_CODES = {
    ErrorType.PARSE: 1,
    ErrorType.QUERY: 3,
    ErrorType.CONVERSION: 4,
}

_WHITESPACE = re.compile(r"\s+")


class ErrorHandler(ErrorHandlerInterface):
    """
    Validation and error reporting for jqr operations.

    Every error is terminal for the current invocation; the handler only
    decides how it is reported: one diagnostic line and an exit status.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_input(self, input_data: str, format: Format = Format.JSON) -> ValidationResult:
        """
        Validate raw input text.

        Args:
            input_data: Document text to validate
            format: Format the text will be parsed as

        Returns:
            ValidationResult with validation details
        """
        if not isinstance(input_data, str):
            return ValidationResult(
                is_valid=False,
                errors=[ValidationError(
                    type=ErrorType.PARSE,
                    message=f"Input must be text, got {type(input_data).__name__}",
                    location="input"
                )],
                warnings=[]
            )

        result = ValidationUtils.validate_text(input_data, format)
        for warning in result.warnings:
            self.logger.warning(warning)
        return result

    def handle_error(self, error: JQRError) -> ErrorResponse:
        """
        Map an error to its exit status and single-line diagnostic.

        Args:
            error: Error raised by a bridge, the query parser or a serializer

        Returns:
            ErrorResponse for the process boundary
        """
        diagnostic = self.format_diagnostic(error)
        self.logger.error(diagnostic)
        return ErrorResponse(
            exit_code=EXIT_CODES.get(error.error_type, 1),
            diagnostic=diagnostic
        )

    def format_diagnostic(self, error: JQRError) -> str:
        """Build the one-line description of an error."""
        message = _WHITESPACE.sub(" ", error.message).strip()

        if isinstance(error, ParseError):
            location = ""
            if error.position is not None:
                line, column = error.position
                location = f" at line {line}, column {column}"
            label = "input" if error.format is Format.AUTO else error.format.value
            return f"Parse error ({label}){location}: {message}"

        if isinstance(error, QueryError):
            location = "" if error.position is None else f" at position {error.position}"
            return f"Query error{location}: {message}"

        return f"Conversion error: {message}"

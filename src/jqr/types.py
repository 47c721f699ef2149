"""Core type definitions for jqr."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .models.path import Match
    from .models.value import Value


class Format(Enum):
    """Enumeration of supported document formats."""
    AUTO = "auto"
    JSON = "json"
    YAML = "yaml"


class OutputMode(Enum):
    """Enumeration of output renderings."""
    DISPLAY = "display"
    JSON = "json"
    YAML = "yaml"


class ErrorType(Enum):
    """Enumeration of error types."""
    PARSE = "parse"
    QUERY = "query"
    CONVERSION = "conversion"


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class ErrorResponse:
    """How an error is reported at the process boundary."""
    exit_code: int
    diagnostic: str


@dataclass
class QueryResult:
    """Ordered match set produced by evaluating a path expression."""
    matches: List['Match'] = field(default_factory=list)

    @property
    def values(self) -> List['Value']:
        return [match.value for match in self.matches]

    @property
    def paths(self) -> List[str]:
        return [match.path for match in self.matches]

    @property
    def count(self) -> int:
        return len(self.matches)

    @property
    def is_empty(self) -> bool:
        return not self.matches


@dataclass
class RunResult:
    """Result of a full load/query/render pipeline run."""
    output: str
    input_format: Format
    matched: bool = True
    match_count: Optional[int] = None


class JQRError(Exception):
    """Base exception for every failure jqr reports."""

    def __init__(self, message: str, error_type: ErrorType):
        super().__init__(message)
        self.message = message
        self.error_type = error_type


class ParseError(JQRError):
    """Malformed input document."""

    def __init__(self, message: str, format: Format,
                 position: Optional[Tuple[int, int]] = None):
        super().__init__(message, ErrorType.PARSE)
        self.format = format
        self.position = position


class QueryError(JQRError):
    """Malformed path expression."""

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message, ErrorType.QUERY)
        self.position = position


class ConversionError(JQRError):
    """A value that cannot be represented in the target format."""

    def __init__(self, message: str):
        super().__init__(message, ErrorType.CONVERSION)


# Abstract base classes for interfaces

class FormatBridgeInterface(ABC):
    """Abstract interface for a text format <-> Value adapter."""

    format: Format

    @abstractmethod
    def parse(self, text: str) -> 'Value':
        """Parse document text into a Value tree."""
        pass

    @abstractmethod
    def serialize(self, value: 'Value') -> str:
        """Serialize a Value tree into document text."""
        pass


class ErrorHandlerInterface(ABC):
    """Abstract interface for error handling."""

    @abstractmethod
    def validate_input(self, input_data: str, format: Format = Format.JSON) -> ValidationResult:
        """Validate input text before parsing."""
        pass

    @abstractmethod
    def handle_error(self, error: JQRError) -> ErrorResponse:
        """Turn an error into a boundary report."""
        pass

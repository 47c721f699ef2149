"""
jqr - pretty-print, query and convert JSON and YAML documents.

Documents are read into a single value model, optionally filtered with a
JSONPath-style query, and printed or converted between the two formats.
"""

__version__ = "0.1.0"

from .jqr import JQR
from .models import Value, ValueKind, Match, PathExpression
from .types import (
    Format,
    OutputMode,
    QueryResult,
    RunResult,
    JQRError,
    ParseError,
    QueryError,
    ConversionError,
)

__all__ = [
    "JQR",
    "Value",
    "ValueKind",
    "Match",
    "PathExpression",
    "Format",
    "OutputMode",
    "QueryResult",
    "RunResult",
    "JQRError",
    "ParseError",
    "QueryError",
    "ConversionError",
]

"""Data models for jqr."""

from .value import Value, ValueKind
from .path import Match, PathExpression

__all__ = ["Value", "ValueKind", "Match", "PathExpression"]

"""Path query parsing and evaluation."""

from .query_parser import QueryParser
from .query_engine import QueryEngine

__all__ = ["QueryParser", "QueryEngine"]

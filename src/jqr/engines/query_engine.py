"""Path query evaluation over the Value model."""

import logging
import operator
from typing import Callable, Dict, Iterator, Optional, Union

from ..types import QueryResult
from ..models.value import Value, ValueKind
from ..models.path import (
    Comparison,
    Exists,
    Field,
    Filter,
    Index,
    Literal,
    Logical,
    Match,
    NodeRef,
    Not,
    PathExpression,
    Predicate,
    RecursiveDescent,
    RootAnchor,
    Segment,
    Selection,
    Slice,
    Wildcard,
)
from .query_parser import QueryParser

_ORDERING: Dict[str, Callable[[object, object], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}

_ORDERABLE_KINDS = (ValueKind.NUMBER, ValueKind.STRING)


class QueryEngine:
    """
    Evaluates path expressions against a Value tree.

    Evaluation is a fold over the segments: the match set starts as the
    root, and each segment maps every current match to its selected
    children, keeping parent order then child order. A segment that
    selects nothing simply contributes nothing; an empty result is not
    an error.
    """

    def __init__(self, parser: Optional[QueryParser] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the query engine.

        Args:
            parser: Optional QueryParser used for string paths
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.parser = parser or QueryParser(logger=self.logger)

    def query(self, root: Value, path: Union[str, PathExpression]) -> QueryResult:
        """
        Evaluate a path against ``root``.

        Args:
            root: Document root
            path: Path text or an already compiled PathExpression

        Returns:
            QueryResult with the ordered matches

        Raises:
            QueryError: If ``path`` is text and does not parse
        """
        expression = self.parser.parse(path) if isinstance(path, str) else path

        matches = [Match(root)]
        for segment in expression.segments:
            matches = [selected
                       for match in matches
                       for selected in self._apply(segment, match, root)]

        self.logger.debug(f"Path {expression.source!r} matched {len(matches)} values")
        return QueryResult(matches=matches)

    def _apply(self, segment: Segment, match: Match, root: Value) -> Iterator[Match]:
        value = match.value

        if isinstance(segment, RootAnchor):
            yield match
        elif isinstance(segment, Field):
            child = value.get(segment.name)
            if child is not None:
                yield match.child(segment.name, child)
        elif isinstance(segment, Index):
            yield from self._select_index(segment, match)
        elif isinstance(segment, Slice):
            if value.is_sequence and segment.step != 0:
                bounds = slice(segment.start, segment.stop, segment.step)
                for position in range(*bounds.indices(value.length)):
                    yield match.child(position, value.data[position])
        elif isinstance(segment, Selection):
            for selector in segment.selectors:
                yield from self._apply(selector, match, root)
        elif isinstance(segment, Wildcard):
            for key, child in value.items():
                yield match.child(key, child)
        elif isinstance(segment, RecursiveDescent):
            yield from self._descend(match)
        elif isinstance(segment, Filter):
            for key, child in value.items():
                if self._test(segment.predicate, child, root):
                    yield match.child(key, child)
        else:
            raise TypeError(f"Unknown segment type: {type(segment).__name__}")

    def _select_index(self, segment: Index, match: Match) -> Iterator[Match]:
        value = match.value
        if not value.is_sequence:
            return
        position = segment.index
        if position < 0:
            if not segment.allow_negative:
                return
            position += value.length
        child = value.at(position) if position >= 0 else None
        if child is not None:
            yield match.child(position, child)

    def _descend(self, match: Match) -> Iterator[Match]:
        """Yield ``match`` and every node below it, pre-order."""
        yield match
        for key, child in match.value.items():
            yield from self._descend(match.child(key, child))

    # Filter predicates -----------------------------------------------

    def _test(self, predicate: Predicate, current: Value, root: Value) -> bool:
        if isinstance(predicate, Comparison):
            left = self._resolve(predicate.left, current, root)
            right = self._resolve(predicate.right, current, root)
            return compare(predicate.operator, left, right)
        if isinstance(predicate, Exists):
            return self._resolve(predicate.operand, current, root) is not None
        if isinstance(predicate, Not):
            return not self._test(predicate.operand, current, root)
        if isinstance(predicate, Logical):
            if predicate.operator == "&&":
                return all(self._test(operand, current, root) for operand in predicate.operands)
            return any(self._test(operand, current, root) for operand in predicate.operands)
        raise TypeError(f"Unknown predicate type: {type(predicate).__name__}")

    def _resolve(self, operand: Union[Literal, NodeRef], current: Value,
                 root: Value) -> Optional[Value]:
        if isinstance(operand, Literal):
            return operand.value

        node: Optional[Value] = current if operand.relative else root
        for step in operand.steps:
            if node is None:
                return None
            node = node.at(step) if isinstance(step, int) else node.get(step)
        return node


def compare(op: str, left: Optional[Value], right: Optional[Value]) -> bool:
    """
    Compare two filter operands.

    Missing operands and mismatched kinds compare false for every
    operator, ``!=`` included. Ordering is defined for numbers and for
    strings only.
    """
    if left is None or right is None or left.kind is not right.kind:
        return False

    if op == "==":
        return left == right
    if op == "!=":
        return left != right
    if left.kind not in _ORDERABLE_KINDS:
        return False
    return _ORDERING[op](left.data, right.data)

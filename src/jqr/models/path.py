"""Compiled path expression model."""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .value import Value


# Filter expressions

@dataclass(frozen=True)
class Literal:
    """Constant operand of a filter comparison."""
    value: Value


@dataclass(frozen=True)
class NodeRef:
    """
    Singular query inside a filter.

    ``relative`` refers to ``@`` (the child under test), otherwise to ``$``.
    Steps are field names (str) and indices (int).
    """
    relative: bool
    steps: Tuple[Union[str, int], ...] = ()


@dataclass(frozen=True)
class Comparison:
    operator: str
    left: Union[Literal, NodeRef]
    right: Union[Literal, NodeRef]


@dataclass(frozen=True)
class Exists:
    operand: NodeRef


@dataclass(frozen=True)
class Not:
    operand: 'Predicate'


@dataclass(frozen=True)
class Logical:
    """``&&`` / ``||`` chain, evaluated left to right with short-circuit."""
    operator: str
    operands: Tuple['Predicate', ...]


Predicate = Union[Comparison, Exists, Not, Logical]


# Segments

@dataclass(frozen=True)
class RootAnchor:
    pass


@dataclass(frozen=True)
class Field:
    name: str


@dataclass(frozen=True)
class Index:
    index: int
    allow_negative: bool = True


@dataclass(frozen=True)
class Slice:
    start: Optional[int] = None
    stop: Optional[int] = None
    step: Optional[int] = None


@dataclass(frozen=True)
class Selection:
    """Bracketed list of field names and indices, e.g. ``['a', 0]``."""
    selectors: Tuple[Union[Field, Index], ...]


@dataclass(frozen=True)
class Wildcard:
    pass


@dataclass(frozen=True)
class RecursiveDescent:
    pass


@dataclass(frozen=True)
class Filter:
    predicate: Predicate


Segment = Union[RootAnchor, Field, Index, Slice, Selection, Wildcard, RecursiveDescent, Filter]


@dataclass(frozen=True)
class PathExpression:
    """A parsed path: the source text plus its segments, RootAnchor first."""
    source: str
    segments: Tuple[Segment, ...]


@dataclass(frozen=True)
class Match:
    """A selected value and its normalized location."""
    value: Value
    path: str = "$"

    def child(self, key: Union[str, int], value: Value) -> 'Match':
        return Match(value=value, path=self.path + format_step(key))


def format_step(key: Union[str, int]) -> str:
    """Render one normalized path step: ``['name']`` or ``[0]``."""
    if isinstance(key, int):
        return f"[{key}]"
    escaped = key.replace("\\", "\\\\").replace("'", "\\'")
    return f"['{escaped}']"

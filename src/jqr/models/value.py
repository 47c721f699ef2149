"""Unified value model shared by the JSON and YAML bridges."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from ..types import ConversionError


class ValueKind(Enum):
    """Enumeration of value variants."""
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


SCALAR_KINDS = frozenset({ValueKind.NULL, ValueKind.BOOL, ValueKind.NUMBER, ValueKind.STRING})


@dataclass(frozen=True)
class Value:
    """
    Immutable node of a document tree.

    ``data`` holds the payload for the variant named by ``kind``:

    * NULL: ``None``
    * BOOL: ``bool``
    * NUMBER: ``int`` or ``float``
    * STRING: ``str``
    * SEQUENCE: tuple of ``Value``
    * MAPPING: tuple of ``(str, Value)`` pairs with unique keys

    Equality is structural and order-sensitive.
    """

    kind: ValueKind
    data: Any = None

    def __post_init__(self):
        """Validate value after initialization."""
        self._validate()
        if self.kind is ValueKind.MAPPING:
            index = {key: position for position, (key, _) in enumerate(self.data)}
            object.__setattr__(self, "_index", index)

    def _validate(self) -> None:
        """Validate that the payload matches the variant."""
        kind, data = self.kind, self.data

        if kind is ValueKind.NULL:
            if data is not None:
                raise ValueError("null value cannot carry data")
        elif kind is ValueKind.BOOL:
            if not isinstance(data, bool):
                raise ValueError("bool value requires a bool payload")
        elif kind is ValueKind.NUMBER:
            if isinstance(data, bool) or not isinstance(data, (int, float)):
                raise ValueError("number value requires an int or float payload")
        elif kind is ValueKind.STRING:
            if not isinstance(data, str):
                raise ValueError("string value requires a str payload")
        elif kind is ValueKind.SEQUENCE:
            if not isinstance(data, tuple):
                raise ValueError("sequence value requires a tuple payload")
        elif kind is ValueKind.MAPPING:
            if not isinstance(data, tuple):
                raise ValueError("mapping value requires a tuple payload")
            keys = [key for key, _ in data]
            if len(set(keys)) != len(keys):
                raise ValueError("mapping keys must be unique")

    # Construction

    @classmethod
    def null(cls) -> 'Value':
        return cls(ValueKind.NULL)

    @classmethod
    def boolean(cls, flag: bool) -> 'Value':
        return cls(ValueKind.BOOL, flag)

    @classmethod
    def number(cls, number: Union[int, float]) -> 'Value':
        return cls(ValueKind.NUMBER, number)

    @classmethod
    def string(cls, text: str) -> 'Value':
        return cls(ValueKind.STRING, text)

    @classmethod
    def sequence(cls, items: Iterable['Value']) -> 'Value':
        return cls(ValueKind.SEQUENCE, tuple(items))

    @classmethod
    def mapping(cls, pairs: Iterable[Tuple[str, 'Value']]) -> 'Value':
        """
        Build a mapping from key/value pairs.

        A repeated key keeps its first position and takes the last value.
        """
        entries: Dict[str, 'Value'] = {}
        for key, value in pairs:
            entries[key] = value
        return cls(ValueKind.MAPPING, tuple(entries.items()))

    @classmethod
    def from_python(cls, data: Any) -> 'Value':
        """
        Create a Value from plain Python data.

        Accepts the structures produced by ``json.loads`` and by the YAML
        bridge's narrowing step: dict, list, tuple, str, int, float, bool
        and None.

        Raises:
            ConversionError: If the data holds any other type or a non-string key
        """
        if data is None:
            return cls.null()
        if isinstance(data, bool):
            return cls.boolean(data)
        if isinstance(data, (int, float)):
            return cls.number(data)
        if isinstance(data, str):
            return cls.string(data)
        if isinstance(data, dict):
            pairs = []
            for key, item in data.items():
                if not isinstance(key, str):
                    raise ConversionError(
                        f"Mapping key must be a string, got {type(key).__name__}")
                pairs.append((key, cls.from_python(item)))
            return cls.mapping(pairs)
        if isinstance(data, (list, tuple)):
            return cls.sequence(cls.from_python(item) for item in data)
        raise ConversionError(f"Unsupported value type: {type(data).__name__}")

    def to_python(self) -> Any:
        """Convert back to plain Python data (dicts keep key order)."""
        if self.kind is ValueKind.SEQUENCE:
            return [item.to_python() for item in self.data]
        if self.kind is ValueKind.MAPPING:
            return {key: item.to_python() for key, item in self.data}
        return self.data

    # Type inspection

    @property
    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    @property
    def is_bool(self) -> bool:
        return self.kind is ValueKind.BOOL

    @property
    def is_number(self) -> bool:
        return self.kind is ValueKind.NUMBER

    @property
    def is_string(self) -> bool:
        return self.kind is ValueKind.STRING

    @property
    def is_sequence(self) -> bool:
        return self.kind is ValueKind.SEQUENCE

    @property
    def is_mapping(self) -> bool:
        return self.kind is ValueKind.MAPPING

    @property
    def is_scalar(self) -> bool:
        return self.kind in SCALAR_KINDS

    # Child access

    @property
    def length(self) -> int:
        """Number of children; 0 for scalars."""
        if self.is_scalar:
            return 0
        return len(self.data)

    def get(self, key: str) -> Optional['Value']:
        """Return the mapping entry for ``key`` or None."""
        if self.kind is not ValueKind.MAPPING:
            return None
        position = self._index.get(key)
        if position is None:
            return None
        return self.data[position][1]

    def at(self, index: int) -> Optional['Value']:
        """Return the sequence element at ``index`` or None (negative counts from the end)."""
        if self.kind is not ValueKind.SEQUENCE:
            return None
        if index < 0:
            index += len(self.data)
        if 0 <= index < len(self.data):
            return self.data[index]
        return None

    def keys(self) -> List[str]:
        if self.kind is not ValueKind.MAPPING:
            return []
        return [key for key, _ in self.data]

    def items(self) -> Iterator[Tuple[Union[str, int], 'Value']]:
        """Yield ``(key, child)`` for mappings and ``(index, child)`` for sequences."""
        if self.kind is ValueKind.MAPPING:
            yield from self.data
        elif self.kind is ValueKind.SEQUENCE:
            yield from enumerate(self.data)

    def children(self) -> Iterator['Value']:
        for _, child in self.items():
            yield child

    def __repr__(self) -> str:
        return f"Value({self.kind.value}, {self.to_python()!r})"

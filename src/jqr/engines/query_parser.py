"""Path expression parser: turns ``$.a[0]..b[?(@.c > 1)]`` into segments."""

import json
import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Union

from ..types import QueryError
from ..models.value import Value
from ..models.path import (
    Comparison,
    Exists,
    Field,
    Filter,
    Index,
    Literal,
    Logical,
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

# Order matters: multi-char operators first
_TOKEN_REGEX = re.compile(
    r"""
    (?P<WS>\s+)
  | (?P<DOTDOT>\.\.)
  | (?P<DOT>\.)
  | (?P<AND>&&)
  | (?P<OR>\|\|)
  | (?P<EQ>==)
  | (?P<NEQ>!=)
  | (?P<LTE><=)
  | (?P<GTE>>=)
  | (?P<LT><)
  | (?P<GT>>)
  | (?P<NOT>!)
  | (?P<LBRACKET>\[)
  | (?P<RBRACKET>\])
  | (?P<LPAREN>\()
  | (?P<RPAREN>\))
  | (?P<STAR>\*)
  | (?P<QUESTION>\?)
  | (?P<COMMA>,)
  | (?P<COLON>:)
  | (?P<ROOT>\$)
  | (?P<CURRENT>@)
  | (?P<NUMBER>-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?)
  | (?P<STRING>"(?:\\.|[^"\\])*"|'(?:\\.|[^'\\])*')
  | (?P<NAME>[^\W\d][\w\-]*)
    """,
    re.VERBOSE,
)

_COMPARISON_OPERATORS = {
    "EQ": "==",
    "NEQ": "!=",
    "LT": "<",
    "LTE": "<=",
    "GT": ">",
    "GTE": ">=",
}

_KEYWORDS = {
    "true": Value.boolean(True),
    "false": Value.boolean(False),
    "null": Value.null(),
}

_ESCAPES = {
    '"': '"',
    "'": "'",
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_DESCRIPTIONS = {
    "EOF": "end of path",
    "RBRACKET": "']'",
    "RPAREN": "')'",
    "ROOT": "'$'",
}


@dataclass(frozen=True)
class Token:
    type: str
    value: str
    position: int


def _tokenize(source: str) -> List[Token]:
    pos = 0
    tokens: List[Token] = []
    length = len(source)
    while pos < length:
        match = _TOKEN_REGEX.match(source, pos)
        if not match:
            raise QueryError(f"Unexpected character {source[pos]!r}", pos)
        kind = match.lastgroup
        text = match.group()
        pos = match.end()
        if kind == "WS":
            continue
        tokens.append(Token(kind, text, match.start()))
    tokens.append(Token("EOF", "", pos))
    return tokens


def _decode_string(token: Token) -> str:
    """Decode a single- or double-quoted string literal."""
    body = token.value[1:-1]
    chars: List[str] = []
    i = 0
    while i < len(body):
        char = body[i]
        if char != "\\":
            chars.append(char)
            i += 1
            continue
        escape = body[i + 1]
        if escape in _ESCAPES:
            chars.append(_ESCAPES[escape])
            i += 2
        elif escape == "u" and re.fullmatch(r"[0-9a-fA-F]{4}", body[i + 2:i + 6]):
            chars.append(chr(int(body[i + 2:i + 6], 16)))
            i += 6
        else:
            raise QueryError(f"Invalid escape sequence '\\{escape}' in string",
                             token.position + 1 + i)
    return "".join(chars)


def _describe(token: Token) -> str:
    if token.type in _DESCRIPTIONS:
        return _DESCRIPTIONS[token.type]
    return repr(token.value)


class _PathParser:
    def __init__(self, tokens: List[Token], allow_negative_indices: bool):
        self.tokens = tokens
        self.index = 0
        self.allow_negative_indices = allow_negative_indices

    # Parsing helpers -------------------------------------------------
    def _current(self) -> Token:
        return self.tokens[self.index]

    def _peek(self) -> Token:
        return self.tokens[min(self.index + 1, len(self.tokens) - 1)]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def _match(self, *types: str) -> Optional[Token]:
        if self._current().type in types:
            return self._advance()
        return None

    def _expect(self, type_: str) -> Token:
        token = self._current()
        if token.type != type_:
            raise QueryError(
                f"Expected {_DESCRIPTIONS.get(type_, type_)}, got {_describe(token)}",
                token.position)
        return self._advance()

    def _error(self, expected: str) -> QueryError:
        token = self._current()
        return QueryError(f"Expected {expected}, got {_describe(token)}", token.position)

    def _integer(self, token: Token) -> int:
        if not re.fullmatch(r"-?\d+", token.value):
            raise QueryError(f"Expected an integer, got {token.value!r}", token.position)
        return int(token.value)

    # Path grammar ----------------------------------------------------
    def parse_path(self) -> List[Segment]:
        if self._current().type != "ROOT":
            raise QueryError("Path must start with '$'", self._current().position)
        self._advance()
        segments: List[Segment] = [RootAnchor()]

        while self._current().type != "EOF":
            if self._match("DOTDOT"):
                segments.append(RecursiveDescent())
                if self._current().type == "LBRACKET":
                    segments.append(self._parse_bracket())
                else:
                    segments.append(self._parse_member("field name, '*' or '[' after '..'"))
            elif self._match("DOT"):
                segments.append(self._parse_member("field name or '*' after '.'"))
            elif self._current().type == "LBRACKET":
                segments.append(self._parse_bracket())
            else:
                raise self._error("'.', '..' or '['")

        return segments

    def _parse_member(self, expected: str) -> Segment:
        if self._match("STAR"):
            return Wildcard()
        token = self._match("NAME", "NUMBER")
        if token is None:
            raise self._error(expected)
        if token.type == "NUMBER":
            return Field(str(self._integer(token)))
        return Field(token.value)

    def _parse_bracket(self) -> Segment:
        self._expect("LBRACKET")

        if self._match("STAR"):
            segment: Segment = Wildcard()
        elif self._match("QUESTION"):
            segment = Filter(self._parse_or())
        elif self._current().type == "COLON" or (
                self._current().type == "NUMBER" and self._peek().type == "COLON"):
            segment = self._parse_slice()
        else:
            selectors = [self._parse_selector()]
            while self._match("COMMA"):
                selectors.append(self._parse_selector())
            segment = selectors[0] if len(selectors) == 1 else Selection(tuple(selectors))

        self._expect("RBRACKET")
        return segment

    def _parse_selector(self) -> Union[Field, Index]:
        token = self._match("STRING", "NUMBER")
        if token is None:
            raise self._error("a quoted field name or an index")
        if token.type == "STRING":
            return Field(_decode_string(token))
        return Index(self._integer(token), self.allow_negative_indices)

    def _parse_slice(self) -> Slice:
        bounds: List[Optional[int]] = []
        for position in range(3):
            if position > 0 and not self._match("COLON"):
                break
            token = self._match("NUMBER")
            bounds.append(self._integer(token) if token else None)
        if len(bounds) < 2:
            raise self._error("':'")
        return Slice(*bounds)

    # Filter grammar (low -> high precedence) -------------------------
    def _parse_or(self) -> Predicate:
        operands = [self._parse_and()]
        while self._match("OR"):
            operands.append(self._parse_and())
        if len(operands) == 1:
            return operands[0]
        return Logical("||", tuple(operands))

    def _parse_and(self) -> Predicate:
        operands = [self._parse_unary()]
        while self._match("AND"):
            operands.append(self._parse_unary())
        if len(operands) == 1:
            return operands[0]
        return Logical("&&", tuple(operands))

    def _parse_unary(self) -> Predicate:
        if self._match("NOT"):
            return Not(self._parse_unary())
        if self._match("LPAREN"):
            expr = self._parse_or()
            self._expect("RPAREN")
            return expr
        return self._parse_comparison()

    def _parse_comparison(self) -> Predicate:
        start = self._current()
        left = self._parse_operand()
        operator = self._current()
        if operator.type in _COMPARISON_OPERATORS:
            self._advance()
            right = self._parse_operand()
            return Comparison(_COMPARISON_OPERATORS[operator.type], left, right)
        if isinstance(left, Literal):
            raise QueryError("A literal must be compared with something", start.position)
        return Exists(left)

    def _parse_operand(self) -> Union[Literal, NodeRef]:
        token = self._current()
        if token.type in ("CURRENT", "ROOT"):
            self._advance()
            return NodeRef(relative=token.type == "CURRENT", steps=self._parse_ref_steps())
        if token.type == "NUMBER":
            self._advance()
            return Literal(Value.number(json.loads(token.value)))
        if token.type == "STRING":
            self._advance()
            return Literal(Value.string(_decode_string(token)))
        if token.type == "NAME" and token.value in _KEYWORDS:
            self._advance()
            return Literal(_KEYWORDS[token.value])
        raise self._error("'@', '$' or a literal")

    def _parse_ref_steps(self) -> tuple:
        steps: List[Union[str, int]] = []
        while True:
            if self._match("DOT"):
                token = self._match("NAME", "NUMBER")
                if token is None:
                    raise self._error("field name after '.'")
                steps.append(token.value if token.type == "NAME" else str(self._integer(token)))
            elif self._match("LBRACKET"):
                token = self._match("STRING", "NUMBER")
                if token is None:
                    raise self._error("a quoted field name or an index")
                steps.append(_decode_string(token) if token.type == "STRING" else self._integer(token))
                self._expect("RBRACKET")
            else:
                return tuple(steps)


class QueryParser:
    """
    Compiles path expression strings into ``PathExpression`` objects.

    Parsing is all-or-nothing: any syntax problem raises ``QueryError``
    with the character offset where it was found, and nothing is
    evaluated.
    """

    def __init__(self, allow_negative_indices: bool = True,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the query parser.

        Args:
            allow_negative_indices: Whether ``[-1]`` counts from the end; when
                disabled negative indices compile but match nothing
            logger: Optional logger instance
        """
        self.allow_negative_indices = allow_negative_indices
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, source: str) -> PathExpression:
        """
        Parse a path expression.

        Args:
            source: Path text, starting with ``$``

        Returns:
            PathExpression whose first segment is RootAnchor

        Raises:
            QueryError: If the path is malformed
        """
        parser = _PathParser(_tokenize(source), self.allow_negative_indices)
        segments = parser.parse_path()
        self.logger.debug(f"Compiled path {source!r} into {len(segments)} segments")
        return PathExpression(source=source, segments=tuple(segments))

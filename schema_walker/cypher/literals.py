"""
Cypher literal and identifier encoding.

Filter values are stored as text. A value that is entirely a decimal
number, or exactly `true` or `false`, is written unquoted; anything else
as a single-quoted string. encode_literal is the only place that makes
this decision, so a typed value model can replace it without touching
the query builders. A string property whose value is the text "true" is
therefore matched as a boolean, just as "30" is matched as a number.

Known limitation: embedded single quotes in values and backticks in
identifiers are NOT escaped. Such input produces a malformed or wrong
query rather than a safely escaped one.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from schema_walker.walk.models import PropertySelection

_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d+)?|\.\d+)(?:[eE][+-]?\d+)?")
_BOOLEANS = frozenset({"true", "false"})


class LiteralKind(Enum):
    """How a filter value is represented in Cypher."""

    NUMBER = "number"
    BOOLEAN = "boolean"
    TEXT = "text"


@dataclass(frozen=True)
class LiteralToken:
    """An encoded Cypher literal.

    Attributes:
        kind: NUMBER or BOOLEAN (emitted bare) or TEXT (emitted single-quoted)
        text: The exact Cypher text
    """

    kind: LiteralKind
    text: str

    def __str__(self) -> str:
        return self.text


def is_numeric(value: str) -> bool:
    """True when the whole of ``value`` is a decimal number literal."""
    return _NUMBER_RE.fullmatch(value) is not None


def encode_literal(value: str) -> LiteralToken:
    """Encode a textual filter value as a Cypher literal.

    >>> str(encode_literal("42"))
    '42'
    >>> str(encode_literal("abc"))
    "'abc'"
    >>> str(encode_literal("true"))
    'true'
    >>> str(encode_literal(""))
    "''"
    """
    if value in _BOOLEANS:
        return LiteralToken(LiteralKind.BOOLEAN, value)
    if is_numeric(value):
        return LiteralToken(LiteralKind.NUMBER, value)
    return LiteralToken(LiteralKind.TEXT, f"'{value}'")


def encode_identifier(name: str) -> str:
    """Delimit a label name with backticks so spaces and symbols survive."""
    return f"`{name}`"


def encode_properties(selections: Iterable[PropertySelection]) -> str:
    """Render a property map such as ``{age: 30, name: 'Ann'}``.

    Selections keep their given order. Returns an empty string when there
    are no selections, so the caller can append the result unconditionally.
    """
    parts = [f"{s.name}: {encode_literal(s.value)}" for s in selections]
    if not parts:
        return ""
    return "{" + ", ".join(parts) + "}"

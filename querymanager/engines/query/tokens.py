"""
Tokens of a parsed query template.

A token is exactly one of ``Literal``, ``PositionalVar`` or ``NamedVar``.
``TokenisedQuery`` pairs a query id with its token sequence; both are
immutable once built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True, slots=True)
class Literal:
    """Text emitted verbatim."""

    text: str

    def source(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class PositionalVar:
    """Reference to the ``index``-th (1-based) positional argument."""

    index: int
    # Placeholder exactly as written in the template (e.g. ``${01}``).
    raw: str | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.index < 1:
            raise ValueError(f"Positional index must be >= 1, got {self.index}")

    def source(self) -> str:
        return self.raw if self.raw is not None else f"${{{self.index}}}"


@dataclass(frozen=True, slots=True)
class NamedVar:
    """Reference to a named argument. The name is kept exactly as captured."""

    name: str
    raw: str | None = field(default=None, compare=False, repr=False)

    def source(self) -> str:
        return self.raw if self.raw is not None else f"${{{self.name}}}"


Token = Union[Literal, PositionalVar, NamedVar]


@dataclass(frozen=True, slots=True)
class TokenisedQuery:
    id: str
    tokens: tuple[Token, ...]

    def named_parameters(self) -> list[str]:
        """Distinct named parameters in order of first appearance."""
        seen: dict[str, None] = {}
        for t in self.tokens:
            if isinstance(t, NamedVar):
                seen.setdefault(t.name, None)
        return list(seen)

    def positional_count(self) -> int:
        """Highest positional index referenced (0 when none)."""
        return max((t.index for t in self.tokens if isinstance(t, PositionalVar)), default=0)


def to_source(tokens: tuple[Token, ...] | list[Token]) -> str:
    """Concatenate the canonical textual form of every token."""
    return "".join(t.source() for t in tokens)


def describe(token: Token) -> dict[str, object]:
    """JSON-friendly view of a token (used by the HTTP introspection routes)."""
    if isinstance(token, Literal):
        return {"kind": "literal", "text": token.text}
    if isinstance(token, PositionalVar):
        return {"kind": "positional", "index": token.index}
    return {"kind": "named", "name": token.name}

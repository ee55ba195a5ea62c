"""Rendered output as an append-only sequence of facts.

A fact is one self-contained block of link text: the parse rank, one half
of a word reference, an attribute, or a relation. Facts are immutable once
built, and RenderedOutput only ever appends, so the order of emission is
the order of the final text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class FactKind(str, Enum):
    """Kinds of emitted facts, in the order a render produces them."""

    RANK = "rank"
    REFERENCE = "reference"
    PARSE_INSTANCE = "parse_instance"
    ATTRIBUTE = "attribute"
    RELATION = "relation"


@dataclass(frozen=True)
class Fact:
    """One emitted block.

    Attributes:
        kind: What the block states
        text: The block text, newline-terminated
    """

    kind: FactKind
    text: str


def quote(text: str) -> str:
    """Quote a string literal, escaping backslashes and double quotes."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class RenderedOutput:
    """Ordered, append-only collection of facts."""

    def __init__(self) -> None:
        self._facts: list[Fact] = []

    def append(self, kind: FactKind, text: str) -> Fact:
        fact = Fact(kind, text)
        self._facts.append(fact)
        return fact

    @property
    def facts(self) -> tuple[Fact, ...]:
        return tuple(self._facts)

    def kinds(self) -> list[FactKind]:
        return [fact.kind for fact in self._facts]

    def count(self, kind: FactKind) -> int:
        return sum(1 for fact in self._facts if fact.kind == kind)

    def text(self) -> str:
        """Assemble the final text."""
        return "".join(fact.text for fact in self._facts)

    def __iter__(self) -> Iterator[Fact]:
        return iter(tuple(self._facts))

    def __len__(self) -> int:
        return len(self._facts)

    def __str__(self) -> str:
        return self.text()

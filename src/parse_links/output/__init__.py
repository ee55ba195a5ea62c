"""Scheme link output for parses.

Key Components:
    - IdentityMap / IdentityAssigner: per-parse word-instance identifiers
    - Fact / FactKind / RenderedOutput: append-only emitted blocks
    - SchemeRenderer / render: the three-pass renderer
    - read_facts: read rendered text back into nested lists
"""

from .facts import Fact, FactKind, RenderedOutput, quote
from .identity import IdentityAssigner, IdentityMap
from .reader import Symbol, read_facts
from .scheme import SchemeRelationWriter, SchemeRenderer, render

__all__ = [
    "Fact",
    "FactKind",
    "RenderedOutput",
    "quote",
    "IdentityAssigner",
    "IdentityMap",
    "Symbol",
    "read_facts",
    "SchemeRelationWriter",
    "SchemeRenderer",
    "render",
]

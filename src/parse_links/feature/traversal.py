"""Feature Graph Traversal.

A single exhaustive walk over a parse's feature graph that reports what it
finds to a RelationCallback:

- on_unary_attribute: a valued, non-structural feature of a word node
  (part-of-speech, tense, flags, hypothesis markers)
- on_binary_head: a word node that heads at least one relation
- on_binary_relation: one relation edge between two word nodes

Every callback returns a stop signal; ``True`` ends the walk immediately.

Visit order:
    Canonical nodes are visited once each, in word-slot order. For each node
    its unary attributes come first (feature insertion order), then the head
    notification, then its relations (insertion order). Consumers must not
    rely on this order for correctness, only for reproducible output.

Example:
    >>> dumper = RelationDumper()
    >>> parse.foreach(dumper)
    >>> print(dumper.text())
    pos(bark, verb)
    _subj(bark, dogs)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from .models import STRUCTURAL_FEATURES, FeatureNode, ParsedSentence

logger = logging.getLogger(__name__)


class RelationCallback(ABC):
    """Visitor interface for ``foreach``.

    Implementations decide relevance themselves: the traversal reports every
    candidate and does not check for a ``name``.
    """

    @abstractmethod
    def on_unary_attribute(self, node: FeatureNode, attribute_name: str) -> bool:
        """Called once per (node, attribute) pair. Return True to stop."""

    @abstractmethod
    def on_binary_relation(
        self, relation_name: str, source: FeatureNode, target: FeatureNode
    ) -> bool:
        """Called once per relation edge. Return True to stop."""

    @abstractmethod
    def on_binary_head(self, node: FeatureNode) -> bool:
        """Called for a node that heads relations. Return True to stop."""


def unary_attributes(node: FeatureNode) -> list[str]:
    """Names of the features of ``node`` reported as unary attributes."""
    return [
        name
        for name, child in node.features.items()
        if name not in STRUCTURAL_FEATURES and child.is_valued
    ]


def foreach(parse: ParsedSentence, callback: RelationCallback) -> bool:
    """Walk the feature graph of ``parse``.

    Args:
        parse: The parse to walk
        callback: Visitor receiving attributes, heads and relations

    Returns:
        True if a callback stopped the traversal, False otherwise
    """
    for node in parse.canonical_nodes():
        for attribute_name in unary_attributes(node):
            if callback.on_unary_attribute(node, attribute_name):
                logger.debug(f"Traversal stopped at attribute {attribute_name} of {node!r}")
                return True

        if not node.has_relations:
            continue

        if callback.on_binary_head(node):
            logger.debug(f"Traversal stopped at head {node!r}")
            return True

        for relation_name, target in node.relations():
            if callback.on_binary_relation(relation_name, node, target):
                logger.debug(f"Traversal stopped at relation {relation_name} of {node!r}")
                return True

    return False


# =============================================================================
# Debug Visitor
# =============================================================================


class RelationDumper(RelationCallback):
    """Collects attributes and relations as plain ``name(a, b)`` lines.

    Useful for eyeballing a parse without identifiers or link syntax.
    Nodes without a ``name`` are shown as ``#handle``.

    Attributes:
        lines: Collected output lines in traversal order
        show_attributes: Include unary attribute lines
    """

    def __init__(self, show_attributes: bool = True):
        self.show_attributes = show_attributes
        self.lines: list[str] = []

    @staticmethod
    def _label(node: FeatureNode) -> str:
        name = node.get_value("name")
        return name if name is not None else f"#{node.handle}"

    def on_unary_attribute(self, node: FeatureNode, attribute_name: str) -> bool:
        if self.show_attributes:
            value = node.get_value(attribute_name)
            self.lines.append(f"{attribute_name}({self._label(node)}, {value})")
        return False

    def on_binary_relation(
        self, relation_name: str, source: FeatureNode, target: FeatureNode
    ) -> bool:
        self.lines.append(f"{relation_name}({self._label(source)}, {self._label(target)})")
        return False

    def on_binary_head(self, node: FeatureNode) -> bool:
        return False

    def text(self) -> str:
        """All collected lines, newline-terminated."""
        return "".join(f"{line}\n" for line in self.lines)

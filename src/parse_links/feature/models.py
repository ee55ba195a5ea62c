"""Feature Graph Data Models.

This module defines the in-memory feature graph a parser hands to the
renderer:

- FeatureNode: a vertex holding either a leaf string value or named
  features pointing at other nodes
- TruthValue: strength/confidence pair attached to a parse
- ParsedSentence: one parse of one sentence, with its ordered word slots

Word slots and canonical nodes:
    Each word slot is a FeatureNode whose ``ref`` feature points at the
    canonical node for that word instance. Several slots may share one
    canonical node, and a slot swallowed by a multi-word expression (the
    "New" of "New_York") has no ``ref`` at all. Slot 0 is the LEFT-WALL
    sentinel and never carries a word.

Identity:
    FeatureNode equality and hashing are by identity, never by content. Each
    node also carries an integer ``handle`` so identity tables can key on a
    plain int.

Example:
    >>> parse = ParsedSentence.from_dict({
    ...     "id": "sentence@42_parse_0",
    ...     "sentence_id": "sentence@42",
    ...     "confidence": 0.87654321,
    ...     "words": [
    ...         {"name": "dogs", "attributes": {"pos": "noun"}},
    ...         {"name": "bark", "attributes": {"pos": "verb"}},
    ...     ],
    ...     "relations": [{"name": "_subj", "source": "bark", "target": "dogs"}],
    ... })
    >>> parse.num_words
    3
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterator

if TYPE_CHECKING:
    from .traversal import RelationCallback


_handles = itertools.count(1)

LEFT_WALL = "LEFT-WALL"

# Bookkeeping features that describe graph structure rather than the word.
STRUCTURAL_FEATURES = frozenset(
    {
        "name",
        "ref",
        "links",
        "nameSource",
        "str",
        "orig_str",
        "index_in_sentence",
        "start_char",
        "end_char",
        "NEXT",
        "head-word",
    }
)


# =============================================================================
# Feature Node
# =============================================================================


@dataclass(eq=False)
class FeatureNode:
    """A vertex in the feature graph.

    A node is either valued (a leaf holding a string) or a container of
    named features. Relations to other word nodes are kept apart from the
    features as an ordered edge list, so one source may carry several edges
    with the same relation name ("big red dog" has two ``_amod`` edges).

    Attributes:
        value: Leaf string, or None for a container node
        features: Named child nodes, in insertion order
        links: (relation_name, target) edges, in insertion order
        handle: Process-unique integer identifying this node
    """

    value: str | None = None
    features: dict[str, FeatureNode] = field(default_factory=dict)
    links: list[tuple[str, FeatureNode]] = field(default_factory=list)
    handle: int = field(default_factory=lambda: next(_handles), init=False)

    @classmethod
    def leaf(cls, value: str) -> FeatureNode:
        """Create a valued leaf node.

        Raises:
            TypeError: If ``value`` is not a string
        """
        if not isinstance(value, str):
            raise TypeError(f"Leaf value must be a string, got {type(value).__name__}")
        return cls(value=value)

    @property
    def is_valued(self) -> bool:
        """True if this node is a leaf holding a string."""
        return self.value is not None

    def get(self, name: str) -> FeatureNode | None:
        """Get a named feature, or None if absent."""
        return self.features.get(name)

    def get_value(self, name: str) -> str | None:
        """Get the leaf value of a named feature, or None."""
        child = self.features.get(name)
        if child is None:
            return None
        return child.value

    def set(self, name: str, node: FeatureNode) -> FeatureNode:
        """Set a named feature to an existing node.

        Raises:
            ValueError: If this node is a leaf
        """
        if self.is_valued:
            raise ValueError(f"Cannot add feature '{name}' to valued node #{self.handle}")
        self.features[name] = node
        return node

    def set_value(self, name: str, value: str) -> FeatureNode:
        """Set a named feature to a new leaf node and return the leaf."""
        return self.set(name, FeatureNode.leaf(value))

    def feature_names(self) -> list[str]:
        """Names of all features, in insertion order."""
        return list(self.features)

    # -------------------------------------------------------------------------
    # Relations
    # -------------------------------------------------------------------------

    def add_relation(self, relation_name: str, target: FeatureNode) -> None:
        """Add a relation edge from this node to ``target``.

        Raises:
            ValueError: If this node is a leaf
        """
        if self.is_valued:
            raise ValueError(
                f"Cannot add relation '{relation_name}' to valued node #{self.handle}"
            )
        self.links.append((relation_name, target))

    def relations(self) -> Iterator[tuple[str, FeatureNode]]:
        """Iterate (relation_name, target) edges in insertion order."""
        yield from list(self.links)

    @property
    def has_relations(self) -> bool:
        """True if this node has at least one outgoing relation."""
        return bool(self.links)

    def to_dict(self) -> dict[str, Any]:
        """Shallow dict view; non-leaf children appear as ``#handle``."""
        return {
            "handle": self.handle,
            "value": self.value,
            "features": {
                name: child.value if child.is_valued else f"#{child.handle}"
                for name, child in self.features.items()
            },
            "links": [[name, f"#{target.handle}"] for name, target in self.links],
        }

    def __repr__(self) -> str:
        if self.is_valued:
            return f"FeatureNode(#{self.handle}, value={self.value!r})"
        name = self.get_value("name")
        if name is not None:
            return f"FeatureNode(#{self.handle}, name={name!r})"
        return f"FeatureNode(#{self.handle}, features={self.feature_names()})"


# =============================================================================
# Truth Value
# =============================================================================


@dataclass(frozen=True)
class TruthValue:
    """Simple truth value attached to a parse.

    Attributes:
        strength: How true the parse is (0.0-1.0)
        confidence: How much evidence backs the strength (0.0-1.0)
    """

    strength: float = 1.0
    confidence: float = 0.0

    def __post_init__(self) -> None:
        for name in ("strength", "confidence"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")


# =============================================================================
# Parsed Sentence
# =============================================================================


@dataclass
class ParsedSentence:
    """One parse of one sentence.

    Attributes:
        words: Word slot nodes; index 0 is the LEFT-WALL sentinel
        id_string: Display identifier of this parse
        sentence_id: Identifier of the sentence the parse belongs to
        truth_value: Parse ranking truth value
    """

    words: list[FeatureNode | None]
    id_string: str
    sentence_id: str
    truth_value: TruthValue = field(default_factory=TruthValue)

    @property
    def num_words(self) -> int:
        """Number of word slots, including the LEFT-WALL sentinel."""
        return len(self.words)

    @property
    def confidence(self) -> float:
        return self.truth_value.confidence

    def word_node(self, index: int) -> FeatureNode | None:
        """Get the slot node at ``index``, or None if out of range."""
        if 0 <= index < len(self.words):
            return self.words[index]
        return None

    def canonical_node(self, index: int) -> FeatureNode | None:
        """Resolve the slot at ``index`` through its ``ref`` feature."""
        slot = self.word_node(index)
        if slot is None:
            return None
        return slot.get("ref")

    def canonical_nodes(self) -> Iterator[FeatureNode]:
        """Yield each distinct canonical node once, in word-slot order."""
        seen: set[int] = set()
        for i in range(1, self.num_words):
            node = self.canonical_node(i)
            if node is None or node.handle in seen:
                continue
            seen.add(node.handle)
            yield node

    def foreach(self, callback: RelationCallback) -> bool:
        """Walk this parse's feature graph; see ``traversal.foreach``."""
        from .traversal import foreach

        return foreach(self, callback)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParsedSentence:
        """Build a parse from a plain dict.

        Expected shape::

            {
                "id": "sentence@42_parse_0",
                "sentence_id": "sentence@42",
                "confidence": 0.87,
                "words": [
                    {"ref": "ny", "str": "New"},                  # alias
                    {"ref": "ny", "str": "York", "name": "New_York"},
                    {"ref": None, "str": "the"},                  # merged away
                    {"name": "city"},                             # own node
                ],
                "relations": [{"name": "_subj", "source": "ny", "target": 4}],
            }

        Slots that give the same explicit ``ref`` share one canonical node;
        ``"ref": None`` leaves the slot without one. A word without a ``ref``
        key gets a node of its own, so a repeated word ("the dog saw the
        cat") yields distinct nodes. ``attributes`` maps feature names to
        values, stored as leaf strings. The LEFT-WALL sentinel is added
        automatically.

        A relation endpoint is a slot index (int), an explicit ``ref`` key,
        or a word name that belongs to exactly one canonical node.

        Raises:
            ValueError: If a relation endpoint is unknown or ambiguous
        """
        wall = FeatureNode()
        wall.set_value("str", LEFT_WALL)
        words: list[FeatureNode | None] = [wall]
        refs: dict[Any, FeatureNode] = {}
        named: dict[str, list[FeatureNode]] = {}

        for index, word in enumerate(data.get("words", []), start=1):
            slot = FeatureNode()
            surface = word.get("str", word.get("name"))
            if surface is not None:
                slot.set_value("str", str(surface))
            slot.set_value("index_in_sentence", str(index))

            node = None
            if "ref" in word:
                key = word["ref"]
                if key is not None:
                    node = refs.get(key)
                    if node is None:
                        node = refs[key] = FeatureNode()
            elif word.get("name") is not None:
                node = FeatureNode()

            if node is not None:
                name = word.get("name")
                if name is not None and node.get("name") is None:
                    node.set_value("name", str(name))
                    named.setdefault(str(name), []).append(node)
                for attr, value in word.get("attributes", {}).items():
                    if value is not None:
                        node.set_value(attr, str(value))
                slot.set("ref", node)
            words.append(slot)

        def resolve(endpoint: Any) -> FeatureNode:
            if isinstance(endpoint, int) and not isinstance(endpoint, bool):
                slot_node = words[endpoint] if 0 < endpoint < len(words) else None
                node = slot_node.get("ref") if slot_node is not None else None
                if node is None:
                    raise ValueError(f"Slot {endpoint} has no canonical node")
                return node
            if endpoint in refs:
                return refs[endpoint]
            matches = named.get(endpoint, [])
            if len(matches) > 1:
                raise ValueError(
                    f"Word name {endpoint!r} is ambiguous; address it by slot index"
                )
            if not matches:
                raise ValueError(f"Unknown relation endpoint {endpoint!r}")
            return matches[0]

        for relation in data.get("relations", []):
            try:
                source = resolve(relation["source"])
                target = resolve(relation["target"])
            except (KeyError, TypeError) as e:
                raise ValueError(f"Malformed relation {relation!r}") from e
            except ValueError as e:
                raise ValueError(f"Relation {relation!r}: {e}") from e
            source.add_relation(relation["name"], target)

        return cls(
            words=words,
            id_string=data["id"],
            sentence_id=data.get("sentence_id", data["id"]),
            truth_value=TruthValue(
                strength=data.get("strength", 1.0),
                confidence=data.get("confidence", 0.0),
            ),
        )

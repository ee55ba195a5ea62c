"""Scheme link rendering of a single parse.

Renders one ParsedSentence as link-based Scheme text for the downstream
reasoning system's importer. The output is built in three passes:

1. The rank fact: the parse identifier with its confidence as a truth value
2. Word references: one ReferenceLink/ParseInstanceLink pair per canonical
   word node; this is where identifiers are minted
3. A feature graph traversal emitting attribute and relation facts, using
   only identifiers minted in pass 2

Output shape (indentation is cosmetic, keywords and nesting are not):

    (ParseLink
       (ConceptNode "sentence@42_parse_0" (stv 1.0 0.8765))
       (SentenceNode "sentence@42")
    )
    (ReferenceLink
       (ConceptNode "dogs@<uuid>")
       (WordNode "dogs")
    )
    (ParseInstanceLink
       (ConceptNode "dogs@<uuid>")
       (ConceptNode "sentence@42_parse_0")
    )
    ; pos (dogs, noun)
    (PartOfSpeechLink
       (ConceptNode "dogs@<uuid>")
       (DefinedLinguisticConceptNode "noun")
    )
    ; _subj (bark, dogs)
    (EvaluationLink
       (DefinedLinguisticRelationshipNode "_subj")
       (ListLink
          (ConceptNode "bark@<uuid>")
          (ConceptNode "dogs@<uuid>")
       )
    )

Facts whose linkage is missing (no name, no identifier) are skipped one at
a time; they never fail the render.
"""

from __future__ import annotations

import logging
import random

from parse_links.config import RenderConfig
from parse_links.exceptions import MissingIdentityMapError, MissingParseError
from parse_links.feature.models import FeatureNode, ParsedSentence
from parse_links.feature.traversal import RelationCallback

from .facts import FactKind, RenderedOutput, quote
from .identity import IdentityAssigner, IdentityMap

logger = logging.getLogger(__name__)


def text_value(node: FeatureNode, name: str) -> str | None:
    """Leaf string of feature ``name``, or None if absent or not a string."""
    value = node.get_value(name)
    if value is not None and not isinstance(value, str):
        logger.debug(
            f"Feature {name} of #{node.handle} holds a {type(value).__name__}, skipping"
        )
        return None
    return value


def single_line(text: str) -> str:
    """Fold line breaks to spaces so a comment stays on one line."""
    return text.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")


class SchemeRenderer:
    """Renders parses as Scheme link text.

    Usage:
        >>> renderer = SchemeRenderer()
        >>> identity_map = IdentityMap()
        >>> text = renderer.render(parse, identity_map)

    Args:
        config: Render configuration
        rng: Random source for identifier tokens
    """

    def __init__(self, config: RenderConfig | None = None, rng: random.Random | None = None):
        self.config = config or RenderConfig()
        self.rng = rng or random.Random()

    def render(self, parse: ParsedSentence, identity_map: IdentityMap) -> str:
        """Render ``parse`` to text. See ``render_output``."""
        return self.render_output(parse, identity_map).text()

    def render_output(
        self, parse: ParsedSentence, identity_map: IdentityMap
    ) -> RenderedOutput:
        """Render ``parse`` as an ordered sequence of facts.

        Args:
            parse: The parse to render
            identity_map: Identifier table; inserted into during the
                reference pass and only read afterwards

        Returns:
            The rank fact, then reference facts, then attribute and relation
            facts in traversal order

        Raises:
            MissingParseError: If ``parse`` is None
            MissingIdentityMapError: If ``identity_map`` is None
        """
        if parse is None:
            raise MissingParseError()
        if identity_map is None:
            raise MissingIdentityMapError()

        output = RenderedOutput()
        output.append(FactKind.RANK, self.format_rank(parse))
        self._emit_word_refs(parse, identity_map, output)
        parse.foreach(SchemeRelationWriter(self, identity_map, output))

        logger.debug(f"Rendered parse {parse.id_string}: {len(output)} facts")
        return output

    # =========================================================================
    # Passes
    # =========================================================================

    def _emit_word_refs(
        self,
        parse: ParsedSentence,
        identity_map: IdentityMap,
        output: RenderedOutput,
    ) -> None:
        assigner = IdentityAssigner(identity_map, self.rng)
        emitted: set[int] = set()

        for i in range(1, parse.num_words):
            # Slots merged into a multi-word expression have no ref.
            node = parse.canonical_node(i)
            if node is None:
                logger.debug(f"Word slot {i} has no canonical node, skipping")
                continue
            word = text_value(node, "name")
            if word is None:
                logger.debug(f"Word slot {i} has no name, skipping")
                continue
            if node.handle in emitted:
                continue
            emitted.add(node.handle)

            identifier = assigner.ensure_identity(node)
            output.append(FactKind.REFERENCE, self.format_reference(identifier, word))
            output.append(
                FactKind.PARSE_INSTANCE,
                self.format_parse_instance(identifier, parse.id_string),
            )

    # =========================================================================
    # Formatting
    # =========================================================================

    def _term(self, keyword: str, name: str, depth: int = 1) -> str:
        return f"{self.config.indent * depth}({keyword} {quote(name)})\n"

    def _comment(self, label: str, first: str, second: str) -> str:
        if not self.config.emit_comments:
            return ""
        return f"; {single_line(label)} ({single_line(first)}, {single_line(second)})\n"

    def truncate_confidence(self, confidence: float) -> str:
        """Cut the confidence's text form to ``confidence_width`` characters.

        The text is truncated, never rounded: 0.999999 gives ``0.9999``.
        """
        text = str(confidence)
        width = self.config.confidence_width
        if len(text) < width:
            logger.warning(
                f"Confidence text {text!r} is shorter than {width} characters"
            )
        return text[:width]

    def format_rank(self, parse: ParsedSentence) -> str:
        indent = self.config.indent
        stv = f"(stv {self.config.strength} {self.truncate_confidence(parse.confidence)})"
        return (
            "(ParseLink\n"
            f"{indent}(ConceptNode {quote(parse.id_string)} {stv})\n"
            f"{self._term('SentenceNode', parse.sentence_id)}"
            ")\n"
        )

    def format_reference(self, identifier: str, word: str) -> str:
        return (
            "(ReferenceLink\n"
            f"{self._term('ConceptNode', identifier)}"
            f"{self._term('WordNode', word)}"
            ")\n"
        )

    def format_parse_instance(self, identifier: str, parse_id: str) -> str:
        return (
            "(ParseInstanceLink\n"
            f"{self._term('ConceptNode', identifier)}"
            f"{self._term('ConceptNode', parse_id)}"
            ")\n"
        )

    def attribute_value(self, attribute_name: str, value: str) -> str:
        """Value written for an attribute.

        Flags and the hypothesis marker are presence-only: their stored value
        is dropped and the lower-cased attribute name is used instead.
        """
        suffix = self.config.flag_suffix
        if attribute_name.endswith(suffix):
            return attribute_name[: -len(suffix)].lower()
        if attribute_name == self.config.hypothesis_attribute:
            return attribute_name.lower()
        return value

    def format_attribute(
        self, word: str, attribute_name: str, value: str, identifier: str
    ) -> str:
        keyword = (
            "PartOfSpeechLink"
            if attribute_name == self.config.pos_attribute
            else "InheritanceLink"
        )
        return (
            f"{self._comment(attribute_name, word, value)}"
            f"({keyword}\n"
            f"{self._term('ConceptNode', identifier)}"
            f"{self._term('DefinedLinguisticConceptNode', self.attribute_value(attribute_name, value))}"
            ")\n"
        )

    def format_relation(
        self,
        relation_name: str,
        source_word: str,
        target_word: str,
        source_id: str,
        target_id: str,
    ) -> str:
        indent = self.config.indent
        return (
            f"{self._comment(relation_name, source_word, target_word)}"
            "(EvaluationLink\n"
            f"{self._term('DefinedLinguisticRelationshipNode', relation_name)}"
            f"{indent}(ListLink\n"
            f"{self._term('ConceptNode', source_id, depth=2)}"
            f"{self._term('ConceptNode', target_id, depth=2)}"
            f"{indent})\n"
            ")\n"
        )


class SchemeRelationWriter(RelationCallback):
    """Traversal visitor appending attribute and relation facts.

    Only looks identifiers up; it never mints them.
    """

    def __init__(
        self,
        renderer: SchemeRenderer,
        identity_map: IdentityMap,
        output: RenderedOutput,
    ):
        self.renderer = renderer
        self.identity_map = identity_map
        self.output = output

    def on_unary_attribute(self, node: FeatureNode, attribute_name: str) -> bool:
        word = text_value(node, "name")
        if word is None:
            return False

        value = text_value(node, attribute_name)
        if value is None:
            return False

        identifier = self.identity_map.get(node)
        if identifier is None:
            logger.debug(f"No identifier for {word}, skipping attribute {attribute_name}")
            return False

        self.output.append(
            FactKind.ATTRIBUTE,
            self.renderer.format_attribute(word, attribute_name, value, identifier),
        )
        return False

    def on_binary_relation(
        self, relation_name: str, source: FeatureNode, target: FeatureNode
    ) -> bool:
        source_word = text_value(source, "name")
        target_word = text_value(target, "name")
        if source_word is None or target_word is None:
            return False

        source_id = self.identity_map.get(source)
        target_id = self.identity_map.get(target)
        if source_id is None or target_id is None:
            logger.debug(
                f"Missing identifier for {relation_name}({source_word}, {target_word}), skipping"
            )
            return False

        self.output.append(
            FactKind.RELATION,
            self.renderer.format_relation(
                relation_name, source_word, target_word, source_id, target_id
            ),
        )
        return False

    def on_binary_head(self, node: FeatureNode) -> bool:
        return False


def render(
    parse: ParsedSentence,
    identity_map: IdentityMap,
    rng: random.Random | None = None,
    config: RenderConfig | None = None,
) -> str:
    """Render one parse with a default-configured SchemeRenderer."""
    return SchemeRenderer(config=config, rng=rng).render(parse, identity_map)

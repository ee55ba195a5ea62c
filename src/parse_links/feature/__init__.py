"""Feature graph model and traversal.

Key Components:

Graph Data Models:
    - FeatureNode: Leaf value or container of named features
    - TruthValue: Strength/confidence of a parse
    - ParsedSentence: One parse with its word slots

Traversal:
    - RelationCallback: Visitor interface (unary, binary, head)
    - foreach: Single exhaustive walk over a parse
    - RelationDumper: Plain-text debugging visitor
"""

from .models import (
    LEFT_WALL,
    STRUCTURAL_FEATURES,
    FeatureNode,
    ParsedSentence,
    TruthValue,
)

from .traversal import (
    RelationCallback,
    RelationDumper,
    foreach,
    unary_attributes,
)

__all__ = [
    "LEFT_WALL",
    "STRUCTURAL_FEATURES",
    "FeatureNode",
    "ParsedSentence",
    "TruthValue",
    "RelationCallback",
    "RelationDumper",
    "foreach",
    "unary_attributes",
]

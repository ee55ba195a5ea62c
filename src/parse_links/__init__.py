"""parse-links - Render linguistic parses as Scheme link knowledge.

Takes one parse of a sentence (a feature graph of words joined by
grammatical relations) and writes it in the link notation read by a
symbolic-reasoning importer: a ParseLink ranking the parse, a
ReferenceLink/ParseInstanceLink pair per word instance, and
InheritanceLink/PartOfSpeechLink/EvaluationLink facts for the word
attributes and relations.

Example:
    from parse_links import IdentityMap, ParsedSentence, render

    parse = ParsedSentence.from_dict(data)
    identity_map = IdentityMap()
    print(render(parse, identity_map))
"""

__version__ = "0.1.0"

from parse_links.config import RenderConfig

from parse_links.exceptions import (
    ParseLinksError,
    ConfigurationError,
    RenderError,
    MissingParseError,
    MissingIdentityMapError,
    IdentityError,
    IdentityConflictError,
    MissingNameError,
    OutputSyntaxError,
)

from parse_links.feature import (
    FeatureNode,
    ParsedSentence,
    TruthValue,
    RelationCallback,
    RelationDumper,
    foreach,
)

from parse_links.output import (
    FactKind,
    IdentityAssigner,
    IdentityMap,
    RenderedOutput,
    SchemeRenderer,
    read_facts,
    render,
)

__all__ = [
    "__version__",
    # Configuration
    "RenderConfig",
    # Exceptions
    "ParseLinksError",
    "ConfigurationError",
    "RenderError",
    "MissingParseError",
    "MissingIdentityMapError",
    "IdentityError",
    "IdentityConflictError",
    "MissingNameError",
    "OutputSyntaxError",
    # Feature graph
    "FeatureNode",
    "ParsedSentence",
    "TruthValue",
    "RelationCallback",
    "RelationDumper",
    "foreach",
    # Output
    "FactKind",
    "IdentityAssigner",
    "IdentityMap",
    "RenderedOutput",
    "SchemeRenderer",
    "read_facts",
    "render",
]

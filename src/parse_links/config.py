"""Render configuration for parse-links.

RenderConfig controls the cosmetic and naming conventions of the emitted
link text:
- Indentation of nested terms
- Confidence truncation width and truth-value strength
- Attribute names that get special treatment (flags, hypothesis, POS)
- Whether human-readable comment lines are emitted

Keyword names, nesting depth and argument order are NOT configurable; they
are fixed by the downstream importer.
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from parse_links.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for the Scheme renderer.

    Create from environment variables:
        config = RenderConfig.from_env()

    Load from a YAML file:
        config = RenderConfig.from_yaml("parse_links.yaml")

    Or specify directly:
        config = RenderConfig(indent="  ", emit_comments=False)
    """

    indent: str = "   "

    # Truth value of the rank fact
    confidence_width: int = 6
    strength: str = "1.0"

    # Attribute naming conventions
    flag_suffix: str = "-FLAG"
    hypothesis_attribute: str = "HYP"
    pos_attribute: str = "pos"

    emit_comments: bool = True

    def __post_init__(self) -> None:
        if self.confidence_width < 1:
            raise ConfigurationError(
                f"confidence_width must be positive, got {self.confidence_width}"
            )
        if not self.flag_suffix:
            raise ConfigurationError("flag_suffix must not be empty")
        if self.indent.strip():
            raise ConfigurationError("indent must contain only whitespace")
        try:
            float(self.strength)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"strength must be a number, got {self.strength!r}", cause=e
            ) from e

    @classmethod
    def from_env(cls) -> "RenderConfig":
        """Load configuration from environment variables.

        Environment variables:
        - PARSE_LINKS_INDENT: Indentation string for nested terms
        - PARSE_LINKS_CONFIDENCE_WIDTH: Characters kept from the confidence
        - PARSE_LINKS_STRENGTH: Strength written into the rank fact
        - PARSE_LINKS_FLAG_SUFFIX: Suffix marking boolean flag attributes
        - PARSE_LINKS_HYPOTHESIS_ATTRIBUTE: Name of the hypothesis marker
        - PARSE_LINKS_POS_ATTRIBUTE: Name of the part-of-speech attribute
        - PARSE_LINKS_EMIT_COMMENTS: 1/true/yes/on, anything else is false
        """
        defaults = cls()
        emit_comments = os.getenv("PARSE_LINKS_EMIT_COMMENTS", "true").strip().lower()
        width = os.getenv("PARSE_LINKS_CONFIDENCE_WIDTH")
        try:
            confidence_width = int(width) if width else defaults.confidence_width
        except ValueError as e:
            raise ConfigurationError(
                f"PARSE_LINKS_CONFIDENCE_WIDTH is not an integer: {width!r}", cause=e
            ) from e

        return cls(
            indent=os.getenv("PARSE_LINKS_INDENT", defaults.indent),
            confidence_width=confidence_width,
            strength=os.getenv("PARSE_LINKS_STRENGTH", defaults.strength),
            flag_suffix=os.getenv("PARSE_LINKS_FLAG_SUFFIX", defaults.flag_suffix),
            hypothesis_attribute=os.getenv(
                "PARSE_LINKS_HYPOTHESIS_ATTRIBUTE", defaults.hypothesis_attribute
            ),
            pos_attribute=os.getenv("PARSE_LINKS_POS_ATTRIBUTE", defaults.pos_attribute),
            emit_comments=emit_comments in TRUTHY,
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RenderConfig":
        """Load configuration from a YAML file.

        The file may hold the settings at top level or under a ``render`` key.
        Unknown keys are ignored with a warning.

        Args:
            path: Path to the YAML file.

        Returns:
            Parsed configuration.

        Raises:
            ConfigurationError: If the file cannot be read or parsed.
        """
        path = Path(path)
        try:
            with open(path) as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load config file {path}", cause=e) from e

        if not isinstance(raw, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")

        return cls.from_dict(raw.get("render", raw))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RenderConfig":
        """Create a config from a plain dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                logger.warning(f"Ignoring unknown render config key: {key}")
        try:
            return cls(**{k: v for k, v in data.items() if k in known})
        except (TypeError, AttributeError) as e:
            raise ConfigurationError(f"Invalid render config: {data!r}", cause=e) from e

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

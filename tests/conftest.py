"""Pytest configuration for parse-links tests."""

import random
from typing import Any

import pytest

from parse_links import IdentityMap, ParsedSentence, SchemeRenderer


# =============================================================================
# Parse Fixtures
# =============================================================================


def dogs_bark_data() -> dict[str, Any]:
    """Two words and one relation: _subj(bark, dogs)."""
    return {
        "id": "sentence@42_parse_0",
        "sentence_id": "sentence@42",
        "confidence": 0.87654321,
        "words": [
            {"name": "dogs", "attributes": {"pos": "noun", "noun_number": "plural"}},
            {"name": "bark", "attributes": {"pos": "verb", "tense": "present"}},
        ],
        "relations": [{"name": "_subj", "source": "bark", "target": "dogs"}],
    }


def new_york_data() -> dict[str, Any]:
    """'New York is big' with 'New' merged into New_York.

    The "New" slot has no ref, so only New_York, is and big are words.
    """
    return {
        "id": "sentence@7_parse_1",
        "sentence_id": "sentence@7",
        "confidence": 0.5321876,
        "words": [
            {"ref": None, "str": "New"},
            {
                "ref": "ny",
                "str": "York",
                "name": "New_York",
                "attributes": {"pos": "noun", "DEFINITE-FLAG": "T"},
            },
            {
                "name": "is",
                "attributes": {"pos": "verb", "tense": "present", "HYP": "T"},
            },
            {"name": "big", "attributes": {"pos": "adj"}},
        ],
        "relations": [
            {"name": "_predadj", "source": "ny", "target": "big"},
        ],
    }


@pytest.fixture
def dogs_bark_dict() -> dict[str, Any]:
    return dogs_bark_data()


@pytest.fixture
def new_york_dict() -> dict[str, Any]:
    return new_york_data()


@pytest.fixture
def dogs_bark() -> ParsedSentence:
    return ParsedSentence.from_dict(dogs_bark_data())


@pytest.fixture
def new_york() -> ParsedSentence:
    return ParsedSentence.from_dict(new_york_data())


# =============================================================================
# Renderer Fixtures
# =============================================================================


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source so identifiers are reproducible."""
    return random.Random(1234)


@pytest.fixture
def identity_map() -> IdentityMap:
    return IdentityMap()


@pytest.fixture
def renderer(rng) -> SchemeRenderer:
    return SchemeRenderer(rng=rng)

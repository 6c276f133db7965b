"""Shared test fixtures."""

import copy

import pytest

from sanamorf.analyzer import Analyzer
from sanamorf.model import LexiconModel


# Self-contained miniature Finnish model (no file I/O needed).
# Vowel harmony and consonant gradation are left out; the lexicon just lists
# the few surface strings the tests use.
FIXTURE = {
    "initialState": "Root",
    "states": {
        "Root": {},
        "Noun": {
            "terminal": True,
            "compoundTo": "Root",
            "attributes": {"SIJAMUOTO": "nimento", "NUMBER": "singular"},
        },
        "NounEnd": {"terminal": True},
        "VerbStem": {},
        "End": {"terminal": True},
    },
    "morphemes": [
        # Stems
        {"surface": "talo", "state": "Root", "next": "Noun", "class": "nimisana", "id": "talo"},
        {"surface": "kirja", "state": "Root", "next": "Noun", "class": "nimisana", "id": "kirja"},
        {"surface": "hylly", "state": "Root", "next": "Noun", "class": "nimisana", "id": "hylly"},
        {"surface": "kuusi", "state": "Root", "next": "Noun", "class": "nimisana", "id": "kuusi-1"},
        {"surface": "kuusi", "state": "Root", "next": "Noun", "class": "lukusana", "id": "kuusi-2"},
        {"surface": "kirjoitta", "state": "Root", "next": "VerbStem", "class": "teonsana",
         "baseform": "kirjoittaa", "id": "kirjoittaa"},
        # Nominal endings
        {"surface": "ssa", "state": "Noun", "next": "NounEnd", "kind": "inflection",
         "attributes": {"SIJAMUOTO": "sisaolento", "NUMBER": "singular"}},
        {"surface": "ssä", "state": "Noun", "next": "NounEnd", "kind": "inflection",
         "attributes": {"SIJAMUOTO": "sisaolento", "NUMBER": "singular"}},
        {"surface": "n", "state": "Noun", "next": "NounEnd", "kind": "inflection",
         "attributes": {"SIJAMUOTO": "omanto", "NUMBER": "singular"}},
        {"surface": "t", "state": "Noun", "next": "NounEnd", "kind": "inflection",
         "attributes": {"SIJAMUOTO": "nimento", "NUMBER": "plural"}},
        {"surface": "t", "state": "Noun", "next": "NounEnd", "kind": "inflection",
         "attributes": {"SIJAMUOTO": "kohdanto", "NUMBER": "plural"}},
        # Clitics
        {"surface": "kin", "state": "NounEnd", "next": "End", "kind": "clitic",
         "attributes": {"FOCUS": "kin"}},
        {"surface": "ko", "state": "NounEnd", "next": "End", "kind": "clitic",
         "attributes": {"KYSYMYSLIITE": "true"}},
        # Verbal derivation and inflection
        {"surface": "ja", "state": "VerbStem", "next": "Noun", "kind": "derivation",
         "class": "nimisana", "baseform": "ja", "attributes": {"PARTICIPLE": "agent"}},
        {"surface": "vat", "state": "VerbStem", "next": "End", "kind": "inflection",
         "attributes": {"MOOD": "indicative", "TENSE": "present_simple",
                        "PERSON": "3", "NUMBER": "plural", "NEGATIVE": "false"}},
        {"surface": "a", "state": "VerbStem", "next": "End", "kind": "inflection",
         "attributes": {"MOOD": "A-infinitive"}},
    ],
}


@pytest.fixture
def model_dict() -> dict:
    """A fresh copy of the fixture model that a test may modify."""
    return copy.deepcopy(FIXTURE)


@pytest.fixture
def model(model_dict) -> LexiconModel:
    return LexiconModel.from_dict(model_dict)


@pytest.fixture
def analyzer(model) -> Analyzer:
    return Analyzer(model)

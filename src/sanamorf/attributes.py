"""
The fixed vocabulary of analysis attribute keys.

Keys follow the Voikko naming (Finnish names kept where Voikko uses them,
e.g. SIJAMUOTO for grammatical case).  Values are plain strings; which keys
an analysis carries depends on its word class.

Usage:
    from sanamorf.attributes import Attr

    Attr.parse("sijamuoto")   # Attr.SIJAMUOTO
    Attr.parse("COLOUR")      # raises UnknownAttributeError
"""

from __future__ import annotations

from enum import Enum

from sanamorf.errors import UnknownAttributeError


class Attr(str, Enum):
    """Attribute keys an Analysis may carry."""

    # Always present
    BASEFORM = "BASEFORM"
    CLASS = "CLASS"  # nimisana, teonsana, laatusana, ...
    STRUCTURE = "STRUCTURE"
    WORDBASES = "WORDBASES"

    # Nominal inflection
    SIJAMUOTO = "SIJAMUOTO"  # nimento, omanto, sisaolento, ...
    NUMBER = "NUMBER"  # singular, plural
    COMPARISON = "COMPARISON"  # positive, comparative, superlative
    POSSESSIVE = "POSSESSIVE"  # 1s, 2s, 1p, 2p, 3

    # Verbal inflection
    PERSON = "PERSON"  # 1, 2, 3, 4 (passive)
    MOOD = "MOOD"  # indicative, conditional, imperative, ...
    TENSE = "TENSE"  # present_simple, past_imperfective
    NEGATIVE = "NEGATIVE"  # true, false, both
    PARTICIPLE = "PARTICIPLE"  # present_active, past_passive, agent, ...
    REQUIRE_FOLLOWING_VERB = "REQUIRE_FOLLOWING_VERB"

    # Clitics
    KYSYMYSLIITE = "KYSYMYSLIITE"  # question clitic -ko/-kö
    FOCUS = "FOCUS"  # kin, kaan

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, key: Attr | str) -> Attr:
        """Resolve an Attr or its (case-insensitive) name."""
        if isinstance(key, cls):
            return key
        if isinstance(key, str):
            try:
                return cls[key.strip().upper()]
            except KeyError:
                pass
        raise UnknownAttributeError(key)


# Keys every analysis carries, whatever its word class.
CORE_ATTRIBUTES: frozenset[Attr] = frozenset({Attr.BASEFORM, Attr.CLASS, Attr.STRUCTURE})

# Keys the analysis builder adds itself rather than taking from model rules.
BUILDER_ATTRIBUTES: frozenset[Attr] = frozenset(
    {Attr.BASEFORM, Attr.STRUCTURE, Attr.WORDBASES}
)

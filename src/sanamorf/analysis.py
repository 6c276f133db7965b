"""
Analysis records and the owned result set returned by the analyzer.

Usage:
    from sanamorf import Analyzer, Attr

    results = analyzer.analyze("kirjahyllyssä")
    for a in results:
        print(a.baseform, a.word_class, a.get(Attr.SIJAMUOTO), a.structure)
    results = analyzer.release(results)   # results is now None

    # or let a with-block release it:
    with analyzer.analyze("talo") as results:
        print(len(results))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, Mapping

from sanamorf.attributes import Attr
from sanamorf.errors import InvalidHandleError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, eq=False)
class Analysis:
    """One morphological parse of a word: a bundle of attribute values.

    Different word classes populate different keys, so this is a mapping
    over the closed Attr vocabulary rather than a fixed record.  Every
    analysis has at least BASEFORM and CLASS.
    """

    attributes: Mapping[Attr, str]

    def __post_init__(self) -> None:
        attrs = {Attr.parse(k): str(v) for k, v in dict(self.attributes).items()}
        missing = [k.value for k in (Attr.BASEFORM, Attr.CLASS) if k not in attrs]
        if missing:
            raise ValueError(f"Analysis is missing required attributes: {', '.join(missing)}")
        object.__setattr__(self, "attributes", MappingProxyType(attrs))

    # ── Mapping-style access ─────────────────────────────────────────────

    def get(self, key: Attr | str, default: str | None = None) -> str | None:
        """Value for a key, or `default` if this analysis doesn't carry it.

        Raises UnknownAttributeError for names outside the vocabulary.
        """
        return self.attributes.get(Attr.parse(key), default)

    def __getitem__(self, key: Attr | str) -> str:
        return self.attributes[Attr.parse(key)]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (Attr, str)):
            return False
        try:
            return Attr.parse(key) in self.attributes
        except KeyError:
            return False

    def __iter__(self) -> Iterator[Attr]:
        return iter(self.attributes)

    def __len__(self) -> int:
        return len(self.attributes)

    def keys(self):
        return self.attributes.keys()

    def items(self):
        return self.attributes.items()

    def as_dict(self) -> dict[str, str]:
        """Plain dict with string keys (e.g. for JSON output)."""
        return {k.value: v for k, v in self.attributes.items()}

    # ── Convenience accessors ────────────────────────────────────────────

    @property
    def baseform(self) -> str:
        return self.attributes[Attr.BASEFORM]

    @property
    def word_class(self) -> str:
        return self.attributes[Attr.CLASS]

    @property
    def structure(self) -> str | None:
        return self.attributes.get(Attr.STRUCTURE)

    @property
    def case(self) -> str | None:
        return self.attributes.get(Attr.SIJAMUOTO)

    @property
    def number(self) -> str | None:
        return self.attributes.get(Attr.NUMBER)

    @property
    def person(self) -> str | None:
        return self.attributes.get(Attr.PERSON)

    # Key order carries no meaning, so equality and hashing ignore it.
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Analysis):
            return NotImplemented
        return dict(self.attributes) == dict(other.attributes)

    def __hash__(self) -> int:
        return hash(frozenset(self.attributes.items()))

    def __repr__(self) -> str:
        extras = " ".join(
            v for k, v in self.attributes.items()
            if k not in (Attr.BASEFORM, Attr.CLASS, Attr.STRUCTURE, Attr.WORDBASES)
        )
        return (
            f"Analysis({self.baseform!r} [{self.word_class}] "
            f"{self.structure or ''}{' ' + extras if extras else ''})"
        )


class ResultSet:
    """
    The analyses found for one word, owned by whoever called analyze().

    A result set is Live until release() is called and Released afterwards.
    release() drops every owned Analysis; any later read raises
    InvalidHandleError instead of quietly returning stale data.  Only
    `released` and release() itself stay legal on a Released set.

    Releasing twice is a programmer error.  With strict handles (the default
    unless Python runs with -O) it raises InvalidHandleError; otherwise it
    logs a warning and does nothing.  Releasing through
    Analyzer.release() and rebinding the name to its None return value
    makes the second call a plain no-op.
    """

    __slots__ = ("word", "_analyses", "_strict")

    def __init__(self, word: str, analyses: list[Analysis] | None = None, *, strict: bool = __debug__):
        self.word = word
        self._analyses: list[Analysis] | None = list(analyses or [])
        self._strict = strict

    # ── Lifecycle ────────────────────────────────────────────────────────

    @property
    def released(self) -> bool:
        return self._analyses is None

    def release(self) -> None:
        """Destroy every owned analysis, then the set itself."""
        if self._analyses is None:
            if self._strict:
                raise InvalidHandleError(f"ResultSet for {self.word!r} was already released")
            logger.warning("Ignoring second release of ResultSet for %r", self.word)
            return
        self._analyses.clear()
        self._analyses = None

    def __enter__(self) -> ResultSet:
        self._live()
        return self

    def __exit__(self, *args) -> None:
        if self._analyses is not None:
            self.release()

    def _live(self) -> list[Analysis]:
        if self._analyses is None:
            raise InvalidHandleError(f"ResultSet for {self.word!r} used after release")
        return self._analyses

    # ── Read access ──────────────────────────────────────────────────────

    @property
    def analyses(self) -> tuple[Analysis, ...]:
        return tuple(self._live())

    def __len__(self) -> int:
        return len(self._live())

    def __bool__(self) -> bool:
        return bool(self._live())

    def __iter__(self) -> Iterator[Analysis]:
        return iter(tuple(self._live()))

    def __getitem__(self, index: int) -> Analysis:
        return self._live()[index]

    def baseforms(self) -> list[str]:
        """Distinct base forms in traversal order."""
        return list(dict.fromkeys(a.baseform for a in self._live()))

    def __repr__(self) -> str:
        if self._analyses is None:
            return f"ResultSet({self.word!r}, released)"
        return f"ResultSet({self.word!r}, {len(self._analyses)} analyses)"

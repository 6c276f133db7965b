"""
The morphological model: morpheme lexicon, morphotactic states and the
attribute rules attached to them.

The analyzer only needs the query contract below, so any object that
provides it can stand in for LexiconModel (a compiled transducer wrapper,
for instance):

    initial_state                        state every word starts in
    match_morphemes(remaining, state)    ordered MorphemeMatch sequence
    attribute_rules(morphemes)           dict[Attr, str] for one word part
    is_terminal_state(state)             may a word end here?
    compound_successor(state)            where a new compound part starts
    reachable_attributes()               every key the rules can produce

LexiconModel builds that contract from a JSON description:

    {
      "initialState": "Root",
      "states": {
        "Root":     {},
        "NounInfl": {"terminal": true, "compoundTo": "Root",
                     "attributes": {"SIJAMUOTO": "nimento", "NUMBER": "singular"}},
        "End":      {"terminal": true}
      },
      "morphemes": [
        {"surface": "talo", "state": "Root", "next": "NounInfl",
         "kind": "stem", "class": "nimisana"},
        {"surface": "ssa", "state": "NounInfl", "next": "End",
         "kind": "inflection",
         "attributes": {"SIJAMUOTO": "sisaolento", "NUMBER": "singular"}}
      ]
    }

Usage:
    from sanamorf.model import LexiconModel

    model = LexiconModel.from_file("data/sanamorf-fi.json")
    print(model.summary())
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, NamedTuple, Sequence

from sanamorf.attributes import Attr
from sanamorf.errors import ModelError, UnknownAttributeError

logger = logging.getLogger(__name__)

MORPHEME_KINDS = ("stem", "derivation", "inflection", "clitic")


@dataclass(frozen=True, slots=True)
class Morpheme:
    """A lexicon entry: one surface string valid in one morphotactic state."""

    surface: str
    state: str  # state the morpheme is matched in
    next_state: str  # state after consuming it
    kind: str = "stem"  # stem, derivation, inflection, clitic
    baseform: str | None = None  # stems default to their surface
    word_class: str | None = None  # sets (or for derivations, changes) CLASS
    attributes: tuple[tuple[Attr, str], ...] = ()
    morpheme_id: str | None = None

    @property
    def is_stem(self) -> bool:
        return self.kind == "stem"

    def __repr__(self) -> str:
        return f"Morpheme({self.surface!r} {self.state}->{self.next_state} [{self.kind}])"


@dataclass(frozen=True, slots=True)
class MorphState:
    """A node of the morphotactic automaton."""

    name: str
    terminal: bool = False
    compound_to: str | None = None  # state a following compound part starts in
    # Filled in when a word part ends here and no morpheme set them
    # (zero endings such as the nominative singular).
    attributes: tuple[tuple[Attr, str], ...] = ()


class MorphemeMatch(NamedTuple):
    """One answer to match_morphemes()."""

    morpheme: Morpheme
    consumed_length: int
    next_state: str


@dataclass(frozen=True, eq=False)
class LexiconModel:
    """
    Read-only morpheme lexicon indexed for prefix matching.

    Instances are never mutated after loading, so one model can serve any
    number of analyzers and threads at once.
    """

    initial_state: str
    states: Mapping[str, MorphState]
    morphemes: tuple[Morpheme, ...]
    # state -> first character -> morphemes in declaration order
    _index: Mapping[str, Mapping[str, tuple[Morpheme, ...]]] = field(repr=False)
    _reachable: frozenset[Attr] = field(repr=False)

    @classmethod
    def from_file(cls, path: str | Path) -> LexiconModel:
        """Load from a JSON model description."""
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
        model = cls._from_raw(raw)
        logger.info(
            "Loaded morphological model from %s (%d states, %d morphemes)",
            path, len(model.states), len(model.morphemes),
        )
        return model

    @classmethod
    def from_dict(cls, raw: dict) -> LexiconModel:
        """Load from an already-parsed JSON dict."""
        return cls._from_raw(raw)

    @classmethod
    def _from_raw(cls, raw: dict) -> LexiconModel:
        if not isinstance(raw, dict):
            raise ModelError("Model description must be a JSON object")

        # 1. States
        states_raw = raw.get("states") or {}
        if not isinstance(states_raw, dict):
            raise ModelError("'states' must be an object of state name -> state")
        states: dict[str, MorphState] = {}
        for name, st_raw in states_raw.items():
            where = f"state {name!r}"
            st_raw = st_raw or {}
            if not isinstance(st_raw, dict):
                raise ModelError(f"{where} must be an object, got {type(st_raw).__name__}")
            states[name] = MorphState(
                name=name,
                terminal=bool(st_raw.get("terminal", False)),
                compound_to=_optional_str(st_raw, "compoundTo", where),
                attributes=_parse_attributes(st_raw.get("attributes"), where),
            )

        initial = raw.get("initialState", "Root")
        if not isinstance(initial, str) or initial not in states:
            raise ModelError(f"Initial state {initial!r} is not defined")
        for st in states.values():
            if st.compound_to is not None and st.compound_to not in states:
                raise ModelError(
                    f"State {st.name!r} compounds into undefined state {st.compound_to!r}"
                )

        # 2. Morphemes
        morphemes_raw = raw.get("morphemes", [])
        if not isinstance(morphemes_raw, list):
            raise ModelError("'morphemes' must be a list")
        morphemes: list[Morpheme] = []
        for i, m_raw in enumerate(morphemes_raw):
            where = f"morpheme #{i}"
            if not isinstance(m_raw, dict):
                raise ModelError(f"{where} must be an object, got {type(m_raw).__name__}")
            try:
                surface = m_raw["surface"]
                state = m_raw["state"]
                next_state = m_raw["next"]
            except KeyError as exc:
                raise ModelError(f"{where} is missing {exc.args[0]!r}") from None
            for key, value in (("surface", surface), ("state", state), ("next", next_state)):
                if not isinstance(value, str):
                    raise ModelError(f"{where} has a non-string {key!r}: {value!r}")
            if not surface:
                raise ModelError(f"{where} has an empty surface")
            for ref in (state, next_state):
                if ref not in states:
                    raise ModelError(f"{where} ({surface!r}) refers to undefined state {ref!r}")
            kind = m_raw.get("kind", "stem")
            if kind not in MORPHEME_KINDS:
                raise ModelError(f"{where} ({surface!r}) has unknown kind {kind!r}")

            baseform = _optional_str(m_raw, "baseform", where)
            if baseform is None and kind == "stem":
                baseform = surface
            morphemes.append(Morpheme(
                surface=surface,
                state=state,
                next_state=next_state,
                kind=kind,
                baseform=baseform,
                word_class=_optional_str(m_raw, "class", where),
                attributes=_parse_attributes(m_raw.get("attributes"), where),
                morpheme_id=_optional_str(m_raw, "id", where),
            ))

        index: dict[str, dict[str, list[Morpheme]]] = {}
        reachable: set[Attr] = set()
        for m in morphemes:
            index.setdefault(m.state, {}).setdefault(m.surface[0], []).append(m)
            reachable.update(k for k, _ in m.attributes)
            if m.word_class is not None:
                reachable.add(Attr.CLASS)
        for st in states.values():
            reachable.update(k for k, _ in st.attributes)

        frozen_index = MappingProxyType({
            state: MappingProxyType({ch: tuple(ms) for ch, ms in by_char.items()})
            for state, by_char in index.items()
        })
        return cls(
            initial_state=initial,
            states=MappingProxyType(states),
            morphemes=tuple(morphemes),
            _index=frozen_index,
            _reachable=frozenset(reachable),
        )

    # ── Query contract ───────────────────────────────────────────────────

    def match_morphemes(self, remaining: str, state: str) -> tuple[MorphemeMatch, ...]:
        """Morphemes valid in `state` that are a prefix of `remaining`.

        Returned in lexicon declaration order.  Characters the lexicon has
        never seen simply produce no match.
        """
        if not remaining:
            return ()
        by_char = self._index.get(state)
        if by_char is None:
            return ()
        return tuple(
            MorphemeMatch(m, len(m.surface), m.next_state)
            for m in by_char.get(remaining[0], ())
            if remaining.startswith(m.surface)
        )

    def is_terminal_state(self, state: str) -> bool:
        st = self.states.get(state)
        return st is not None and st.terminal

    def compound_successor(self, state: str) -> str | None:
        st = self.states.get(state)
        return st.compound_to if st is not None else None

    def attribute_rules(self, morphemes: Sequence[Morpheme]) -> dict[Attr, str]:
        """Attributes for one word part (one compound component).

        Morpheme tables are merged in order so the last inflectional suffix
        decides case and number; CLASS comes from the last morpheme that
        declares a word class, so derivational suffixes override the stem.
        The end state's defaults fill whatever is still missing.
        """
        attrs: dict[Attr, str] = {}
        word_class = None
        for m in morphemes:
            attrs.update(m.attributes)
            if m.word_class is not None:
                word_class = m.word_class
        if word_class is not None:
            attrs[Attr.CLASS] = word_class
        if morphemes:
            end = self.states.get(morphemes[-1].next_state)
            if end is not None:
                for key, value in end.attributes:
                    attrs.setdefault(key, value)
        return attrs

    def reachable_attributes(self) -> frozenset[Attr]:
        """Every key attribute_rules() can put into a result."""
        return self._reachable

    # ── Introspection ────────────────────────────────────────────────────

    def morphemes_in(self, state: str) -> list[Morpheme]:
        """All morphemes matched in a given state, in declaration order."""
        return [m for m in self.morphemes if m.state == state]

    def summary(self) -> str:
        terminal = sum(1 for st in self.states.values() if st.terminal)
        compounding = sum(1 for st in self.states.values() if st.compound_to)
        lines = [
            f"Initial state:   {self.initial_state}",
            f"States:          {len(self.states)} ({terminal} terminal, {compounding} compounding)",
            f"Morphemes:       {len(self.morphemes)}",
            "",
            "Morpheme kinds:",
        ]
        kind_counts = Counter(m.kind for m in self.morphemes)
        for kind, count in kind_counts.most_common():
            lines.append(f"  {kind:12s} {count:6d}")
        classes = Counter(m.word_class for m in self.morphemes if m.is_stem and m.word_class)
        if classes:
            lines.append("")
            lines.append("Stem classes:")
            for cls_name, count in classes.most_common():
                lines.append(f"  {cls_name:12s} {count:6d}")
        return "\n".join(lines)


def _parse_attributes(raw: dict | None, where: str) -> tuple[tuple[Attr, str], ...]:
    """Validate an attribute table against the Attr vocabulary."""
    if not raw:
        return ()
    if not isinstance(raw, dict):
        raise ModelError(f"{where} has an attribute table that is not an object")
    pairs = []
    for key, value in raw.items():
        try:
            attr = Attr.parse(key)
        except UnknownAttributeError:
            raise ModelError(f"{where} uses unknown attribute {key!r}") from None
        pairs.append((attr, str(value)))
    return tuple(pairs)


def _optional_str(raw: dict, key: str, where: str) -> str | None:
    value = raw.get(key)
    if value is not None and not isinstance(value, str):
        raise ModelError(f"{where} has a non-string {key!r}: {value!r}")
    return value

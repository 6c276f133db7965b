"""
Segmentation search: every way to split a word into morphemes that the
model's morphotactics accept, including compound-part boundaries.

Usage:
    from sanamorf.segmentation import SegmentationSearch

    search = SegmentationSearch(model)
    for seg in search.search("kirjahyllyssä"):
        print(seg.surfaces, len(seg.parts))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator

from sanamorf.errors import ModelError
from sanamorf.model import Morpheme, MorphemeMatch

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MorphemeSpan:
    """A morpheme placed at word[start:end]."""

    morpheme: Morpheme
    start: int
    end: int
    state: str  # morphotactic state after this morpheme
    part: int  # compound part index, 0-based

    @property
    def surface(self) -> str:
        return self.morpheme.surface


@dataclass(frozen=True, slots=True)
class Segmentation:
    """An accepted path: spans that together cover the whole word."""

    word: str
    spans: tuple[MorphemeSpan, ...]

    @property
    def parts(self) -> list[tuple[MorphemeSpan, ...]]:
        """Spans grouped by compound part, in word order."""
        grouped: list[list[MorphemeSpan]] = []
        for span in self.spans:
            if span.part == len(grouped):
                grouped.append([])
            grouped[-1].append(span)
        return [tuple(g) for g in grouped]

    @property
    def surfaces(self) -> list[str]:
        return [s.surface for s in self.spans]

    @property
    def is_compound(self) -> bool:
        return bool(self.spans) and self.spans[-1].part > 0

    def __repr__(self) -> str:
        text = "=".join("+".join(s.surface for s in part) for part in self.parts)
        return f"Segmentation({text})"


class SegmentationSearch:
    """
    Depth-first search over (position, state) pairs.

    The search runs in two passes.  The first walks every reachable
    (position, state) node once, caching the model's matches for it, and
    marks the nodes from which the end of the word can still be reached in
    a terminal state.  The second enumerates paths depth-first through
    those live nodes only, so a word with no parse costs one pass over the
    node graph instead of one walk per path.

    Both passes use explicit work lists instead of recursion so that long
    words and deep compounds cannot hit the interpreter's recursion limit.
    Children are pushed in reverse, so candidates come out in exactly the
    order the model returns its matches: morphemes continuing the current
    word part first, then morphemes opening a new compound part.

    Nothing is ranked or discarded here; every valid path is yielded.
    """

    def __init__(self, model: Any, *, allow_compounds: bool = True, max_parts: int | None = None):
        self.model = model
        self.allow_compounds = allow_compounds
        self.max_parts = max_parts

    def search(self, word: str) -> Iterator[Segmentation]:
        """Yield every accepted segmentation of `word`."""
        if not word:
            return

        transitions, live = self._live_nodes(word)
        start = self._key(0, self.model.initial_state, 0)
        explored = 0
        try:
            if start not in live:
                return
            # (position, state, part, spans so far)
            stack: list[tuple[int, str, int, tuple[MorphemeSpan, ...]]] = [
                (0, self.model.initial_state, 0, ())
            ]
            while stack:
                pos, state, part, spans = stack.pop()
                explored += 1

                if pos == len(word):
                    yield Segmentation(word, spans)
                    continue

                children = []
                for match, bump in transitions[self._key(pos, state, part)]:
                    child = self._step(pos, part + bump, spans, match)
                    if self._key(child[0], child[1], child[2]) in live:
                        children.append(child)
                stack.extend(reversed(children))
        finally:
            logger.debug(
                "Explored %d of %d search nodes for %r (%d live)",
                explored, len(transitions), word, len(live),
            )

    def _key(self, pos: int, state: str, part: int) -> tuple:
        # The part index only changes what may follow when parts are capped.
        if self.max_parts is None:
            return (pos, state)
        return (pos, state, part)

    def _live_nodes(self, word: str) -> tuple[dict, set]:
        """Cache transitions per node and find the nodes that can finish.

        Transitions are stored with a part increment (0 inside a part, 1 for
        a compound boundary) because one node may be reached with different
        part counts when parts are uncapped.
        """
        length = len(word)
        start = (0, self.model.initial_state, 0)
        transitions: dict[tuple, list[tuple[MorphemeMatch, int]]] = {}
        parents: dict[tuple, list[tuple]] = {}
        accepting = []

        pending = [start]
        transitions[self._key(*start)] = []
        while pending:
            pos, state, part = pending.pop()
            key = self._key(pos, state, part)
            if pos == length:
                if self.model.is_terminal_state(state):
                    accepting.append(key)
                continue

            moves = self._transitions(word, pos, state, part)
            transitions[key] = moves
            for (morpheme, consumed, next_state), bump in moves:
                if consumed < 1:
                    raise ModelError(f"Model returned a zero-length match for {morpheme!r}")
                child = (pos + consumed, next_state, part + bump)
                child_key = self._key(*child)
                parents.setdefault(child_key, []).append(key)
                if child_key not in transitions:
                    transitions[child_key] = []
                    pending.append(child)

        live = set(accepting)
        frontier = list(accepting)
        while frontier:
            for parent in parents.get(frontier.pop(), ()):
                if parent not in live:
                    live.add(parent)
                    frontier.append(parent)
        return transitions, live

    def _transitions(self, word: str, pos: int, state: str, part: int) -> list[tuple[MorphemeMatch, int]]:
        remaining = word[pos:]
        moves = [(match, 0) for match in self.model.match_morphemes(remaining, state)]

        # A new compound part may only follow a morpheme of the current part,
        # and every node past position 0 has one.
        if self.allow_compounds and pos > 0:
            successor = self.model.compound_successor(state)
            if successor is not None and (self.max_parts is None or part + 1 < self.max_parts):
                moves.extend(
                    (match, 1) for match in self.model.match_morphemes(remaining, successor)
                )
        return moves

    @staticmethod
    def _step(pos, part, spans, match):
        morpheme, consumed, next_state = match
        end = pos + consumed
        span = MorphemeSpan(morpheme=morpheme, start=pos, end=end, state=next_state, part=part)
        return (end, next_state, part, spans + (span,))

"""
Turn accepted segmentations into Analysis records.

BASEFORM, STRUCTURE and WORDBASES are computed here from the morpheme
sequence; CLASS and the inflectional attributes come from the model's
attribute rules for the last compound part, which is the part that
inflects.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

from sanamorf.analysis import Analysis
from sanamorf.attributes import Attr
from sanamorf.errors import RuleCoverageError
from sanamorf.segmentation import MorphemeSpan, Segmentation

STRUCTURE_STYLES = ("morphemes", "letters")


class AnalysisBuilder:
    """
    Build one Analysis per Segmentation.  Holds no mutable state, so the
    same candidate always yields the same analysis.

    structure_style:
        "morphemes"  morphemes joined by '+', compound parts by '='
                     (kirja=hylly+ssä; a bare stem is just the word)
        "letters"    Voikko letter pattern: '=' opens each part, then
                     'p' lowercase, 'i' uppercase, 'q' other, '-' and ':'
                     kept (=ppppp=pppppppp)
    """

    def __init__(self, model: Any, structure_style: str = "morphemes"):
        if structure_style not in STRUCTURE_STYLES:
            raise ValueError(
                f"Unknown structure style {structure_style!r} "
                f"(expected one of {', '.join(STRUCTURE_STYLES)})"
            )
        self.model = model
        self.structure_style = structure_style

    def build(
        self,
        segmentation: Segmentation,
        surface: str | None = None,
        offsets: Sequence[int] | None = None,
    ) -> Analysis:
        """Analysis for one segmentation.

        `surface` is the word as the caller spelled it; it differs from
        segmentation.word only in letter case and is what STRUCTURE and
        WORDBASES are written from.  `offsets` maps each position of
        segmentation.word (plus its end) to a position in `surface` when
        case folding changed the length; None means positions are shared.
        """
        cut = _cutter(segmentation, surface, offsets)
        parts = segmentation.parts
        last = parts[-1]

        attrs = dict(self.model.attribute_rules([s.morpheme for s in last]))
        if Attr.CLASS not in attrs:
            raise RuleCoverageError(
                f"No rule gives a CLASS to {segmentation!r} "
                f"(ends in state {last[-1].state!r})"
            )

        bases = [self._part_baseform(part, final=(i == len(parts) - 1))
                 for i, part in enumerate(parts)]
        attrs[Attr.BASEFORM] = "".join(bases)
        attrs[Attr.STRUCTURE] = self._structure(parts, cut)
        attrs[Attr.WORDBASES] = "".join(
            f"+{_text(part, cut)}({base})" for part, base in zip(parts, bases)
        )
        return Analysis(attrs)

    # ── Base forms ───────────────────────────────────────────────────────

    @staticmethod
    def _part_baseform(part: Sequence[MorphemeSpan], *, final: bool) -> str:
        """Base form of one compound part.

        Non-final parts keep their written form (kirja|hylly -> kirjahylly).
        In the final part, each morpheme that declares a base form replaces
        everything from itself onwards: the stem gives the dictionary form
        and a derivational suffix rebuilds it on top of the preceding
        morphemes (kirjoitta+ja -> kirjoittaja).
        """
        written = [s.morpheme.surface for s in part]
        if not final:
            return "".join(written)
        base = ""
        for i, span in enumerate(part):
            if span.morpheme.baseform is not None:
                base = "".join(written[:i]) + span.morpheme.baseform
        return base or "".join(written)

    # ── Structure ────────────────────────────────────────────────────────

    def _structure(self, parts: list[tuple[MorphemeSpan, ...]], cut: Callable[[int, int], str]) -> str:
        if self.structure_style == "letters":
            return "".join("=" + _letter_pattern(_text(part, cut)) for part in parts)
        return "=".join(
            "+".join(cut(s.start, s.end) for s in part) for part in parts
        )


def _cutter(segmentation: Segmentation, surface: str | None, offsets: Sequence[int] | None):
    """Slicing function from segmentation positions to the caller's text."""
    word = segmentation.word
    if surface is None:
        return lambda start, end: word[start:end]
    if offsets is None:
        return lambda start, end: surface[start:end]

    # A boundary inside a letter that folded to several code points has no
    # place in the caller's spelling; such parses are written as matched.
    bounds = {s.start for s in segmentation.spans} | {s.end for s in segmentation.spans}
    if all(b == 0 or b == len(word) or offsets[b] != offsets[b - 1] for b in bounds):
        return lambda start, end: surface[offsets[start]:offsets[end]]
    return lambda start, end: word[start:end]


def _text(part: Sequence[MorphemeSpan], cut: Callable[[int, int], str]) -> str:
    return cut(part[0].start, part[-1].end)


def _letter_pattern(text: str) -> str:
    out = []
    for ch in text:
        if ch in "-:":
            out.append(ch)
        elif ch.isalpha():
            out.append("i" if ch.isupper() else "p")
        else:
            out.append("q")
    return "".join(out)

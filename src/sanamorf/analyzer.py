"""
The analyzer: word in, owned ResultSet of analyses out.

Usage:
    from sanamorf import Analyzer

    analyzer = Analyzer.from_config()           # loads sanamorf.toml
    results = analyzer.analyze("kirjahyllyssä")
    for a in results:
        print(a.baseform, a.word_class, a.case)
    results = analyzer.release(results)         # results is None now

    # Or build manually:
    model = LexiconModel.from_file("data/sanamorf-fi.json")
    analyzer = Analyzer(model, AnalyzerConfig(structure_style="letters"))
"""

from __future__ import annotations

import logging
from itertools import islice
from pathlib import Path
from typing import Any

from sanamorf.analysis import ResultSet
from sanamorf.builder import AnalysisBuilder
from sanamorf.config import AnalyzerConfig, load_config
from sanamorf.model import LexiconModel
from sanamorf.segmentation import SegmentationSearch

logger = logging.getLogger(__name__)


class Analyzer:
    """
    Drives the segmentation search over a shared, read-only model and
    builds one Analysis per accepted segmentation.

    The analyzer keeps no per-call state, so one instance may be used from
    several threads.  Each ResultSet it returns belongs to the caller alone
    and must be released exactly once.
    """

    def __init__(self, model: Any, config: AnalyzerConfig | None = None):
        self.model = model
        self.config = config or AnalyzerConfig()
        self.search = SegmentationSearch(
            model,
            allow_compounds=self.config.allow_compounds,
            max_parts=self.config.max_parts,
        )
        self.builder = AnalysisBuilder(model, structure_style=self.config.structure_style)

    @classmethod
    def from_config(cls, config_path: str | Path = "sanamorf.toml") -> Analyzer:
        """Load the model and settings named in a TOML config file."""
        model_path, config = load_config(config_path)
        return cls(LexiconModel.from_file(model_path), config)

    # ── Analysis ─────────────────────────────────────────────────────────

    def analyze(self, word: str) -> ResultSet:
        """Every analysis of `word`, in search traversal order.

        An empty ResultSet means the word has no valid parse; that is never
        an error.  The caller owns the returned set.
        """
        cfg = self.config
        if not word or (cfg.max_word_chars is not None and len(word) > cfg.max_word_chars):
            return ResultSet(word, strict=cfg.strict_handles)

        offsets = None
        searched = word
        if cfg.case_insensitive:
            searched, offsets = _fold_case(word)

        found = self.search.search(searched)
        try:
            segmentations = found
            if cfg.max_analyses is not None:
                segmentations = islice(found, cfg.max_analyses)
            analyses = [self.builder.build(seg, word, offsets) for seg in segmentations]
        finally:
            found.close()
        logger.debug("Analyzed %r: %d analyses", word, len(analyses))
        return ResultSet(word, analyses, strict=cfg.strict_handles)

    def analyze_batch(self, words: list[str]) -> dict[str, ResultSet]:
        """Analyze several words; one ResultSet per unique word.

        Every returned set must still be released by the caller.
        """
        return {word: self.analyze(word) for word in dict.fromkeys(words)}

    def release(self, results: ResultSet | None) -> None:
        """Release a ResultSet and return the None sentinel.

        Rebind the caller's name to the return value so that a stray second
        call sees None and does nothing:

            results = analyzer.release(results)
        """
        if results is None:
            return None
        results.release()
        return None

    # ── Introspection ────────────────────────────────────────────────────

    def summary(self) -> str:
        cfg = self.config
        lines = ["Analyzer"]
        lines.append(f"  Structure style:  {cfg.structure_style}")
        lines.append(f"  Case-insensitive: {cfg.case_insensitive}")
        lines.append(f"  Compounds:        {cfg.allow_compounds}"
                     + (f" (max {cfg.max_parts} parts)" if cfg.max_parts else ""))
        if cfg.max_analyses is not None:
            lines.append(f"  Max analyses:     {cfg.max_analyses}")
        if cfg.max_word_chars is not None:
            lines.append(f"  Max word length:  {cfg.max_word_chars}")
        lines.append(f"  Strict handles:   {cfg.strict_handles}")
        if hasattr(self.model, "summary"):
            lines.append("  [model]")
            for sub_line in self.model.summary().split("\n"):
                lines.append(f"    {sub_line}")
        return "\n".join(lines)


def _fold_case(word: str) -> tuple[str, list[int] | None]:
    """Lowercase `word` for matching.

    Some letters lowercase to more than one code point ('İ' -> 'i̇').  When
    that happens the second value maps each folded position (plus the end)
    back to its position in `word`; otherwise it is None.
    """
    folded = word.lower()
    if len(folded) == len(word):
        return folded, None
    offsets = []
    for i, ch in enumerate(word):
        offsets.extend([i] * len(ch.lower()))
    offsets.append(len(word))
    return folded, offsets

"""
TOML configuration for the analyzer.

Example sanamorf.toml:

    [model]
    path = "data/sanamorf-fi.json"     # relative to this file

    [analyzer]
    structure_style = "letters"
    case_insensitive = true
    max_analyses = 31

Usage:
    from sanamorf.config import load_config

    model_path, config = load_config("sanamorf.toml")
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields
from pathlib import Path

from sanamorf.builder import STRUCTURE_STYLES
from sanamorf.errors import ConfigError


@dataclass(frozen=True, slots=True)
class AnalyzerConfig:
    """Analyzer settings.  The defaults return every analysis, unranked."""

    structure_style: str = "morphemes"  # or "letters"
    case_insensitive: bool = False  # match lowercased input against the lexicon
    allow_compounds: bool = True
    max_parts: int | None = None  # cap on compound parts per word
    max_analyses: int | None = None  # keep only the first N, in traversal order
    max_word_chars: int | None = None  # longer words get no analysis
    # Raise on double release; off under `python -O`.
    strict_handles: bool = __debug__

    def __post_init__(self) -> None:
        if self.structure_style not in STRUCTURE_STYLES:
            raise ConfigError(
                f"structure_style must be one of {', '.join(STRUCTURE_STYLES)}, "
                f"got {self.structure_style!r}"
            )
        for name in ("case_insensitive", "allow_compounds", "strict_handles"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigError(f"{name} must be true or false, got {value!r}")
        for name in ("max_parts", "max_analyses", "max_word_chars"):
            value = getattr(self, name)
            # bool is an int subclass
            if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 1):
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")

    @classmethod
    def from_dict(cls, raw: dict) -> AnalyzerConfig:
        """Build from an [analyzer] table; unknown keys are rejected."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ConfigError(f"Unknown [analyzer] setting(s): {', '.join(unknown)}")
        return cls(**raw)


def load_config(config_path: str | Path = "sanamorf.toml") -> tuple[Path, AnalyzerConfig]:
    """Read a TOML config file.

    Returns the model path (resolved relative to the config file's
    directory) and the analyzer settings.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    with config_path.open("rb") as f:
        try:
            cfg = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"{config_path}: {exc}") from exc

    model_table = cfg.get("model", {})
    if not isinstance(model_table, dict):
        raise ConfigError(f"{config_path}: [model] must be a table")
    model_path = model_table.get("path")
    if not model_path:
        raise ConfigError(f"{config_path}: [model] path is required")
    if not isinstance(model_path, str):
        raise ConfigError(f"{config_path}: [model] path must be a string, got {model_path!r}")
    model_path = Path(model_path)
    if not model_path.is_absolute():
        model_path = config_path.parent / model_path

    config = AnalyzerConfig.from_dict(cfg.get("analyzer", {}))
    return model_path, config

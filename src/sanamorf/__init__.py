"""sanamorf: morphological analysis engine for spell-checkers and grammar tools."""

from sanamorf.attributes import Attr
from sanamorf.analysis import Analysis, ResultSet
from sanamorf.model import LexiconModel, Morpheme, MorphemeMatch
from sanamorf.segmentation import SegmentationSearch, Segmentation, MorphemeSpan
from sanamorf.builder import AnalysisBuilder
from sanamorf.config import AnalyzerConfig, load_config
from sanamorf.analyzer import Analyzer
from sanamorf.errors import (
    SanamorfError, InvalidHandleError, ModelError, RuleCoverageError,
    UnknownAttributeError, ConfigError,
)

__all__ = [
    "Attr",
    "Analysis", "ResultSet",
    "LexiconModel", "Morpheme", "MorphemeMatch",
    "SegmentationSearch", "Segmentation", "MorphemeSpan",
    "AnalysisBuilder",
    "AnalyzerConfig", "load_config",
    "Analyzer",
    "SanamorfError", "InvalidHandleError", "ModelError", "RuleCoverageError",
    "UnknownAttributeError", "ConfigError",
]

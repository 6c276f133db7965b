"""
Exceptions raised by sanamorf.

A word without any valid parse is not an error: the analyzer returns an
empty ResultSet for it.  Everything here signals either a programmer error
(touching a released result set) or a broken morphological model.
"""

from __future__ import annotations


class SanamorfError(Exception):
    """Base class for all sanamorf errors."""


class InvalidHandleError(SanamorfError):
    """A released ResultSet was used, or released again in strict mode."""


class ModelError(SanamorfError):
    """The morphological model is malformed or broke its query contract."""


class RuleCoverageError(ModelError):
    """An accepted segmentation has no attribute rule giving it a CLASS."""


class UnknownAttributeError(SanamorfError, KeyError):
    """An attribute key outside the fixed vocabulary."""


class ConfigError(SanamorfError, ValueError):
    """Invalid value or unknown key in a sanamorf TOML config."""

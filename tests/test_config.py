"""Tests for TOML configuration (config.py, Analyzer.from_config)."""

import json
from pathlib import Path

import pytest

from sanamorf.analyzer import Analyzer
from sanamorf.config import AnalyzerConfig, load_config
from sanamorf.errors import ConfigError


def _write_setup(tmp_path, model_dict, analyzer_table: str = "") -> Path:
    data = tmp_path / "data"
    data.mkdir()
    (data / "model.json").write_text(json.dumps(model_dict, ensure_ascii=False), encoding="utf-8")
    cfg = tmp_path / "sanamorf.toml"
    cfg.write_text(
        '[model]\npath = "data/model.json"\n\n' + analyzer_table,
        encoding="utf-8",
    )
    return cfg


# ── AnalyzerConfig ────────────────────────────────────────────────────────────

def test_defaults():
    cfg = AnalyzerConfig()
    assert cfg.structure_style == "morphemes"
    assert cfg.case_insensitive is False
    assert cfg.allow_compounds is True
    assert cfg.max_analyses is None
    assert cfg.strict_handles is __debug__


def test_bad_structure_style():
    with pytest.raises(ConfigError, match="structure_style"):
        AnalyzerConfig(structure_style="xml")


@pytest.mark.parametrize("name", ["max_parts", "max_analyses", "max_word_chars"])
def test_limits_must_be_positive(name):
    with pytest.raises(ConfigError, match=name):
        AnalyzerConfig(**{name: 0})


@pytest.mark.parametrize("name", ["max_parts", "max_analyses", "max_word_chars"])
def test_limits_reject_booleans(name):
    with pytest.raises(ConfigError, match=name):
        AnalyzerConfig(**{name: True})


@pytest.mark.parametrize("name", ["case_insensitive", "allow_compounds", "strict_handles"])
@pytest.mark.parametrize("value", ["false", 0, None])
def test_flags_must_be_booleans(name, value):
    with pytest.raises(ConfigError, match=name):
        AnalyzerConfig(**{name: value})


def test_from_dict_rejects_mistyped_toml_values():
    with pytest.raises(ConfigError, match="max_parts"):
        AnalyzerConfig.from_dict({"max_parts": True})
    with pytest.raises(ConfigError, match="allow_compounds"):
        AnalyzerConfig.from_dict({"allow_compounds": "no"})


def test_from_dict_unknown_key():
    with pytest.raises(ConfigError, match="ranking"):
        AnalyzerConfig.from_dict({"ranking": "frequency"})


# ── load_config ───────────────────────────────────────────────────────────────

def test_load_config_resolves_model_path(tmp_path, model_dict):
    cfg_path = _write_setup(tmp_path, model_dict, '[analyzer]\nmax_analyses = 31\n')
    model_path, cfg = load_config(cfg_path)
    assert model_path == tmp_path / "data" / "model.json"
    assert cfg.max_analyses == 31


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.toml")


def test_load_config_requires_model_path(tmp_path):
    p = tmp_path / "sanamorf.toml"
    p.write_text("[analyzer]\ncase_insensitive = true\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="path is required"):
        load_config(p)


def test_load_config_bad_toml(tmp_path):
    p = tmp_path / "sanamorf.toml"
    p.write_text("[model\npath = ", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(p)


def test_load_config_rejects_boolean_limit(tmp_path, model_dict):
    cfg_path = _write_setup(tmp_path, model_dict, '[analyzer]\nmax_parts = true\n')
    with pytest.raises(ConfigError, match="max_parts"):
        load_config(cfg_path)


def test_load_config_model_path_must_be_string(tmp_path):
    p = tmp_path / "sanamorf.toml"
    p.write_text("[model]\npath = 5\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="must be a string"):
        load_config(p)


# ── Analyzer.from_config ──────────────────────────────────────────────────────

def test_analyzer_from_config(tmp_path, model_dict):
    cfg_path = _write_setup(
        tmp_path, model_dict,
        '[analyzer]\nstructure_style = "letters"\ncase_insensitive = true\n',
    )
    analyzer = Analyzer.from_config(cfg_path)
    assert analyzer.config.structure_style == "letters"
    with analyzer.analyze("Kirjahyllyssä") as results:
        assert [a.structure for a in results] == ["=ipppp=pppppppp"]

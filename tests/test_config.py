"""Tests for JSON configuration."""
import sys
import os
import json
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from keysuggest.config import Config, DEFAULT_CONFIG


def test_defaults_when_file_missing(tmp_path):
    config = Config(tmp_path / "missing.json")
    assert config.locale == DEFAULT_CONFIG["locale"]
    assert config.max_candidates == 3
    assert config.learning_enabled is True
    assert config.auto_correct_aggressiveness == "moderate"


def test_stored_values_override_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"locale": "de", "max_candidates": 5}), encoding="utf-8")
    config = Config(path)
    assert config.locale == "de"
    assert config.max_candidates == 5
    assert config.max_suggestions == 3


def test_corrupt_file_uses_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{oops", encoding="utf-8")
    assert Config(path).locale == "en"


def test_set_persists(tmp_path):
    path = tmp_path / "sub" / "config.json"
    config = Config(path)
    config.set("locale", "fr")
    config.learning_enabled = False
    reloaded = Config(path)
    assert reloaded.locale == "fr"
    assert reloaded.learning_enabled is False

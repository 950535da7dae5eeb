# File: backend/tests/test_config_thermo.py
# Version: v0.1.0
"""
Reaction-condition settings file: defaults, fallback, atomic save.
"""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from backend.app.config.config_thermo import (
    ensure_current_exists,
    load_current_settings,
    load_default_settings,
    save_current_settings,
)
from backend.app.core.primer.parameters import DEFAULT_THERMO_SETTINGS, ThermodynamicSettings


def test_default_file_matches_builtin():
    assert load_default_settings() == DEFAULT_THERMO_SETTINGS


def test_missing_current_falls_back_to_default(tmp_path):
    assert load_current_settings(tmp_path / "nope.json") == DEFAULT_THERMO_SETTINGS


def test_save_and_reload(tmp_path):
    target = tmp_path / "sub" / "thermo.json"
    value = ThermodynamicSettings(oligoConc=0.5, naConc=100.0, mgConc=2.0, dntpConc=0.2)
    save_current_settings(value, target)
    assert json.loads(target.read_text(encoding="utf-8"))["naConc"] == 100.0
    assert load_current_settings(target) == value
    assert not target.with_suffix(".json.tmp").exists()


def test_ensure_current_exists(tmp_path):
    target = tmp_path / "thermo.json"
    created, value = ensure_current_exists(target)
    assert created is True
    assert value == DEFAULT_THERMO_SETTINGS
    created_again, _ = ensure_current_exists(target)
    assert created_again is False


def test_invalid_file_is_rejected(tmp_path):
    target = tmp_path / "thermo.json"
    target.write_text(json.dumps({"oligoConc": -1, "naConc": 50, "mgConc": 3, "dntpConc": 0.8}), encoding="utf-8")
    with pytest.raises(ValidationError):
        load_current_settings(target)

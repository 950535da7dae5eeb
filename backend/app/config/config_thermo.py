# File: backend/app/config/config_thermo.py
# Version: v0.1.0
"""
Thermodynamic settings loader/saver.

- Reads defaults from: backend/app/config/thermo_settings_default.json
- Reads/writes current from: settings.THERMO_SETTINGS_PATH
  (backend/app/config/thermo_settings.json unless overridden by env)
- Validates payloads with ThermodynamicSettings (Pydantic) from core/primer/parameters.py

The engine never reads these files. Routers and the CLI load a value here and
pass it explicitly to every computation.

Usage:
    from backend.app.config.config_thermo import load_current_settings, save_current_settings

Expected JSON (camelCase keys):

  {
    "oligoConc": 0.2,
    "naConc": 50.0,
    "mgConc": 3.0,
    "dntpConc": 0.8
  }

Thread-safety:
- Uses atomic writes (tmp + replace) to avoid partial/dirty writes.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Tuple

from backend.app.core.config import settings
from backend.app.core.primer.parameters import DEFAULT_THERMO_SETTINGS, ThermodynamicSettings

logger = logging.getLogger(__name__)

_THIS_DIR = Path(__file__).resolve().parent
DEFAULT_FILE = _THIS_DIR / "thermo_settings_default.json"


def _current_file(path: Optional[Path] = None) -> Path:
    return Path(path) if path is not None else Path(settings.THERMO_SETTINGS_PATH)


def _read_json(path: Path) -> dict:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _atomic_write_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    with tmp.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")
    os.replace(tmp, path)


def load_default_settings() -> ThermodynamicSettings:
    """Load default reaction conditions; the built-in constant if the file is missing."""
    payload = _read_json(DEFAULT_FILE)
    if not payload:
        return DEFAULT_THERMO_SETTINGS
    return ThermodynamicSettings.model_validate(payload)


def load_current_settings(path: Optional[Path] = None, fallback_to_default: bool = True) -> ThermodynamicSettings:
    """
    Load current (editable) reaction conditions.
    If the file is missing/empty and fallback is True, return defaults.
    """
    payload = _read_json(_current_file(path))
    if not payload and fallback_to_default:
        return load_default_settings()
    return ThermodynamicSettings.model_validate(payload)


def save_current_settings(value: ThermodynamicSettings, path: Optional[Path] = None) -> None:
    """Persist current reaction conditions (atomic write)."""
    target = _current_file(path)
    _atomic_write_json(target, value.model_dump())
    logger.info("Saved thermodynamic settings to %s", target)


def ensure_current_exists(path: Optional[Path] = None) -> Tuple[bool, ThermodynamicSettings]:
    """
    Ensure the current settings file exists; if not, initialize it from defaults.
    Returns (created, settings).
    """
    target = _current_file(path)
    if target.exists():
        return False, load_current_settings(target)
    defaults = load_default_settings()
    save_current_settings(defaults, target)
    return True, defaults

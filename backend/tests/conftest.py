# File: backend/tests/conftest.py
# Version: v0.2.0
"""
Test bootstrap:
- ensure project root is on sys.path so 'backend.*' imports work;
- point DB_URL and THERMO_SETTINGS_PATH at a throwaway directory before any
  backend module reads settings, so tests never touch the dev database.
"""
import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]  # repo root (../.. from this file)
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

_TMP = Path(tempfile.mkdtemp(prefix="bisprimer-tests-"))
os.environ.setdefault("DB_URL", f"sqlite:///{_TMP / 'test.db'}")
os.environ.setdefault("THERMO_SETTINGS_PATH", str(_TMP / "thermo_settings.json"))


@pytest.fixture(scope="session")
def db_schema():
    """Create the tables once for tests that hit the database."""
    from backend.app.db.maintenance import ensure_schema
    from backend.app.db.session import engine

    ensure_schema(engine)
    return engine

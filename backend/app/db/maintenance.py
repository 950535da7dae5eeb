# File: backend/app/db/maintenance.py
# Version: v0.4.0
"""
Non-destructive schema upkeep.

ensure_schema(engine) compares Base.metadata (every model in db/models.py)
with the live database and creates the tables that are missing. Existing
tables are never dropped or altered, so calling it on every startup is safe.
main.py runs it when SCHEMA_AUTOHEAL is on (the default for SQLite).
"""
from __future__ import annotations

import logging
from typing import List

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from backend.app.db.models import Base

logger = logging.getLogger(__name__)


def ensure_schema(engine: Engine) -> List[str]:
    """Create missing tables; returns action strings such as "created table projects"."""
    existing = set(inspect(engine).get_table_names())
    actions: List[str] = []
    for name in sorted(set(Base.metadata.tables) - existing):
        Base.metadata.tables[name].create(bind=engine, checkfirst=True)
        actions.append(f"created table {name}")
        logger.info("schema: created table %s", name)
    return actions or ["all tables present"]

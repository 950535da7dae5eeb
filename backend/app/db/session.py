# File: backend/app/db/session.py
# Version: v0.3.0
"""
SQLAlchemy engine and session factory for the project store.

- DB_URL comes from settings (SQLite file by default); the parent directory
  of a SQLite file is created on import.
- SQLite connections may be used from FastAPI's threadpool, so
  check_same_thread is disabled for that backend.
- `get_db()` is the FastAPI dependency; the session is always closed.
"""
from __future__ import annotations

from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from backend.app.core.config import settings

_url = make_url(settings.DB_URL)
_connect_args: dict = {}
if _url.get_backend_name() == "sqlite":
    _connect_args["check_same_thread"] = False
    if _url.database and _url.database != ":memory:":
        Path(_url.database).resolve().parent.mkdir(parents=True, exist_ok=True)

engine = create_engine(_url, connect_args=_connect_args)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db() -> Generator[Session, None, None]:
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# File: backend/app/db/models.py
# Version: v0.4.0
"""
ORM models for BisPrimer.

Tables:
- Project: a saved design project. The project state (sequence, methylation
  sets, primers, reaction settings) is kept as an opaque JSON blob; only a few
  summary columns are broken out for listing.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base; db/maintenance.py reads Base.metadata from here."""


class Project(Base):
    """Persisted primer-design project."""
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    # Optional friendly label
    name: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)

    sequence_len: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    primer_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Full project state (JSON text, ProjectData layout)
    blob: Mapped[str] = mapped_column(Text, nullable=False)

    def touch(self) -> None:
        """Update `updated_at` timestamp."""
        self.updated_at = datetime.utcnow()

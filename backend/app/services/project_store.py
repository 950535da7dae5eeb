# File: backend/app/services/project_store.py
# Version: v0.1.0
"""
Project persistence helpers (service layer).

The project state travels as a JSON blob (ProjectData layout, the same text a
user downloads and re-imports). Only this module encodes or decodes it; the
engine receives plain sequences, sets and settings.

These functions encapsulate the DB logic so routers don't need to import
SQLAlchemy session management details.
"""
from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from backend.app.core.primer.project import ProjectData
from backend.app.db.models import Project

logger = logging.getLogger(__name__)


class ProjectBlobError(ValueError):
    """The blob is not a valid saved project."""


def export_blob(data: ProjectData) -> str:
    """Serialize project state to the saved-project JSON text."""
    return data.model_dump_json(indent=2)


def import_blob(blob: str) -> ProjectData:
    """Parse saved-project JSON text (legacy single methylation list accepted)."""
    try:
        return ProjectData.model_validate_json(blob)
    except ValidationError as exc:
        raise ProjectBlobError(f"Invalid project file: {exc.error_count()} error(s)") from exc


def _apply(project: Project, data: ProjectData) -> None:
    project.blob = export_blob(data)
    project.sequence_len = len(data.sequence)
    project.primer_count = len(data.primers)


def create_project(db: Session, *, data: ProjectData, name: Optional[str] = None) -> Project:
    project = Project(name=name)
    _apply(project, data)
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info("Created project %d (%d bp)", project.id, project.sequence_len)
    return project


def get_project(db: Session, project_id: int) -> Optional[Project]:
    return db.get(Project, project_id)


def load_data(project: Project) -> ProjectData:
    return import_blob(project.blob)


def save_data(db: Session, project: Project, data: ProjectData, *, name: Optional[str] = None) -> Project:
    """Replace the stored state of an existing project."""
    _apply(project, data)
    if name is not None:
        project.name = name
    project.touch()
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


def list_projects(db: Session, *, q: Optional[str] = None, limit: int = 50, offset: int = 0) -> tuple[int, list[Project]]:
    """Return (total, items) filtered by optional free-text q against the name."""
    stmt = select(Project).order_by(Project.updated_at.desc(), Project.id.desc()).limit(limit).offset(offset)
    count_stmt = select(func.count()).select_from(Project)
    if q:
        like = f"%{q}%"
        stmt = stmt.where(Project.name.ilike(like))
        count_stmt = count_stmt.where(Project.name.ilike(like))
    total = db.execute(count_stmt).scalar_one()
    items = list(db.execute(stmt).scalars())
    return total, items


def delete_project(db: Session, project_id: int) -> bool:
    res = db.execute(delete(Project).where(Project.id == project_id))
    db.commit()
    return (res.rowcount or 0) > 0

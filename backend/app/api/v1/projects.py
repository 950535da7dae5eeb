# File: backend/app/api/v1/projects.py
# Version: v0.1.0
"""
Projects API.

Endpoints
---------
POST   /v1/projects/import                      New project from GenBank / FASTA / pasted text
POST   /v1/projects/from-blob                   New project from an exported project file
GET    /v1/projects                             List projects (with pagination)
GET    /v1/projects/{id}                        Project detail (decoded state)
PUT    /v1/projects/{id}                        Replace project state
DELETE /v1/projects/{id}                        Delete a project
POST   /v1/projects/{id}/methylation            Toggle methylation marks over a strand range
POST   /v1/projects/{id}/primers                Add a primer
PUT    /v1/projects/{id}/primers/{primer_id}    Replace a primer
DELETE /v1/projects/{id}/primers/{primer_id}    Remove a primer
GET    /v1/projects/{id}/export                 Saved-project JSON (download)
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from backend.app.core.dna.sequence_import import SequenceImportError, parse_sequence_text
from backend.app.core.primer.project import (
    Primer,
    ProjectData,
    add_primer,
    delete_primer,
    toggle_methylation,
    update_primer,
)
from backend.app.db.models import Project
from backend.app.db.schemas.project import (
    MethylationToggleRequest,
    ProjectBlobRequest,
    ProjectDetail,
    ProjectImportRequest,
    ProjectItem,
    ProjectListResponse,
    ProjectUpdateRequest,
)
from backend.app.db.session import get_db
from backend.app.services import project_store
from backend.app.services.project_store import ProjectBlobError

router = APIRouter(prefix="/v1/projects", tags=["projects"])


def _get_or_404(db: Session, project_id: int) -> Project:
    project = project_store.get_project(db, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


def _detail(project: Project, data: Optional[ProjectData] = None) -> ProjectDetail:
    if data is None:
        data = project_store.load_data(project)
    return ProjectDetail(**ProjectItem.model_validate(project).model_dump(), data=data)


@router.post("/import", response_model=ProjectDetail, status_code=status.HTTP_201_CREATED)
def import_project(payload: ProjectImportRequest, db: Session = Depends(get_db)):
    try:
        imported = parse_sequence_text(payload.text, name=payload.name or "sequence")
    except SequenceImportError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    data = ProjectData(sequence=imported.sequence)
    project = project_store.create_project(db, data=data, name=payload.name or imported.name)
    return _detail(project, data)


@router.post("/from-blob", response_model=ProjectDetail, status_code=status.HTTP_201_CREATED)
def import_project_blob(payload: ProjectBlobRequest, db: Session = Depends(get_db)):
    try:
        data = project_store.import_blob(payload.blob)
    except ProjectBlobError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    project = project_store.create_project(db, data=data, name=payload.name)
    return _detail(project, data)


@router.get("", response_model=ProjectListResponse)
def list_projects(
    response: Response,
    db: Session = Depends(get_db),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    q: Optional[str] = Query(None, description="Filter by name substring"),
):
    total, items = project_store.list_projects(db, q=q, limit=limit, offset=offset)
    response.headers["Cache-Control"] = "no-store"
    return ProjectListResponse(total=total, items=[ProjectItem.model_validate(p) for p in items])


@router.get("/{project_id}", response_model=ProjectDetail)
def read_project(project_id: int, db: Session = Depends(get_db)):
    return _detail(_get_or_404(db, project_id))


@router.put("/{project_id}", response_model=ProjectDetail)
def replace_project(project_id: int, payload: ProjectUpdateRequest, db: Session = Depends(get_db)):
    project = project_store.save_data(db, _get_or_404(db, project_id), payload.data, name=payload.name)
    return _detail(project, payload.data)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_project(project_id: int, db: Session = Depends(get_db)):
    if not project_store.delete_project(db, project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{project_id}/methylation", response_model=ProjectDetail)
def toggle_project_methylation(project_id: int, payload: MethylationToggleRequest, db: Session = Depends(get_db)):
    project = _get_or_404(db, project_id)
    data = toggle_methylation(project_store.load_data(project), payload.strand, payload.start, payload.end)
    return _detail(project_store.save_data(db, project, data), data)


@router.post("/{project_id}/primers", response_model=ProjectDetail, status_code=status.HTTP_201_CREATED)
def create_primer(project_id: int, payload: Primer, db: Session = Depends(get_db)):
    project = _get_or_404(db, project_id)
    try:
        data = add_primer(project_store.load_data(project), payload)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _detail(project_store.save_data(db, project, data), data)


@router.put("/{project_id}/primers/{primer_id}", response_model=ProjectDetail)
def replace_primer(project_id: int, primer_id: str, payload: Primer, db: Session = Depends(get_db)):
    project = _get_or_404(db, project_id)
    try:
        data = update_primer(project_store.load_data(project), primer_id, payload)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Primer not found") from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _detail(project_store.save_data(db, project, data), data)


@router.delete("/{project_id}/primers/{primer_id}", response_model=ProjectDetail)
def remove_primer(project_id: int, primer_id: str, db: Session = Depends(get_db)):
    project = _get_or_404(db, project_id)
    try:
        data = delete_primer(project_store.load_data(project), primer_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Primer not found") from exc
    return _detail(project_store.save_data(db, project, data), data)


@router.get("/{project_id}/export")
def export_project(project_id: int, db: Session = Depends(get_db)):
    project = _get_or_404(db, project_id)
    filename = f"{project.name or f'project-{project.id}'}.json"
    return Response(
        content=project_store.export_blob(project_store.load_data(project)),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

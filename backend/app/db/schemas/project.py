# File: backend/app/db/schemas/project.py
# Version: v0.1.0
"""
Pydantic schemas for Project resources.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from backend.app.core.primer.project import ProjectData
from backend.app.core.primer.strands import StrandType


class ProjectItem(BaseModel):
    """Compact list item representation (no blob)."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: Optional[str] = None
    sequence_len: int
    primer_count: int
    created_at: datetime
    updated_at: datetime


class ProjectDetail(ProjectItem):
    """Detailed representation; includes the decoded project state."""
    data: ProjectData


class ProjectListResponse(BaseModel):
    total: int
    items: List[ProjectItem]


class ProjectImportRequest(BaseModel):
    """Create a project from GenBank / FASTA / pasted sequence text."""
    text: str = Field(..., min_length=1, description="File content or pasted sequence")
    name: Optional[str] = Field(None, max_length=120)


class ProjectBlobRequest(BaseModel):
    """Create a project from a previously exported project blob."""
    blob: str = Field(..., min_length=2)
    name: Optional[str] = Field(None, max_length=120)


class MethylationToggleRequest(BaseModel):
    strand: StrandType
    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)


class ProjectUpdateRequest(BaseModel):
    """Replace the stored state (and optionally the name) of a project."""
    data: ProjectData
    name: Optional[str] = Field(None, max_length=120)

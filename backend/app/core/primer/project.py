# File: backend/app/core/primer/project.py
# Version: v0.2.0
"""
Project state consumed by the engine: top-strand sequence, the two methylation
sets, stored primers and reaction settings.

Keys follow the saved-project layout (`methylatedF`, `methylatedR`, `isMGB`, ...)
so an exported project loads back unchanged. Older files that carried a single
`methylationIndices` list are migrated into the top set.

The state is treated as immutable: every edit helper returns a new ProjectData.
"""

from __future__ import annotations

import uuid
from typing import Any, FrozenSet, List, Optional

from pydantic import BaseModel, Field, computed_field, conint, field_validator, model_validator

from .parameters import DEFAULT_THERMO_SETTINGS, ThermodynamicSettings
from .segments import parse_primer_sequence
from .strands import StrandType, derive_strand, is_bottom_family


class Primer(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = Field(..., min_length=1, max_length=120)
    sequence: str = Field(..., description="5'->3', tails in [brackets], uppercase = LNA")
    strand: StrandType
    start: conint(ge=0) = Field(..., description="Index of the first binding base on the strand")
    isMGB: bool = False

    @field_validator("sequence")
    @classmethod
    def _well_formed(cls, v: str) -> str:
        parsed = parse_primer_sequence(v, strict=True)
        if parsed.binding_length == 0:
            raise ValueError("primer has no binding bases")
        return v

    @property
    def binding_length(self) -> int:
        return parse_primer_sequence(self.sequence, strict=True).binding_length

    # exported alongside the stored fields; ignored on load
    @computed_field  # type: ignore[misc]
    @property
    def length(self) -> int:
        return self.binding_length


def check_primer_fits(sequence_len: int, primer: Primer) -> None:
    """Raise ValueError unless the primer's binding region lies inside the strand."""
    if primer.start + primer.binding_length > sequence_len:
        raise ValueError(
            f"Primer '{primer.name}' ends at {primer.start + primer.binding_length}, "
            f"past the sequence length {sequence_len}"
        )


class ProjectData(BaseModel):
    sequence: str = ""
    methylatedF: List[int] = Field(default_factory=list)
    methylatedR: List[int] = Field(default_factory=list)
    primers: List[Primer] = Field(default_factory=list)
    thermoSettings: ThermodynamicSettings = DEFAULT_THERMO_SETTINGS

    @model_validator(mode="before")
    @classmethod
    def _migrate_legacy(cls, data: Any) -> Any:
        if isinstance(data, dict) and "methylationIndices" in data:
            data = dict(data)
            legacy = data.pop("methylationIndices") or []
            if not data.get("methylatedF"):
                data["methylatedF"] = legacy
                data["methylatedR"] = []
        return data

    @field_validator("sequence")
    @classmethod
    def _lower(cls, v: str) -> str:
        return v.lower()

    @field_validator("methylatedF", "methylatedR")
    @classmethod
    def _dedupe(cls, v: List[int]) -> List[int]:
        return sorted(set(v))

    @model_validator(mode="after")
    def _primers_fit(self) -> "ProjectData":
        for p in self.primers:
            check_primer_fits(len(self.sequence), p)
        return self

    @property
    def methylated_top(self) -> FrozenSet[int]:
        return frozenset(self.methylatedF)

    @property
    def methylated_bottom(self) -> FrozenSet[int]:
        return frozenset(self.methylatedR)

    def strand_sequence(self, strand: StrandType) -> str:
        return derive_strand(self.sequence, self.methylated_top, self.methylated_bottom, strand)

    def find_primer(self, primer_id: str) -> Optional[Primer]:
        return next((p for p in self.primers if p.id == primer_id), None)


def toggle_methylation(project: ProjectData, strand: StrandType, start: int, end: int) -> ProjectData:
    """
    Flip the methylation mark of every 'c' in [start, end] on the given strand view.

    Bottom-family strands (R, OB, CTOT) edit the bottom set, the others the top
    set. The new set is the symmetric difference with the touched positions.
    """
    lo, hi = min(start, end), max(start, end)
    view = project.strand_sequence(strand)
    touched = {i for i in range(max(0, lo), min(hi + 1, len(view))) if view[i] == "c"}
    key = "methylatedR" if is_bottom_family(strand) else "methylatedF"
    current = set(getattr(project, key))
    return project.model_copy(update={key: sorted(current ^ touched)})


def add_primer(project: ProjectData, primer: Primer) -> ProjectData:
    check_primer_fits(len(project.sequence), primer)
    return project.model_copy(update={"primers": [*project.primers, primer]})


def update_primer(project: ProjectData, primer_id: str, primer: Primer) -> ProjectData:
    if project.find_primer(primer_id) is None:
        raise KeyError(primer_id)
    primer = primer.model_copy(update={"id": primer_id})
    check_primer_fits(len(project.sequence), primer)
    return project.model_copy(
        update={"primers": [primer if p.id == primer_id else p for p in project.primers]}
    )


def delete_primer(project: ProjectData, primer_id: str) -> ProjectData:
    if project.find_primer(primer_id) is None:
        raise KeyError(primer_id)
    return project.model_copy(update={"primers": [p for p in project.primers if p.id != primer_id]})

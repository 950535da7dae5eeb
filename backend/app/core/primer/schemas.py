# File: backend/app/core/primer/schemas.py
# Version: v0.3.0
"""
DTOs for requests and responses used by Primer endpoints.

- `settings` is optional on thermodynamics requests: if omitted, the router
  loads the stored current settings (config_thermo) and passes them explicitly.
- Strand coordinates are 0-based; search hit `end` is inclusive.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, conint

from .parameters import ThermoCalibration, ThermodynamicSettings
from .strands import StrandType


class StrandsRequest(BaseModel):
    """Derive one strand view (if `strand` is set) or all six."""
    sequence: str = Field(..., min_length=1, description="Top-strand sequence")
    methylatedTop: List[conint(ge=0)] = Field(default_factory=list)
    methylatedBottom: List[conint(ge=0)] = Field(default_factory=list)
    strand: Optional[StrandType] = None


class StrandsResponse(BaseModel):
    length: int
    strands: Dict[StrandType, str]


class StrandSliceRequest(StrandsRequest):
    """Read [start, end] of a strand 5'->3' (for primer and template sequences)."""
    strand: StrandType
    start: conint(ge=0)
    end: conint(ge=0)


class StrandSliceResponse(BaseModel):
    strand: StrandType
    start: int
    end: int
    sequence: str


class ThermodynamicsRequest(BaseModel):
    sequence: str = Field(..., description="Primer 5'->3'; [tails] excluded, uppercase = LNA")
    template: Optional[str] = Field(None, description="Aligned strand slice (5'->3') for mismatch-aware scoring")
    isMGB: bool = False
    settings: Optional[ThermodynamicSettings] = None
    calibration: Optional[ThermoCalibration] = None


class ThermodynamicsResponse(BaseModel):
    tm: float
    dg: float
    gc: float
    bindingLength: int
    lnaCount: int


class StructureRequest(BaseModel):
    sequence: str = Field(..., min_length=1)


class CrossDimerRequest(BaseModel):
    sequenceA: str = Field(..., min_length=1, description="Primer A, 5'->3'")
    sequenceB: str = Field(..., min_length=1, description="Primer B, 5'->3'")


class DimerResponse(BaseModel):
    found: bool
    dg: Optional[float] = None
    alignment: List[str] = Field(default_factory=list)
    offset: Optional[int] = None
    pairs: Optional[int] = None


class HairpinResponse(BaseModel):
    found: bool
    dg: Optional[float] = None
    alignment: List[str] = Field(default_factory=list)
    stemLength: Optional[int] = None
    loopLength: Optional[int] = None


class SearchRequest(BaseModel):
    sequence: str = Field(..., min_length=1, description="Top-strand sequence")
    methylatedTop: List[conint(ge=0)] = Field(default_factory=list)
    methylatedBottom: List[conint(ge=0)] = Field(default_factory=list)
    query: str = Field(..., min_length=1, description="Pattern; IUPAC codes allowed")
    maxMismatches: conint(ge=0, le=10) = 0
    strand: Optional[StrandType] = Field(None, description="Limit to one strand; all six if omitted")


class SearchHit(BaseModel):
    strand: StrandType
    start: int
    end: int
    mismatches: int


class SearchResponse(BaseModel):
    total: int
    hits: List[SearchHit]

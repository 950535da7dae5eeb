# File: backend/app/api/v1/primers/router.py
# Version: v0.3.0
"""
Primer endpoints (mounted under /api):
- POST /v1/primers/strands          ← one or all six strand views
- POST /v1/primers/strand-slice     ← [start, end] of a strand read 5'->3'
- POST /v1/primers/thermodynamics   ← Tm / dG / GC% of a primer
- POST /v1/primers/hairpin
- POST /v1/primers/self-dimer
- POST /v1/primers/cross-dimer
- POST /v1/primers/search           ← degenerate bounded-mismatch search
- GET  /v1/primers/settings         ← current reaction conditions
- PUT  /v1/primers/settings         ← validates & persists new conditions

Primer strings are parsed strictly here: a malformed bracket is a 422, never
silently repaired.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from backend.app.config.config_thermo import ensure_current_exists, load_current_settings, save_current_settings
from backend.app.core.primer.parameters import DEFAULT_CALIBRATION, ThermodynamicSettings
from backend.app.core.primer.schemas import (
    CrossDimerRequest,
    DimerResponse,
    HairpinResponse,
    SearchHit,
    SearchRequest,
    SearchResponse,
    StrandSliceRequest,
    StrandSliceResponse,
    StrandsRequest,
    StrandsResponse,
    StructureRequest,
    ThermodynamicsRequest,
    ThermodynamicsResponse,
)
from backend.app.core.primer.search import search, search_all_strands
from backend.app.core.primer.segments import PrimerSequence, PrimerSequenceError, parse_primer_sequence
from backend.app.core.primer.strands import derive_all_strands, derive_strand, strand_slice_5to3
from backend.app.core.primer.structures import (
    DimerAnalysis,
    HairpinAnalysis,
    find_cross_dimer,
    find_hairpin,
    find_self_dimer,
)
from backend.app.core.primer.thermodynamics import compute_thermodynamics

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/primers", tags=["primers"])


def _parse(raw: str) -> PrimerSequence:
    try:
        return parse_primer_sequence(raw, strict=True)
    except PrimerSequenceError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _dimer_out(res: DimerAnalysis | None) -> DimerResponse:
    if res is None:
        return DimerResponse(found=False)
    return DimerResponse(found=True, dg=res.dg, alignment=res.alignment, offset=res.offset, pairs=res.pairs)


def _hairpin_out(res: HairpinAnalysis | None) -> HairpinResponse:
    if res is None:
        return HairpinResponse(found=False)
    return HairpinResponse(
        found=True,
        dg=res.dg,
        alignment=res.alignment,
        stemLength=res.stem_length,
        loopLength=res.loop_length,
    )


@router.get("/settings", response_model=ThermodynamicSettings)
def get_settings():
    """
    Return the current editable reaction conditions.
    If not initialized, create the settings file from defaults and return it.
    """
    _, current = ensure_current_exists()
    return current


@router.put("/settings", response_model=ThermodynamicSettings)
def update_settings(payload: ThermodynamicSettings):
    """Validate and persist new reaction conditions."""
    save_current_settings(payload)
    return payload


@router.post("/strands", response_model=StrandsResponse)
def strands(payload: StrandsRequest):
    seq = payload.sequence.lower()
    if payload.strand is not None:
        views = {
            payload.strand: derive_strand(seq, payload.methylatedTop, payload.methylatedBottom, payload.strand)
        }
    else:
        views = derive_all_strands(seq, payload.methylatedTop, payload.methylatedBottom)
    return StrandsResponse(length=len(seq), strands=views)


@router.post("/strand-slice", response_model=StrandSliceResponse)
def strand_slice(payload: StrandSliceRequest):
    seq = payload.sequence.lower()
    lo, hi = min(payload.start, payload.end), max(payload.start, payload.end)
    if hi >= len(seq):
        raise HTTPException(status_code=400, detail="Slice coordinates exceed the sequence length.")
    piece = strand_slice_5to3(seq, payload.methylatedTop, payload.methylatedBottom, payload.strand, lo, hi)
    return StrandSliceResponse(strand=payload.strand, start=lo, end=hi, sequence=piece)


@router.post("/thermodynamics", response_model=ThermodynamicsResponse)
def thermodynamics(payload: ThermodynamicsRequest):
    """
    Tm / dG / GC% of the primer's binding region.
    If `settings` is omitted, the stored current settings are used.
    """
    primer = _parse(payload.sequence)
    conditions = payload.settings or load_current_settings()
    result = compute_thermodynamics(
        primer,
        conditions,
        template=payload.template,
        is_mgb=payload.isMGB,
        calibration=payload.calibration or DEFAULT_CALIBRATION,
    )
    return ThermodynamicsResponse(
        tm=result.tm,
        dg=result.dg,
        gc=result.gc,
        bindingLength=primer.binding_length,
        lnaCount=len(primer.lna_positions),
    )


@router.post("/hairpin", response_model=HairpinResponse)
def hairpin(payload: StructureRequest):
    return _hairpin_out(find_hairpin(_parse(payload.sequence)))


@router.post("/self-dimer", response_model=DimerResponse)
def self_dimer(payload: StructureRequest):
    return _dimer_out(find_self_dimer(_parse(payload.sequence)))


@router.post("/cross-dimer", response_model=DimerResponse)
def cross_dimer(payload: CrossDimerRequest):
    return _dimer_out(find_cross_dimer(_parse(payload.sequenceA), _parse(payload.sequenceB)))


@router.post("/search", response_model=SearchResponse)
def search_strands(payload: SearchRequest):
    """Search one strand (if `strand` is set) or all six in display order."""
    seq = payload.sequence.lower()
    if payload.strand is not None:
        view = derive_strand(seq, payload.methylatedTop, payload.methylatedBottom, payload.strand)
        hits = [
            SearchHit(strand=payload.strand, start=h.start, end=h.end, mismatches=h.mismatches)
            for h in search(view, payload.query, payload.strand, payload.maxMismatches)
        ]
    else:
        hits = [
            SearchHit(strand=h.strand, start=h.start, end=h.end, mismatches=h.mismatches)
            for h in search_all_strands(
                seq, payload.methylatedTop, payload.methylatedBottom, payload.query, payload.maxMismatches
            )
        ]
    logger.debug("search '%s' (<=%d mm): %d hit(s)", payload.query, payload.maxMismatches, len(hits))
    return SearchResponse(total=len(hits), hits=hits)

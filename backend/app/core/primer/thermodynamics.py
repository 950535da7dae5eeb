# File: backend/app/core/primer/thermodynamics.py
# Version: v0.3.0
"""
Thermodynamics utilities for primer properties.

Implements, in this order:
1. Tail stripping (bracketed segments never bind).
2. Nearest-neighbor dH/dS summation over Biopython's SantaLucia 1998 table
   (MeltingTemp.DNA_NN3), with an optional template slice: a step touching an
   incompatible base uses a flat mismatch penalty instead of the table value.
3. Initiation and terminal penalties (A/T end, or terminal mismatch).
4. Tm at 1 M Na+, then the Owczarzy salt correction from
   MeltingTemp.salt_correction (method 7: monovalent 2004 or divalent 2008,
   chosen from sqrt([Mg_free]) / [Na]).
5. LNA and MGB Tm adjustments.
6. dG at 37 °C from the NN totals (salt independent).

Notes:
- Every function here is total: short input returns the zero result and the
  degenerate no-ion case returns Tm = 0 instead of NaN/inf.
- Degenerate primer bases are resolved to the first base of their IUPAC set
  for table lookup and GC counting.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from Bio.SeqUtils import MeltingTemp as mt

from . import constants as C
from .alphabet import is_base_compatible, resolve_base
from .parameters import DEFAULT_CALIBRATION, ThermoCalibration, ThermodynamicSettings
from .segments import PrimerInput, as_primer_sequence

logger = logging.getLogger(__name__)

_DNA_COMPLEMENT = str.maketrans("ACGT", "TGCA")


@dataclass(frozen=True)
class ThermodynamicResult:
    tm: float   # °C
    dg: float   # kcal/mol at 37 °C
    gc: float   # percent


ZERO_RESULT = ThermodynamicResult(tm=0.0, dg=0.0, gc=0.0)


def gc_percent(seq: str) -> float:
    if not seq:
        return 0.0
    s = seq.upper()
    gc = sum(1 for c in s if c in ("G", "C"))
    return 100.0 * gc / len(s)


def template_matches(primer: str, template: str) -> List[bool]:
    """Per-position compatibility of primer bases against an aligned template slice."""
    return [
        is_base_compatible(p, template[i] if i < len(template) else None)
        for i, p in enumerate(primer)
    ]


def _nn_step(pair: str) -> Optional[Tuple[float, float]]:
    """(dH, dS) of one Watson-Crick step from Biopython's SantaLucia 1998 table."""
    top = pair.upper()
    bottom = top.translate(_DNA_COMPLEMENT)
    return mt.DNA_NN3.get(f"{top}/{bottom}") or mt.DNA_NN3.get(f"{bottom[::-1]}/{top[::-1]}")


def nearest_neighbor_totals(
    bases: str,
    matches: Optional[Sequence[bool]] = None,
    calibration: ThermoCalibration = DEFAULT_CALIBRATION,
) -> Tuple[float, float]:
    """
    Sum dH (kcal/mol) and dS (cal/(mol*K)) over all dinucleotide steps,
    plus initiation and terminal penalties.

    Args:
        bases: lowercase concrete bases of the binding region.
        matches: per-position template compatibility, or None for a perfect duplex.
    """
    n = len(bases)
    dh = 0.0
    ds = 0.0
    for i in range(n - 1):
        if matches is not None and not (matches[i] and matches[i + 1]):
            dh += calibration.mismatchStepDH
            ds += calibration.mismatchStepDS
            continue
        step = _nn_step(bases[i : i + 2])
        if step:
            dh += step[0]
            ds += step[1]

    dh += calibration.initiationDH
    ds += calibration.initiationDS

    for idx in {0, n - 1}:
        if matches is not None and not matches[idx]:
            dh += calibration.terminalMismatchDH
            ds += calibration.terminalMismatchDS
        elif bases[idx] in ("a", "t"):
            dh += calibration.terminalAtDH
            ds += calibration.terminalAtDS
    return dh, ds


def tm_at_1m(dh: float, ds: float, oligo_conc_um: float) -> float:
    """
    Tm (°C) at the 1 M Na+ reference for a non-self-complementary duplex.

    Returns 0.0 when the result is not a physical temperature.
    """
    ct = max(oligo_conc_um * 1e-6 / 4.0, C.CONC_EPSILON)
    denom = ds + C.GAS_CONSTANT * math.log(ct)
    if denom == 0.0:
        return 0.0
    tm_k = dh * 1000.0 / denom
    if not math.isfinite(tm_k) or tm_k <= 0.0:
        return 0.0
    return tm_k - C.KELVIN


def salt_corrected_tm(tm_1m: float, bases: str, settings: ThermodynamicSettings) -> float:
    """
    Apply the Owczarzy salt correction (Biopython method 7) to a 1 M Tm (°C).

    Free Mg2+ = max(0, Mg - dNTP) is handed to Biopython with dNTPs=0, which
    picks the monovalent (2004) or divalent (2008) formula from
    sqrt([Mg_free]) / [Na]. With neither ion present (or an invalid 1 M Tm)
    the sentinel 0.0 is returned.
    """
    if tm_1m == 0.0 or len(bases) < 2:
        return 0.0
    free_mg = max(0.0, settings.mgConc - settings.dntpConc)
    if settings.naConc <= 0.0 and free_mg <= 0.0:
        logger.debug("salt correction: no cations, returning Tm sentinel")
        return 0.0

    corr = mt.salt_correction(Na=settings.naConc, Mg=free_mg, dNTPs=0, seq=bases.upper(), method=7)
    inv = 1.0 / (tm_1m + C.KELVIN) + corr
    if not math.isfinite(inv) or inv <= 0.0:
        return 0.0
    return 1.0 / inv - C.KELVIN


def lna_adjustment(
    bases: str,
    lna_positions: Sequence[int],
    matches: Optional[Sequence[bool]],
    calibration: ThermoCalibration = DEFAULT_CALIBRATION,
) -> float:
    """
    Tm shift (°C) from LNA positions.

    G/C LNAs boost more than A/T LNAs; the per-base boost shrinks once the
    primer is longer than `lnaReferenceLength`. An LNA on a mismatched
    position costs `lnaMismatchPenalty` instead.
    """
    n = len(bases)
    if n == 0:
        return 0.0
    scale = min(1.0, calibration.lnaReferenceLength / n)
    shift = 0.0
    for i in lna_positions:
        if matches is not None and not matches[i]:
            shift -= calibration.lnaMismatchPenalty
        elif bases[i] in ("g", "c"):
            shift += calibration.lnaGcBoost * scale
        else:
            shift += calibration.lnaAtBoost * scale
    return shift


def mgb_adjustment(
    f_gc: float,
    matches: Optional[Sequence[bool]],
    calibration: ThermoCalibration = DEFAULT_CALIBRATION,
) -> float:
    """MGB Tm boost (°C): largest for AT-rich duplexes, scaled by the matched fraction."""
    boost = calibration.mgbAtBoost - (calibration.mgbAtBoost - calibration.mgbGcBoost) * f_gc
    if matches:
        boost *= sum(1 for m in matches if m) / len(matches)
    return boost


def compute_thermodynamics(
    sequence: PrimerInput,
    settings: ThermodynamicSettings,
    template: Optional[str] = None,
    is_mgb: bool = False,
    calibration: ThermoCalibration = DEFAULT_CALIBRATION,
) -> ThermodynamicResult:
    """
    Tm, dG and GC% of a primer's binding region.

    Args:
        sequence: raw primer string ("[tail]acgT...") or a parsed PrimerSequence.
        settings: reaction conditions; always required.
        template: strand slice aligned to the binding region (5'->3'); enables
            mismatch-aware scoring. Case is ignored. Empty means "no template".
        is_mgb: a 3' minor groove binder is attached.
        calibration: empirical constants.
    """
    primer = as_primer_sequence(sequence)
    nts = primer.nucleotides()
    n = len(nts)
    if n < 2:
        return ZERO_RESULT

    bases = "".join(resolve_base(nt.base) for nt in nts)
    matches = template_matches(primer.binding, template) if template else None

    dh, ds = nearest_neighbor_totals(bases, matches, calibration)

    gc_count = sum(1 for b in bases if b in ("g", "c"))
    f_gc = gc_count / n

    tm = salt_corrected_tm(tm_at_1m(dh, ds, settings.oligoConc), bases, settings)
    if tm != 0.0:
        tm += lna_adjustment(bases, primer.lna_positions, matches, calibration)
        if is_mgb:
            tm += mgb_adjustment(f_gc, matches, calibration)

    dg = dh - (C.T_REF_K * ds / 1000.0)
    return ThermodynamicResult(tm=tm, dg=dg, gc=f_gc * 100.0)

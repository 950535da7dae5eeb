# File: backend/app/core/primer/strands.py
# Version: v0.1.0
"""
Bisulfite strand model.

One top-strand sequence plus two methylation index sets yield six strand views
that all live in the same (top-strand) coordinate space:

    F     top strand, unconverted                 displayed 5'->3'
    R     aligned complement of F, unconverted    displayed 3'->5'
    OT    bisulfite-converted F                   displayed 5'->3'
    CTOT  complement of OT                        displayed 3'->5'
    OB    bisulfite-converted R                   displayed 3'->5'
    CTOB  complement of OB                        displayed 5'->3'

The bottom strand is the position-wise complement of the top strand, NOT the
reverse complement: position i of every view pairs with position i of F.
"""

from __future__ import annotations

from enum import Enum
from typing import AbstractSet, Dict, Iterable

from .alphabet import complement_seq


class StrandType(str, Enum):
    F = "F"
    R = "R"
    OT = "OT"
    CTOT = "CTOT"
    OB = "OB"
    CTOB = "CTOB"


# Top-to-bottom order used by the viewer and by the all-strand search.
STRANDS_ORDER = (
    StrandType.OT,
    StrandType.CTOT,
    StrandType.F,
    StrandType.R,
    StrandType.CTOB,
    StrandType.OB,
)

_REVERSE_DISPLAYED = frozenset({StrandType.R, StrandType.CTOT, StrandType.OB})
_BOTTOM_FAMILY = frozenset({StrandType.R, StrandType.OB, StrandType.CTOT})


def is_reverse_displayed(strand: StrandType) -> bool:
    """True for strands drawn 3'->5' left-to-right (R, CTOT, OB)."""
    return StrandType(strand) in _REVERSE_DISPLAYED


def is_bottom_family(strand: StrandType) -> bool:
    """True for strands whose methylation marks are kept in the bottom set."""
    return StrandType(strand) in _BOTTOM_FAMILY


def bisulfite_convert(seq: str, methylated: AbstractSet[int]) -> str:
    """
    Convert every unmethylated 'c' to 't'.

    Positions in `methylated` resist conversion. Indices that do not point at a
    'c' (or fall outside the sequence) are inert.
    """
    return "".join(
        "t" if base == "c" and idx not in methylated else base
        for idx, base in enumerate(seq)
    )


def _as_set(indices: Iterable[int]) -> AbstractSet[int]:
    if isinstance(indices, (set, frozenset)):
        return indices
    return frozenset(indices)


def derive_strand(
    top_sequence: str,
    methylated_top: Iterable[int],
    methylated_bottom: Iterable[int],
    strand: StrandType,
) -> str:
    """Return one of the six strand views (lowercase, same length as the input)."""
    f = top_sequence.lower()
    strand = StrandType(strand)
    if strand is StrandType.F:
        return f
    if strand is StrandType.OT:
        return bisulfite_convert(f, _as_set(methylated_top))
    if strand is StrandType.CTOT:
        return complement_seq(bisulfite_convert(f, _as_set(methylated_top)))

    r = complement_seq(f)
    if strand is StrandType.R:
        return r
    ob = bisulfite_convert(r, _as_set(methylated_bottom))
    if strand is StrandType.OB:
        return ob
    return complement_seq(ob)


def derive_all_strands(
    top_sequence: str,
    methylated_top: Iterable[int],
    methylated_bottom: Iterable[int],
) -> Dict[StrandType, str]:
    """Derive all six views at once, sharing the conversions."""
    mt = _as_set(methylated_top)
    mb = _as_set(methylated_bottom)
    f = top_sequence.lower()
    r = complement_seq(f)
    ot = bisulfite_convert(f, mt)
    ob = bisulfite_convert(r, mb)
    return {
        StrandType.F: f,
        StrandType.R: r,
        StrandType.OT: ot,
        StrandType.CTOT: complement_seq(ot),
        StrandType.OB: ob,
        StrandType.CTOB: complement_seq(ob),
    }


def strand_slice_5to3(
    top_sequence: str,
    methylated_top: Iterable[int],
    methylated_bottom: Iterable[int],
    strand: StrandType,
    start: int,
    end: int,
) -> str:
    """
    Slice a strand view between two inclusive coordinates and read it 5'->3'.

    `start`/`end` may be given in either order (a drag selection). Slices on
    reverse-displayed strands are reversed so the result is always a biological
    5'->3' reading.
    """
    lo, hi = min(start, end), max(start, end)
    seq = derive_strand(top_sequence, methylated_top, methylated_bottom, strand)[max(0, lo): hi + 1]
    if is_reverse_displayed(strand):
        seq = seq[::-1]
    return seq

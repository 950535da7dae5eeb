# File: backend/app/core/primer/structures.py
# Version: v0.1.0
"""
Secondary structure screens for primers: dimers and hairpins.

Both scorers are bounded, exhaustive searches rather than a folding algorithm:

- Dimers: slide the (reversed) second strand across every offset of the first,
  score each overlapping pair with a flat stabilizing/destabilizing increment,
  keep the most negative offset with at least two complementary pairs.
- Hairpins: enumerate stem length x loop length x 3' end offset inside small
  fixed ranges, accept exact reverse-complement stems, score stem plus loop.

Runtime is bounded by the range constants and the primer length, never by the
template length. The energies are an approximation for ranking and display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from . import constants as C
from .alphabet import complement, reverse_complement
from .segments import PrimerInput, as_primer_sequence

_PAIRING = frozenset("ACGT")


@dataclass(frozen=True)
class StructureAnalysis:
    dg: float               # kcal/mol, lower = more stable
    alignment: List[str]    # three display lines


@dataclass(frozen=True)
class DimerAnalysis(StructureAnalysis):
    offset: int             # position of reversed seq_b's first base relative to seq_a
    pairs: int              # complementary pairs in the overlap


@dataclass(frozen=True)
class HairpinAnalysis(StructureAnalysis):
    stem_length: int
    loop_length: int
    stem5_start: int        # first base of the upstream stem
    stem3_end: int          # one past the last base of the downstream stem


def find_most_stable_dimer(seq_a: str, seq_b: str) -> Optional[DimerAnalysis]:
    """
    Most stable antiparallel duplex between two 5'->3' sequences, or None.

    The result's dG does not depend on argument order.
    """
    q1 = seq_a.upper()
    q2_rev = seq_b.upper()[::-1]
    if not q1 or not q2_rev:
        return None

    best: Optional[DimerAnalysis] = None
    best_dg = 0.0
    for shift in range(-len(q2_rev) + 1, len(q1)):
        lo = max(0, shift)
        hi = min(len(q1), shift + len(q2_rev))
        pairs = 0
        dg = 0.0
        bars: List[str] = []
        for i in range(lo, hi):
            if q1[i] in _PAIRING and q1[i] == complement(q2_rev[i - shift]):
                bars.append("|")
                pairs += 1
                dg += C.DIMER_PAIR_DG
            else:
                bars.append(" ")
                dg += C.DIMER_MISMATCH_DG

        if pairs >= C.DIMER_MIN_PAIRS and dg < best_dg:
            best_dg = dg
            indent1 = -shift if shift < 0 else 0
            indent2 = shift if shift > 0 else 0
            best = DimerAnalysis(
                dg=dg,
                alignment=[
                    f"5' {' ' * indent1}{q1} 3'",
                    f"   {' ' * (indent1 + indent2)}{''.join(bars)}",
                    f"3' {' ' * indent2}{q2_rev} 5'",
                ],
                offset=shift,
                pairs=pairs,
            )
    return best


def _stem_dg(stem: str) -> float:
    return sum(C.HAIRPIN_GC_PAIR_DG if b in ("G", "C") else C.HAIRPIN_AT_PAIR_DG for b in stem)


def _loop_dg(loop_len: int) -> float:
    short = min(loop_len, C.HAIRPIN_LOOP_SHORT_MAX)
    long_ = max(0, loop_len - C.HAIRPIN_LOOP_SHORT_MAX)
    return C.HAIRPIN_LOOP_INIT_DG + C.HAIRPIN_LOOP_SHORT_SLOPE * short + C.HAIRPIN_LOOP_LONG_SLOPE * long_


def find_most_stable_hairpin(sequence: str) -> Optional[HairpinAnalysis]:
    """
    Most stable stem-loop whose 3' stem ends within HAIRPIN_END_OFFSET_MAX bases
    of the 3' terminus, or None when no stem pairs with a negative dG.
    """
    seq = sequence.upper()
    n = len(seq)
    best: Optional[HairpinAnalysis] = None
    best_dg = 0.0

    for end_offset in range(0, C.HAIRPIN_END_OFFSET_MAX + 1):
        stem2_end = n - end_offset
        for stem_len in range(C.HAIRPIN_STEM_MIN, C.HAIRPIN_STEM_MAX + 1):
            stem2_start = stem2_end - stem_len
            stem2 = seq[stem2_start:stem2_end]
            target = reverse_complement(stem2)
            for loop_len in range(C.HAIRPIN_LOOP_MIN, C.HAIRPIN_LOOP_MAX + 1):
                loop_start = stem2_start - loop_len
                stem1_start = loop_start - stem_len
                if stem1_start < 0:
                    break
                stem1 = seq[stem1_start:loop_start]
                if stem1 != target or not _PAIRING.issuperset(stem1):
                    continue
                dg = _stem_dg(stem1) + _loop_dg(loop_len)
                if dg >= best_dg:
                    continue
                best_dg = dg
                prefix = seq[:stem1_start]
                suffix_rev = seq[stem2_end:][::-1]
                pad = max(len(prefix), len(suffix_rev))
                best = HairpinAnalysis(
                    dg=dg,
                    alignment=[
                        f"5'-{' ' * (pad - len(prefix))}{prefix}{stem1}--\\",
                        f"   {' ' * pad}{'|' * stem_len}   {seq[loop_start:stem2_start]}",
                        f"3'-{' ' * (pad - len(suffix_rev))}{suffix_rev}{stem2[::-1]}--/",
                    ],
                    stem_length=stem_len,
                    loop_length=loop_len,
                    stem5_start=stem1_start,
                    stem3_end=stem2_end,
                )
    return best


def find_self_dimer(primer: PrimerInput) -> Optional[DimerAnalysis]:
    """Self-dimer of a primer's binding region (tails are not scored)."""
    binding = as_primer_sequence(primer).binding
    return find_most_stable_dimer(binding, binding)


def find_cross_dimer(primer_a: PrimerInput, primer_b: PrimerInput) -> Optional[DimerAnalysis]:
    """Dimer between two primers, both given 5'->3'."""
    return find_most_stable_dimer(as_primer_sequence(primer_a).binding, as_primer_sequence(primer_b).binding)


def find_hairpin(primer: PrimerInput) -> Optional[HairpinAnalysis]:
    """Hairpin of a primer's binding region (tails are not scored)."""
    return find_most_stable_hairpin(as_primer_sequence(primer).binding)

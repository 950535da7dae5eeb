# File: backend/app/core/primer/search.py
# Version: v0.1.0
"""
Degenerate, bounded-mismatch search over strand views.

Approach:
- Ungapped sliding comparison of the query against every window of a strand.
- Query bases may be IUPAC codes; strand bases are concrete.
- On reverse-displayed strands (R, CTOT, OB) the query is reversed first, so a
  hit is the query read in the strand's on-screen direction.
- The inner comparison stops as soon as the mismatch budget is exceeded.
- Hits are reported in scan order; overlapping hits are all kept.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .alphabet import is_base_compatible
from .strands import STRANDS_ORDER, StrandType, derive_all_strands, is_reverse_displayed


@dataclass(frozen=True)
class SearchResult:
    start: int
    end: int            # inclusive
    mismatches: int
    strand: Optional[StrandType] = None


def search(strand_seq: str, query: str, strand: StrandType, max_mismatches: int) -> List[SearchResult]:
    """Return every window of `strand_seq` matching `query` with at most `max_mismatches` mismatches."""
    n = len(strand_seq)
    m = len(query)
    if m == 0 or m > n or max_mismatches < 0:
        return []

    subject = strand_seq.upper()
    pattern = query[::-1].upper() if is_reverse_displayed(strand) else query.upper()

    hits: List[SearchResult] = []
    for i in range(n - m + 1):
        mism = 0
        for j in range(m):
            if not is_base_compatible(pattern[j], subject[i + j]):
                mism += 1
                if mism > max_mismatches:
                    break
        if mism <= max_mismatches:
            hits.append(SearchResult(start=i, end=i + m - 1, mismatches=mism))
    return hits


def search_all_strands(
    top_sequence: str,
    methylated_top: Iterable[int],
    methylated_bottom: Iterable[int],
    query: str,
    max_mismatches: int,
) -> List[SearchResult]:
    """Search all six strand views in display order; each hit is tagged with its strand."""
    views = derive_all_strands(top_sequence, methylated_top, methylated_bottom)
    results: List[SearchResult] = []
    for strand in STRANDS_ORDER:
        for hit in search(views[strand], query, strand, max_mismatches):
            results.append(SearchResult(hit.start, hit.end, hit.mismatches, strand))
    return results

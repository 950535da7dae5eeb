# File: backend/app/core/primer/alphabet.py
# Version: v0.1.0
"""
Base alphabet helpers shared by every primer component.

- Case-preserving complement (A<->T, C<->G); unknown characters pass through.
- IUPAC degenerate code table (15 standard single-letter codes).
- Single-base compatibility predicate used by search and mismatch-aware scoring.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

COMPLEMENTS: Dict[str, str] = {
    "a": "t", "t": "a", "c": "g", "g": "c",
    "A": "T", "T": "A", "C": "G", "G": "C",
}

# Order matters: the first base is used when a degenerate code has to be
# resolved to a concrete base (NN lookup, GC counting).
IUPAC_MAP: Dict[str, Tuple[str, ...]] = {
    "A": ("A",),
    "C": ("C",),
    "G": ("G",),
    "T": ("T",),
    "R": ("A", "G"),
    "Y": ("C", "T"),
    "S": ("G", "C"),
    "W": ("A", "T"),
    "K": ("G", "T"),
    "M": ("A", "C"),
    "B": ("C", "G", "T"),
    "D": ("A", "G", "T"),
    "H": ("A", "C", "T"),
    "V": ("A", "C", "G"),
    "N": ("A", "T", "C", "G"),
}

CONCRETE_BASES = ("A", "C", "G", "T")


def complement(base: str) -> str:
    """Complement one base, keeping its case. Unknown characters are returned unchanged."""
    return COMPLEMENTS.get(base, base)


def complement_seq(seq: str) -> str:
    """Position-wise complement (no reversal)."""
    return "".join(COMPLEMENTS.get(b, b) for b in seq)


def reverse_complement(seq: str) -> str:
    return complement_seq(seq)[::-1]


def is_base_compatible(primer_base: Optional[str], template_base: Optional[str]) -> bool:
    """
    True if the (possibly degenerate) primer base can represent the template base.

    Comparison is case-insensitive. A primer base outside the IUPAC table falls
    back to strict equality. Empty or missing inputs are never compatible.
    """
    if not primer_base or not template_base:
        return False
    p = primer_base.upper()
    t = template_base.upper()
    allowed = IUPAC_MAP.get(p)
    if allowed is None:
        return p == t
    return t in allowed


def resolve_base(base: str) -> str:
    """Map a degenerate code to its first concrete base (lowercase); other characters are lowercased."""
    allowed = IUPAC_MAP.get(base.upper())
    if allowed is None:
        return base.lower()
    return allowed[0].lower()

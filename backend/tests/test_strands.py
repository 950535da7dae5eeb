# File: backend/tests/test_strands.py
# Version: v0.1.0
"""
Six-strand bisulfite model: conversion, complements, display direction.
"""

from __future__ import annotations

from backend.app.core.primer.alphabet import complement_seq
from backend.app.core.primer.strands import (
    STRANDS_ORDER,
    StrandType,
    bisulfite_convert,
    derive_all_strands,
    derive_strand,
    is_bottom_family,
    is_reverse_displayed,
    strand_slice_5to3,
)


def test_unmethylated_views():
    views = derive_all_strands("ACGT", [], [])
    assert views[StrandType.F] == "acgt"
    assert views[StrandType.R] == "tgca"
    assert views[StrandType.OT] == "atgt"
    assert views[StrandType.CTOT] == "taca"
    assert views[StrandType.OB] == "tgta"
    assert views[StrandType.CTOB] == "acat"


def test_methylated_c_resists_conversion():
    assert derive_strand("acgt", [1], [], StrandType.OT) == "acgt"
    assert derive_strand("acgt", [], [2], StrandType.OB) == "tgca"


def test_inert_methylation_indices():
    # index 0 is 'a', 99 is out of range
    assert bisulfite_convert("acca", {0, 99}) == "atta"


def test_all_views_same_length_and_lowercase():
    top = "AACCGGTTCG"
    for strand, seq in derive_all_strands(top, [2, 8], [4]).items():
        assert len(seq) == len(top)
        assert seq == seq.lower()
        assert seq == derive_strand(top, [2, 8], [4], strand)


def test_complement_pairs():
    views = derive_all_strands("gattacacg", [7], [0, 5])
    assert views[StrandType.CTOT] == complement_seq(views[StrandType.OT])
    assert views[StrandType.CTOB] == complement_seq(views[StrandType.OB])
    assert views[StrandType.R] == complement_seq(views[StrandType.F])


def test_display_and_family_flags():
    assert {s for s in STRANDS_ORDER if is_reverse_displayed(s)} == {StrandType.R, StrandType.CTOT, StrandType.OB}
    assert {s for s in STRANDS_ORDER if is_bottom_family(s)} == {StrandType.R, StrandType.CTOT, StrandType.OB}
    assert STRANDS_ORDER[0] is StrandType.OT


def test_slice_reads_5_to_3():
    # F: 5'->3' as displayed
    assert strand_slice_5to3("aacg", [], [], StrandType.F, 1, 3) == "acg"
    # R displayed 3'->5' ("ttgc"), returned reversed
    assert strand_slice_5to3("aacg", [], [], StrandType.R, 3, 1) == "cgt"

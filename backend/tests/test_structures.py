# File: backend/tests/test_structures.py
# Version: v0.1.0
"""
Dimer and hairpin screens.
"""

from __future__ import annotations

import pytest

from backend.app.core.primer.structures import (
    find_cross_dimer,
    find_hairpin,
    find_most_stable_dimer,
    find_most_stable_hairpin,
    find_self_dimer,
)


def test_self_complementary_dimer():
    res = find_most_stable_dimer("ACGT", "ACGT")
    assert res is not None
    assert res.pairs == 4
    assert res.offset == 0
    assert res.dg == pytest.approx(-8.0)
    assert res.alignment == ["5' ACGT 3'", "   ||||", "3' TGCA 5'"]


def test_dimer_is_symmetric():
    a, b = "ttgggtaggtattt", "aaatacctaccc"
    ab = find_most_stable_dimer(a, b)
    ba = find_most_stable_dimer(b, a)
    assert ab is not None and ba is not None
    assert ab.dg == pytest.approx(ba.dg)


def test_no_dimer_without_complementary_pairs():
    assert find_most_stable_dimer("AAAA", "AAAA") is None
    assert find_most_stable_dimer("", "ACGT") is None


def test_degenerate_bases_never_pair():
    assert find_most_stable_dimer("NNNN", "NNNN") is None


def test_single_pair_is_not_a_dimer():
    # only one A/T pair available at any offset
    assert find_most_stable_dimer("A", "T") is None


def test_dimer_case_insensitive_and_tails_ignored():
    assert find_self_dimer("[ACGTACGT]aaaa") is None
    upper = find_self_dimer("ACGT")
    lower = find_self_dimer("acgt")
    assert upper is not None and lower is not None
    assert upper.dg == lower.dg


def test_cross_dimer_reverse_complement_partner():
    res = find_cross_dimer("gggaaattt", "aaatttccc")
    assert res is not None
    assert res.pairs == 9
    assert res.dg == pytest.approx(-18.0)


def test_hairpin_found():
    res = find_most_stable_hairpin("GGGGGAAAAACCCCC")
    assert res is not None
    assert res.stem_length == 5
    assert res.loop_length == 5
    assert res.dg == pytest.approx(5 * -2.2 + 3.0 + 0.2 * 5)
    assert len(res.alignment) == 3
    assert res.alignment[0].endswith("GGGGG--\\")
    assert res.alignment[2].endswith("CCCCC--/")


def test_hairpin_absent_for_unpairable_stems():
    # no T anywhere: every candidate 3' stem containing A lacks a partner
    assert find_most_stable_hairpin("GCGACGCAGCCAGAA") is None


def test_hairpin_ignores_tail_and_short_input():
    assert find_hairpin("[GGGGGAAAAACCCCC]acgt") is None
    assert find_hairpin("acg") is None


def test_hairpin_stem_may_end_before_3_terminus():
    res = find_most_stable_hairpin("GGGGGAAAAACCCCCAA")
    assert res is not None
    assert res.stem_length == 5
    assert res.stem3_end == 15

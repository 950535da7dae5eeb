# File: backend/tests/test_project.py
# Version: v0.1.0
"""
Project state: methylation toggling, legacy migration, primer edits.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from backend.app.core.primer.parameters import DEFAULT_THERMO_SETTINGS
from backend.app.core.primer.project import (
    Primer,
    ProjectData,
    add_primer,
    delete_primer,
    toggle_methylation,
    update_primer,
)
from backend.app.core.primer.strands import StrandType


def _project() -> ProjectData:
    return ProjectData(sequence="ACGCGA")


def test_sequence_lowercased_and_defaults():
    p = _project()
    assert p.sequence == "acgcga"
    assert p.thermoSettings == DEFAULT_THERMO_SETTINGS
    assert p.primers == []


def test_toggle_on_top_family_edits_top_set():
    p = toggle_methylation(_project(), StrandType.F, 0, 5)
    assert p.methylatedF == [1, 3]
    assert p.methylatedR == []
    assert p.strand_sequence(StrandType.OT) == "acgcga"


def test_toggle_twice_restores():
    p0 = _project()
    p1 = toggle_methylation(p0, StrandType.F, 5, 0)
    assert toggle_methylation(p1, StrandType.F, 0, 5).methylatedF == []
    # the original is untouched
    assert p0.methylatedF == []


def test_toggle_on_converted_view_only_sees_protected_c():
    p = toggle_methylation(_project(), StrandType.F, 0, 5)
    p = toggle_methylation(p, StrandType.OT, 1, 1)
    assert p.methylatedF == [3]
    # an unprotected c shows as t on OT and is left alone
    assert toggle_methylation(p, StrandType.OT, 1, 1).methylatedF == [3]


def test_toggle_on_bottom_family_edits_bottom_set():
    p = toggle_methylation(_project(), StrandType.R, 0, 5)  # R = "tgcgct"
    assert p.methylatedR == [2, 4]
    assert p.methylatedF == []
    assert p.strand_sequence(StrandType.OB) == "tgcgct"


def test_legacy_methylation_indices_migrate_to_top():
    p = ProjectData.model_validate({"sequence": "acgt", "methylationIndices": [1, 1]})
    assert p.methylatedF == [1]
    assert p.methylatedR == []


def test_primer_validation():
    ok = Primer(name="fwd", sequence="[tt]acGt", strand=StrandType.OT, start=0)
    assert ok.binding_length == 4
    assert ok.id
    with pytest.raises(ValidationError):
        Primer(name="bad", sequence="ac[gt", strand=StrandType.OT, start=0)
    with pytest.raises(ValidationError):
        Primer(name="tail-only", sequence="[acgt]", strand=StrandType.OT, start=0)


def test_primer_dump_carries_binding_length():
    primer = Primer(name="fwd", sequence="[tt]acGt", strand=StrandType.OT, start=0)
    dumped = primer.model_dump()
    assert dumped["length"] == 4

    # a saved file that already holds `length` loads back unchanged
    assert Primer.model_validate(dumped) == primer
    p = ProjectData.model_validate({"sequence": "acgtacgt", "primers": [dumped]})
    assert p.primers[0].length == 4


def test_add_update_delete_primer():
    p = _project()
    fwd = Primer(name="fwd", sequence="acgc", strand=StrandType.OT, start=0)
    p = add_primer(p, fwd)
    assert [x.name for x in p.primers] == ["fwd"]

    moved = Primer(name="fwd2", sequence="gcga", strand=StrandType.OT, start=2)
    p = update_primer(p, fwd.id, moved)
    assert p.primers[0].id == fwd.id
    assert p.primers[0].start == 2

    with pytest.raises(KeyError):
        update_primer(p, "missing", moved)
    with pytest.raises(KeyError):
        delete_primer(p, "missing")

    assert delete_primer(p, fwd.id).primers == []


def test_primer_must_fit_sequence():
    too_far = Primer(name="late", sequence="acgt", strand=StrandType.F, start=3)
    with pytest.raises(ValueError):
        add_primer(_project(), too_far)
    with pytest.raises(ValidationError):
        ProjectData(sequence="acgcga", primers=[too_far])

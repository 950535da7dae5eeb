# File: backend/tests/test_sequence_import.py
# Version: v0.1.0
"""
GenBank / FASTA / raw paste import.
"""

from __future__ import annotations

import pytest

from backend.app.core.dna.sequence_import import (
    SequenceImportError,
    clean_sequence,
    parse_sequence_text,
    read_sequence_file,
)

GENBANK = """LOCUS       TESTSEQ                   24 bp    DNA     linear   SYN 01-JAN-2000
DEFINITION  test.
ACCESSION   TESTSEQ
VERSION     TESTSEQ
KEYWORDS    .
SOURCE      synthetic
  ORGANISM  synthetic
            .
FEATURES             Location/Qualifiers
ORIGIN
        1 acgtacgtac gtacgtacgt acgt
//
"""


def test_clean_sequence():
    assert clean_sequence("AC gt\n12nN-x") == "acgt"


def test_fasta_first_record():
    res = parse_sequence_text(">seq1 desc\nACGTACGT\nACGT\n>seq2\nTTTT\n")
    assert res.fmt == "fasta"
    assert res.name == "seq1"
    assert res.sequence == "acgtacgtacgt"


def test_genbank_origin():
    res = parse_sequence_text(GENBANK)
    assert res.fmt == "genbank"
    assert res.sequence == "acgt" * 6


def test_genbank_origin_block_without_locus():
    res = parse_sequence_text("ORIGIN\n        1 acgtacgtac gt\n//\n")
    assert res.fmt == "genbank"
    assert res.sequence == "acgtacgtacgt"


def test_raw_paste():
    res = parse_sequence_text("  acgt acgt ac\n", name="paste")
    assert res.fmt == "raw"
    assert res.name == "paste"
    assert res.sequence == "acgtacgtac"


def test_raw_paste_too_short():
    with pytest.raises(SequenceImportError):
        parse_sequence_text("acgt")


def test_empty_fasta_record():
    with pytest.raises(SequenceImportError):
        parse_sequence_text(">empty\n")


def test_read_file_uses_stem_as_name(tmp_path):
    p = tmp_path / "region.txt"
    p.write_text("acgtacgtacgtacgt\n", encoding="utf-8")
    res = read_sequence_file(p)
    assert res.name == "region"
    assert len(res.sequence) == 16

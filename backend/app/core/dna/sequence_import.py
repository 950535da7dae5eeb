# File: backend/app/core/dna/sequence_import.py
# Version: v0.1.0
"""
Turn uploaded or pasted text into a raw top-strand sequence.

Formats, tried in this order:
- GenBank (text has a LOCUS or ORIGIN line): Biopython SeqIO "genbank";
  if Biopython rejects the record, the ORIGIN block is read directly.
- FASTA (text starts with '>'): Biopython SeqIO "fasta", first record only.
- Anything else is a raw paste.

The result is lowercased and stripped of every non-ACGT character.
"""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from Bio import SeqIO

logger = logging.getLogger(__name__)

MIN_PASTE_LEN = 10

_NON_ACGT = re.compile(r"[^acgtACGT]")
_ORIGIN_BLOCK = re.compile(r"^ORIGIN[^\n]*\n(.*?)^//", re.MULTILINE | re.DOTALL)
_GENBANK_HINT = re.compile(r"^(LOCUS|ORIGIN)\b", re.MULTILINE)


class SequenceImportError(ValueError):
    """The text does not contain a usable DNA sequence."""


@dataclass(frozen=True)
class ImportedSequence:
    name: str
    sequence: str
    fmt: str    # "genbank" | "fasta" | "raw"


def clean_sequence(text: str) -> str:
    return _NON_ACGT.sub("", text).lower()


def _parse_genbank(text: str) -> ImportedSequence:
    try:
        record = next(SeqIO.parse(io.StringIO(text), "genbank"))
        seq = clean_sequence(str(record.seq))
        if seq:
            return ImportedSequence(record.name or record.id or "sequence", seq, "genbank")
    except (ValueError, StopIteration) as exc:
        logger.debug("Biopython GenBank parse failed (%s); reading ORIGIN block", exc)

    m = _ORIGIN_BLOCK.search(text)
    if not m:
        raise SequenceImportError("GenBank text has no ORIGIN ... // sequence block")
    return ImportedSequence("sequence", clean_sequence(m.group(1)), "genbank")


def _parse_fasta(text: str) -> ImportedSequence:
    records = list(SeqIO.parse(io.StringIO(text), "fasta"))
    if not records:
        raise SequenceImportError("No FASTA record found")
    if len(records) > 1:
        logger.warning("FASTA has %d records; using the first (%s)", len(records), records[0].id)
    rec = records[0]
    return ImportedSequence(rec.id or "sequence", clean_sequence(str(rec.seq)), "fasta")


def parse_sequence_text(text: str, name: str = "sequence") -> ImportedSequence:
    """
    Detect the format of `text` and return the cleaned top-strand sequence.

    Raises:
        SequenceImportError: nothing usable was found, or a raw paste is shorter
        than MIN_PASTE_LEN bases.
    """
    stripped = (text or "").lstrip()
    if _GENBANK_HINT.search(stripped):
        result = _parse_genbank(stripped)
    elif stripped.startswith(">"):
        result = _parse_fasta(stripped)
    else:
        seq = clean_sequence(stripped)
        if len(seq) < MIN_PASTE_LEN:
            raise SequenceImportError(f"Pasted sequence must contain at least {MIN_PASTE_LEN} bases")
        result = ImportedSequence(name, seq, "raw")

    if not result.sequence:
        raise SequenceImportError(f"No DNA bases found in {result.fmt} input")
    logger.info("Imported %s sequence '%s' (%d bp)", result.fmt, result.name, len(result.sequence))
    return result


def read_sequence_file(path: Path) -> ImportedSequence:
    """Read a .gb/.fa/.txt file and parse it like pasted text."""
    return parse_sequence_text(path.read_text(encoding="utf-8"), name=path.stem)

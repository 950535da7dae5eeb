# File: backend/app/core/primer/segments.py
# Version: v0.1.0
"""
Primer sequence model.

A primer string typed by the user carries two side channels:

- `[...]` marks a non-binding tail (adapters, tags). Tails are rendered but are
  excluded from Tm and structure scoring.
- Uppercase letters mark LNA-modified bases; lowercase letters are plain DNA.

Both are parsed once into a `PrimerSequence`: an ordered list of segments tagged
BINDING or TAIL, and for the binding region an explicit (base, lna) pair per
position. Downstream code never looks at brackets or case again.

Strict parsing rejects nested or unmatched brackets. Lenient parsing, used by the
total scoring functions, drops the malformed bracket characters; text after an
unterminated '[' is kept as binding bases.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Union


class PrimerSequenceError(ValueError):
    """Raised by strict parsing on nested or unmatched tail brackets."""


class SegmentKind(str, Enum):
    BINDING = "binding"
    TAIL = "tail"


@dataclass(frozen=True)
class Segment:
    kind: SegmentKind
    text: str


@dataclass(frozen=True)
class Nucleotide:
    base: str   # lowercase; may be a degenerate IUPAC code
    lna: bool


@dataclass(frozen=True)
class PrimerSequence:
    segments: Tuple[Segment, ...]

    @property
    def binding(self) -> str:
        """Binding region exactly as typed (case kept)."""
        return "".join(s.text for s in self.segments if s.kind is SegmentKind.BINDING)

    @property
    def binding_length(self) -> int:
        return len(self.binding)

    @property
    def tails(self) -> List[str]:
        return [s.text for s in self.segments if s.kind is SegmentKind.TAIL]

    def nucleotides(self) -> List[Nucleotide]:
        return [Nucleotide(base=c.lower(), lna=c.isupper()) for c in self.binding]

    @property
    def lna_positions(self) -> List[int]:
        """Binding-region indices that carry an LNA modification."""
        return [i for i, c in enumerate(self.binding) if c.isupper()]

    def to_raw(self) -> str:
        """Inverse of parsing for well-formed input."""
        return "".join(
            f"[{s.text}]" if s.kind is SegmentKind.TAIL else s.text for s in self.segments
        )


def _append(out: List[Segment], kind: SegmentKind, text: str) -> None:
    if not text:
        return
    if out and out[-1].kind is kind:
        out[-1] = Segment(kind, out[-1].text + text)
    else:
        out.append(Segment(kind, text))


def parse_primer_sequence(raw: str, strict: bool = True) -> PrimerSequence:
    """
    Split a raw primer string into BINDING/TAIL segments.

    Args:
        raw: primer as typed, e.g. "[TTGA]acgTtgca".
        strict: raise PrimerSequenceError on malformed brackets instead of sanitizing.
    """
    out: List[Segment] = []
    buf: List[str] = []
    tail_start = -1  # index in `raw` of the open bracket, -1 when outside a tail

    for i, ch in enumerate(raw or ""):
        if ch == "[":
            if tail_start >= 0:
                if strict:
                    raise PrimerSequenceError(f"Nested '[' at position {i}")
                continue
            _append(out, SegmentKind.BINDING, "".join(buf))
            buf = []
            tail_start = i
        elif ch == "]":
            if tail_start < 0:
                if strict:
                    raise PrimerSequenceError(f"Unmatched ']' at position {i}")
                continue
            _append(out, SegmentKind.TAIL, "".join(buf))
            buf = []
            tail_start = -1
        elif not ch.isspace():
            buf.append(ch)

    if tail_start >= 0:
        if strict:
            raise PrimerSequenceError(f"Unmatched '[' at position {tail_start}")
        # unterminated tail: its content is kept as binding
        _append(out, SegmentKind.BINDING, "".join(buf))
    else:
        _append(out, SegmentKind.BINDING, "".join(buf))
    return PrimerSequence(segments=tuple(out))


PrimerInput = Union[str, PrimerSequence]


def as_primer_sequence(value: PrimerInput) -> PrimerSequence:
    """Accept either a parsed sequence or a raw string (parsed leniently)."""
    if isinstance(value, PrimerSequence):
        return value
    return parse_primer_sequence(value or "", strict=False)

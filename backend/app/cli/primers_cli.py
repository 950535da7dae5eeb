# File: backend/app/cli/primers_cli.py
# Version: v2.0.0
"""
CLI for BisPrimer primer evaluation on bisulfite-converted strands.

Subcommands:
  thermo    Tm / dG / GC% of a primer (optionally against a template slice)
  hairpin   most stable hairpin of a primer
  dimer     self-dimer (one primer) or cross-dimer (two primers)
  search    degenerate bounded-mismatch search over strand views
  strands   print the six strand views of a sequence as FASTA

Sequences are read from GenBank / FASTA / plain text files. Reaction
conditions come from --settings-json, else from the stored current settings.

Usage:
    python -m backend.app.cli.primers_cli thermo "[gtaaaacgacggccagt]ttgGtAttaatGggtaggta" --mgb
    python -m backend.app.cli.primers_cli dimer acgtacgtacgt tttgggcccaaa
    python -m backend.app.cli.primers_cli search --seq-file region.gb --query ttrgggtt --max-mismatches 1
    python -m backend.app.cli.primers_cli strands --seq-file region.fasta --methylated-top 12,40
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from backend.app.config.config_thermo import load_current_settings
from backend.app.core.dna.sequence_import import SequenceImportError, read_sequence_file
from backend.app.core.primer.parameters import ThermodynamicSettings
from backend.app.core.primer.search import search, search_all_strands
from backend.app.core.primer.segments import parse_primer_sequence
from backend.app.core.primer.strands import STRANDS_ORDER, StrandType, derive_all_strands, derive_strand
from backend.app.core.primer.structures import find_cross_dimer, find_hairpin, find_self_dimer
from backend.app.core.primer.thermodynamics import compute_thermodynamics

logger = logging.getLogger("bisprimer.cli")


# ---------- Arg helpers ----------

def _index_list(text: str) -> List[int]:
    """'3,17, 40' -> [3, 17, 40]"""
    try:
        return [int(x) for x in text.split(",") if x.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected comma-separated integers, got {text!r}") from exc


def _load_settings(path: Optional[Path]) -> ThermodynamicSettings:
    if path is None:
        return load_current_settings()
    return ThermodynamicSettings.model_validate(json.loads(path.read_text(encoding="utf-8")))


def _add_sequence_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--seq-file", required=True, type=Path, help="GenBank, FASTA or plain sequence file")
    p.add_argument("--methylated-top", type=_index_list, default=[], help="Methylated C positions, top strand")
    p.add_argument("--methylated-bottom", type=_index_list, default=[], help="Methylated C positions, bottom strand")


# ---------- Commands ----------

def cmd_thermo(args: argparse.Namespace) -> int:
    primer = parse_primer_sequence(args.primer, strict=True)
    conditions = _load_settings(args.settings_json)
    res = compute_thermodynamics(primer, conditions, template=args.template, is_mgb=args.mgb)
    if args.json:
        print(json.dumps({"tm": res.tm, "dg": res.dg, "gc": res.gc, "length": primer.binding_length}, indent=2))
    else:
        print(
            f"len={primer.binding_length} lna={len(primer.lna_positions)} "
            f"tm={res.tm:.1f} dg={res.dg:.2f} gc={res.gc:.1f}"
        )
    return 0


def cmd_hairpin(args: argparse.Namespace) -> int:
    res = find_hairpin(parse_primer_sequence(args.primer, strict=True))
    if res is None:
        print("no hairpin")
        return 0
    print(f"dg={res.dg:.2f} stem={res.stem_length} loop={res.loop_length}")
    print("\n".join(res.alignment))
    return 0


def cmd_dimer(args: argparse.Namespace) -> int:
    a = parse_primer_sequence(args.primer, strict=True)
    if args.other:
        res = find_cross_dimer(a, parse_primer_sequence(args.other, strict=True))
    else:
        res = find_self_dimer(a)
    if res is None:
        print("no dimer")
        return 0
    print(f"dg={res.dg:.2f} pairs={res.pairs}")
    print("\n".join(res.alignment))
    return 0


def cmd_search(args: argparse.Namespace) -> int:
    seq = read_sequence_file(args.seq_file).sequence
    if args.strand:
        strand = StrandType(args.strand)
        view = derive_strand(seq, args.methylated_top, args.methylated_bottom, strand)
        hits = [(strand, h) for h in search(view, args.query, strand, args.max_mismatches)]
    else:
        hits = [
            (h.strand, h)
            for h in search_all_strands(seq, args.methylated_top, args.methylated_bottom, args.query, args.max_mismatches)
        ]
    for strand, h in hits:
        print(f"{strand.value}\t{h.start}\t{h.end}\t{h.mismatches}")
    logger.info("%d hit(s) for %s", len(hits), args.query)
    return 0


def cmd_strands(args: argparse.Namespace) -> int:
    imported = read_sequence_file(args.seq_file)
    views = derive_all_strands(imported.sequence, args.methylated_top, args.methylated_bottom)
    for strand in STRANDS_ORDER:
        print(f">{imported.name}_{strand.value}")
        print(views[strand])
    return 0


# ---------- Main ----------

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="primers_cli", description="Bisulfite primer evaluation")
    p.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING, ...")
    sub = p.add_subparsers(dest="command", required=True)

    t = sub.add_parser("thermo", help="Tm / dG / GC%% of a primer")
    t.add_argument("primer")
    t.add_argument("--template", help="Aligned strand slice (5'->3') for mismatch-aware scoring")
    t.add_argument("--mgb", action="store_true", help="3' minor groove binder attached")
    t.add_argument("--settings-json", type=Path, help="Reaction conditions JSON (camelCase)")
    t.add_argument("--json", action="store_true", help="Print JSON instead of a summary line")
    t.set_defaults(func=cmd_thermo)

    h = sub.add_parser("hairpin", help="Most stable hairpin")
    h.add_argument("primer")
    h.set_defaults(func=cmd_hairpin)

    d = sub.add_parser("dimer", help="Self-dimer, or cross-dimer when a second primer is given")
    d.add_argument("primer")
    d.add_argument("other", nargs="?")
    d.set_defaults(func=cmd_dimer)

    s = sub.add_parser("search", help="Degenerate search over strand views")
    _add_sequence_args(s)
    s.add_argument("--query", required=True)
    s.add_argument("--max-mismatches", type=int, default=0)
    s.add_argument("--strand", choices=[st.value for st in STRANDS_ORDER], help="Limit to one strand")
    s.set_defaults(func=cmd_search)

    v = sub.add_parser("strands", help="Print the six strand views as FASTA")
    _add_sequence_args(v)
    v.set_defaults(func=cmd_strands)
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args)
    except (ValueError, SequenceImportError, OSError) as ex:
        print(f"[ERROR] {ex}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())

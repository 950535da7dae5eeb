# File: backend/tests/test_primers_cli.py
# Version: v0.1.0
"""
Smoke tests for the primers CLI subcommands.
"""

from __future__ import annotations

import json

from backend.app.cli.primers_cli import main


def _settings_file(tmp_path):
    p = tmp_path / "thermo.json"
    p.write_text(json.dumps({"oligoConc": 0.2, "naConc": 50, "mgConc": 3, "dntpConc": 0.8}), encoding="utf-8")
    return p


def test_thermo_json(tmp_path, capsys):
    rc = main(["thermo", "[tt]acgtgcatgcagtcatgcat", "--settings-json", str(_settings_file(tmp_path)), "--json"])
    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out["length"] == 20
    assert out["tm"] > 0


def test_malformed_primer_exit_code(capsys):
    assert main(["hairpin", "acg[t"]) == 2
    assert "[ERROR]" in capsys.readouterr().err


def test_dimer_and_hairpin(capsys):
    assert main(["dimer", "gggaaattt", "aaatttccc"]) == 0
    assert "pairs=9" in capsys.readouterr().out
    assert main(["hairpin", "acgt"]) == 0
    assert capsys.readouterr().out.strip() == "no hairpin"


def test_search_and_strands(tmp_path, capsys):
    seq = tmp_path / "region.fa"
    seq.write_text(">region\nacgaacgaacga\n", encoding="utf-8")
    assert main(["search", "--seq-file", str(seq), "--query", "atga"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0].split("\t") == ["OT", "0", "3", "0"]

    assert main(["strands", "--seq-file", str(seq), "--methylated-top", "1,5"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == ">region_OT"
    assert out[1] == "acgaacgaatga"

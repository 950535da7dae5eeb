# File: backend/tests/test_api_primers.py
# Version: v0.1.0
"""
Primer endpoints: strands, thermodynamics, structures, search, settings.
"""
from fastapi.testclient import TestClient

from backend.app.main import app

client = TestClient(app)


def test_strands_all_and_single():
    r = client.post("/api/v1/primers/strands", json={"sequence": "ACGT"})
    assert r.status_code == 200
    body = r.json()
    assert body["length"] == 4
    assert body["strands"]["OT"] == "atgt"
    assert set(body["strands"]) == {"F", "R", "OT", "CTOT", "OB", "CTOB"}

    r = client.post("/api/v1/primers/strands", json={"sequence": "ACGT", "methylatedTop": [1], "strand": "OT"})
    assert r.json()["strands"] == {"OT": "acgt"}


def test_strand_slice():
    r = client.post(
        "/api/v1/primers/strand-slice",
        json={"sequence": "aacg", "strand": "R", "start": 3, "end": 1},
    )
    assert r.status_code == 200
    assert r.json() == {"strand": "R", "start": 1, "end": 3, "sequence": "cgt"}

    r = client.post("/api/v1/primers/strand-slice", json={"sequence": "aacg", "strand": "F", "start": 0, "end": 9})
    assert r.status_code == 400


def test_thermodynamics_endpoint():
    payload = {
        "sequence": "[gtaaaacgacggccagt]acgtGcatgcagtcatgcat",
        "settings": {"oligoConc": 0.2, "naConc": 50, "mgConc": 3, "dntpConc": 0.8},
    }
    r = client.post("/api/v1/primers/thermodynamics", json=payload)
    assert r.status_code == 200
    body = r.json()
    assert body["bindingLength"] == 20
    assert body["lnaCount"] == 1
    assert body["tm"] > 0
    assert body["dg"] < 0
    assert body["gc"] == 50.0


def test_thermodynamics_uses_stored_settings_when_omitted():
    r = client.post("/api/v1/primers/thermodynamics", json={"sequence": "acgtgcatgcagtcatgcat", "isMGB": True})
    assert r.status_code == 200
    assert r.json()["tm"] > 0


def test_malformed_primer_is_422():
    r = client.post("/api/v1/primers/thermodynamics", json={"sequence": "acg[tt"})
    assert r.status_code == 422
    r = client.post("/api/v1/primers/hairpin", json={"sequence": "acg]tt"})
    assert r.status_code == 422


def test_structures():
    r = client.post("/api/v1/primers/hairpin", json={"sequence": "GGGGGAAAAACCCCC"})
    body = r.json()
    assert body["found"] is True
    assert body["stemLength"] == 5
    assert len(body["alignment"]) == 3

    r = client.post("/api/v1/primers/self-dimer", json={"sequence": "aaaa"})
    assert r.json() == {"found": False, "dg": None, "alignment": [], "offset": None, "pairs": None}

    r = client.post("/api/v1/primers/cross-dimer", json={"sequenceA": "gggaaattt", "sequenceB": "aaatttccc"})
    assert r.json()["pairs"] == 9


def test_search_endpoint():
    r = client.post("/api/v1/primers/search", json={"sequence": "atcgatcg", "query": "ATCG", "strand": "F"})
    body = r.json()
    assert body["total"] == 2
    assert [(h["start"], h["end"]) for h in body["hits"]] == [(0, 3), (4, 7)]

    r = client.post("/api/v1/primers/search", json={"sequence": "acga", "query": "atga"})
    assert [h["strand"] for h in r.json()["hits"]] == ["OT"]


def test_settings_get_put():
    r = client.get("/api/v1/primers/settings")
    assert r.status_code == 200
    assert set(r.json()) == {"oligoConc", "naConc", "mgConc", "dntpConc"}

    new = {"oligoConc": 0.25, "naConc": 60.0, "mgConc": 2.5, "dntpConc": 0.4}
    r = client.put("/api/v1/primers/settings", json=new)
    assert r.status_code == 200
    assert client.get("/api/v1/primers/settings").json() == new

    r = client.put("/api/v1/primers/settings", json={**new, "naConc": -5})
    assert r.status_code == 422

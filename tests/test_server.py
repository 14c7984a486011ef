import pytest
from fastapi.testclient import TestClient

from bendscape.controller import BendscapeController
from bendscape.server.app import create_app


@pytest.fixture
def client(square_params, store):
    controller = BendscapeController(presets=store, parameters=square_params)
    return TestClient(create_app(controller))


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_parameters_roundtrip(client):
    res = client.put("/api/parameters", json={"maxLines": 8})
    assert res.status_code == 200
    assert res.json()["maxLines"] == 8
    assert client.get("/api/parameters").json()["maxLines"] == 8


def test_bad_parameters_are_rejected(client):
    res = client.put("/api/parameters", json={"stoppingCondition": "whenever"})
    assert res.status_code == 400


def test_generate_and_status(client):
    res = client.post("/api/generate")
    assert res.status_code == 200
    assert res.json()["segments"] == 4
    status = client.get("/api/status").json()
    assert status["drawing"]["is_complete"] is True
    assert status["parameters"]["fixedAngle"] == 90.0
    assert len(client.get("/api/strokes").json()["strokes"]) == 4
    assert client.delete("/api/drawing").json() == {"ok": True}
    assert client.get("/api/strokes").json()["strokes"] == []


def test_exports(client):
    client.post("/api/generate")
    svg = client.get("/api/export/svg", params={"annotations": "true"})
    assert svg.headers["content-type"].startswith("image/svg+xml")
    assert svg.text.count("<text") == 8
    doc = client.get("/api/export/json")
    assert doc.json()["metadata"]["totalSegments"] == 4


def test_import(client):
    client.post("/api/generate")
    doc = client.get("/api/export/json").json()
    client.delete("/api/drawing")
    res = client.post("/api/import", json=doc)
    assert res.status_code == 200
    assert res.json()["segments"] == 4
    assert client.post("/api/import", json={"segments": []}).status_code == 400


def test_randomize_and_reset(client):
    assert client.post("/api/parameters/randomize").status_code == 200
    assert client.post("/api/parameters/reset").json()["maxLines"] == 100


def test_presets(client):
    assert client.post("/api/presets", json={"name": " "}).status_code == 400
    assert client.post("/api/presets", json={"name": "sq"}).json()["name"] == "sq"
    assert [p["name"] for p in client.get("/api/presets").json()["presets"]] == ["sq"]
    client.put("/api/parameters", json={"maxLines": 30})
    assert client.post("/api/presets/sq/load").json()["maxLines"] == 4
    assert client.post("/api/presets/nope/load").status_code == 404
    assert client.delete("/api/presets/sq").json() == {"ok": True}
    assert client.delete("/api/presets/sq").status_code == 404


@pytest.mark.parametrize("value", ["nan", "inf", "-Infinity"])
def test_non_finite_parameters_are_rejected(client, value):
    res = client.put("/api/parameters", json={"maxLines": value})
    assert res.status_code == 400
    assert client.get("/api/parameters").json()["maxLines"] == 4


def test_save_preset_over_corrupt_store_fails(client, store):
    store.path.write_text('{"other-tool": {"keep": true}, broken')
    assert client.post("/api/presets", json={"name": "sq"}).status_code == 500
    assert store.path.read_text() == '{"other-tool": {"keep": true}, broken'

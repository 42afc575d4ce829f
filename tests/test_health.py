from fastapi.testclient import TestClient

from generators.registry import GENERATORS, load_generators
from main import app
from questions import Subtopic

client = TestClient(app)


def test_all_generators_registered():
    body = client.get("/health/generators").json()
    assert body["ok"] is True
    assert body["registered"] == [s.value for s in Subtopic]
    assert body["missing"] == []


def test_missing_generator_is_reported(monkeypatch):
    load_generators()
    monkeypatch.delitem(GENERATORS, Subtopic.CONVERSION)
    body = client.get("/health/generators").json()
    assert body["ok"] is False
    assert body["missing"] == ["conversion"]
    assert "conversion" not in body["registered"]

    subtopics = [s["value"] for s in client.get("/subtopics").json()]
    assert "conversion" not in subtopics

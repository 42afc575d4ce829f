from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


def test_static_questions_list():
    r = client.get("/questions")
    assert r.status_code == 200
    items = r.json()
    assert len(items) == 5
    for q in items:
        assert {"topic", "subtopic", "difficulty", "type", "question"} <= q.keys()


def test_static_questions_filter_and_limit():
    items = client.get("/questions", params={"subtopic": "arithmetic"}).json()
    assert len(items) == 2
    assert {q["subtopic"] for q in items} == {"arithmetic"}

    items = client.get("/questions", params={"subtopic": "arithmetic", "difficulty": "medium"}).json()
    assert [q["answer"] for q in items] == ["2"]

    assert len(client.get("/questions", params={"limit": 2, "random": True}).json()) == 2
    assert client.get("/questions", params={"topic": "maths"}).json() == []


def test_subtopics():
    items = client.get("/subtopics").json()
    assert [s["value"] for s in items] == [
        "arithmetic",
        "conditionals",
        "loops",
        "lists",
        "conversion",
        "basic-algorithms",
    ]
    assert all(s["label"] for s in items)


def test_generate_one_subtopic():
    r = client.get(
        "/questions/generate",
        params={"subtopic": "loops", "difficulty": "medium", "count": 5, "seed": 7},
    )
    assert r.status_code == 200
    items = r.json()
    assert len(items) == 5
    for q in items:
        assert q["topic"] == "python"
        assert q["subtopic"] == "loops"
        assert q["difficulty"] == "medium"
        assert q["type"] == "fill"
        assert "```python" in q["question"]


def test_generate_is_repeatable_with_seed():
    params = {"subtopic": "all", "difficulty": "hard", "count": 12, "seed": 99}
    first = client.get("/questions/generate", params=params).json()
    second = client.get("/questions/generate", params=params).json()
    assert first == second
    assert len(first) == 12
    assert len({q["subtopic"] for q in first}) == 6


def test_generate_default_counts():
    assert len(client.get("/questions/generate", params={"seed": 1}).json()) == 50
    one = client.get("/questions/generate", params={"subtopic": "conversion", "seed": 1}).json()
    assert len(one) == 25


def test_generate_topic_override():
    items = client.get(
        "/questions/generate", params={"subtopic": "arithmetic", "count": 2, "topic": "gcse"}
    ).json()
    assert {q["topic"] for q in items} == {"gcse"}


def test_generate_rejects_bad_params():
    assert client.get("/questions/generate", params={"subtopic": "graphs"}).status_code == 422
    assert client.get("/questions/generate", params={"count": 0}).status_code == 422
    assert client.get("/questions/generate", params={"count": 201}).status_code == 422
    assert client.get("/questions/generate", params={"difficulty": "expert"}).status_code == 422

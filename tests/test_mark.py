import json

from fastapi.testclient import TestClient

import config
from main import app
from questions import question_adapter

client = TestClient(app)

FILL = {
    "topic": "python",
    "subtopic": "arithmetic",
    "difficulty": "easy",
    "type": "fill",
    "question": "What will this print?\n\n```python\nprint(8 / 2)\n```",
    "answer": "4.0",
}

HEX = {
    "topic": "python",
    "subtopic": "conversion",
    "difficulty": "hard",
    "type": "fill",
    "question": "What is the hexadecimal representation of the decimal number 255?",
    "answer": "ff",
    "case_sensitive": False,
}

CHOICE = {
    "topic": "python",
    "subtopic": "loops",
    "difficulty": "easy",
    "type": "multiple",
    "question": "Which statement leaves a loop immediately?",
    "options": ["continue", "break", "pass"],
    "correct": 1,
}


def test_mark_correct():
    r = client.post("/mark", json={"question": FILL, "answer": " 4.0 "})
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True and body["correct"] is True and body["score"] == 1


def test_mark_incorrect():
    body = client.post("/mark", json={"question": FILL, "answer": "5.0"}).json()
    assert body["ok"] is True and body["correct"] is False and body["score"] == 0
    assert body["expected"] == "4.0"
    assert body["feedback"] == ""


def test_mark_same_value_different_print():
    body = client.post("/mark", json={"question": FILL, "answer": "4"}).json()
    assert body["ok"] is True and body["correct"] is False
    assert "prints 4.0" in body["feedback"]


def test_mark_hex_ignores_case():
    body = client.post("/mark", json={"question": HEX, "answer": "FF"}).json()
    assert body["correct"] is True


def test_mark_exact_words_are_case_sensitive():
    word = dict(FILL, subtopic="conditionals", answer="Alpha")
    assert client.post("/mark", json={"question": word, "answer": "Alpha"}).json()["correct"]
    assert not client.post("/mark", json={"question": word, "answer": "alpha"}).json()["correct"]


def test_mark_multiple_choice_by_index_or_text():
    assert client.post("/mark", json={"question": CHOICE, "answer": "1"}).json()["correct"]
    assert client.post("/mark", json={"question": CHOICE, "answer": "break"}).json()["correct"]
    body = client.post("/mark", json={"question": CHOICE, "answer": "0"}).json()
    assert body["correct"] is False and body["expected"] == "break"


def test_mark_empty_answer():
    body = client.post("/mark", json={"question": FILL, "answer": "   "}).json()
    assert body["ok"] is False and body["score"] == 0
    assert "required" in body["feedback"].lower()


def test_mark_rejects_malformed_question():
    bad = {k: v for k, v in FILL.items() if k != "type"}
    r = client.post("/mark", json={"question": bad, "answer": "4.0"})
    assert r.status_code == 422


def test_mark_numeric_options_match_text_before_index():
    rows = json.loads((config.DATA_DIR / "python_basics.json").read_text(encoding="utf-8"))
    floor_div = next(r for r in rows if r["type"] == "multiple" and "7 // 2" in r["question"])
    assert floor_div["options"] == ["3.5", "3", "4", "1"]

    q = question_adapter.validate_python(floor_div)
    assert q.is_correct(q.options[q.correct])
    assert q.is_correct("3")
    # "1" is the text of a wrong option, not the index of the right one
    assert not q.is_correct("1")
    assert not q.is_correct("3.5")

    body = client.post("/mark", json={"question": floor_div, "answer": "3"}).json()
    assert body["correct"] is True and body["expected"] == "3"


def test_mark_index_used_when_no_option_text_matches():
    q = question_adapter.validate_python(CHOICE)
    assert q.is_correct("1")
    assert not q.is_correct("2")
    assert not q.is_correct("7")

from __future__ import annotations

import logging
import re
import time
from typing import Any, Dict, List, Optional

from fastapi import APIRouter
from sympy import Rational

from errors import InvalidExpression
from evaluator import evaluate_expression, format_number
from questions import Question
from schemas.marking import (
    EvaluateRequest,
    EvaluateResponse,
    MarkBatchRequest,
    MarkBatchResponse,
    MarkRequest,
    MarkResponse,
)

logger = logging.getLogger(__name__)

# --- Parsing / validation helpers ------------------------------------------------
LEN_LIMIT = 100
_INVALID_CHARS_MSG = (
    "Only numeric expressions using digits, spaces, + - * / // % ** . and parentheses are allowed."
)
_ALLOWED_RE = re.compile(r"^[0-9+\-*/%().\s]{1,100}$")
_NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")

router = APIRouter(tags=["marking"])


def _validate_answer_text(s: str) -> Optional[str]:
    if s is None or not isinstance(s, str) or not s.strip():
        return "Answer required."
    if len(s) > LEN_LIMIT:
        return "Answer too long (> 100)."
    return None


def _validate_expr(s: str) -> Optional[str]:
    msg = _validate_answer_text(s)
    if msg:
        return msg
    if _ALLOWED_RE.fullmatch(s) is None:
        return _INVALID_CHARS_MSG
    return None


def _same_value(given: str, expected: str) -> bool:
    """True for two different spellings of one number, e.g. ``4`` and ``4.0``."""
    a, b = given.strip(), expected.strip()
    if not (_NUMBER_RE.fullmatch(a) and _NUMBER_RE.fullmatch(b)):
        return False
    return Rational(a) == Rational(b)


# --- Core marking -----------------------------------------------------------------


def _mark_one(q: Question, answer: str) -> Dict[str, Any]:
    expected = q.expected

    msg = _validate_answer_text(answer)
    if msg:
        return {"ok": False, "correct": False, "score": 0, "feedback": msg, "expected": expected}

    if q.is_correct(answer):
        return {"ok": True, "correct": True, "score": 1, "feedback": "", "expected": expected}

    feedback = ""
    if _same_value(answer, expected):
        feedback = f"Same value, but Python prints {expected}."
    return {"ok": True, "correct": False, "score": 0, "feedback": feedback, "expected": expected}


# --- Endpoints --------------------------------------------------------------------


@router.post("/evaluate", response_model=EvaluateResponse)
def evaluate(req: EvaluateRequest):
    err = _validate_expr(req.expr)
    if err:
        return {"ok": False, "value": None, "feedback": err}
    try:
        val = evaluate_expression(req.expr)
    except InvalidExpression as e:
        return {"ok": False, "value": None, "feedback": str(e)}
    return {"ok": True, "value": val, "display": format_number(val)}


@router.post("/mark", response_model=MarkResponse)
def mark(req: MarkRequest):
    return _mark_one(req.question, req.answer)


@router.post("/mark-batch", response_model=MarkBatchResponse)
def mark_batch(req: MarkBatchRequest):
    t0 = time.perf_counter()

    results: List[Dict[str, Any]] = []
    correct_count = 0

    for idx, it in enumerate(req.items):
        res = _mark_one(it.question, it.answer)
        results.append({"index": idx, "response": res})
        if res.get("correct"):
            correct_count += 1

    total = len(results)
    measured_ms = int(round((time.perf_counter() - t0) * 1000))
    duration_ms = req.duration_ms if req.duration_ms is not None else measured_ms
    logger.info("marked batch: %d/%d correct in %d ms", correct_count, total, duration_ms)

    return {
        "ok": True,
        "total": total,
        "correct": correct_count,
        "results": results,
        "duration_ms": duration_ms,
    }

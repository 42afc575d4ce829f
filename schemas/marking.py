from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel

from questions import Question

# ---------- Evaluate ----------


class EvaluateRequest(BaseModel):
    expr: str


class EvaluateResponse(BaseModel):
    ok: bool
    value: Optional[Union[int, float]] = None
    # what print() would show, e.g. "4.0"
    display: Optional[str] = None
    feedback: Optional[str] = None


# ---------- Mark single ----------


class MarkRequest(BaseModel):
    question: Question
    answer: str


class MarkResponse(BaseModel):
    ok: bool
    correct: bool
    score: int
    feedback: str
    expected: Optional[str] = None


# ---------- Mark batch ----------


class MarkBatchItem(BaseModel):
    index: int
    response: MarkResponse


class MarkBatchRequest(BaseModel):
    items: List[MarkRequest]
    # client-measured time wins; otherwise the server times the marking loop
    duration_ms: Optional[int] = None


class MarkBatchResponse(BaseModel):
    ok: bool
    total: int
    correct: int
    results: List[MarkBatchItem]
    duration_ms: int

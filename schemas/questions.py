from typing import List

from pydantic import BaseModel

from questions import Question

QuestionOut = Question


class SubtopicOut(BaseModel):
    value: str
    label: str


class GeneratorHealth(BaseModel):
    ok: bool
    registered: List[str]
    missing: List[str]

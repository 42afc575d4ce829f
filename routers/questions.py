from __future__ import annotations

import random as _rnd
from typing import List, Optional

from fastapi import APIRouter, Query

import config
from bank import QuestionBank, generate_questions, get_questions
from generators.registry import available_subtopics
from questions import ALL_SUBTOPICS, Difficulty, Subtopic
from schemas.questions import QuestionOut, SubtopicOut

router = APIRouter(tags=["questions"])

_SUBTOPIC_PATTERN = "^(" + "|".join([ALL_SUBTOPICS] + [s.value for s in Subtopic]) + ")$"


@router.get("/subtopics", response_model=List[SubtopicOut])
def list_subtopics():
    return [{"value": s.value, "label": s.label} for s in available_subtopics()]


@router.get("/questions/generate", response_model=List[QuestionOut])
def generate(
    topic: Optional[str] = None,
    subtopic: str = Query(default=ALL_SUBTOPICS, pattern=_SUBTOPIC_PATTERN),
    difficulty: Difficulty = Difficulty.EASY,
    count: Optional[int] = Query(default=None, ge=1, le=config.MAX_COUNT),
    seed: Optional[int] = Query(default=None, description="Fix the random stream for repeatable batches"),
):
    if count is None:
        count = config.ALL_COUNT if subtopic == ALL_SUBTOPICS else config.DEFAULT_COUNT
    rng = _rnd.Random(seed)
    return generate_questions(topic or config.TOPIC, subtopic, difficulty, count, rng=rng)


@router.get("/questions", response_model=List[QuestionOut])
def list_questions(
    topic: Optional[str] = None,
    subtopic: Optional[str] = None,
    difficulty: Optional[Difficulty] = None,
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    random: bool = Query(default=False, description="If true, shuffle before limiting"),
):
    # materialize once so we can filter/shuffle/limit deterministically
    qs = QuestionBank(get_questions()).filter(topic=topic, subtopic=subtopic, difficulty=difficulty)

    if random:
        _rnd.shuffle(qs)

    if limit is not None:
        qs = qs[:limit]

    return qs

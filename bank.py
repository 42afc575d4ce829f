from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

import config
from errors import GeneratorUnavailable
from generators.registry import available_subtopics, get_generator
from questions import ALL_SUBTOPICS, Difficulty, Question, Subtopic, question_adapter

logger = logging.getLogger(__name__)


def apportion(total: int, subtopics: Sequence[Subtopic]) -> Dict[Subtopic, int]:
    """Split ``total`` as evenly as possible; the first ``total % n`` get one extra."""
    if not subtopics or total <= 0:
        return {s: 0 for s in subtopics}
    base, remainder = divmod(total, len(subtopics))
    return {s: base + (1 if idx < remainder else 0) for idx, s in enumerate(subtopics)}


class QuestionBank:
    """Immutable, ordered collection of questions for one session."""

    def __init__(self, questions: Iterable[Question] = ()):
        self._questions = tuple(questions)

    def __iter__(self) -> Iterator[Question]:
        return iter(self._questions)

    def __len__(self) -> int:
        return len(self._questions)

    @property
    def questions(self) -> tuple:
        return self._questions

    @classmethod
    def build(
        cls,
        requested_counts: Mapping[Union[Subtopic, str], int],
        difficulty: Union[Difficulty, str],
        topic: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ) -> "QuestionBank":
        rng = rng or random.Random()
        questions: List[Question] = []
        for subtopic, count in requested_counts.items():
            if count <= 0:
                continue
            try:
                generator = get_generator(subtopic, rng=rng, topic=topic)
            except GeneratorUnavailable as exc:
                logger.warning("skipping subtopic %s: %s", getattr(subtopic, "value", subtopic), exc)
                continue
            questions.extend(generator.generate(difficulty, count))
        return cls(questions)

    def filter(
        self,
        topic: Optional[str] = None,
        subtopic: Optional[str] = None,
        difficulty: Optional[str] = None,
    ) -> List[Question]:
        subtopic = getattr(subtopic, "value", subtopic)
        difficulty = getattr(difficulty, "value", difficulty)
        return [
            q
            for q in self._questions
            if (topic is None or q.topic == topic)
            and (subtopic is None or q.subtopic == subtopic)
            and (difficulty is None or q.difficulty == difficulty)
        ]


def generate_questions(
    topic: Optional[str],
    subtopic: Union[Subtopic, str],
    difficulty: Union[Difficulty, str],
    count: int,
    rng: Optional[random.Random] = None,
) -> List[Question]:
    """Engine entry point: a (possibly short) batch for one subtopic or ``"all"``."""
    rng = rng or random.Random()

    if subtopic == ALL_SUBTOPICS:
        subtopics = available_subtopics()
        if not subtopics:
            logger.error("no question generators are registered")
            return []
        bank = QuestionBank.build(apportion(count, subtopics), difficulty, topic, rng)
        questions = list(bank)
        rng.shuffle(questions)
        return questions

    return list(QuestionBank.build({subtopic: count}, difficulty, topic, rng))


# Static question banks


def _iter_jsonl(p: Path) -> Iterable[Dict[str, Any]]:
    with p.open("r", encoding="utf-8") as f:
        for idx, line in enumerate(f, 1):
            s = line.strip()
            if not s or s.startswith("#") or s.startswith("//"):
                continue
            try:
                yield json.loads(s)
            except json.JSONDecodeError:
                logger.warning("%s:%d: malformed JSON row skipped", p.name, idx)
                continue


def _iter_json(p: Path) -> Iterable[Dict[str, Any]]:
    with p.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError:
            logger.warning("%s: malformed JSON file skipped", p.name)
            data = []
    if isinstance(data, list):
        yield from data
    else:
        logger.warning("%s: root is not a list, skipped", p.name)


class StaticBank:
    _questions: List[Question] = []
    _loaded: bool = False

    @classmethod
    def load(cls) -> List[Question]:
        if not cls._loaded:
            cls.reload()
        return cls._questions

    @classmethod
    def reload(cls, data_dir: Optional[Path] = None) -> int:
        data_dir = Path(data_dir or config.DATA_DIR)
        questions: List[Question] = []

        if data_dir.exists():
            for p in sorted(data_dir.rglob("*")):
                if not p.is_file():
                    continue
                suf = p.suffix.lower()
                if suf == ".jsonl":
                    source = _iter_jsonl(p)
                elif suf == ".json":
                    source = _iter_json(p)
                else:
                    continue

                for raw in source:
                    try:
                        questions.append(question_adapter.validate_python(raw))
                    except ValidationError as exc:
                        logger.warning("%s: invalid record skipped (%d errors)", p.name, exc.error_count())
                        continue
        else:
            logger.warning("static bank directory %s does not exist", data_dir)

        cls._questions = questions
        cls._loaded = True
        return len(cls._questions)


# Public API
def get_questions() -> List[Question]:
    return StaticBank.load()


def reload_bank() -> int:
    return StaticBank.reload()

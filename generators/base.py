from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Set, Union

import config
from errors import ConstraintExhausted, InvalidExpression
from questions import Difficulty, FillQuestion, Subtopic
from sampling import retry_budget

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Draft:
    """Question text and ground-truth answer built from one parameter set."""

    question: str
    answer: str
    case_sensitive: bool = True


class QuestionGenerator(ABC):
    """Batch loop shared by every subtopic.

    Subclasses implement ``build``: draw one parameter set, simulate it and
    render it. ``build`` may raise ``InvalidExpression`` or
    ``ConstraintExhausted``; the attempt is then discarded and counted
    against the retry budget.
    """

    subtopic: Subtopic

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        topic: Optional[str] = None,
        retry_multiplier: Optional[int] = None,
    ):
        self.rng = rng or random.Random()
        self.topic = topic or config.TOPIC
        self.retry_multiplier = retry_multiplier or config.RETRY_MULTIPLIER

    @abstractmethod
    def build(self, difficulty: Difficulty) -> Draft:
        raise NotImplementedError

    def generate(self, difficulty: Union[Difficulty, str], count: int) -> List[FillQuestion]:
        difficulty = Difficulty(difficulty)
        if count <= 0:
            return []

        budget = retry_budget(count, self.retry_multiplier)
        seen: Set[str] = set()
        out: List[FillQuestion] = []
        attempts = 0

        while len(out) < count and attempts < budget:
            attempts += 1
            try:
                draft = self.build(difficulty)
            except (InvalidExpression, ConstraintExhausted) as exc:
                logger.debug(
                    "discarded %s/%s attempt: %s", self.subtopic.value, difficulty.value, exc
                )
                continue

            if draft.question in seen:
                continue
            seen.add(draft.question)

            out.append(
                FillQuestion(
                    topic=self.topic,
                    subtopic=self.subtopic.value,
                    difficulty=difficulty,
                    question=draft.question,
                    answer=draft.answer,
                    case_sensitive=draft.case_sensitive,
                )
            )

        if len(out) < count:
            logger.warning(
                "short batch for %s/%s: %d of %d after %d attempts",
                self.subtopic.value,
                difficulty.value,
                len(out),
                count,
                attempts,
            )
        return out

# Question records shared by the generators, the static bank and the API.
# The engine only ever produces FillQuestion; MultipleChoiceQuestion exists
# for static banks that ship option lists.

from __future__ import annotations

from enum import Enum
from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Subtopic(str, Enum):
    ARITHMETIC = "arithmetic"
    CONDITIONALS = "conditionals"
    LOOPS = "loops"
    LISTS = "lists"
    CONVERSION = "conversion"
    BASIC_ALGORITHMS = "basic-algorithms"

    @property
    def label(self) -> str:
        return SUBTOPIC_LABELS[self]


SUBTOPIC_LABELS = {
    Subtopic.ARITHMETIC: "Arithmetic Operations",
    Subtopic.CONDITIONALS: "Conditional Statements",
    Subtopic.LOOPS: "Loop Constructs",
    Subtopic.LISTS: "List Operations",
    Subtopic.CONVERSION: "Number Conversion",
    Subtopic.BASIC_ALGORITHMS: "Basic Algorithms",
}

ALL_SUBTOPICS = "all"


class _QuestionBase(BaseModel):
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    topic: str
    subtopic: str
    difficulty: Difficulty
    question: str


class FillQuestion(_QuestionBase):
    type: Literal["fill"] = "fill"
    answer: str
    case_sensitive: bool = True

    def is_correct(self, response: str) -> bool:
        given = (response or "").strip()
        expected = self.answer.strip()
        if self.case_sensitive:
            return given == expected
        return given.casefold() == expected.casefold()

    @property
    def expected(self) -> str:
        return self.answer


class MultipleChoiceQuestion(_QuestionBase):
    type: Literal["multiple"] = "multiple"
    options: List[str] = Field(min_length=2)
    correct: int = Field(ge=0)
    answer: str = ""

    @model_validator(mode="after")
    def _check_correct_index(self) -> "MultipleChoiceQuestion":
        if self.correct >= len(self.options):
            raise ValueError(f"correct={self.correct} is outside the {len(self.options)} options")
        return self

    def is_correct(self, response: str) -> bool:
        given = (response or "").strip()
        # option text wins over index so numeric options mark correctly
        for idx, option in enumerate(self.options):
            if given == option.strip():
                return idx == self.correct
        if given.isdigit():
            return int(given) == self.correct
        return False

    @property
    def expected(self) -> str:
        return self.options[self.correct]


Question = Annotated[Union[FillQuestion, MultipleChoiceQuestion], Field(discriminator="type")]

question_adapter: TypeAdapter = TypeAdapter(Question)

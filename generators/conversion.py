from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict

from generators.base import Draft, QuestionGenerator
from generators.registry import register
from questions import Difficulty, Subtopic

BASE_NAMES = {2: "binary", 16: "hexadecimal"}
# format() spec per base; no prefix, lowercase
FORMAT_SPECS = {2: "b", 16: "x"}

DECIMAL_CEILING: Dict[Difficulty, int] = {
    Difficulty.EASY: 31,
    Difficulty.MEDIUM: 127,
    Difficulty.HARD: 255,
}


def to_base(value: int, base: int) -> str:
    """Unprefixed, lowercase digits of a non-negative ``value``."""
    if base not in BASE_NAMES:
        raise ValueError(f"Unsupported base {base}")
    if value < 0:
        raise ValueError("Only non-negative values are converted")
    return format(value, FORMAT_SPECS[base])


def from_base(text: str, base: int) -> int:
    if base not in BASE_NAMES:
        raise ValueError(f"Unsupported base {base}")
    cleaned = text.strip()
    # int() would also take signs, underscores and 0x/0b prefixes
    if not cleaned.isalnum() or cleaned[:2].lower() in ("0x", "0b"):
        raise ValueError(f"{text!r} is not a plain base-{base} number")
    return int(cleaned, base)


@dataclass(frozen=True)
class ConversionParams:
    value: int
    base: int
    to_decimal: bool


def sample_conversion(rng: random.Random, difficulty: Difficulty) -> ConversionParams:
    return ConversionParams(
        value=rng.randint(1, DECIMAL_CEILING[difficulty]),
        base=rng.choice(tuple(BASE_NAMES)),
        to_decimal=rng.random() < 0.5,
    )


def format_conversion(params: ConversionParams) -> Draft:
    name = BASE_NAMES[params.base]
    if params.to_decimal:
        shown = to_base(params.value, params.base)
        return Draft(
            question=f"What is the decimal value of the {name} number {shown}?",
            answer=str(params.value),
        )
    return Draft(
        question=f"What is the {name} representation of the decimal number {params.value}?",
        answer=to_base(params.value, params.base),
        # hex digits may be typed in either case
        case_sensitive=params.base != 16,
    )


@register(Subtopic.CONVERSION)
class ConversionGenerator(QuestionGenerator):
    def build(self, difficulty: Difficulty) -> Draft:
        return format_conversion(sample_conversion(self.rng, difficulty))

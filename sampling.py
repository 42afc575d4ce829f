"""Random draws shared by the per-subtopic parameter samplers.

Every helper takes the caller's ``random.Random`` so a seeded generator
reproduces the same questions. Draws are made from precomputed candidate
pools rather than draw-and-reject loops, so they always terminate.
"""

from __future__ import annotations

import random
from typing import Iterable, List, Optional, Sequence, Set, TypeVar

from errors import ConstraintExhausted

T = TypeVar("T")

ICAO_ALPHABET = (
    "Alpha", "Bravo", "Charlie", "Delta", "Echo", "Foxtrot", "Golf",
    "Hotel", "India", "Juliet", "Kilo", "Lima", "Mike", "November",
    "Oscar", "Papa", "Quebec", "Romeo", "Sierra", "Tango", "Uniform",
    "Victor", "Whiskey", "X-ray", "Yankee", "Zulu",
)  # fmt: skip

DEAD_ZONE = 3


def operand_pool(low: int, high: int, dead_zone: int = DEAD_ZONE) -> List[int]:
    """Values in ``[low, high]`` outside ``[-dead_zone, dead_zone]``, plus zero."""
    pool = [n for n in range(low, high + 1) if n == 0 or abs(n) > dead_zone]
    if not pool:
        raise ConstraintExhausted(f"No operands left in [{low}, {high}] after the dead zone")
    return pool


def draw_operand(rng: random.Random, low: int, high: int, dead_zone: int = DEAD_ZONE) -> int:
    return rng.choice(operand_pool(low, high, dead_zone))


def draw_operands(
    rng: random.Random, count: int, low: int, high: int, dead_zone: int = DEAD_ZONE
) -> List[int]:
    pool = operand_pool(low, high, dead_zone)
    return [rng.choice(pool) for _ in range(count)]


def draw_distinct(rng: random.Random, vocabulary: Sequence[T], count: int) -> List[T]:
    if count > len(vocabulary):
        raise ConstraintExhausted(
            f"Cannot draw {count} distinct values from a vocabulary of {len(vocabulary)}"
        )
    return rng.sample(list(vocabulary), count)


def distinct_words(rng: random.Random, count: int) -> List[str]:
    return draw_distinct(rng, ICAO_ALPHABET, count)


def draw_name(rng: random.Random, pool: Iterable[str], taken: Set[str]) -> str:
    """Pick a variable name from ``pool`` not already in ``taken`` and reserve it."""
    free = [name for name in pool if name not in taken]
    if not free:
        raise ConstraintExhausted("Ran out of distinct variable names")
    name = rng.choice(free)
    taken.add(name)
    return name


def snap_to_reachable(target: int, sequence: Sequence[int]) -> Optional[int]:
    """Nearest value of ``sequence`` to ``target``; ties go to the earlier one."""
    if not sequence:
        return None
    if target in sequence:
        return target
    return min(sequence, key=lambda value: (abs(value - target), sequence.index(value)))


def retry_budget(count: int, multiplier: int) -> int:
    return max(1, count) * max(1, multiplier)

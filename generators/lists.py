from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Set, Tuple

from errors import ConstraintExhausted
from generators.base import Draft, QuestionGenerator
from generators.registry import register
from questions import Difficulty, Subtopic
from sampling import draw_name, draw_operands
from snippets import WRAP_EVERY, code, indent, python_list_literal, question_text

VALUE_RANGE = (-9, 9)
TARGET_RANGE = (1, 9)
DIVISORS = (2, 3, 4, 5)

EASY_SIZE = (4, 8)
MEDIUM_SIZE = (15, 25)
HARD_SIZE = (8, 12)

LIST_NAMES = ("n", "nums", "vals", "data", "arr")
ITEM_NAMES = ("v", "x", "num", "item")
RESULT_NAMES = ("total", "res", "acc", "out")


@dataclass(frozen=True)
class ListParams:
    """One list question: the literal, the names and the operation knobs."""

    family: str
    values: Tuple[int, ...]
    list_name: str
    item_name: str
    result_name: str
    target: Optional[int] = None
    k: int = 0
    p: int = 0
    start: Optional[int] = None
    stop: Optional[int] = None
    stride: Optional[int] = None
    wrap: bool = False


# Simulation


def _sum_where(values, keep: Callable[[int], bool]) -> int:
    return sum(v for v in values if keep(v))


def _last_index(values, target: int) -> int:
    pos = -1
    for idx, v in enumerate(values):
        if v == target:
            pos = idx
    return pos


def _smallest(values) -> int:
    m = values[0]
    for v in values:
        if v < m:
            m = v
    return m


def _largest(values) -> int:
    m = values[0]
    for v in values:
        if v > m:
            m = v
    return m


def _sum_modified(values, k: int, p: int) -> int:
    total = 0
    for v in values:
        if v % k == 0:
            total -= p
        else:
            total += v
    return total


def slice_of(params: ListParams) -> List[int]:
    return list(params.values)[slice(params.start, params.stop, params.stride)]


def simulate(params: ListParams) -> int:
    values = params.values
    family = params.family
    if family == "sum":
        return _sum_where(values, lambda v: True)
    if family == "count":
        return len(values)
    if family == "sum_even":
        return _sum_where(values, lambda v: v % 2 == 0)
    if family == "sum_odd":
        return _sum_where(values, lambda v: v % 2 != 0)
    if family == "last_index":
        return _last_index(values, params.target)
    if family == "count_target":
        return sum(1 for v in values if v == params.target)
    if family == "smallest":
        return _smallest(values)
    if family == "largest":
        return _largest(values)
    if family == "sum_excluding":
        return _sum_where(values, lambda v: v % params.k != 0)
    if family == "sum_modified":
        return _sum_modified(values, params.k, params.p)
    if family in ("slice_sum", "stride_sum"):
        return sum(slice_of(params))
    raise ValueError(f"Unknown list family {family!r}")


# Rendering


def _slice_text(params: ListParams) -> str:
    start = "" if params.start is None else str(params.start)
    stop = "" if params.stop is None else str(params.stop)
    if params.stride is None:
        return f"{params.list_name}[{start}:{stop}]"
    return f"{params.list_name}[{start}:{stop}:{params.stride}]"


def _body(params: ListParams) -> List[str]:
    lst, v, r = params.list_name, params.item_name, params.result_name
    family = params.family

    if family == "count":
        return [f"{r} = 0", f"for {v} in {lst}:", *indent([f"{r} += 1"])]
    if family in ("sum_even", "sum_odd", "sum_excluding"):
        test = {
            "sum_even": f"{v} % 2 == 0",
            "sum_odd": f"{v} % 2 != 0",
            "sum_excluding": f"{v} % {params.k} != 0",
        }[family]
        return [
            f"{r} = 0",
            f"for {v} in {lst}:",
            *indent([f"if {test}:", *indent([f"{r} += {v}"])]),
        ]
    if family == "last_index":
        return [
            f"{r} = -1",
            "i = 0",
            f"for {v} in {lst}:",
            *indent([f"if {v} == {params.target}:", *indent([f"{r} = i"]), "i += 1"]),
        ]
    if family == "count_target":
        return [
            f"{r} = 0",
            f"for {v} in {lst}:",
            *indent([f"if {v} == {params.target}:", *indent([f"{r} += 1"])]),
        ]
    if family in ("smallest", "largest"):
        cmp = "<" if family == "smallest" else ">"
        return [
            f"{r} = {lst}[0]",
            f"for {v} in {lst}:",
            *indent([f"if {v} {cmp} {r}:", *indent([f"{r} = {v}"])]),
        ]
    if family == "sum_modified":
        return [
            f"{r} = 0",
            f"for {v} in {lst}:",
            *indent(
                [
                    f"if {v} % {params.k} == 0:",
                    *indent([f"{r} -= {params.p}"]),
                    "else:",
                    *indent([f"{r} += {v}"]),
                ]
            ),
        ]
    if family in ("slice_sum", "stride_sum"):
        return [
            f"s = {_slice_text(params)}",
            f"{r} = 0",
            f"for {v} in s:",
            *indent([f"{r} += {v}"]),
        ]
    return [f"{r} = 0", f"for {v} in {lst}:", *indent([f"{r} += {v}"])]


def format_list(params: ListParams) -> str:
    per_line = WRAP_EVERY if params.wrap else None
    lines = [python_list_literal(params.values, params.list_name, per_line)]
    lines.extend(_body(params))
    lines.append(f"print({params.result_name})")
    return code(lines)


# Sampling

FAMILIES: Dict[Difficulty, Tuple[str, ...]] = {
    Difficulty.EASY: ("sum", "count", "sum_even", "sum_odd"),
    Difficulty.MEDIUM: (
        "last_index",
        "count_target",
        "smallest",
        "largest",
        "sum_excluding",
        "sum_modified",
    ),
    Difficulty.HARD: ("slice_sum", "stride_sum"),
}

_TARGET_FAMILIES = ("last_index", "count_target")


def _names(rng: random.Random) -> Tuple[str, str, str]:
    taken: Set[str] = {"s", "i"}
    return (
        draw_name(rng, LIST_NAMES, taken),
        draw_name(rng, ITEM_NAMES, taken),
        draw_name(rng, RESULT_NAMES, taken),
    )


def _slice_bounds(rng: random.Random, size: int, strided: bool) -> Tuple[int, int, Optional[int]]:
    start = rng.randint(1, 3)
    if rng.random() < 0.3:
        stop = -rng.randint(1, 3)
    else:
        stop = rng.randint(start + 2, size - 1)
    stride = rng.choice((2, 3)) if strided else None
    return start, stop, stride


def sample_list(rng: random.Random, difficulty: Difficulty) -> ListParams:
    family = rng.choice(FAMILIES[difficulty])
    list_name, item_name, result_name = _names(rng)
    size_range = {
        Difficulty.EASY: EASY_SIZE,
        Difficulty.MEDIUM: MEDIUM_SIZE,
        Difficulty.HARD: HARD_SIZE,
    }[difficulty]
    size = rng.randint(*size_range)

    if family in _TARGET_FAMILIES:
        values = [rng.randint(*TARGET_RANGE) for _ in range(size)]
    else:
        values = draw_operands(rng, size, *VALUE_RANGE)

    extra: Dict[str, object] = {}
    if family in _TARGET_FAMILIES:
        extra["target"] = rng.choice(values)
    elif family == "sum_excluding":
        extra["k"] = rng.choice(DIVISORS)
    elif family == "sum_modified":
        extra["k"], extra["p"] = rng.sample(DIVISORS, 2)
    elif family in ("slice_sum", "stride_sum"):
        start, stop, stride = _slice_bounds(rng, size, family == "stride_sum")
        extra.update(start=start, stop=stop, stride=stride)

    params = ListParams(
        family=family,
        values=tuple(values),
        list_name=list_name,
        item_name=item_name,
        result_name=result_name,
        wrap=difficulty == Difficulty.MEDIUM,
        **extra,
    )
    if family in ("slice_sum", "stride_sum") and len(slice_of(params)) < 2:
        raise ConstraintExhausted(f"{_slice_text(params)} keeps fewer than two items")
    return params


@register(Subtopic.LISTS)
class ListsGenerator(QuestionGenerator):
    def build(self, difficulty: Difficulty) -> Draft:
        params = sample_list(self.rng, difficulty)
        return Draft(question=question_text(format_list(params)), answer=str(simulate(params)))

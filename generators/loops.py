"""``for``/``while`` accumulation questions.

Simulation follows the rendered loop step by step::

    before loop  -> total = 0, i = start
    check        -> i < stop (or <=, >, >=); leave when false
    body         -> interrupt test, then exclusion/modification, then total += i
    step         -> i += step
    exit         -> print(total)

``continue`` in a ``while`` loop steps first and then re-checks. ``break``
leaves immediately without accumulating or stepping.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from errors import ConstraintExhausted
from evaluator import compare
from generators.base import Draft, QuestionGenerator
from generators.registry import register
from questions import Difficulty, Subtopic
from sampling import snap_to_reachable
from snippets import code, indent, question_text

VALUE_RANGE = (-9, 9)
DIVISORS = (2, 3, 4, 5)
MAX_ITERATIONS = 100

LOOP_VAR = "i"
ACCUMULATOR = "total"

_UP = ("<", "<=")
_DOWN = (">", ">=")


@dataclass(frozen=True)
class Filter:
    kind: str  # "exclude" or "modify"
    k: int
    p: int = 0


@dataclass(frozen=True)
class Interrupt:
    test: str  # "mod" or "eq"
    value: int
    action: str  # "break" or "continue"

    def render(self) -> str:
        if self.test == "mod":
            return f"{LOOP_VAR} % {self.value} == 0"
        return f"{LOOP_VAR} == {self.value}"

    def fires(self, i: int) -> bool:
        if self.test == "mod":
            return i % self.value == 0
        return i == self.value


@dataclass(frozen=True)
class LoopParams:
    kind: str  # "for" or "while"
    start: int
    stop: int
    step: int
    comparison: str = "<"
    filter: Optional[Filter] = None
    interrupt: Optional[Interrupt] = None


def loop_condition(params: LoopParams) -> Tuple[str, int]:
    """The comparison that keeps the loop running, as ``(op, bound)``.

    ``range(start, stop, step)`` runs while ``i < stop`` for a positive step
    and while ``i > stop`` for a negative one.
    """
    if params.kind == "for":
        return ("<" if params.step > 0 else ">"), params.stop
    return params.comparison, params.stop


def visited(params: LoopParams) -> List[int]:
    """Values of the loop variable that reach the body, ignoring break."""
    op, bound = loop_condition(params)
    values: List[int] = []
    i = params.start
    while compare(i, op, bound):
        values.append(i)
        if len(values) > MAX_ITERATIONS:
            raise ConstraintExhausted("loop does not terminate within the iteration cap")
        i += params.step
    return values


def simulate(params: LoopParams) -> int:
    op, bound = loop_condition(params)
    total = 0
    i = params.start
    iterations = 0

    while compare(i, op, bound):
        iterations += 1
        if iterations > MAX_ITERATIONS:
            raise ConstraintExhausted("loop does not terminate within the iteration cap")

        if params.interrupt is not None and params.interrupt.fires(i):
            if params.interrupt.action == "break":
                break
            i += params.step
            continue

        flt = params.filter
        if flt is None:
            total += i
        elif flt.kind == "exclude":
            if i % flt.k != 0:
                total += i
        elif i % flt.k == 0:
            total -= flt.p
        else:
            total += i

        i += params.step
    return total


def _step_line(step: int) -> str:
    if step > 0:
        return f"{LOOP_VAR} += {step}"
    return f"{LOOP_VAR} -= {-step}"


def _range_call(params: LoopParams) -> str:
    if params.step == 1:
        return f"range({params.start}, {params.stop})"
    return f"range({params.start}, {params.stop}, {params.step})"


def format_loop(params: LoopParams) -> str:
    body: List[str] = []
    if params.interrupt is not None:
        body.append(f"if {params.interrupt.render()}:")
        if params.kind == "while" and params.interrupt.action == "continue":
            body.extend(indent([_step_line(params.step)]))
        body.extend(indent([params.interrupt.action]))

    flt = params.filter
    if flt is None:
        body.append(f"{ACCUMULATOR} += {LOOP_VAR}")
    elif flt.kind == "exclude":
        body.append(f"if {LOOP_VAR} % {flt.k} != 0:")
        body.extend(indent([f"{ACCUMULATOR} += {LOOP_VAR}"]))
    else:
        body.append(f"if {LOOP_VAR} % {flt.k} == 0:")
        body.extend(indent([f"{ACCUMULATOR} -= {flt.p}"]))
        body.append("else:")
        body.extend(indent([f"{ACCUMULATOR} += {LOOP_VAR}"]))

    lines = [f"{ACCUMULATOR} = 0"]
    if params.kind == "for":
        lines.append(f"for {LOOP_VAR} in {_range_call(params)}:")
        lines.extend(indent(body))
    else:
        lines.append(f"{LOOP_VAR} = {params.start}")
        lines.append(f"while {LOOP_VAR} {params.comparison} {params.stop}:")
        body.append(_step_line(params.step))
        lines.extend(indent(body))
    lines.append(f"print({ACCUMULATOR})")
    return code(lines)


def _bounds(rng: random.Random) -> Tuple[int, int]:
    m = rng.randint(*VALUE_RANGE)
    n = rng.randint(*VALUE_RANGE)
    return min(m, n), max(m, n)


def sample_shape(rng: random.Random, difficulty: Difficulty) -> LoopParams:
    """Loop header only: kind, bounds, step and comparison."""
    kind = rng.choice(("for", "while"))
    low, high = _bounds(rng)
    magnitude = 1 if difficulty == Difficulty.EASY else rng.choice((1, 2))
    counting_down = rng.random() < 0.25

    if kind == "for":
        if counting_down:
            return LoopParams(kind, start=high, stop=low - 1, step=-magnitude)
        return LoopParams(kind, start=low, stop=high + 1, step=magnitude)

    if counting_down:
        comparison = rng.choice(_DOWN)
        stop = low if comparison == ">=" else low - 1
        return LoopParams(kind, start=high, stop=stop, step=-magnitude, comparison=comparison)
    comparison = rng.choice(_UP)
    stop = high if comparison == "<=" else high + 1
    return LoopParams(kind, start=low, stop=stop, step=magnitude, comparison=comparison)


def sample_loop(rng: random.Random, difficulty: Difficulty) -> LoopParams:
    params = sample_shape(rng, difficulty)
    sequence = visited(params)
    if not sequence:
        raise ConstraintExhausted("loop body never runs")

    if difficulty == Difficulty.MEDIUM:
        if rng.random() < 0.5:
            return replace(params, filter=Filter("exclude", rng.choice(DIVISORS)))
        k, p = rng.sample(DIVISORS, 2)
        return replace(params, filter=Filter("modify", k, p))

    if difficulty == Difficulty.HARD:
        action = rng.choice(("break", "continue"))
        if rng.random() < 0.5:
            interrupt = Interrupt("mod", rng.choice(DIVISORS), action)
        else:
            target = snap_to_reachable(rng.randint(*VALUE_RANGE), sequence)
            interrupt = Interrupt("eq", target, action)

        fired = [i for i in sequence if interrupt.fires(i)]
        if not fired:
            raise ConstraintExhausted(f"{interrupt.render()} never fires")
        if action == "break" and fired[0] == sequence[0]:
            raise ConstraintExhausted("break on the first iteration")
        return replace(params, interrupt=interrupt)

    return params


@register(Subtopic.LOOPS)
class LoopsGenerator(QuestionGenerator):
    def build(self, difficulty: Difficulty) -> Draft:
        params = sample_loop(self.rng, difficulty)
        return Draft(question=question_text(format_loop(params)), answer=str(simulate(params)))


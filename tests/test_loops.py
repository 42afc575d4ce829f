import random

import pytest

from errors import ConstraintExhausted
from generators.loops import (
    Filter,
    Interrupt,
    LoopParams,
    LoopsGenerator,
    format_loop,
    sample_loop,
    simulate,
    visited,
)
from questions import Difficulty


@pytest.mark.parametrize("kind", ["for", "while"])
def test_break_stops_before_accumulating(kind):
    params = LoopParams(kind, start=1, stop=5, step=1, interrupt=Interrupt("eq", 3, "break"))
    assert simulate(params) == 3


@pytest.mark.parametrize("kind", ["for", "while"])
def test_continue_skips_only_the_target(kind):
    params = LoopParams(kind, start=1, stop=5, step=1, interrupt=Interrupt("eq", 3, "continue"))
    assert simulate(params) == 7


def test_inclusive_while_continue():
    params = LoopParams(
        "while", start=1, stop=5, step=1, comparison="<=", interrupt=Interrupt("eq", 3, "continue")
    )
    assert simulate(params) == 12


def test_while_continue_steps_before_continuing():
    params = LoopParams("while", start=1, stop=5, step=1, interrupt=Interrupt("mod", 2, "continue"))
    assert format_loop(params) == (
        "total = 0\n"
        "i = 1\n"
        "while i < 5:\n"
        "    if i % 2 == 0:\n"
        "        i += 1\n"
        "        continue\n"
        "    total += i\n"
        "    i += 1\n"
        "print(total)"
    )
    assert simulate(params) == 4


def test_for_range_counting_down_with_modification():
    params = LoopParams("for", start=6, stop=0, step=-2, filter=Filter("modify", 4, 3))
    # 6 + (-3 for 4) + 2
    assert simulate(params) == 5
    assert "for i in range(6, 0, -2):" in format_loop(params)


def test_exclusion():
    params = LoopParams("for", start=-3, stop=4, step=1, filter=Filter("exclude", 3))
    # -2 - 1 + 1 + 2 (0 and +-3 excluded)
    assert simulate(params) == 0


def test_runaway_loop_is_capped():
    params = LoopParams("while", start=0, stop=10, step=-1, comparison="<")
    with pytest.raises(ConstraintExhausted):
        simulate(params)
    with pytest.raises(ConstraintExhausted):
        visited(params)


def test_equality_targets_are_reachable():
    rng = random.Random(5)
    for _ in range(500):
        try:
            params = sample_loop(rng, Difficulty.HARD)
        except ConstraintExhausted:
            continue
        if params.interrupt.test == "eq":
            assert params.interrupt.value in visited(params)


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_snippet_prints_answer(difficulty, run_snippet):
    gen = LoopsGenerator(rng=random.Random(31))
    questions = gen.generate(difficulty, 100)
    assert len(questions) == 100
    for q in questions:
        assert run_snippet(q.question) == q.answer, q.question

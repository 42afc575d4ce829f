import random

import pytest

from generators.conditionals import (
    Branch,
    Condition,
    ConditionalsGenerator,
    Print,
    Program,
    const,
    if_else,
    render_program,
    run,
    term,
)
from questions import Difficulty
from sampling import ICAO_ALPHABET


def test_elif_chain_picks_first_true_arm():
    program = Program(
        (("x", const(4)), ("y", const(-5)), ("f", term("x", "*", "y"))),
        Branch(
            (
                (Condition(term("f"), ">", const(0)), Print("Alpha")),
                (Condition(term("f"), "<", const(-9)), Print("Bravo")),
            ),
            Print("Charlie"),
        ),
    )
    assert run(program) == "Bravo"
    assert render_program(program) == (
        "x = 4\n"
        "y = -5\n"
        "f = x * y\n"
        "if f > 0:\n"
        '    print("Alpha")\n'
        "elif f < -9:\n"
        '    print("Bravo")\n'
        "else:\n"
        '    print("Charlie")'
    )


def test_nested_branches():
    program = Program(
        (("m", const(5)), ("n", const(-4))),
        if_else(
            Condition(term("m", "+", "n"), ">", const(0)),
            if_else(Condition(term("n"), "<", const(0)), Print("Delta"), Print("Echo")),
            Print("Golf"),
        ),
    )
    assert run(program) == "Delta"


def test_precedence_inside_conditions():
    # 4 + 5 * 4 == 24, not 36
    program = Program(
        (("a", const(4)),),
        if_else(Condition(term("a", "+", 5, "*", 4), "==", const(24)), Print("Kilo"), Print("Lima")),
    )
    assert run(program) == "Kilo"


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_snippet_prints_answer(difficulty, run_snippet):
    gen = ConditionalsGenerator(rng=random.Random(17))
    questions = gen.generate(difficulty, 150)
    assert len(questions) == 150
    for q in questions:
        assert q.answer in ICAO_ALPHABET
        assert run_snippet(q.question) == q.answer, q.question


def test_branch_words_are_distinct():
    gen = ConditionalsGenerator(rng=random.Random(3))
    for q in gen.generate(Difficulty.HARD, 100):
        words = [w for w in ICAO_ALPHABET if f'print("{w}")' in q.question]
        assert len(words) == 4

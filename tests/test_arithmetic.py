import random

import pytest

from evaluator import evaluate
from generators.arithmetic import (
    ArithmeticGenerator,
    ExpressionParams,
    allowed_operators,
    format_answer,
    format_expression,
    is_admissible,
    sample_expression,
)
from questions import Difficulty


def _numeric(answer: str) -> float:
    if answer.startswith("ans = "):
        answer = answer[len("ans = "):]
    return float(answer)


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_answers_are_admissible(difficulty):
    gen = ArithmeticGenerator(rng=random.Random(1234))
    questions = gen.generate(difficulty, 1000)
    assert len(questions) == 1000

    for q in questions:
        value = _numeric(q.answer)
        assert value == 0 or 3 <= abs(value) <= 99, q.answer
        text = q.answer.rsplit(" ", 1)[-1]
        if "." in text:
            assert len(text.split(".", 1)[1]) == 1, q.answer
        assert text != "-0.0"


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_snippet_prints_answer(difficulty, run_snippet):
    gen = ArithmeticGenerator(rng=random.Random(99))
    for q in gen.generate(difficulty, 200):
        assert run_snippet(q.question) == q.answer, q.question


def _floored_operands(params):
    """Left and right values that each ``//`` or ``%`` actually receives."""
    ops = params.operators
    for idx, op in enumerate(ops):
        if op not in ("//", "%"):
            continue
        start = idx
        while start > 0 and ops[start - 1] not in ("+", "-"):
            start -= 1
        left = evaluate(params.operands[start : idx + 1], ops[start:idx])
        stop = idx + 1
        while stop < len(ops) and ops[stop] == "**":
            stop += 1
        right = evaluate(params.operands[idx + 1 : stop + 1], ops[idx + 1 : stop])
        yield left, right


@pytest.mark.parametrize("op_count", [2, 3, 4])
def test_floor_and_modulo_operands_are_positive(op_count):
    rng = random.Random(7)
    seen = 0
    for _ in range(20000):
        params = sample_expression(rng, op_count)
        for left, right in _floored_operands(params):
            seen += 1
            assert left >= 1, params
            assert right >= 1, params
        for idx, op in enumerate(params.operators):
            if op == "**":
                assert params.operands[idx] >= 1
                assert params.operands[idx + 1] in (2, 3)
    assert seen > 0


def test_floor_sees_the_whole_product():
    # -4 * 4 // 5 floors -16, so only the adjacent 4 looks safe
    assert "//" not in allowed_operators(4, 5, False, False, term=-16)
    assert "%" not in allowed_operators(4, 5, False, False, term=0)
    assert "//" in allowed_operators(4, 5, False, False, term=16)
    assert "//" in allowed_operators(4, 5, False, False)


def test_at_most_one_power_and_one_division():
    rng = random.Random(11)
    for _ in range(2000):
        ops = sample_expression(rng, 4).operators
        assert ops.count("**") <= 1
        assert sum(ops.count(op) for op in ("/", "//", "%")) <= 1


def test_division_answer_keeps_point_zero():
    params = ExpressionParams(operands=(8, 2), operators=("/",), output="print")
    assert format_expression(params) == "print(8 / 2)"
    assert format_answer(params, 4.0) == "4.0"


def test_variable_form_with_fstring():
    params = ExpressionParams(
        operands=(4, 5, -4),
        operators=("*", "+"),
        output="fstring",
        names=("x", "y", "z"),
    )
    assert format_expression(params) == (
        'x = 4\ny = 5\nz = -4\nans = x * y + z\nprint(f"ans = {ans}")'
    )
    assert format_answer(params, 16) == "ans = 16"


def test_outer_parentheses_from_three_operators():
    two = ExpressionParams(operands=(4, 5, 4), operators=("+", "*"), output="assign")
    three = ExpressionParams(operands=(4, 5, 4, 5), operators=("+", "*", "-"), output="print")
    assert format_expression(two) == "ans = 4 + 5 * 4\nprint(ans)"
    assert format_expression(three) == "print((4 + 5 * 4 - 5))"


@pytest.mark.parametrize(
    "value, ok",
    [(0, True), (3, True), (-3, True), (99, True), (2, False), (-2.5, False), (100, False),
     (4.5, True), (4.25, False), (-0.0, False), (0.0, True)],
)
def test_is_admissible(value, ok):
    assert is_admissible(value) is ok

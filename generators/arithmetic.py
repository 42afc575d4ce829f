"""Arithmetic expression questions.

Operands are drawn from ``[-5, 5]`` outside the dead zone. Operators are
chosen left to right from whatever is safe for the adjacent operands and
the multiplicative run to the left, so ``+ - *`` are always available and the draw never stalls.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from errors import ConstraintExhausted, InvalidExpression
from evaluator import Number, decimal_places, evaluate, format_number
from generators.base import Draft, QuestionGenerator
from generators.registry import register
from questions import Difficulty, Subtopic
from sampling import draw_distinct, draw_operands
from snippets import code, question_text, render_expression

logger = logging.getLogger(__name__)

OPERAND_COUNTS: Dict[Difficulty, int] = {
    Difficulty.EASY: 3,
    Difficulty.MEDIUM: 4,
    Difficulty.HARD: 5,
}
OPERAND_RANGE = (-5, 5)
EXPONENTS = (2, 3)
MAX_ANSWER = 99
MIN_ANSWER = 3
MAX_DECIMALS = 1

DIVISION_LIKE = ("/", "//", "%")
VARIABLE_NAMES = ("a", "b", "c", "m", "n", "p", "q", "x", "y", "z")

OUTPUT_FORMATS = ("print", "assign", "variables", "fstring")

# Attempts per question before giving up on the current structure
_MAX_SHRINK_ATTEMPTS = 40


@dataclass(frozen=True)
class ExpressionParams:
    operands: Tuple[int, ...]
    operators: Tuple[str, ...]
    output: str
    names: Tuple[str, ...] = ()


def is_admissible(value: Number) -> bool:
    """Answer window: ``3 <= |v| <= 99`` or exactly zero, one decimal digit at most."""
    if isinstance(value, float) and value == 0 and math.copysign(1.0, value) < 0:
        return False
    if abs(value) > MAX_ANSWER:
        return False
    if value != 0 and abs(value) < MIN_ANSWER:
        return False
    return decimal_places(value) <= MAX_DECIMALS


def allowed_operators(
    left: int,
    right: int,
    used_power: bool,
    used_division: bool,
    term: Optional[Number] = None,
) -> List[str]:
    """Operators safe between ``left`` and ``right``.

    ``term`` is the value of the multiplicative run ending at ``left``; that,
    not ``left`` alone, is what ``//`` and ``%`` would floor.
    """
    if term is None:
        term = left
    ops = ["+", "-", "*"]
    if not used_power and left >= 1:
        # the exponent is redrawn from EXPONENTS when ** is picked
        ops.append("**")
    if not used_division:
        if right != 0:
            ops.append("/")
        if term >= 1 and right >= 1:
            ops.extend(["//", "%"])
    return ops


def _term_value(operands: List[int], operators: List[str]) -> Number:
    if not operators:
        return operands[0]
    try:
        return evaluate(operands, operators)
    except InvalidExpression:
        # an unusable run never admits floor or modulo
        return 0


def sample_expression(rng: random.Random, op_count: int) -> ExpressionParams:
    operands = draw_operands(rng, op_count + 1, *OPERAND_RANGE)
    operators: List[str] = []
    used_power = used_division = False

    term_start = 0

    for i in range(op_count):
        term = _term_value(operands[term_start : i + 1], operators[term_start:i])
        op = rng.choice(
            allowed_operators(operands[i], operands[i + 1], used_power, used_division, term)
        )
        if op == "**":
            operands[i + 1] = rng.choice(EXPONENTS)
            used_power = True
        elif op in DIVISION_LIKE:
            used_division = True
        operators.append(op)
        if op in ("+", "-"):
            term_start = i + 1

    output = rng.choice(OUTPUT_FORMATS)
    names: Tuple[str, ...] = ()
    if output in ("variables", "fstring"):
        names = tuple(draw_distinct(rng, VARIABLE_NAMES, len(operands)))
    return ExpressionParams(tuple(operands), tuple(operators), output, names)


def format_expression(params: ExpressionParams) -> str:
    if params.names:
        expr = " ".join(
            [params.names[0]]
            + [part for op, name in zip(params.operators, params.names[1:]) for part in (op, name)]
        )
    else:
        expr = render_expression(params.operands, params.operators)
    if len(params.operators) >= 3:
        expr = f"({expr})"

    if params.output == "print":
        return code([f"print({expr})"])
    if params.output == "assign":
        return code([f"ans = {expr}", "print(ans)"])

    lines = [f"{name} = {value}" for name, value in zip(params.names, params.operands)]
    lines.append(f"ans = {expr}")
    if params.output == "fstring":
        lines.append('print(f"ans = {ans}")')
    else:
        lines.append("print(ans)")
    return code(lines)


def format_answer(params: ExpressionParams, value: Number) -> str:
    text = format_number(value)
    if params.output == "fstring":
        return f"ans = {text}"
    return text


@register(Subtopic.ARITHMETIC)
class ArithmeticGenerator(QuestionGenerator):
    def build(self, difficulty: Difficulty) -> Draft:
        op_count = OPERAND_COUNTS[difficulty] - 1

        for _ in range(_MAX_SHRINK_ATTEMPTS):
            params = sample_expression(self.rng, op_count)
            try:
                value = evaluate(params.operands, params.operators)
            except InvalidExpression as exc:
                logger.debug("resampling %s: %s", params.operators, exc)
                op_count = max(1, op_count - 1)
                continue

            if decimal_places(value) > MAX_DECIMALS:
                # same structure, new draw
                continue
            if not is_admissible(value):
                op_count = max(1, op_count - 1)
                continue

            return Draft(
                question=question_text(format_expression(params)),
                answer=format_answer(params, value),
            )

        raise ConstraintExhausted(f"no admissible expression with {op_count} operators")

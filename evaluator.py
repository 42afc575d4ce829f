"""Python-semantics arithmetic and comparison evaluation.

The generators never ``eval`` the snippets they render. Ground truth is
computed here from the same operands and operators the snippet is built
from, using Python's precedence table:

    **            right-associative, binds tighter than unary minus on its left
    * / // %      left-associative
    + -           left-associative

``/`` always produces a float, ``//`` floors the true quotient and ``%``
takes the sign of the divisor, exactly as CPython does.
"""

from __future__ import annotations

import math
import operator
import re
from typing import Callable, Dict, List, Optional, Sequence, Union

from errors import InvalidExpression

Number = Union[int, float]

ARITHMETIC_OPERATORS = ("+", "-", "*", "/", "//", "%", "**")
COMPARISON_OPERATORS = ("<", "<=", ">", ">=", "==", "!=")

PRECEDENCE: Dict[str, int] = {
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
    "//": 2,
    "%": 2,
    "**": 3,
}
RIGHT_ASSOCIATIVE = frozenset({"**"})
UNARY_PRECEDENCE = 3

# Exponents beyond this are never produced by a sampler
_MAX_EXPONENT_ABS = 2000
# Integer results stay printable well under the interpreter's str() digit limit
_MAX_INT_DIGITS = 200
_INT_CEILING = 10 ** _MAX_INT_DIGITS

_BINARY: Dict[str, Callable[[Number, Number], Number]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "//": operator.floordiv,
    "%": operator.mod,
    "**": operator.pow,
}

_COMPARE: Dict[str, Callable[[Number, Number], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "==": operator.eq,
    "!=": operator.ne,
}

_TOKEN_RE = re.compile(r"\d+\.\d*|\.\d+|\d+|\*\*|//|[-+*/%()]|\S")
_INT_RE = re.compile(r"[+-]?\d+")

Token = Union[str, int, float]


def _power_too_large(left: Number, right: Number) -> bool:
    if not (isinstance(left, int) and isinstance(right, int)) or right <= 0 or abs(left) <= 1:
        return False
    return (abs(left).bit_length() - 1) * right >= _INT_CEILING.bit_length()


def apply_operator(left: Number, op: str, right: Number) -> Number:
    func = _BINARY.get(op)
    if func is None:
        raise InvalidExpression(f"Unsupported operator {op!r}")
    if op == "**" and abs(right) > _MAX_EXPONENT_ABS:
        raise InvalidExpression("Exponent too large.")
    if op == "**" and _power_too_large(left, right):
        raise InvalidExpression(f"{left} {op} {right}: result too large")
    try:
        value = func(left, right)
    except ZeroDivisionError as exc:
        raise InvalidExpression(f"{left} {op} {right}: division by zero") from exc
    except OverflowError as exc:
        raise InvalidExpression(f"{left} {op} {right}: result too large") from exc
    if isinstance(value, complex):
        raise InvalidExpression(f"{left} {op} {right}: complex result")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidExpression(f"{left} {op} {right}: result is not finite")
    if isinstance(value, int) and abs(value) >= _INT_CEILING:
        raise InvalidExpression(f"Result has more than {_MAX_INT_DIGITS} digits.")
    return value


def tokenize(expr: str) -> List[Token]:
    tokens: List[Token] = []
    for raw in _TOKEN_RE.findall(expr):
        if raw[0].isdigit() or raw[0] == ".":
            tokens.append(_as_number(raw))
        elif raw in PRECEDENCE or raw in "()":
            tokens.append(raw)
        else:
            raise InvalidExpression(f"Unexpected character {raw!r}")
    if not tokens:
        raise InvalidExpression("Empty expression.")
    return tokens


class Parser:
    """Precedence-climbing evaluator over a token list.

    Numeric tokens are atomic: a negative number token used as the base of
    ``**`` behaves like a parenthesized literal. Unary signs in text are
    separate ``-``/``+`` tokens and follow Python's grammar, so
    ``-2 ** 2 == -4`` while ``2 ** -1 == 0.5``.
    """

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = list(tokens)
        self.pos = 0

    def peek(self) -> Optional[Token]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def consume(self, expected: Optional[str] = None) -> Optional[Token]:
        token = self.peek()
        if expected is not None and token != expected:
            raise InvalidExpression(f"Expected {expected!r} but got {token!r}")
        self.pos += 1
        return token

    def parse(self) -> Number:
        value = self.parse_expression()
        if self.peek() is not None:
            raise InvalidExpression(f"Unexpected token {self.peek()!r}")
        return value

    def parse_expression(self, min_prec: int = 1) -> Number:
        left = self.parse_unary()
        while True:
            op = self.peek()
            if not isinstance(op, str) or op not in PRECEDENCE or PRECEDENCE[op] < min_prec:
                break
            prec = PRECEDENCE[op]
            self.consume(op)
            right = self.parse_expression(prec if op in RIGHT_ASSOCIATIVE else prec + 1)
            left = apply_operator(left, op, right)
        return left

    def parse_unary(self) -> Number:
        token = self.peek()
        if token == "-" or token == "+":
            self.consume()
            operand = self.parse_expression(UNARY_PRECEDENCE)
            return -operand if token == "-" else +operand
        return self.parse_primary()

    def parse_primary(self) -> Number:
        token = self.peek()
        if token == "(":
            self.consume("(")
            value = self.parse_expression()
            self.consume(")")
            return value
        if isinstance(token, (int, float)) and not isinstance(token, bool):
            self.consume()
            return token
        raise InvalidExpression(f"Unexpected token {token!r}")


def _as_number(value: Union[str, Number]) -> Number:
    if isinstance(value, bool):
        raise InvalidExpression("Booleans are not operands.")
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    if _INT_RE.fullmatch(text):
        return int(text)
    try:
        return float(text)
    except ValueError as exc:
        raise InvalidExpression(f"Not a number: {value!r}") from exc


def evaluate(operands: Sequence[Union[str, Number]], operators: Sequence[str]) -> Number:
    """Evaluate ``operands[0] op[0] operands[1] ...`` with Python semantics."""
    if len(operands) != len(operators) + 1:
        raise InvalidExpression(
            f"Need exactly one more operand than operators ({len(operands)}/{len(operators)})."
        )
    tokens: List[Token] = [_as_number(operands[0])]
    for op, operand in zip(operators, operands[1:]):
        if op not in PRECEDENCE:
            raise InvalidExpression(f"Unsupported operator {op!r}")
        tokens.append(op)
        tokens.append(_as_number(operand))
    return Parser(tokens).parse()


def evaluate_expression(expr: str) -> Number:
    return Parser(tokenize(expr)).parse()


def compare(lhs: Number, op: str, rhs: Number) -> bool:
    func = _COMPARE.get(op)
    if func is None:
        raise ValueError(f"Unknown comparison operator {op!r}")
    return func(lhs, rhs)


def format_number(value: Number) -> str:
    """Text that ``print(value)`` writes."""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return str(value)
    return repr(float(value))


def decimal_places(value: Number) -> int:
    text = format_number(value)
    if "e" in text or "inf" in text or "nan" in text:
        # Scientific notation never counts as a short decimal
        return 99
    if "." not in text:
        return 0
    return len(text.split(".", 1)[1])

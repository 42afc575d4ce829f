"""if/else, if/elif/else and nested-if questions.

Each shape builds a small ``Program``: a few integer assignments followed by
a branch tree whose leaves print distinct ICAO words. The same ``Program``
is rendered to text and walked by ``run`` to get the printed word.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Sequence, Tuple, Union

from errors import ConstraintExhausted
from evaluator import COMPARISON_OPERATORS, Number, compare, evaluate
from generators.base import Draft, QuestionGenerator
from generators.registry import register
from questions import Difficulty, Subtopic
from sampling import distinct_words, draw_operand
from snippets import code, indent, question_text, quote

VALUE_RANGE = (-9, 9)
FLOOR_MOD_RANGE = (2, 25)
TERM_OPERATORS = ("+", "-", "*")

Operand = Union[str, int]


@dataclass(frozen=True)
class Expr:
    operands: Tuple[Operand, ...]
    operators: Tuple[str, ...] = ()

    def render(self) -> str:
        parts = [str(self.operands[0])]
        for op, operand in zip(self.operators, self.operands[1:]):
            parts.extend([op, str(operand)])
        return " ".join(parts)

    def value(self, env: Mapping[str, Number]) -> Number:
        values = [env[o] if isinstance(o, str) else o for o in self.operands]
        return evaluate(values, self.operators)


@dataclass(frozen=True)
class Condition:
    lhs: Expr
    op: str
    rhs: Expr

    def render(self) -> str:
        return f"{self.lhs.render()} {self.op} {self.rhs.render()}"

    def holds(self, env: Mapping[str, Number]) -> bool:
        return compare(self.lhs.value(env), self.op, self.rhs.value(env))


@dataclass(frozen=True)
class Print:
    word: str


@dataclass(frozen=True)
class Branch:
    arms: Tuple[Tuple[Condition, "Node"], ...]
    otherwise: "Node"


Node = Union[Print, Branch]


@dataclass(frozen=True)
class Program:
    assignments: Tuple[Tuple[str, Expr], ...]
    body: Node


def term(*items: Union[Operand, str]) -> Expr:
    """``term("a", "+", 5)`` -> Expr(("a", 5), ("+",))."""
    return Expr(tuple(items[0::2]), tuple(items[1::2]))


def const(value: int) -> Expr:
    return Expr((value,))


def if_else(cond: Condition, then: Node, otherwise: Node) -> Branch:
    return Branch(((cond, then),), otherwise)


def render_node(node: Node) -> List[str]:
    if isinstance(node, Print):
        return [f"print({quote(node.word)})"]
    lines: List[str] = []
    for idx, (cond, child) in enumerate(node.arms):
        keyword = "if" if idx == 0 else "elif"
        lines.append(f"{keyword} {cond.render()}:")
        lines.extend(indent(render_node(child)))
    lines.append("else:")
    lines.extend(indent(render_node(node.otherwise)))
    return lines


def render_program(program: Program) -> str:
    lines = [f"{name} = {expr.render()}" for name, expr in program.assignments]
    lines.extend(render_node(program.body))
    return code(lines)


def conditions(node: Node) -> List[Condition]:
    if isinstance(node, Print):
        return []
    found = [cond for cond, _ in node.arms]
    for _, child in node.arms:
        found.extend(conditions(child))
    found.extend(conditions(node.otherwise))
    return found


def run(program: Program) -> str:
    env: Dict[str, Number] = {}
    for name, expr in program.assignments:
        env[name] = expr.value(env)

    node = program.body
    while isinstance(node, Branch):
        for cond, child in node.arms:
            if cond.holds(env):
                node = child
                break
        else:
            node = node.otherwise
    return node.word


class _Draw:
    def __init__(self, rng: random.Random):
        self.rng = rng

    def num(self) -> int:
        return draw_operand(self.rng, *VALUE_RANGE)

    def small(self) -> int:
        return self.rng.randint(*FLOOR_MOD_RANGE)

    def op(self) -> str:
        return self.rng.choice(TERM_OPERATORS)

    def cmp(self) -> str:
        return self.rng.choice(COMPARISON_OPERATORS)


# easy: if/else


def assign_compare(d: _Draw, words: Sequence[str]) -> Program:
    return Program(
        (("a", const(d.num())), ("b", const(d.num())), ("res", term("a", d.op(), "b"))),
        if_else(Condition(term("res"), d.cmp(), const(d.num())), Print(words[0]), Print(words[1])),
    )


def inline_compare(d: _Draw, words: Sequence[str]) -> Program:
    cond = Condition(term("x", d.op(), "y"), d.cmp(), term("y", d.op(), "z"))
    return Program(
        (("x", const(d.num())), ("y", const(d.num())), ("z", const(d.num()))),
        if_else(cond, Print(words[0]), Print(words[1])),
    )


def literal_compare(d: _Draw, words: Sequence[str]) -> Program:
    cond = Condition(term("a", d.op(), d.num()), d.cmp(), const(d.num()))
    return Program((("a", const(d.num())),), if_else(cond, Print(words[0]), Print(words[1])))


def floor_mod_compare(d: _Draw, words: Sequence[str]) -> Program:
    cond = Condition(term("x", "//", "y"), d.cmp(), term("x", "%", "y"))
    return Program(
        (("x", const(d.small())), ("y", const(d.small()))),
        if_else(cond, Print(words[0]), Print(words[1])),
    )


# medium: if/elif/else


def sequential(d: _Draw, words: Sequence[str]) -> Program:
    return Program(
        (
            ("x", const(d.num())),
            ("y", const(d.num())),
            ("f", term("x", d.op(), "y")),
            ("s", term("x", d.op(), "f")),
        ),
        Branch(
            (
                (Condition(term("s"), ">", const(d.num())), Print(words[0])),
                (Condition(term("f"), "<", const(d.num())), Print(words[1])),
            ),
            Print(words[2]),
        ),
    )


def chain(d: _Draw, words: Sequence[str]) -> Program:
    left, right = term("a", d.op(), "b"), term("b", d.op(), "c")
    return Program(
        (("a", const(d.num())), ("b", const(d.num())), ("c", const(d.num()))),
        Branch(
            (
                (Condition(left, ">", right), Print(words[0])),
                (Condition(left, "==", right), Print(words[1])),
            ),
            Print(words[2]),
        ),
    )


def mixed(d: _Draw, words: Sequence[str]) -> Program:
    return Program(
        (("p", const(d.num())), ("q", const(d.num())), ("r", const(d.num()))),
        Branch(
            (
                (Condition(term("p", d.op(), "q"), d.cmp(), term("r", "*", 2)), Print(words[0])),
                (Condition(term("p"), d.cmp(), term("q")), Print(words[1])),
            ),
            Print(words[2]),
        ),
    )


# hard: nested if/else


def nested_calc(d: _Draw, words: Sequence[str]) -> Program:
    outer, inner = term("m", d.op(), "n"), term("n", d.op(), "k")
    return Program(
        (("m", const(d.num())), ("n", const(d.num())), ("k", const(d.num()))),
        if_else(
            Condition(outer, ">", const(0)),
            if_else(Condition(inner, ">", outer), Print(words[0]), Print(words[1])),
            if_else(Condition(inner, "<", const(0)), Print(words[2]), Print(words[3])),
        ),
    )


def nested_inner(d: _Draw, words: Sequence[str]) -> Program:
    op = d.op()
    return Program(
        (("u", const(d.num())), ("v", const(d.num())), ("w", const(d.num()))),
        if_else(
            Condition(term("u", d.op(), "v"), d.cmp(), term("w")),
            if_else(
                Condition(term("v", op, "w"), d.cmp(), term("u", op, "w")),
                Print(words[0]),
                Print(words[1]),
            ),
            if_else(Condition(term("u"), d.cmp(), term("v")), Print(words[2]), Print(words[3])),
        ),
    )


def multi_level(d: _Draw, words: Sequence[str]) -> Program:
    return Program(
        (
            ("s", const(d.num())),
            ("t", const(d.num())),
            ("t1", term("s", d.op(), "t")),
            ("t2", term("s", d.op(), "t1")),
            ("f", term("t1", "+", "t2")),
        ),
        if_else(
            Condition(term("f"), ">", const(0)),
            if_else(Condition(term("t2"), ">", term("t1")), Print(words[0]), Print(words[1])),
            if_else(Condition(term("t1"), ">", term("s")), Print(words[2]), Print(words[3])),
        ),
    )


Shape = Callable[[_Draw, Sequence[str]], Program]

SHAPES: Dict[Difficulty, Tuple[Tuple[Shape, int], ...]] = {
    Difficulty.EASY: (
        (assign_compare, 2),
        (inline_compare, 2),
        (literal_compare, 2),
        (floor_mod_compare, 2),
    ),
    Difficulty.MEDIUM: ((sequential, 3), (chain, 3), (mixed, 3)),
    Difficulty.HARD: ((nested_calc, 4), (nested_inner, 4), (multi_level, 4)),
}


def sample_program(rng: random.Random, difficulty: Difficulty) -> Program:
    shape, word_count = rng.choice(SHAPES[difficulty])
    program = shape(_Draw(rng), distinct_words(rng, word_count))
    for cond in conditions(program.body):
        if cond.lhs.render() == cond.rhs.render():
            raise ConstraintExhausted(f"both sides of {cond.render()!r} are the same")
    return program


@register(Subtopic.CONDITIONALS)
class ConditionalsGenerator(QuestionGenerator):
    def build(self, difficulty: Difficulty) -> Draft:
        program = sample_program(self.rng, difficulty)
        return Draft(question=question_text(render_program(program)), answer=run(program))

"""Rendering helpers shared by the per-subtopic snippet formatters."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence, Union

PROMPT = "What will this print?"
INDENT = "    "
WRAP_EVERY = 6

_SAFE_TOKEN_RE = re.compile(r"[A-Za-z0-9 _\-.]*")

Literal = Union[int, float, str]


def question_text(snippet: str, prompt: str = PROMPT) -> str:
    return f"{prompt}\n\n```python\n{snippet}\n```"


def code(lines: Iterable[str]) -> str:
    return "\n".join(lines)


def indent(lines: Iterable[str], depth: int = 1) -> List[str]:
    pad = INDENT * depth
    return [pad + line for line in lines]


def is_safe_token(token: Literal) -> bool:
    """True when ``token`` can be interpolated without HTML escaping."""
    return bool(_SAFE_TOKEN_RE.fullmatch(str(token)))


def quote(word: str) -> str:
    if not is_safe_token(word):
        raise ValueError(f"Unsafe display token {word!r}")
    return f'"{word}"'


def literal(value: Literal) -> str:
    if isinstance(value, str):
        return quote(value)
    return str(value)


def python_list_literal(
    values: Sequence[Literal], var_name: str, per_line: Optional[int] = None
) -> str:
    """``name = [a, b, ...]``, optionally wrapped every ``per_line`` items.

    Continuation lines line up under the first element, i.e. they are
    indented by ``len(name) + 4`` spaces (``name = [`` is that wide).
    """
    items = [literal(v) for v in values]
    head = f"{var_name} = ["
    if not per_line or len(items) <= per_line:
        return head + ", ".join(items) + "]"

    rows = [", ".join(items[i : i + per_line]) for i in range(0, len(items), per_line)]
    pad = " " * (len(var_name) + 4)
    return head + (",\n" + pad).join(rows) + "]"


def render_operand(value: Union[int, float, str], base_of_power: bool = False) -> str:
    text = str(value)
    if base_of_power and isinstance(value, (int, float)) and value < 0:
        return f"({text})"
    return text


def render_expression(operands: Sequence[Union[int, float, str]], operators: Sequence[str]) -> str:
    """Join operands with operators; a negative ``**`` base is parenthesized."""
    parts = [render_operand(operands[0], bool(operators) and operators[0] == "**")]
    for idx, op in enumerate(operators):
        nxt = operands[idx + 1]
        is_base = idx + 1 < len(operators) and operators[idx + 1] == "**"
        parts.append(op)
        parts.append(render_operand(nxt, is_base))
    return " ".join(parts)

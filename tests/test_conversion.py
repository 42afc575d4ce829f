import random
import re

import pytest

from generators.conversion import (
    DECIMAL_CEILING,
    ConversionGenerator,
    ConversionParams,
    format_conversion,
    from_base,
    to_base,
)
from questions import Difficulty, FillQuestion


@pytest.mark.parametrize("base", [2, 16])
def test_round_trip(base):
    for d in range(1, 256):
        assert from_base(to_base(d, base), base) == d


def test_matches_builtin_formatting():
    assert from_base("FF", 16) == 255
    for d in range(0, 256):
        assert to_base(d, 2) == format(d, "b")
        assert to_base(d, 16) == format(d, "x")


@pytest.mark.parametrize(
    "text, base",
    [("102", 2), ("fg", 16), ("", 16), ("-101", 2), ("1_0", 2), ("0x1f", 16), ("0b11", 2)],
)
def test_rejects_non_plain_numbers(text, base):
    with pytest.raises(ValueError):
        from_base(text, base)


def test_rejects_unsupported_bases():
    with pytest.raises(ValueError):
        from_base("17", 8)
    with pytest.raises(ValueError):
        to_base(10, 8)


def test_hex_answers_ignore_case():
    draft = format_conversion(ConversionParams(value=255, base=16, to_decimal=False))
    assert draft.answer == "ff"
    assert draft.case_sensitive is False

    hex_q = FillQuestion(
        topic="python",
        subtopic="conversion",
        difficulty="hard",
        question=draft.question,
        answer=draft.answer,
        case_sensitive=draft.case_sensitive,
    )
    assert hex_q.is_correct("FF")
    assert hex_q.is_correct(" ff ")


def test_other_answers_are_case_sensitive():
    binary = format_conversion(ConversionParams(value=5, base=2, to_decimal=False))
    assert binary.answer == "101" and binary.case_sensitive is True
    decimal = format_conversion(ConversionParams(value=26, base=16, to_decimal=True))
    assert decimal.answer == "26" and decimal.case_sensitive is True
    assert "1a" in decimal.question


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_values_stay_under_ceiling(difficulty):
    gen = ConversionGenerator(rng=random.Random(4))
    for q in gen.generate(difficulty, 60):
        shown = re.search(r"decimal number (\d+)", q.question)
        decimal = int(shown.group(1)) if shown else int(q.answer)
        assert 1 <= decimal <= DECIMAL_CEILING[difficulty]
        assert not q.answer.startswith(("0b", "0x"))
        assert q.case_sensitive is not ("hexadecimal representation" in q.question)


def test_hostile_count_terminates_with_short_batch():
    gen = ConversionGenerator(rng=random.Random(1), retry_multiplier=5)
    questions = gen.generate(Difficulty.EASY, 5000)
    # 31 values x 2 bases x 2 directions
    assert 0 < len(questions) <= 124
    assert len({q.question for q in questions}) == len(questions)

import random

import pytest

from generators.algorithms import PUZZLES, AlgorithmsGenerator, perfect_number, prime_check
from questions import Difficulty


def test_fifteen_puzzles():
    assert sum(len(p) for p in PUZZLES.values()) == 15


@pytest.mark.parametrize("difficulty", list(Difficulty))
@pytest.mark.parametrize("seed", range(5))
def test_every_puzzle_prints_its_answer(difficulty, seed, run_snippet):
    rng = random.Random(seed)
    for puzzle in PUZZLES[difficulty]:
        for _ in range(20):
            lines, answer = puzzle(rng)
            question = "What will this print?\n\n```python\n" + "\n".join(lines) + "\n```"
            assert run_snippet(question) == answer, question


def test_boolean_answers_use_python_spelling():
    rng = random.Random(1)
    answers = {prime_check(rng)[1] for _ in range(100)} | {perfect_number(rng)[1] for _ in range(100)}
    assert answers == {"True", "False"}


def test_generator_batch_is_unique():
    gen = AlgorithmsGenerator(rng=random.Random(12))
    questions = gen.generate(Difficulty.EASY, 80)
    assert len(questions) == 80
    assert len({q.question for q in questions}) == 80
    assert {q.subtopic for q in questions} == {"basic-algorithms"}

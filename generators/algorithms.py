"""Short algorithm-tracing puzzles built from loops, conditionals and lists.

Every puzzle samples its inputs once, renders them and then traces the same
inputs the way the rendered code would run.
"""

from __future__ import annotations

import random
from typing import Callable, Dict, List, Tuple

from generators.base import Draft, QuestionGenerator
from generators.registry import register
from questions import Difficulty, Subtopic
from snippets import code, indent, python_list_literal, question_text

Puzzle = Tuple[List[str], str]

SCIENCE_WORDS = (
    "atom", "acceleration", "algebra", "angle", "bacteria", "biodiversity",
    "carbon", "cell", "circle", "density", "diameter", "equation", "element",
    "energy", "friction", "force", "genetics", "gravity", "hydrogen", "integer",
    "kinetic", "mass", "molecule", "neutron", "oxygen", "photosynthesis",
    "polygon", "pressure", "quadratic", "radius", "speed", "temperature",
    "velocity", "volume",
)  # fmt: skip
START_LETTERS = ("a", "b", "c", "m", "p")

CONTAINS_WORDS = (
    "mitosis", "respiration", "photosynthesis", "chromosome", "ecosystem",
    "formula", "theorem", "factorization", "polynomial", "triangle",
    "rectangle", "coordinate", "proportion", "statistics", "probability",
    "magnetic", "electric", "chemical", "physical", "organic", "compound",
    "solution", "reaction", "isotope",
)  # fmt: skip
CONTAINS_LETTERS = ("e", "o", "t", "a", "i")

T_WORDS = (
    "orbit", "habitat", "magnet", "vertex", "factor", "vector", "centre",
    "matter", "rotational", "potential", "systematic", "genetics",
    "mathematics", "statistics", "quadratic", "arithmetic",
)  # fmt: skip

SORT_WORDS = (
    "atom", "biology", "carbon", "density", "element", "friction", "genetics",
    "hydrogen", "isotope", "kinetic", "molecule", "neutron", "oxygen",
    "polygon", "quadratic", "radius", "statistics", "triangle", "velocity",
    "volume",
)  # fmt: skip

PHRASES = (
    " Cellular respiration ", "Photosynthesis process", " Light reaction ",
    "Gravitational force", "Nuclear fusion", " Atomic structure ",
    "Chemical bonding", " Periodic table ", "Electromagnetic waves",
    " Sound waves ", "Heat transfer", " Newton laws ", " Quadratic equation ",
    " Linear equation ", " Polynomial function ", " Trigonometric ratio ",
    " Circle theorem ", " Triangle inequality ", " Probability theory ",
    " Statistics data ", " Cell wall ", " DNA RNA ", " Photon ", "Gravity",
    " Enzyme ", " Protein ", "Ion bond", " pH scale ", " Neutron ",
    " Proton ", " Electron ", " Mitosis ", " Prime number ", " Integer set ",
    " Rational number ", " Real number ",
)  # fmt: skip

PRIME_CHOICES = (7, 11, 13, 17, 19, 23)
COMPOSITE_CHOICES = (8, 9, 10, 12, 14, 15, 16, 18, 20, 21, 22, 24, 25)
PERFECT_CHOICES = (6, 28)
NOT_PERFECT_CHOICES = (8, 10, 12, 14, 16, 18, 20, 22, 24, 26, 30)
PALINDROMES = ((1, 2, 1), (3, 4, 3), (5, 6, 7, 6, 5), (8, 9, 8), (1, 2, 3, 2, 1))
NOT_PALINDROMES = ((1, 2, 3), (4, 5, 6), (7, 8, 9, 1), (2, 3, 4, 5), (6, 7, 8, 9, 1))


def _picks(rng: random.Random, vocabulary, low: int, high: int) -> List[str]:
    return [rng.choice(vocabulary) for _ in range(rng.randint(low, high))]


def _index(rng: random.Random, size: int) -> int:
    """A valid index into a list of ``size``, negative half of the time."""
    if rng.random() < 0.5:
        return -rng.randint(1, size)
    return rng.randint(0, size - 1)


def _while(cond: str, body: List[str], step: str = "i += 1") -> List[str]:
    return [f"while {cond}:", *indent(body + [step])]


def _bubble_pass(items: list, key=lambda v: v) -> list:
    out = list(items)
    for i in range(len(out) - 1):
        if key(out[i]) > key(out[i + 1]):
            out[i], out[i + 1] = out[i + 1], out[i]
    return out


# easy


def count_even(rng: random.Random) -> Puzzle:
    nums = [rng.randint(1, 9) for _ in range(rng.randint(8, 15))]
    lines = [
        python_list_literal(nums, "arr"),
        "x = 0",
        "for val in arr:",
        *indent(["if val % 2 == 0:", *indent(["x += 1"])]),
        "print(x)",
    ]
    return lines, str(sum(1 for n in nums if n % 2 == 0))


def find_maximum(rng: random.Random) -> Puzzle:
    nums = [rng.randint(1, 20) for _ in range(rng.randint(8, 15))]
    val, pos = nums[0], 0
    for i in range(1, len(nums)):
        if nums[i] > val:
            val, pos = nums[i], i
    lines = [
        python_list_literal(nums, "arr"),
        "val = arr[0]",
        "pos = 0",
        "i = 1",
        *_while("i < len(arr)", ["if arr[i] > val:", *indent(["val = arr[i]", "pos = i"])]),
        "print(pos)",
    ]
    return lines, str(pos)


def sum_digits(rng: random.Random) -> Puzzle:
    n = rng.randint(123, 999)
    total, rest = 0, n
    while rest > 0:
        total += rest % 10
        rest //= 10
    lines = [f"n = {n}", "x = 0", *_while("n > 0", ["x += n % 10"], "n = n // 10"), "print(x)"]
    return lines, str(total)


def words_starting_with(rng: random.Random) -> Puzzle:
    words = _picks(rng, SCIENCE_WORDS, 8, 12)
    letter = rng.choice(START_LETTERS)
    lines = [
        python_list_literal(words, "w"),
        f't = "{letter}"',
        "x = 0",
        "for wrd in w:",
        *indent(["if wrd.lower().startswith(t):", *indent(["x += 1"])]),
        "print(x)",
    ]
    return lines, str(sum(1 for w in words if w.lower().startswith(letter)))


def words_containing(rng: random.Random) -> Puzzle:
    words = _picks(rng, CONTAINS_WORDS, 8, 12)
    letter = rng.choice(CONTAINS_LETTERS)
    lines = [
        python_list_literal(words, "w"),
        f'ltr = "{letter}"',
        "x = 0",
        "for wrd in w:",
        *indent(["if ltr in wrd.lower():", *indent(["x += 1"])]),
        "print(x)",
    ]
    return lines, str(sum(1 for w in words if letter in w.lower()))


# medium


def prime_check(rng: random.Random) -> Puzzle:
    n = rng.choice(PRIME_CHOICES + COMPOSITE_CHOICES)
    flag = all(n % i != 0 for i in range(2, n))
    lines = [
        f"n = {n}",
        "f = True",
        "i = 2",
        *_while("i < n", ["if n % i == 0:", *indent(["f = False"])]),
        "print(f)",
    ]
    return lines, str(flag)


def count_factors(rng: random.Random) -> Puzzle:
    n = rng.randint(6, 20)
    lines = [
        f"n = {n}",
        "c = 0",
        "i = 1",
        *_while("i <= n", ["if n % i == 0:", *indent(["c += 1"])]),
        "print(c)",
    ]
    return lines, str(sum(1 for i in range(1, n + 1) if n % i == 0))


def reverse_number(rng: random.Random) -> Puzzle:
    n = rng.randint(123, 987)
    rev, rest = 0, n
    while rest > 0:
        rev = rev * 10 + rest % 10
        rest //= 10
    lines = [
        f"n = {n}",
        "r = 0",
        *_while("n > 0", ["r = r * 10 + n % 10"], "n = n // 10"),
        "print(r)",
    ]
    return lines, str(rev)


def palindrome_list(rng: random.Random) -> Puzzle:
    nums = list(rng.choice(PALINDROMES + NOT_PALINDROMES))
    flag = all(nums[i] == nums[len(nums) - 1 - i] for i in range(len(nums) // 2))
    lines = [
        python_list_literal(nums, "arr"),
        "b = True",
        "i = 0",
        *_while("i < len(arr) // 2", ["if arr[i] != arr[len(arr) - 1 - i]:", *indent(["b = False"])]),
        "print(b)",
    ]
    return lines, str(flag)


def fibonacci_index(rng: random.Random) -> Puzzle:
    n = rng.randint(4, 7)
    seq = [0, 1]
    while len(seq) < n:
        seq.append(seq[-1] + seq[-2])
    index = _index(rng, n)
    lines = [
        f"n = {n}",
        "s = [0, 1]",
        "i = 2",
        *_while("i < n", ["s.append(s[i - 1] + s[i - 2])"]),
        f"print(s[{index}])",
    ]
    return lines, str(seq[index])


def letter_before_t(rng: random.Random) -> Puzzle:
    words = _picks(rng, T_WORDS, 6, 10)
    counts: Dict[str, int] = {}
    for word in words:
        for i in range(len(word) - 1):
            if word[i + 1].lower() == "t":
                ch = word[i].lower()
                counts[ch] = counts.get(ch, 0) + 1
    best, most = "x", 0
    for ch, count in counts.items():
        if count > most:
            best, most = ch, count

    lines = [
        python_list_literal(words, "w"),
        "cnt = {}",
        "for wrd in w:",
        *indent(
            [
                "for i in range(len(wrd) - 1):",
                *indent(
                    [
                        'if wrd[i + 1].lower() == "t":',
                        *indent(
                            [
                                "ch = wrd[i].lower()",
                                "if ch in cnt:",
                                *indent(["cnt[ch] += 1"]),
                                "else:",
                                *indent(["cnt[ch] = 1"]),
                            ]
                        ),
                    ]
                ),
            ]
        ),
        'mc = "x"',
        "mn = 0",
        "for ch, count in cnt.items():",
        *indent(["if count > mn:", *indent(["mn = count", "mc = ch"])]),
        "print(mc)",
    ]
    return lines, best


# hard


def bubble_pass_numbers(rng: random.Random) -> Puzzle:
    nums = [rng.randint(1, 9) for _ in range(4)]
    after = _bubble_pass(nums)
    index = _index(rng, len(nums))
    lines = [
        python_list_literal(nums, "a"),
        "i = 0",
        *_while(
            "i < len(a) - 1",
            ["if a[i] > a[i + 1]:", *indent(["tmp = a[i]", "a[i] = a[i + 1]", "a[i + 1] = tmp"])],
        ),
        f"print(a[{index}])",
    ]
    return lines, str(after[index])


def perfect_number(rng: random.Random) -> Puzzle:
    n = rng.choice(PERFECT_CHOICES + NOT_PERFECT_CHOICES)
    divisor_sum = sum(i for i in range(1, n) if n % i == 0)
    lines = [
        f"n = {n}",
        "s = 0",
        "i = 1",
        *_while("i < n", ["if n % i == 0:", *indent(["s += i"])]),
        "res = s == n",
        "print(res)",
    ]
    return lines, str(divisor_sum == n)


def bubble_pass_words(rng: random.Random) -> Puzzle:
    words = _picks(rng, SORT_WORDS, 5, 8)
    after = _bubble_pass(words, key=str.lower)
    index = _index(rng, len(words))
    lines = [
        python_list_literal(words, "w"),
        "i = 0",
        *_while(
            "i < len(w) - 1",
            [
                "if w[i].lower() > w[i + 1].lower():",
                *indent(["tmp = w[i]", "w[i] = w[i + 1]", "w[i + 1] = tmp"]),
            ],
        ),
        f"print(w[{index}])",
    ]
    return lines, after[index]


def string_pipeline(rng: random.Random) -> Puzzle:
    phrases = _picks(rng, PHRASES, 4, 6)
    threshold = rng.randint(8, 12)
    result = 0
    for phrase in phrases:
        processed = phrase.strip().replace(" ", "_").lower()
        if len(processed) > threshold:
            result += len(processed.split("_"))
    lines = [
        python_list_literal(phrases, "w"),
        "res = 0",
        "for wrd in w:",
        *indent(
            [
                'p = wrd.strip().replace(" ", "_").lower()',
                f"if len(p) > {threshold}:",
                *indent(['res += len(p.split("_"))']),
            ]
        ),
        "print(res)",
    ]
    return lines, str(result)


PUZZLES: Dict[Difficulty, Tuple[Callable[[random.Random], Puzzle], ...]] = {
    Difficulty.EASY: (count_even, find_maximum, sum_digits, words_starting_with, words_containing),
    Difficulty.MEDIUM: (
        prime_check,
        count_factors,
        reverse_number,
        palindrome_list,
        fibonacci_index,
        letter_before_t,
    ),
    Difficulty.HARD: (bubble_pass_numbers, perfect_number, bubble_pass_words, string_pipeline),
}


@register(Subtopic.BASIC_ALGORITHMS)
class AlgorithmsGenerator(QuestionGenerator):
    def build(self, difficulty: Difficulty) -> Draft:
        puzzle = self.rng.choice(PUZZLES[difficulty])
        lines, answer = puzzle(self.rng)
        return Draft(question=question_text(code(lines)), answer=answer)

"""Exercise Text Generator

Builds the practice text for one curriculum step out of the letters known
at that step. Three kinds of drill line are produced:

- A/B contrast lines alternating the step's two letters
- repetition groups of each focus letter
- pseudo-words sampled from the known alphabet, weighted toward the focus
  letters, each containing at least one of them

Output depends only on ``(index, rng)``; pass a seeded ``random.Random``
for reproducible text.
"""
import random

from core.logging import engine_logger
from engines.curriculum import get_step, known_letters_up_to

log = engine_logger()

PATTERN_LINES = 2
PSEUDO_WORD_LINES = 3
WORDS_PER_LINE = 6
WORD_LENGTH = (2, 5)
FOCUS_WEIGHT = 3


def _pattern_templates(a: str, b: str) -> list[str]:
    return [
        f"{a}{b}{a}{b}{a} {b}{a}{a}{b} {a}{b}{b}{b}{a}",
        f"{b}{a}{b}{a}{b} {a}{b}{b}{a} {b}{b}{a}{a}{b}",
        f"{a * 4} {b * 4} {a}{b}{a}{b}{a}{b}",
        f"{a}{a}{b}{b} {b}{a}{a}{b} {a}{b}{b}{a}{a}",
        f"{b}{b}{a}{a} {a}{b}{a}{a}{b} {b}{a}{b}{b}{a}",
        f"{a}{b}{a}{a}{b} {b}{a}{b}{a}{a} {a}{a}{b}{b}{a}",
    ]


def build_pattern_lines(pair: tuple[str, str], rng: random.Random, lines: int = PATTERN_LINES) -> list[str]:
    """A/B contrast lines for the step's two letters."""
    a, b = pair
    return rng.sample(_pattern_templates(a, b), lines)


def build_repetition_line(focus: list[str], rng: random.Random) -> str:
    groups = []
    for letter in focus:
        groups.extend(letter * rng.randint(2, 4) for _ in range(2))
    rng.shuffle(groups)
    return " ".join(groups)


def build_pseudo_word(alphabet: list[str], weights: list[int], focus: list[str], rng: random.Random) -> str:
    length = rng.randint(*WORD_LENGTH)
    letters = rng.choices(alphabet, weights=weights, k=length)
    if not any(letter in focus for letter in letters):
        letters[rng.randrange(length)] = rng.choice(focus)
    return "".join(letters)


def build_pseudo_word_lines(
    known: list[str],
    focus: list[str],
    rng: random.Random,
    lines: int = PSEUDO_WORD_LINES,
) -> list[str]:
    weights = [FOCUS_WEIGHT if letter in focus else 1 for letter in known]
    return [
        " ".join(build_pseudo_word(known, weights, focus, rng) for _ in range(WORDS_PER_LINE))
        for _ in range(lines)
    ]


def _resolve_rng(rng: random.Random | int | None) -> random.Random:
    if isinstance(rng, random.Random):
        return rng
    return random.Random(rng)


def generate_exercise_text(index: int, rng: random.Random | int | None = None) -> list[str]:
    """Practice lines for curriculum step ``index``.

    Every non-space character belongs to ``known_letters_up_to(index)``.
    ``rng`` may be a ``random.Random``, an int seed, or None for fresh entropy.
    """
    step = get_step(index)
    if step is None:
        raise IndexError(f"No curriculum step at index {index}")

    rng = _resolve_rng(rng)
    known = list(dict.fromkeys(known_letters_up_to(index)))
    focus = list(dict.fromkeys(step.new_letters))

    text: list[str] = []
    if len(focus) == 2:
        text.extend(build_pattern_lines((focus[0], focus[1]), rng))
    text.append(build_repetition_line(focus, rng))
    text.extend(build_pseudo_word_lines(known, focus, rng))

    log.debug(
        "exercise_text_generated",
        index=index,
        kind=step.kind.value,
        known_letters=len(known),
        lines=len(text),
    )
    return text

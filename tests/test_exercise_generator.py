import random
from collections import Counter

import pytest

from engines.curriculum import ExerciseKind, curriculum, get_step, known_letters_up_to
from engines.exercises import build_pseudo_word, generate_exercise_text


def _letters(lines: list[str]) -> list[str]:
    return [ch for line in lines for ch in line if not ch.isspace()]


@pytest.mark.parametrize("index", range(19))
def test_text_uses_only_known_letters(index):
    known = set(known_letters_up_to(index))
    for seed in range(5):
        lines = generate_exercise_text(index, random.Random(seed))
        assert lines
        assert all(line.strip() for line in lines)
        assert set(_letters(lines)) <= known


def test_same_seed_same_text():
    assert generate_exercise_text(7, random.Random(42)) == generate_exercise_text(7, random.Random(42))
    assert generate_exercise_text(7, 42) == generate_exercise_text(7, 42)


def test_fresh_entropy_varies_text():
    texts = {tuple(generate_exercise_text(12)) for _ in range(5)}
    assert len(texts) > 1


def test_first_step_only_uses_its_two_letters():
    lines = generate_exercise_text(0, random.Random(3))
    assert set(_letters(lines)) == {"כ", "ח"}


@pytest.mark.parametrize("step", [s for s in curriculum() if s.kind is ExerciseKind.REVIEW], ids=lambda s: s.id)
def test_review_letters_dominate(step):
    counts = Counter(_letters(generate_exercise_text(step.index, random.Random(step.index))))
    focus = set(step.new_letters)
    others = [n for letter, n in counts.items() if letter not in focus]
    for letter in focus:
        assert counts[letter] > max(others, default=0)


def test_pseudo_words_always_contain_a_focus_letter():
    rng = random.Random(9)
    alphabet = list(known_letters_up_to(14))
    focus = list(get_step(14).new_letters)
    weights = [1] * len(alphabet)
    for _ in range(200):
        word = build_pseudo_word(alphabet, weights, focus, rng)
        assert 2 <= len(word) <= 5
        assert any(ch in focus for ch in word)


def test_unknown_step_raises():
    with pytest.raises(IndexError):
        generate_exercise_text(19, random.Random(0))

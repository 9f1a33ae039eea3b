import pytest

from content import final_letters, hebrew_letters
from engines.curriculum import (
    ExerciseKind,
    curriculum,
    exercise_id,
    get_step,
    known_letters_up_to,
    label_for,
)


def test_curriculum_has_nineteen_steps_indexed_by_position():
    steps = curriculum()
    assert len(steps) == 19
    assert [s.index for s in steps] == list(range(19))


def test_first_step_introduces_kaf_and_het():
    step = get_step(0)
    assert step.new_letters == ("כ", "ח")
    assert step.kind is ExerciseKind.PRACTICE
    assert step.id == "practice-0"
    assert label_for(step) == "כ ח (Practice)"


def test_review_label_and_id():
    step = get_step(4)
    assert step.kind is ExerciseKind.REVIEW
    assert step.label == "כ ל (Review)"
    assert step.id == "review-4"


def test_review_steps_only_name_practiced_letters():
    introduced: set[str] = set()
    for step in curriculum():
        if step.kind is ExerciseKind.REVIEW:
            assert set(step.new_letters) <= introduced
        else:
            introduced.update(step.new_letters)


def test_known_letters_is_flattened_prefix():
    assert known_letters_up_to(0) == ("כ", "ח")
    assert known_letters_up_to(1) == ("כ", "ח", "ג", "ל")
    # review steps repeat letters
    assert known_letters_up_to(4).count("כ") == 2


@pytest.mark.parametrize("index", range(18))
def test_known_letters_grow_monotonically(index):
    current = known_letters_up_to(index)
    following = known_letters_up_to(index + 1)
    assert following[: len(current)] == current
    assert set(current) <= set(following)


def test_negative_index_knows_nothing():
    assert known_letters_up_to(-1) == ()
    assert known_letters_up_to(-50) == ()


def test_index_past_end_clamps_to_last_step():
    assert known_letters_up_to(19) == known_letters_up_to(18)
    assert known_letters_up_to(1000) == known_letters_up_to(18)


def test_full_curriculum_covers_alphabet_and_final_forms():
    expected = set(hebrew_letters()) | set(final_letters().values())
    assert set(known_letters_up_to(18)) == expected


def test_get_step_out_of_range():
    assert get_step(-1) is None
    assert get_step(19) is None


def test_exercise_id_is_kind_and_index():
    assert exercise_id(3, ExerciseKind.PRACTICE) == "practice-3"
    assert exercise_id(19, ExerciseKind.TEXT) == "text-19"

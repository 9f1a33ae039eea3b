"""Letter Curriculum Model

The fixed order in which the keyboard alphabet is introduced: two letters
per step, each step tagged PRACTICE (new letters) or REVIEW (letters from
an earlier practice step). Loaded once from ``letter_exercises.yaml``.
"""
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from content import letter_exercise_descriptors

LetterPair = tuple[str, str]


class ExerciseKind(str, Enum):
    PRACTICE = "practice"
    REVIEW = "review"
    TEXT = "text"

    @property
    def title(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True, slots=True)
class CurriculumStep:
    """One "introduce these two letters" step."""
    index: int
    new_letters: LetterPair
    kind: ExerciseKind

    @property
    def label(self) -> str:
        return label_for(self)

    @property
    def id(self) -> str:
        return exercise_id(self.index, self.kind)


def _parse_step(index: int, raw: dict) -> CurriculumStep:
    letters = raw["new_letters"]
    if len(letters) != 2:
        raise ValueError(f"Curriculum step {index} must name exactly two letters, got {letters!r}")
    return CurriculumStep(
        index=index,
        new_letters=(letters[0], letters[1]),
        kind=ExerciseKind(raw["type"]),
    )


@lru_cache(maxsize=1)
def curriculum() -> tuple[CurriculumStep, ...]:
    """The ordered curriculum, index == position."""
    steps = tuple(_parse_step(i, raw) for i, raw in enumerate(letter_exercise_descriptors()))
    _check_reviews(steps)
    return steps


def _check_reviews(steps: tuple[CurriculumStep, ...]) -> None:
    introduced: set[str] = set()
    for step in steps:
        if step.kind is ExerciseKind.REVIEW:
            unknown = [l for l in step.new_letters if l not in introduced]
            if unknown:
                raise ValueError(
                    f"Review step {step.index} names letters not yet practiced: {unknown}"
                )
        else:
            introduced.update(step.new_letters)


def step_count() -> int:
    return len(curriculum())


def get_step(index: int) -> CurriculumStep | None:
    steps = curriculum()
    if 0 <= index < len(steps):
        return steps[index]
    return None


def known_letters_up_to(index: int) -> tuple[str, ...]:
    """Letters introduced by steps ``0..index`` in introduction order.

    Negative indices yield an empty tuple; indices past the end are clamped
    to the last step. Repeats (review steps) are kept.
    """
    if index < 0:
        return ()
    steps = curriculum()
    last = min(index, len(steps) - 1)
    return tuple(letter for step in steps[: last + 1] for letter in step.new_letters)


def label_for(step: CurriculumStep) -> str:
    return f"{step.new_letters[0]} {step.new_letters[1]} ({step.kind.title})"


def exercise_id(index: int, kind: ExerciseKind) -> str:
    return f"{kind.value}-{index}"

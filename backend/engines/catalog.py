"""Exercise Catalog

One addressable list of every exercise: the generated letter drills
followed by the fixed free-text passages. The catalog also owns the
learner's current selection.
"""
import random
from dataclasses import dataclass, replace

from content import text_exercises
from core.logging import engine_logger
from engines.curriculum import (
    CurriculumStep,
    ExerciseKind,
    LetterPair,
    curriculum,
    exercise_id,
)
from engines.exercises import generate_exercise_text

log = engine_logger()


@dataclass(frozen=True, slots=True)
class Exercise:
    """A letter drill (``new_letters`` set) or a free-text passage."""
    id: str
    index: int
    kind: ExerciseKind
    text: tuple[str, ...]
    label: str
    new_letters: LetterPair | None = None

    @property
    def is_letter_exercise(self) -> bool:
        return self.kind is not ExerciseKind.TEXT

    @property
    def target_text(self) -> str:
        """The lines joined the way the learner types them."""
        return "\n".join(self.text)


@dataclass(frozen=True, slots=True)
class ExerciseSummary:
    id: str
    index: int
    kind: ExerciseKind
    label: str


class ExerciseCatalog:
    """Catalog of letter and free-text exercises with the current selection.

    Usage:
        catalog = ExerciseCatalog()
        catalog.select_by_id("practice-0")
        catalog.current.text
        catalog.regenerate()
    """

    __slots__ = ("_rng", "_steps", "_free_text", "_summaries", "_current")

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()
        self._steps: tuple[CurriculumStep, ...] = curriculum()
        offset = len(self._steps)
        self._free_text = tuple(
            Exercise(
                id=exercise_id(offset + i, ExerciseKind.TEXT),
                index=offset + i,
                kind=ExerciseKind.TEXT,
                text=data.text,
                label=data.label,
            )
            for i, data in enumerate(text_exercises())
        )
        self._summaries = tuple(
            ExerciseSummary(id=s.id, index=s.index, kind=s.kind, label=s.label) for s in self._steps
        ) + tuple(
            ExerciseSummary(id=e.id, index=e.index, kind=e.kind, label=e.label) for e in self._free_text
        )
        self._current: Exercise | None = None

    def __len__(self) -> int:
        return len(self._summaries)

    @property
    def current(self) -> Exercise | None:
        return self._current

    @property
    def current_letter(self) -> str | None:
        """First of the active letter drill's new letters."""
        if self._current is None or self._current.new_letters is None:
            return None
        return self._current.new_letters[0]

    @property
    def letter_exercise_count(self) -> int:
        return len(self._steps)

    @property
    def text_exercises(self) -> tuple[Exercise, ...]:
        return self._free_text

    def summaries(self) -> tuple[ExerciseSummary, ...]:
        """Every exercise in global index order, without text."""
        return self._summaries

    def get(self, index: int) -> Exercise | None:
        """Build the exercise at ``index`` (letter text freshly generated)."""
        if 0 <= index < len(self._steps):
            return self._letter_exercise(self._steps[index])
        offset = index - len(self._steps)
        if 0 <= offset < len(self._free_text):
            return self._free_text[offset]
        return None

    def all_exercises(self) -> list[Exercise]:
        return [self.get(summary.index) for summary in self._summaries]

    def _letter_exercise(self, step: CurriculumStep) -> Exercise:
        return Exercise(
            id=step.id,
            index=step.index,
            kind=step.kind,
            text=tuple(generate_exercise_text(step.index, self._rng)),
            label=step.label,
            new_letters=step.new_letters,
        )

    def _index_of(self, exercise_id_: str) -> int | None:
        for summary in self._summaries:
            if summary.id == exercise_id_:
                return summary.index
        return None

    def select_by_id(self, exercise_id_: str) -> Exercise | None:
        """Activate the exercise with this ID; unknown IDs leave state untouched."""
        index = self._index_of(exercise_id_)
        if index is None:
            log.debug("exercise_not_found", exercise_id=exercise_id_)
            return None
        return self._activate(index)

    def select_by_index(self, index: int) -> Exercise | None:
        """Activate the exercise at ``index``; misses leave state untouched."""
        if not 0 <= index < len(self._summaries):
            log.debug("exercise_not_found", index=index)
            return None
        return self._activate(index)

    def _activate(self, index: int) -> Exercise:
        exercise = self.get(index)
        self._current = exercise
        log.info("exercise_selected", exercise_id=exercise.id, index=index)
        return exercise

    def regenerate(self) -> Exercise | None:
        """Fresh text for the active letter drill. No-op otherwise."""
        current = self._current
        if current is None or not current.is_letter_exercise:
            return current
        self._current = replace(
            current, text=tuple(generate_exercise_text(current.index, self._rng))
        )
        log.debug("exercise_regenerated", exercise_id=current.id)
        return self._current

    def clear(self) -> None:
        self._current = None

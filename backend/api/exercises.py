"""Exercise Catalog API

Lists the catalog, builds exercises by index and drives the current
selection. Changing the active exercise resets the typing session.
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel, model_validator

from api.deps import get_catalog, get_estimator
from core.errors import not_found, raise_error
from engines.catalog import Exercise, ExerciseCatalog, ExerciseSummary
from engines.curriculum import ExerciseKind, get_step, known_letters_up_to
from engines.typing_speed import TypingSpeedEstimator

router = APIRouter()


class ExerciseSummaryOut(BaseModel):
    id: str
    index: int
    kind: ExerciseKind
    label: str

    @classmethod
    def from_summary(cls, summary: ExerciseSummary) -> "ExerciseSummaryOut":
        return cls(id=summary.id, index=summary.index, kind=summary.kind, label=summary.label)


class ExerciseOut(BaseModel):
    id: str
    index: int
    kind: ExerciseKind
    label: str
    text: list[str]
    new_letters: list[str] | None = None

    @classmethod
    def from_exercise(cls, exercise: Exercise) -> "ExerciseOut":
        return cls(
            id=exercise.id,
            index=exercise.index,
            kind=exercise.kind,
            label=exercise.label,
            text=list(exercise.text),
            new_letters=list(exercise.new_letters) if exercise.new_letters else None,
        )


class CurrentExercise(BaseModel):
    exercise: ExerciseOut | None
    current_letter: str | None


class SelectRequest(BaseModel):
    id: str | None = None
    index: int | None = None

    @model_validator(mode="after")
    def exactly_one_key(self) -> "SelectRequest":
        if (self.id is None) == (self.index is None):
            raise ValueError("Provide exactly one of 'id' or 'index'")
        return self


class KnownLetters(BaseModel):
    index: int
    letters: list[str]


def _current(catalog: ExerciseCatalog) -> CurrentExercise:
    exercise = catalog.current
    return CurrentExercise(
        exercise=ExerciseOut.from_exercise(exercise) if exercise else None,
        current_letter=catalog.current_letter,
    )


@router.get("", response_model=list[ExerciseSummaryOut])
async def list_exercises(catalog: ExerciseCatalog = Depends(get_catalog)):
    """Every exercise in global index order (letter drills first)."""
    return [ExerciseSummaryOut.from_summary(s) for s in catalog.summaries()]


@router.get("/current", response_model=CurrentExercise)
async def current_exercise(catalog: ExerciseCatalog = Depends(get_catalog)):
    return _current(catalog)


@router.post("/select", response_model=CurrentExercise)
async def select_exercise(
    request: SelectRequest,
    catalog: ExerciseCatalog = Depends(get_catalog),
    estimator: TypingSpeedEstimator = Depends(get_estimator),
):
    before = catalog.current
    if request.id is not None:
        exercise = catalog.select_by_id(request.id)
        key = request.id
    else:
        exercise = catalog.select_by_index(request.index)
        key = request.index

    if exercise is None:
        raise_error(not_found("Exercise", key, origin="api.exercises").error)

    # re-selecting the same drill still regenerates its text
    if exercise is not before:
        estimator.reset()
    return _current(catalog)


@router.post("/regenerate", response_model=CurrentExercise)
async def regenerate_exercise(
    catalog: ExerciseCatalog = Depends(get_catalog),
    estimator: TypingSpeedEstimator = Depends(get_estimator),
):
    """New random text for the active letter drill; the typing session restarts."""
    before = catalog.current
    after = catalog.regenerate()
    if after is not before:
        estimator.reset()
    return _current(catalog)


@router.post("/clear", response_model=CurrentExercise)
async def clear_exercise(
    catalog: ExerciseCatalog = Depends(get_catalog),
    estimator: TypingSpeedEstimator = Depends(get_estimator),
):
    catalog.clear()
    estimator.reset()
    return _current(catalog)


@router.get("/{index}/known-letters", response_model=KnownLetters)
async def known_letters(index: int):
    if get_step(index) is None:
        raise_error(not_found("Curriculum step", index, origin="api.exercises").error)
    return KnownLetters(index=index, letters=list(known_letters_up_to(index)))


@router.get("/{index}", response_model=ExerciseOut)
async def get_exercise(index: int, catalog: ExerciseCatalog = Depends(get_catalog)):
    """Build one exercise without selecting it."""
    exercise = catalog.get(index)
    if exercise is None:
        raise_error(not_found("Exercise", index, origin="api.exercises").error)
    return ExerciseOut.from_exercise(exercise)

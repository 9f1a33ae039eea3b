"""Typing Session API

The UI posts its keystroke state after every change; the estimator's
polling task keeps the reading current between posts.
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api.deps import get_catalog, get_estimator
from content import normalize_geresh
from core.errors import raise_error, validation_error
from engines.catalog import ExerciseCatalog
from engines.typing_speed import TypingReading, TypingSpeedEstimator, count_correct

router = APIRouter()


class ObserveRequest(BaseModel):
    typed_text: str
    target_text: str | None = Field(None, description="Defaults to the current exercise's text")
    correct_count: int | None = Field(None, ge=0, description="Defaults to a per-position character match")


class ReadingOut(BaseModel):
    wpm: int
    elapsed_seconds: float
    finished: bool
    started: bool
    polling: bool

    @classmethod
    def build(cls, reading: TypingReading, estimator: TypingSpeedEstimator) -> "ReadingOut":
        return cls(
            wpm=reading.wpm,
            elapsed_seconds=round(reading.elapsed_seconds, 3),
            finished=reading.finished,
            started=reading.started,
            polling=estimator.polling,
        )


@router.post("/observe", response_model=ReadingOut)
async def observe(
    request: ObserveRequest,
    catalog: ExerciseCatalog = Depends(get_catalog),
    estimator: TypingSpeedEstimator = Depends(get_estimator),
):
    target = request.target_text
    if target is None:
        if catalog.current is None:
            raise_error(validation_error(
                "No exercise selected and no target_text given",
                field="target_text",
                origin="api.typing",
            ).error)
        target = catalog.current.target_text

    typed = normalize_geresh(request.typed_text)
    target = normalize_geresh(target)
    correct = request.correct_count if request.correct_count is not None else count_correct(typed, target)

    reading = estimator.observe(typed, target, correct)
    return ReadingOut.build(reading, estimator)


@router.get("", response_model=ReadingOut)
async def reading(estimator: TypingSpeedEstimator = Depends(get_estimator)):
    return ReadingOut.build(estimator.reading, estimator)


@router.post("/reset", response_model=ReadingOut)
async def reset(estimator: TypingSpeedEstimator = Depends(get_estimator)):
    estimator.reset()
    return ReadingOut.build(estimator.reading, estimator)

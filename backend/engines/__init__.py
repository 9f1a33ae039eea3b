from engines.curriculum import (
    CurriculumStep,
    ExerciseKind,
    curriculum,
    known_letters_up_to,
    label_for,
    exercise_id,
)
from engines.exercises import generate_exercise_text
from engines.catalog import Exercise, ExerciseCatalog
from engines.typing_speed import TypingReading, TypingSpeedEstimator
from engines.speech import (
    PlaybackOutcome,
    SpeechOrchestrator,
    SpeechSource,
    SpeechSpeed,
    clip_path,
)

__all__ = [
    "CurriculumStep",
    "ExerciseKind",
    "curriculum",
    "known_letters_up_to",
    "label_for",
    "exercise_id",
    "generate_exercise_text",
    "Exercise",
    "ExerciseCatalog",
    "TypingReading",
    "TypingSpeedEstimator",
    "PlaybackOutcome",
    "SpeechOrchestrator",
    "SpeechSource",
    "SpeechSpeed",
    "clip_path",
]

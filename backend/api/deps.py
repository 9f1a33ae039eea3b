"""Request-scoped access to the engine objects built in the app lifespan."""
from fastapi import Request

from core.preferences import PreferencesStore
from engines.catalog import ExerciseCatalog
from engines.speech import SpeechOrchestrator
from engines.typing_speed import TypingSpeedEstimator


def get_catalog(request: Request) -> ExerciseCatalog:
    return request.app.state.catalog


def get_estimator(request: Request) -> TypingSpeedEstimator:
    return request.app.state.estimator


def get_speech(request: Request) -> SpeechOrchestrator:
    return request.app.state.speech


def get_preferences(request: Request) -> PreferencesStore:
    return request.app.state.preferences

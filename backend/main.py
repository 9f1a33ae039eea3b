from contextlib import asynccontextmanager
from pathlib import Path
from typing import Callable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from api import content, exercises, preferences, speech, typing_speed
from core.config import settings
from core.errors import register_error_handlers
from core.logging import configure_logging, get_logger
from core.middleware import RequestLoggingMiddleware
from core.preferences import PreferencesStore
from engines.catalog import ExerciseCatalog
from engines.speech import SpeechOrchestrator
from engines.typing_speed import TypingSpeedEstimator

# Initialize logging before anything else
configure_logging(level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)

log = get_logger(__name__)


def _default_speech() -> SpeechOrchestrator:
    from audio import build_speech_orchestrator

    return build_speech_orchestrator(settings)


def create_app(
    speech_factory: Callable[[], SpeechOrchestrator] | None = None,
    preferences_path: Path | str | None = None,
) -> FastAPI:
    """Build the API. Tests pass fakes for the audio stack and a temp preferences file."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info("startup", message="Haklada API starting up")

        app.state.catalog = ExerciseCatalog()
        app.state.estimator = TypingSpeedEstimator(refresh_ms=settings.WPM_REFRESH_MS)
        app.state.speech = (speech_factory or _default_speech)()
        app.state.preferences = PreferencesStore(preferences_path)
        log.info(
            "engines_ready",
            exercises=len(app.state.catalog),
            synthesis_available=app.state.speech.synthesis_available,
            preferences=str(app.state.preferences.path),
        )

        yield

        log.info("shutdown", message="Haklada API shutting down")
        await app.state.estimator.aclose()
        await app.state.speech.aclose()

    app = FastAPI(
        title="Haklada API",
        description="Hebrew typing tutor: letter-by-letter drills, live WPM and spoken vocabulary",
        version="0.1.0",
        lifespan=lifespan,
    )

    register_error_handlers(app)

    # Middleware (order matters: last added = first executed)
    app.add_middleware(RequestLoggingMiddleware, slow_threshold_ms=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(exercises.router, prefix="/api/exercises", tags=["exercises"])
    app.include_router(typing_speed.router, prefix="/api/typing", tags=["typing"])
    app.include_router(speech.router, prefix="/api/speech", tags=["speech"])
    app.include_router(content.router, prefix="/api/content", tags=["content"])
    app.include_router(preferences.router, prefix="/api/preferences", tags=["preferences"])

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "version": "0.1.0"}

    # Pre-rendered clips; without the directory every item falls back to synthesis
    if Path(settings.AUDIO_DIR).is_dir():
        app.mount("/audio", StaticFiles(directory=settings.AUDIO_DIR), name="audio")
    else:
        log.warning("audio_dir_missing", path=settings.AUDIO_DIR)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    log.info("server_config", host=settings.BACKEND_HOST, port=settings.BACKEND_PORT, debug=settings.APP_DEBUG)
    uvicorn.run(
        "main:app",
        host=settings.BACKEND_HOST,
        port=settings.BACKEND_PORT,
        reload=settings.APP_DEBUG,
        log_config=None,  # Disable uvicorn's default logging, we handle it
    )

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Backend
    BACKEND_HOST: str = "127.0.0.1"
    BACKEND_PORT: int = 8000
    APP_DEBUG: bool = True
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for production (structured JSON), False for dev (colored)

    # Audio assets
    AUDIO_DIR: str = "public/audio"
    AUDIO_BASE_URL: str | None = None  # e.g. "http://localhost:8000"; probes go over HTTP when set
    PROBE_TIMEOUT_SECONDS: float = 3.0

    # Speech
    SPEECH_LANGUAGE: str = "he-IL"
    DEFAULT_SPEECH_SPEED: str = "normal"

    # Typing
    WPM_REFRESH_MS: int = 800

    # User preferences file (platform config dir when unset)
    PREFERENCES_PATH: str | None = None

    # Offline pre-rendering (scripts/generate_audio.py)
    TTS_VOICE_NAME: str = "he-IL-Wavenet-A"
    TTS_SPEAKING_RATE: float = 0.9
    TTS_REQUEST_DELAY_SECONDS: float = 0.1

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

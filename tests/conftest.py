import random

import pytest
from fastapi.testclient import TestClient

from engines.catalog import ExerciseCatalog
from engines.speech import SpeechOrchestrator
from engines.typing_speed import TypingSpeedEstimator

from fakes import FakeClock, FakePlayer, FakeProbe, FakeSynthesizer


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def catalog(rng) -> ExerciseCatalog:
    return ExerciseCatalog(rng=rng)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def estimator(clock) -> TypingSpeedEstimator:
    return TypingSpeedEstimator(clock=clock, refresh_ms=800)


@pytest.fixture
def probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture
def player() -> FakePlayer:
    return FakePlayer()


@pytest.fixture
def synthesizer() -> FakeSynthesizer:
    return FakeSynthesizer()


@pytest.fixture
def speech(probe, player, synthesizer) -> SpeechOrchestrator:
    return SpeechOrchestrator(probe, player, synthesizer, language="he-IL", default_speed="normal")


@pytest.fixture
def client(tmp_path, probe, player, synthesizer):
    from main import create_app

    app = create_app(
        speech_factory=lambda: SpeechOrchestrator(probe, player, synthesizer, language="he-IL"),
        preferences_path=tmp_path / "preferences.json",
    )
    with TestClient(app) as test_client:
        yield test_client

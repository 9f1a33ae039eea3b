"""Test doubles for the clock and the audio backends."""
import asyncio
import threading
from types import SimpleNamespace

from engines.speech import INTERRUPTED, PlaybackError, ProbeError, SynthesisError


class FakeClock:
    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeProbe:
    """Clips in ``present`` exist. ``gate`` holds every probe until set."""

    def __init__(self, present=(), fail: str | None = None, gate: asyncio.Event | None = None):
        self.present = set(present)
        self.fail = fail
        self.gate = gate
        self.calls: list[str] = []

    async def exists(self, path: str) -> bool:
        self.calls.append(path)
        if self.gate is not None:
            await self.gate.wait()
        if self.fail:
            raise ProbeError(self.fail)
        return path in self.present


class FakePlayer:
    """Plays instantly, or until stopped when ``block`` is set."""

    def __init__(self, fail: str | None = None, block: bool = False):
        self.fail = fail
        self.block = block
        self.played: list[tuple[str, float]] = []
        self.stop_calls = 0
        self._stopped: asyncio.Event | None = None

    async def play(self, path: str, rate: float) -> bool:
        self.played.append((path, rate))
        if self.fail:
            raise PlaybackError(self.fail)
        if self.block:
            self._stopped = asyncio.Event()
            await self._stopped.wait()
            return False
        return True

    def stop(self) -> None:
        self.stop_calls += 1
        if self._stopped is not None:
            self._stopped.set()


class FakeSynthesizer:
    """Records utterances; ``error`` makes speak fail with that reason."""

    def __init__(self, error: str | None = None, block: bool = False):
        self.error = error
        self.block = block
        self.spoken: list[dict] = []
        self.cancel_calls = 0
        self._cancelled: asyncio.Event | None = None

    async def speak(self, text: str, *, language: str, rate: float, volume: float) -> None:
        self.spoken.append({"text": text, "language": language, "rate": rate, "volume": volume})
        if self.error:
            raise SynthesisError(self.error)
        if self.block:
            self._cancelled = asyncio.Event()
            await self._cancelled.wait()
            raise SynthesisError(INTERRUPTED)

    def cancel(self) -> None:
        self.cancel_calls += 1
        if self._cancelled is not None:
            self._cancelled.set()


class FakeRenderer:
    """Stands in for Google Cloud TTS in the pre-render job."""

    def __init__(self, fail_on: set[str] | None = None, empty_on: set[str] | None = None):
        self.fail_on = fail_on or set()
        self.empty_on = empty_on or set()
        self.requests: list[str] = []

    def synthesize(self, text: str) -> bytes:
        self.requests.append(text)
        if text in self.fail_on:
            raise RuntimeError("quota exceeded")
        if text in self.empty_on:
            return b""
        return f"MP3:{text}".encode()


class FakeTtsEngine:
    """pyttsx3-shaped engine. The first ``blocking_runs`` run loops last until ``stop()``.

    Like the real driver it refuses to start a run loop while one is active.
    """

    def __init__(self, blocking_runs: int = 0, fail: str | None = None, voices=None):
        self.blocking_runs = blocking_runs
        self.fail = fail
        self.voices = voices if voices is not None else [
            SimpleNamespace(id="en-voice", name="English", languages=["en_US"]),
            SimpleNamespace(id="he-voice", name="Hebrew", languages=["he_IL"]),
        ]
        self.properties: dict = {}
        self.said: list[str] = []
        self.stop_calls = 0
        self.running = threading.Event()
        self._stopped = threading.Event()
        self._loop_active = False

    def getProperty(self, name):
        return self.voices if name == "voices" else self.properties.get(name)

    def setProperty(self, name, value):
        self.properties[name] = value

    def say(self, text: str) -> None:
        self.said.append(text)

    def runAndWait(self) -> None:
        if self._loop_active:
            raise RuntimeError("run loop already started")
        if self.fail:
            raise RuntimeError(self.fail)
        self._loop_active = True
        try:
            if self.blocking_runs > 0:
                self.blocking_runs -= 1
                self._stopped.clear()
                self.running.set()
                self._stopped.wait(timeout=2)
        finally:
            self.running.clear()
            self._loop_active = False

    def stop(self) -> None:
        self.stop_calls += 1
        self._stopped.set()


class FakeSoundDevice:
    """sounddevice-shaped output; a stream stays active for ``frames`` polls."""

    class PortAudioError(Exception):
        pass

    def __init__(self, frames: int = 2, fail: str | None = None):
        self.frames = frames
        self.fail = fail
        self.played: list[tuple] = []
        self.stop_calls = 0
        self._remaining = 0

    def play(self, samples, sample_rate) -> None:
        if self.fail:
            raise self.PortAudioError(self.fail)
        self.played.append((samples, sample_rate))
        self._remaining = self.frames

    def get_stream(self):
        return self

    @property
    def active(self) -> bool:
        if self._remaining <= 0:
            return False
        self._remaining -= 1
        return True

    def stop(self) -> None:
        self.stop_calls += 1
        self._remaining = 0

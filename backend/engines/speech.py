"""Speech Playback Orchestrator

Speaks a vocabulary item or phrase: plays its pre-rendered clip when one
exists, otherwise falls back to on-device speech synthesis. At most one
playback is active; every new request stops the previous one first.

The audio backends are injected (see ``audio/``) so the decision logic runs
the same against real devices and test fakes.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable

from core.config import settings
from core.errors import (
    AppError,
    Ok,
    Result,
    playback_failed,
    synthesis_failed,
    synthesis_unavailable,
)
from core.logging import speech_logger

log = speech_logger()

INTERRUPTED = "interrupted"
SYNTHESIS_VOLUME = 1.0


class SpeechSpeed(str, Enum):
    SLOW = "slow"
    NORMAL = "normal"

    @property
    def rate(self) -> float:
        return SPEED_RATES[self]


SPEED_RATES: dict[SpeechSpeed, float] = {
    SpeechSpeed.SLOW: 0.6,
    SpeechSpeed.NORMAL: 1.0,
}


class SpeechSource(str, Enum):
    PRERENDERED = "prerendered"
    SYNTHESIZED = "synthesized"


@dataclass(frozen=True, slots=True)
class PlaybackOutcome:
    """Terminal value of a successful (or superseded) speak call."""
    item_id: str | None
    source: SpeechSource | None
    interrupted: bool = False


# =============================================================================
# Backend contracts
# =============================================================================

class SpeechBackendError(Exception):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class ProbeError(SpeechBackendError):
    """The existence check itself failed (network, permissions)."""


class PlaybackError(SpeechBackendError):
    """The clip could not start or failed mid-stream."""


class SynthesisError(SpeechBackendError):
    """Synthesis failed; ``reason == "interrupted"`` means it was cancelled."""


@runtime_checkable
class ClipProbe(Protocol):
    async def exists(self, path: str) -> bool:
        """True when the clip is present. Raises ProbeError when unsure."""
        ...


@runtime_checkable
class ClipPlayer(Protocol):
    async def play(self, path: str, rate: float) -> bool:
        """Play to the end. False when stopped early. Raises PlaybackError."""
        ...

    def stop(self) -> None: ...


@runtime_checkable
class SpeechSynthesizer(Protocol):
    async def speak(self, text: str, *, language: str, rate: float, volume: float) -> None:
        """Speak to completion. Raises SynthesisError."""
        ...

    def cancel(self) -> None: ...


def clip_path(item_id: str) -> str:
    """``phrase*`` IDs map to phrase clips, everything else to vocabulary clips."""
    category = "phrase" if item_id.startswith("phrase") else "vocab"
    return f"/audio/{category}-{item_id}.mp3"


# =============================================================================
# Orchestrator
# =============================================================================

class SpeechOrchestrator:
    """Decides between clip playback and synthesis for each request.

    Usage:
        speech = SpeechOrchestrator(probe, player, synthesizer)
        match await speech.speak_item("v001", "שלום"):
            case Ok(outcome):
                outcome.source
            case Err(error):
                error.message
    """

    __slots__ = ("_probe", "_player", "_synth", "language", "default_speed", "_generation", "_speaking")

    def __init__(
        self,
        probe: ClipProbe,
        player: ClipPlayer,
        synthesizer: SpeechSynthesizer | None = None,
        *,
        language: str | None = None,
        default_speed: SpeechSpeed | str | None = None,
    ):
        self._probe = probe
        self._player = player
        self._synth = synthesizer
        self.language = language or settings.SPEECH_LANGUAGE
        self.default_speed = SpeechSpeed(default_speed or settings.DEFAULT_SPEECH_SPEED)
        self._generation = 0
        self._speaking = False

    @property
    def is_speaking(self) -> bool:
        return self._speaking

    @property
    def synthesis_available(self) -> bool:
        return self._synth is not None

    def set_default_speed(self, speed: SpeechSpeed | str) -> None:
        self.default_speed = SpeechSpeed(speed)

    def stop(self) -> None:
        """Stop clip playback and synthesis. Safe when idle."""
        self._generation += 1
        self._player.stop()
        if self._synth is not None:
            self._synth.cancel()
        self._speaking = False

    async def aclose(self) -> None:
        """Stop playback and release backend resources (HTTP clients)."""
        self.stop()
        for backend in (self._probe, self._player, self._synth):
            close = getattr(backend, "aclose", None)
            if close is not None:
                await close()

    def _resolve_speed(self, speed: SpeechSpeed | str | None) -> SpeechSpeed:
        return SpeechSpeed(speed) if speed is not None else self.default_speed

    async def speak_item(
        self,
        item_id: str,
        hebrew_text: str,
        speed: SpeechSpeed | str | None = None,
    ) -> Result[PlaybackOutcome, AppError]:
        """Speak one item, preferring its pre-rendered clip."""
        self.stop()
        generation = self._generation
        speed = self._resolve_speed(speed)
        path = clip_path(item_id)

        try:
            exists = await self._probe.exists(path)
        except ProbeError as e:
            log.warning("audio_probe_failed", path=path, reason=e.reason, fallback="synthesis")
            exists = None

        if generation != self._generation:
            log.debug("speech_superseded", item_id=item_id)
            return Ok(PlaybackOutcome(item_id=item_id, source=None, interrupted=True))

        if exists:
            return await self._play_clip(item_id, path, speed, generation)

        if exists is False:
            log.warning("audio_clip_missing", path=path, fallback="synthesis")
        return await self._synthesize(item_id, hebrew_text, speed, generation)

    async def speak(
        self, text: str, speed: SpeechSpeed | str | None = None
    ) -> Result[PlaybackOutcome, AppError]:
        """Synthesize ``text`` directly, without looking for a clip."""
        self.stop()
        return await self._synthesize(None, text, self._resolve_speed(speed), self._generation)

    async def _play_clip(
        self, item_id: str, path: str, speed: SpeechSpeed, generation: int
    ) -> Result[PlaybackOutcome, AppError]:
        self._speaking = True
        try:
            completed = await self._player.play(path, speed.rate)
        except PlaybackError as e:
            log.warning("audio_playback_failed", path=path, reason=e.reason)
            return playback_failed(path, e.reason, origin="speech", cause=e)
        finally:
            if generation == self._generation:
                self._speaking = False

        interrupted = not completed or generation != self._generation
        log.debug("audio_clip_played", item_id=item_id, speed=speed.value, interrupted=interrupted)
        return Ok(PlaybackOutcome(item_id=item_id, source=SpeechSource.PRERENDERED, interrupted=interrupted))

    async def _synthesize(
        self, item_id: str | None, text: str, speed: SpeechSpeed, generation: int
    ) -> Result[PlaybackOutcome, AppError]:
        if self._synth is None:
            log.error("speech_synthesis_unavailable", item_id=item_id)
            return synthesis_unavailable(origin="speech")

        self._speaking = True
        interrupted = False
        try:
            await self._synth.speak(
                text, language=self.language, rate=speed.rate, volume=SYNTHESIS_VOLUME
            )
        except SynthesisError as e:
            if e.reason != INTERRUPTED:
                log.warning("speech_synthesis_failed", item_id=item_id, reason=e.reason)
                return synthesis_failed(e.reason, origin="speech", cause=e)
            interrupted = True
        finally:
            if generation == self._generation:
                self._speaking = False

        interrupted = interrupted or generation != self._generation
        log.debug("speech_synthesized", item_id=item_id, speed=speed.value, interrupted=interrupted)
        return Ok(PlaybackOutcome(item_id=item_id, source=SpeechSource.SYNTHESIZED, interrupted=interrupted))

"""Audio Backends

Concrete probe, player and synthesizer implementations for the speech
orchestrator, and the factory that wires them from settings.
"""
from pathlib import Path

from core.config import Settings, settings as default_settings
from core.logging import speech_logger
from engines.speech import SpeechOrchestrator, SpeechSynthesizer

from audio.probes import HttpClipProbe, LocalClipProbe
from audio.player import AUDIO_AVAILABLE, SoundDeviceClipPlayer

log = speech_logger()


def create_synthesizer() -> SpeechSynthesizer | None:
    """pyttsx3 synthesizer, or None when no TTS engine can start here."""
    from audio.synthesizer import Pyttsx3Synthesizer

    try:
        return Pyttsx3Synthesizer()
    except (ImportError, RuntimeError, OSError) as e:
        log.warning("speech_synthesis_disabled", reason=str(e))
        return None


def build_speech_orchestrator(settings: Settings | None = None) -> SpeechOrchestrator:
    settings = settings or default_settings
    if settings.AUDIO_BASE_URL:
        probe = HttpClipProbe(settings.AUDIO_BASE_URL, timeout=settings.PROBE_TIMEOUT_SECONDS)
    else:
        probe = LocalClipProbe(Path(settings.AUDIO_DIR))

    if not AUDIO_AVAILABLE:
        log.warning("audio_output_disabled", reason="librosa/sounddevice not installed")

    player = SoundDeviceClipPlayer(audio_dir=settings.AUDIO_DIR, base_url=settings.AUDIO_BASE_URL)
    return SpeechOrchestrator(
        probe,
        player,
        create_synthesizer(),
        language=settings.SPEECH_LANGUAGE,
        default_speed=settings.DEFAULT_SPEECH_SPEED,
    )


__all__ = [
    "HttpClipProbe",
    "LocalClipProbe",
    "SoundDeviceClipPlayer",
    "create_synthesizer",
    "build_speech_orchestrator",
]

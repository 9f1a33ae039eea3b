"""On-Device Speech Synthesis

pyttsx3 wrapper used when no pre-rendered clip exists. The blocking
``runAndWait`` loop runs in a worker thread; ``cancel`` stops the engine and
the pending ``speak`` call raises ``SynthesisError("interrupted")``.
"""
import asyncio
from dataclasses import dataclass

from core.logging import speech_logger
from engines.speech import INTERRUPTED, SynthesisError

log = speech_logger()

BASE_WORDS_PER_MINUTE = 180


@dataclass
class _Utterance:
    cancelled: bool = False


def _voice_languages(voice) -> list[str]:
    langs = getattr(voice, "languages", []) or []
    return [
        bytes(l).decode(errors="ignore") if isinstance(l, (bytes, bytearray)) else str(l)
        for l in langs
    ]


def _matches_language(voice, language: str) -> bool:
    prefix = language.split("-")[0].lower()
    names = [s.lower().strip("\x05") for s in _voice_languages(voice)]
    if any(s.startswith(prefix) for s in names):
        return True
    ident = f"{voice.id} {voice.name}".lower()
    return "hebrew" in ident or f"{prefix}_" in ident or f"{prefix}-" in ident


class Pyttsx3Synthesizer:
    """System TTS (SAPI5 / NSSpeechSynthesizer / eSpeak) via pyttsx3."""

    def __init__(self, base_rate: int = BASE_WORDS_PER_MINUTE, engine=None):
        if engine is None:
            import pyttsx3

            engine = pyttsx3.init()
        self._engine = engine
        self.base_rate = base_rate
        self._voices: dict[str, str | None] = {}
        # one run loop at a time; a new request waits for the cancelled one to exit
        self._run_lock = asyncio.Lock()
        self._current: _Utterance | None = None

    def _voice_for(self, language: str) -> str | None:
        if language not in self._voices:
            voice_id = None
            for voice in self._engine.getProperty("voices"):
                if _matches_language(voice, language):
                    voice_id = voice.id
                    break
            if voice_id is None:
                log.warning("speech_voice_missing", language=language, fallback="system default")
            else:
                log.info("speech_voice_selected", language=language, voice=voice_id)
            self._voices[language] = voice_id
        return self._voices[language]

    def _run(self, text: str, language: str, rate: float, volume: float) -> None:
        voice_id = self._voice_for(language)
        if voice_id:
            self._engine.setProperty("voice", voice_id)
        self._engine.setProperty("rate", int(self.base_rate * rate))
        self._engine.setProperty("volume", volume)
        self._engine.say(text)
        self._engine.runAndWait()

    async def speak(self, text: str, *, language: str, rate: float, volume: float) -> None:
        utterance = _Utterance()
        self._current = utterance
        async with self._run_lock:
            if utterance.cancelled:
                raise SynthesisError(INTERRUPTED)
            try:
                await asyncio.to_thread(self._run, text, language, rate, volume)
            except RuntimeError as e:
                # pyttsx3 raises RuntimeError("run loop already started") and driver errors
                raise SynthesisError(str(e) or "synthesis-failed") from e
            finally:
                if self._current is utterance:
                    self._current = None
        if utterance.cancelled:
            raise SynthesisError(INTERRUPTED)

    def cancel(self) -> None:
        """Interrupt the utterance in progress. Safe when idle."""
        if self._current is None:
            return
        self._current.cancelled = True
        self._engine.stop()

"""Clip Player

Decodes an MP3 clip with librosa, time-stretches it for slow playback
(pitch preserved) and plays it through sounddevice. ``play`` returns when
the clip ends or ``stop`` is called.
"""
import asyncio
import io
from pathlib import Path

import httpx

from core.logging import speech_logger
from engines.speech import PlaybackError
from audio.probes import relative_clip_name

log = speech_logger()

try:
    import librosa
    import numpy as np
    import sounddevice as sd
    AUDIO_AVAILABLE = True
except (ImportError, OSError):
    # sounddevice raises OSError when PortAudio is missing
    AUDIO_AVAILABLE = False

POLL_SECONDS = 0.05


class SoundDeviceClipPlayer:
    """Plays clips from a local directory or an HTTP asset host."""

    def __init__(
        self,
        audio_dir: Path | str | None = None,
        base_url: str | None = None,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.audio_dir = Path(audio_dir) if audio_dir else None
        self.base_url = base_url.rstrip("/") if base_url else None
        self._client = client or (httpx.AsyncClient(timeout=timeout) if self.base_url else None)
        self._token: object | None = None

    async def _read_source(self, path: str) -> Path | io.BytesIO:
        if self.base_url:
            try:
                response = await self._client.get(f"{self.base_url}{path}")
                response.raise_for_status()
            except httpx.HTTPError as e:
                raise PlaybackError(f"download failed: {e}") from e
            return io.BytesIO(response.content)
        if self.audio_dir is None:
            raise PlaybackError("no audio source configured")
        return self.audio_dir / relative_clip_name(path)

    @staticmethod
    def _decode(source: Path | io.BytesIO, rate: float) -> tuple["np.ndarray", int]:
        samples, sample_rate = librosa.load(source, sr=None, mono=True)
        if rate != 1.0:
            samples = librosa.effects.time_stretch(samples, rate=rate)
        return samples.astype(np.float32), sample_rate

    async def play(self, path: str, rate: float) -> bool:
        if not AUDIO_AVAILABLE:
            raise PlaybackError("audio output backend not installed")

        token = object()
        self._token = token
        source = await self._read_source(path)

        try:
            samples, sample_rate = await asyncio.to_thread(self._decode, source, rate)
        except Exception as e:
            raise PlaybackError(f"decode failed: {e}") from e

        if self._token is not token:
            return False

        try:
            sd.play(samples, sample_rate)
            stream = sd.get_stream()
            while stream.active:
                if self._token is not token:
                    return False
                await asyncio.sleep(POLL_SECONDS)
        except sd.PortAudioError as e:
            raise PlaybackError(f"output device error: {e}") from e

        completed = self._token is token
        if completed:
            self._token = None
        return completed

    def stop(self) -> None:
        if self._token is None:
            return
        self._token = None
        if AUDIO_AVAILABLE:
            sd.stop()

    async def aclose(self) -> None:
        self.stop()
        if self._client is not None:
            await self._client.aclose()

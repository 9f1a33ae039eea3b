"""Clip Existence Probes

Answer "is there a pre-rendered clip at this path?" without reading it:
a filesystem stat for the local asset directory, or an HTTP HEAD request
when clips are served from elsewhere.
"""
import asyncio
from pathlib import Path

import httpx

from core.logging import speech_logger
from engines.speech import ProbeError

log = speech_logger()

AUDIO_URL_PREFIX = "/audio/"


def relative_clip_name(path: str) -> str:
    """``/audio/vocab-v001.mp3`` -> ``vocab-v001.mp3``."""
    return path.removeprefix(AUDIO_URL_PREFIX).lstrip("/")


class LocalClipProbe:
    """Stats clips under a local directory."""

    def __init__(self, audio_dir: Path | str):
        self.audio_dir = Path(audio_dir)

    def resolve(self, path: str) -> Path:
        return self.audio_dir / relative_clip_name(path)

    async def exists(self, path: str) -> bool:
        target = self.resolve(path)
        try:
            return await asyncio.to_thread(target.is_file)
        except OSError as e:
            raise ProbeError(f"{type(e).__name__}: {e}") from e


class HttpClipProbe:
    """Sends HEAD requests to the asset host; any 2xx means present."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 3.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def exists(self, path: str) -> bool:
        url = self.url_for(path)
        try:
            response = await self._client.head(url)
        except httpx.HTTPError as e:
            raise ProbeError(f"{type(e).__name__}: {e}") from e
        log.debug("audio_probe", url=url, status=response.status_code)
        return response.is_success

    async def aclose(self) -> None:
        await self._client.aclose()

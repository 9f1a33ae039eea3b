#!/usr/bin/env python3
"""Pre-render vocabulary and phrase clips with Google Cloud Text-to-Speech.

Writes ``vocab-<id>.mp3`` / ``phrase-<id>.mp3`` into the audio directory the
API serves under ``/audio``. Items without a clip fall back to on-device
synthesis at runtime, so a partial run is still useful.

Prerequisites:
  1. A Google Cloud project with the "Cloud Text-to-Speech API" enabled
  2. A service account JSON key
  3. export GOOGLE_APPLICATION_CREDENTIALS=/path/to/key.json

Run with: python3 -m scripts.generate_audio [--output-dir DIR] [--skip-existing]
"""
import argparse
import asyncio
import os
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol

import content
from core.config import settings
from core.errors import AppError, ErrorCode, Ok, Result, external_service_error, file_error
from core.logging import batch_logger, configure_logging
from core.resilience import BatchProcessor, BatchResult, BatchStrategy

log = batch_logger()

CREDENTIALS_ENV = "GOOGLE_APPLICATION_CREDENTIALS"

# ANSI color codes
C_RESET = "\033[0m"
C_BOLD = "\033[1m"
C_DIM = "\033[2m"
C_GREEN = "\033[32m"
C_RED = "\033[31m"
C_CYAN = "\033[36m"


@dataclass(frozen=True, slots=True)
class AudioItem:
    id: str
    hebrew: str
    category: Literal["vocab", "phrase"]

    @property
    def filename(self) -> str:
        return f"{self.category}-{self.id}.mp3"


class SpeechRenderer(Protocol):
    def synthesize(self, text: str) -> bytes: ...


class GoogleSpeechRenderer:
    """Google Cloud TTS: he-IL WaveNet voice, MP3, slightly slowed for learners."""

    def __init__(
        self,
        voice_name: str | None = None,
        speaking_rate: float | None = None,
        language_code: str | None = None,
    ):
        from google.cloud import texttospeech

        self._tts = texttospeech
        self._client = texttospeech.TextToSpeechClient()
        self._voice = texttospeech.VoiceSelectionParams(
            language_code=language_code or settings.SPEECH_LANGUAGE,
            name=voice_name or settings.TTS_VOICE_NAME,
        )
        self._audio_config = texttospeech.AudioConfig(
            audio_encoding=texttospeech.AudioEncoding.MP3,
            speaking_rate=speaking_rate or settings.TTS_SPEAKING_RATE,
            pitch=0.0,
        )

    def synthesize(self, text: str) -> bytes:
        response = self._client.synthesize_speech(
            input=self._tts.SynthesisInput(text=text),
            voice=self._voice,
            audio_config=self._audio_config,
        )
        return response.audio_content


def collect_items() -> list[AudioItem]:
    """Every vocabulary item followed by every phrase."""
    items = [AudioItem(id=v.id, hebrew=v.hebrew, category="vocab") for v in content.vocabulary()]
    items += [AudioItem(id=p.id, hebrew=p.hebrew, category="phrase") for p in content.phrases()]
    return items


async def render_item(item: AudioItem, renderer: SpeechRenderer, output_dir: Path) -> Result[Path, AppError]:
    target = output_dir / item.filename
    try:
        audio = await asyncio.to_thread(renderer.synthesize, item.hebrew)
    except Exception as e:
        return external_service_error("google-tts", str(e), origin="generate_audio", cause=e)

    if not audio:
        return external_service_error("google-tts", "No audio content in response", origin="generate_audio")

    try:
        target.write_bytes(audio)
    except OSError as e:
        return file_error(
            f"Could not write {target}: {e}",
            code=ErrorCode.E6003_FILE_WRITE_ERROR,
            path=str(target),
            origin="generate_audio",
            cause=e,
        )
    return Ok(target)


async def generate_audio(
    items: list[AudioItem],
    renderer: SpeechRenderer,
    output_dir: Path,
    delay_seconds: float | None = None,
) -> BatchResult[Path]:
    """Render every item; failures are collected, never fatal."""
    output_dir.mkdir(parents=True, exist_ok=True)
    total = len(items)
    done = 0

    async def render_with_progress(item: AudioItem) -> Result[Path, AppError]:
        nonlocal done
        result = await render_item(item, renderer, output_dir)
        done += 1
        if result.is_ok():
            print(f"  {C_GREEN}[{done}/{total}]{C_RESET} Generated: {item.filename}")
        else:
            print(f"  {C_RED}[{done}/{total}] Error generating {item.filename}:{C_RESET} {result.error.message}")
        return result

    processor = BatchProcessor(
        BatchStrategy.PARTIAL_SUCCESS,
        delay_seconds=settings.TTS_REQUEST_DELAY_SECONDS if delay_seconds is None else delay_seconds,
    )
    return await processor.execute(items, render_with_progress, key_fn=lambda i: i.filename)


def print_credentials_help() -> None:
    print(f"{C_RED}Error: {CREDENTIALS_ENV} environment variable not set{C_RESET}", file=sys.stderr)
    print(
        "\nTo use this script:\n"
        "1. Create a Google Cloud project at https://console.cloud.google.com\n"
        '2. Enable the "Cloud Text-to-Speech API"\n'
        "3. Create a service account and download the JSON key\n"
        "4. Set the environment variable:\n"
        f"   export {CREDENTIALS_ENV}=/path/to/your-key.json\n"
        "\nThen run: python3 -m scripts.generate_audio",
        file=sys.stderr,
    )


def print_summary(result: BatchResult[Path], output_dir: Path, duration: float) -> None:
    print(f"\n{C_BOLD}--- Summary ---{C_RESET}")
    print(f"  {C_GREEN}Successfully generated:{C_RESET} {result.success_count}")
    print(f"  {C_RED if result.failure_count else C_DIM}Errors:{C_RESET} {result.failure_count}")
    print(f"  {C_DIM}Output directory:{C_RESET} {output_dir}")
    print(f"  {C_DIM}Duration: {duration:.1f}s{C_RESET}")


async def main(argv: list[str] | None = None, renderer: SpeechRenderer | None = None) -> int:
    parser = argparse.ArgumentParser(description="Pre-render Hebrew audio clips with Google Cloud TTS")
    parser.add_argument("--output-dir", type=Path, default=Path(settings.AUDIO_DIR), help="Where MP3 files are written")
    parser.add_argument("--skip-existing", action="store_true", help="Leave clips that already exist untouched")
    parser.add_argument("--limit", type=int, help="Only render the first N items")
    args = parser.parse_args(argv)

    configure_logging(level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)

    if renderer is None:
        if not os.environ.get(CREDENTIALS_ENV):
            print_credentials_help()
            return 1
        renderer = GoogleSpeechRenderer()

    items = collect_items()
    if args.skip_existing:
        items = [i for i in items if not (args.output_dir / i.filename).exists()]
    if args.limit:
        items = items[: args.limit]

    print(f"\n{C_BOLD}{C_CYAN}Generating audio for {len(items)} items...{C_RESET}\n")
    start = time.time()
    result = await generate_audio(items, renderer, args.output_dir)
    print_summary(result, args.output_dir, time.time() - start)

    log.info(
        "audio_generation_complete",
        generated=result.success_count,
        errors=result.failure_count,
        output_dir=str(args.output_dir),
    )
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))

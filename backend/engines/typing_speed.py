"""Typing-Speed Estimator

Live words-per-minute from keystroke timing. A session opens on the first
non-empty input; while it runs, a polling task recomputes

    wpm = round((correct_chars / 5) / (elapsed_seconds / 60))

every ``refresh_ms`` until the typed text is as long as the target.
The estimator knows nothing about exercises: callers ``reset()`` it when the
active exercise changes.
"""
import asyncio
import math
import time
from dataclasses import dataclass
from typing import Callable

from core.config import settings
from core.logging import typing_logger

log = typing_logger()

WORD_LENGTH = 5
SECONDS_IN_MINUTE = 60


@dataclass(frozen=True, slots=True)
class TypingReading:
    wpm: int
    elapsed_seconds: float
    finished: bool
    started: bool


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def count_correct(typed_text: str, target_text: str) -> int:
    """Positions where the typed character matches the target."""
    return sum(1 for typed, target in zip(typed_text, target_text) if typed == target)


def words_per_minute(correct_count: int, elapsed_seconds: float) -> int:
    words = correct_count / WORD_LENGTH
    return round_half_up(words / (elapsed_seconds / SECONDS_IN_MINUTE))


class TypingSpeedEstimator:
    """Owns one typing session and its polling task.

    Usage:
        estimator = TypingSpeedEstimator()
        estimator.observe("ש", target, correct_count=1)   # opens the session
        ...
        estimator.reading.wpm
        await estimator.aclose()
    """

    __slots__ = (
        "_clock", "refresh_seconds", "_start", "_elapsed", "_wpm",
        "_typed_len", "_target_len", "_correct", "_task",
    )

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        refresh_ms: int | None = None,
    ):
        self._clock = clock
        if refresh_ms is None:
            refresh_ms = settings.WPM_REFRESH_MS
        self.refresh_seconds = refresh_ms / 1000
        self._start: float | None = None
        self._elapsed = 0.0
        self._wpm = 0
        self._typed_len = 0
        self._target_len = 0
        self._correct = 0
        self._task: asyncio.Task | None = None

    @property
    def started(self) -> bool:
        return self._start is not None

    @property
    def finished(self) -> bool:
        return self._typed_len >= self._target_len

    @property
    def wpm(self) -> int:
        return self._wpm

    @property
    def elapsed_seconds(self) -> float:
        return self._elapsed

    @property
    def reading(self) -> TypingReading:
        return TypingReading(
            wpm=self._wpm,
            elapsed_seconds=self._elapsed,
            finished=self.finished,
            started=self.started,
        )

    @property
    def polling(self) -> bool:
        return self._task is not None and not self._task.done()

    def should_continue(self) -> bool:
        """Polling predicate: a session is open and the text isn't complete."""
        return self.started and not self.finished

    def observe(self, typed_text: str, target_text: str, correct_count: int) -> TypingReading:
        """Feed the latest keystroke state.

        The first non-empty input opens the session without computing.
        The input that completes the text records one final reading.
        """
        was_finished = self.finished
        self._typed_len = len(typed_text)
        self._target_len = len(target_text)
        self._correct = correct_count

        if self._start is None:
            if self._typed_len > 0:
                self._start = self._clock()
                log.debug("typing_session_opened", target_length=self._target_len)
                self._ensure_polling()
            return self.reading

        if self.finished and not was_finished:
            self._compute()
            log.info("typing_session_finished", wpm=self._wpm, elapsed_seconds=round(self._elapsed, 2))
        elif not self.finished:
            self._ensure_polling()
        return self.reading

    def tick(self) -> bool:
        """One recomputation. Returns whether polling should continue."""
        if not self.should_continue():
            return False
        self._compute()
        return self.should_continue()

    def _compute(self) -> None:
        elapsed = self._clock() - self._start
        if elapsed <= 0:
            return
        self._elapsed = elapsed
        self._wpm = words_per_minute(self._correct, elapsed)

    def reset(self) -> None:
        """Back to no session: wpm and elapsed cleared, clock and polling stopped."""
        self._start = None
        self._wpm = 0
        self._elapsed = 0.0
        if self._task is not None:
            self._task.cancel()
            self._task = None
        log.debug("typing_session_reset")

    def _ensure_polling(self) -> None:
        if self.polling:
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            # No loop: caller drives tick() itself.
            return
        self.start_polling()

    def start_polling(self) -> asyncio.Task:
        """Start the polling task (must be called from a running loop)."""
        if not self.polling:
            self._task = asyncio.create_task(self._poll(), name="wpm-poll")
        return self._task

    async def _poll(self) -> None:
        try:
            while self.should_continue():
                await asyncio.sleep(self.refresh_seconds)
                if not self.tick():
                    break
        finally:
            if self._task is asyncio.current_task():
                self._task = None

    async def aclose(self) -> None:
        """Cancel the polling task, if any."""
        task = self._task
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        self._task = None

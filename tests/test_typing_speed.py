import asyncio

import pytest

from engines.typing_speed import (
    TypingSpeedEstimator,
    count_correct,
    round_half_up,
    words_per_minute,
)

TARGET = "א" * 50


def test_first_keystroke_opens_session_without_computing(estimator, clock):
    reading = estimator.observe("א", TARGET, 1)
    assert reading.started
    assert reading.wpm == 0
    assert reading.elapsed_seconds == 0
    assert not reading.finished


def test_empty_text_before_session_is_noop(estimator):
    reading = estimator.observe("", TARGET, 0)
    assert not reading.started
    assert estimator.tick() is False
    assert estimator.wpm == 0


def test_wpm_48_scenario(estimator, clock):
    estimator.observe("א", TARGET, 1)
    clock.advance(12)
    typed = "א" * 48 + "בב"
    reading = estimator.observe(typed, TARGET, 48)
    assert reading.finished
    assert reading.wpm == 48
    assert reading.elapsed_seconds == pytest.approx(12)
    # polling halted: further ticks change nothing
    clock.advance(30)
    assert estimator.tick() is False
    assert estimator.wpm == 48
    assert estimator.elapsed_seconds == pytest.approx(12)


def test_tick_recomputes_while_running(estimator, clock):
    estimator.observe("א", TARGET, 1)
    clock.advance(6)
    estimator.observe("א" * 10, TARGET, 10)
    assert estimator.tick() is True
    # (10 / 5) / (6 / 60) = 20
    assert estimator.wpm == 20


def test_retrigger_does_not_restart_clock(estimator, clock):
    estimator.observe("א", TARGET, 1)
    clock.advance(5)
    estimator.observe("", TARGET, 0)
    estimator.observe("א", TARGET, 1)
    clock.advance(7)
    estimator.observe("א" * 5, TARGET, 5)
    estimator.tick()
    assert estimator.elapsed_seconds == pytest.approx(12)


def test_non_positive_elapsed_is_skipped(estimator, clock):
    estimator.observe("א", TARGET, 1)
    estimator.observe("אא", TARGET, 2)
    assert estimator.tick() is True
    assert estimator.wpm == 0
    clock.advance(-1)
    estimator.tick()
    assert estimator.wpm == 0
    assert estimator.elapsed_seconds == 0


def test_reset_scenario(estimator, clock):
    estimator.observe("א", TARGET, 1)
    clock.advance(10)
    estimator.observe("א" * 20, TARGET, 20)
    estimator.tick()
    assert estimator.wpm > 0

    estimator.reset()
    assert estimator.wpm == 0
    assert estimator.elapsed_seconds == 0
    assert not estimator.started

    clock.advance(3)
    reading = estimator.observe("ב", TARGET, 1)
    assert reading.started
    assert reading.wpm == 0
    assert reading.elapsed_seconds == 0


def test_rounding_is_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2
    assert words_per_minute(45, 60) == 9
    # 2.5 and 7.5 words per minute round up
    assert words_per_minute(25, 120) == 3
    assert words_per_minute(75, 120) == 8


def test_count_correct_matches_positions():
    assert count_correct("שלום", "שלום") == 4
    assert count_correct("שלוכ", "שלום") == 3
    assert count_correct("", "שלום") == 0
    assert count_correct("שלום עולם", "של") == 2


async def test_polling_updates_reading_and_stops_when_finished(clock):
    estimator = TypingSpeedEstimator(clock=clock, refresh_ms=10)
    estimator.observe("א", TARGET, 1)
    assert estimator.polling

    clock.advance(6)
    estimator.observe("א" * 10, TARGET, 10)
    await asyncio.sleep(0.05)
    assert estimator.wpm == 20

    clock.advance(6)
    estimator.observe(TARGET, TARGET, 50)
    await asyncio.sleep(0.05)
    assert not estimator.polling
    assert estimator.reading.finished
    assert estimator.wpm == 50
    await estimator.aclose()


async def test_aclose_cancels_polling(clock):
    estimator = TypingSpeedEstimator(clock=clock, refresh_ms=1000)
    estimator.observe("א", TARGET, 1)
    assert estimator.polling
    await estimator.aclose()
    assert not estimator.polling


async def test_reset_lets_polling_task_exit(clock):
    estimator = TypingSpeedEstimator(clock=clock, refresh_ms=10)
    estimator.observe("א", TARGET, 1)
    estimator.reset()
    await asyncio.sleep(0.05)
    assert not estimator.polling


def test_explicit_zero_refresh_is_kept():
    assert TypingSpeedEstimator(refresh_ms=0).refresh_seconds == 0
    assert TypingSpeedEstimator().refresh_seconds == 0.8


async def test_reset_cancels_sleeping_poll_task(clock):
    estimator = TypingSpeedEstimator(clock=clock, refresh_ms=1000)
    estimator.observe("א", TARGET, 1)
    first_task = estimator._task

    estimator.reset()
    assert not estimator.polling
    await asyncio.sleep(0.01)
    assert first_task.cancelled()

    estimator.observe("ב", TARGET, 1)
    second_task = estimator._task
    assert second_task is not first_task
    await asyncio.sleep(0.01)
    # the cancelled task finishing must not detach the new one
    assert estimator.polling
    await estimator.aclose()

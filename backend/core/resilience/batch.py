"""Batch Operation Error Aggregation

Runs one async operation per item and aggregates the outcomes:
- Fail-fast: stop at the first failed item
- Partial success: keep going, report successes and failures together

Items run one after another with an optional pause between them, which
keeps rate-limited external services (speech APIs) happy.
"""
from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Awaitable, Callable, Generic, TypeVar

from core.errors import AppError, ErrorCode, Err, Result, from_exception
from core.logging import batch_logger

log = batch_logger()

T = TypeVar("T")
U = TypeVar("U")


class BatchStrategy(Enum):
    FAIL_FAST = auto()        # Stop on first error
    PARTIAL_SUCCESS = auto()  # Process everything, collect errors


@dataclass(frozen=True)
class BatchItemResult(Generic[U]):
    """Result for a single item in a batch."""
    index: int
    input_key: str | None
    result: Result[U, AppError]
    duration_ms: float


@dataclass
class BatchResult(Generic[U]):
    """Every item's result, split by outcome."""
    successes: list[BatchItemResult[U]]
    failures: list[BatchItemResult[U]]
    total_duration_ms: float
    strategy: BatchStrategy

    @property
    def success_count(self) -> int:
        return len(self.successes)

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    @property
    def total_count(self) -> int:
        return self.success_count + self.failure_count

    @property
    def all_succeeded(self) -> bool:
        return self.failure_count == 0

    def values(self) -> list[U]:
        return [r.result.unwrap() for r in self.successes]

    def errors(self) -> list[AppError]:
        return [r.result.unwrap_err() for r in self.failures]


class BatchProcessor(Generic[T, U]):
    """Process items sequentially with configurable error handling.

    Usage:
        processor = BatchProcessor(BatchStrategy.PARTIAL_SUCCESS, delay_seconds=0.1)

        async def render(item: VocabItem) -> Result[Path, AppError]:
            ...

        result = await processor.execute(items, render, key_fn=lambda i: i.id)
        print(f"Rendered {result.success_count}/{result.total_count}")
    """

    def __init__(
        self,
        strategy: BatchStrategy = BatchStrategy.PARTIAL_SUCCESS,
        delay_seconds: float = 0.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.strategy = strategy
        self.delay_seconds = delay_seconds
        self._sleep = sleep

    async def execute(
        self,
        items: list[T],
        processor: Callable[[T], Awaitable[Result[U, AppError]]],
        key_fn: Callable[[T], str] | None = None,
    ) -> BatchResult[U]:
        """Run ``processor`` over ``items``.

        Exceptions escaping ``processor`` are converted to failures so one
        bad item never aborts a partial-success batch.
        """
        start = time.perf_counter()
        successes: list[BatchItemResult[U]] = []
        failures: list[BatchItemResult[U]] = []

        for idx, item in enumerate(items):
            if idx and self.delay_seconds > 0:
                await self._sleep(self.delay_seconds)

            key = key_fn(item) if key_fn else None
            item_start = time.perf_counter()
            try:
                result = await processor(item)
            except Exception as e:
                result = from_exception(e, code=ErrorCode.E9001_UNEXPECTED_ERROR, origin="batch", key=key)

            item_result = BatchItemResult(
                index=idx,
                input_key=key,
                result=result,
                duration_ms=(time.perf_counter() - item_start) * 1000,
            )

            if isinstance(result, Err):
                failures.append(item_result)
                log.warning("batch_item_failed", index=idx, key=key, error=result.error.message)
                if self.strategy is BatchStrategy.FAIL_FAST:
                    break
            else:
                successes.append(item_result)

        return BatchResult(
            successes=successes,
            failures=failures,
            total_duration_ms=(time.perf_counter() - start) * 1000,
            strategy=self.strategy,
        )

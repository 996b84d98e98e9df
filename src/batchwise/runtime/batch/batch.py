"""Batched execution engine.

Runs an operation over many items with bounded concurrency:
- Items are split into consecutive, fixed-size batches
- Each batch runs concurrently; the next starts only after it resolves
- Optional pause between batches (never after the last one)
- Two failure policies: fail-fast (raise) or settled (record every outcome)

Design: each batch is a WaitGroup; the policy only decides which wait
flavor is used. Results are always in input order regardless of
completion order inside a batch.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Iterable, Iterator, Sized
from dataclasses import dataclass, field
from itertools import islice
from typing import Annotated, Callable, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from batchwise.foundation.config import get_settings
from batchwise.foundation.errors import ContractViolation
from batchwise.runtime.concurrency import Settled, WaitGroup, pause, resolve, run_sync
from batchwise.runtime.observability.logging import get_logger

A = TypeVar("A")
B = TypeVar("B")


def partition(items: Iterable[A], size: int) -> Iterator[list[A]]:
    """Split items into consecutive lists of `size`; the last one may be shorter.

    Consumes the iterable lazily. Raises ContractViolation right away for a
    non-positive or non-integer size.

    Example:
        >>> list(partition([1, 2, 3, 4, 5], 2))
        [[1, 2], [3, 4], [5]]
    """
    if isinstance(size, bool) or not isinstance(size, int) or size < 1:
        raise ContractViolation(f"batch size must be a positive integer, got {size!r}")
    return _chunks(iter(items), size)


def _chunks(it: Iterator[A], size: int) -> Iterator[list[A]]:
    while chunk := list(islice(it, size)):
        yield chunk


@dataclass(frozen=True, slots=True)
class BatchProgress:
    """Snapshot passed to on_batch_complete after each successful or settled batch."""
    index: int
    size: int
    completed: int
    total: int | None
    elapsed_ms: float


@dataclass(slots=True)
class SettledResults(Generic[B]):
    """Ordered outcomes from a settled run, one per input item."""
    items: list[Settled[B]]
    total_ms: float = field(default=0.0, compare=False)
    batches: int = field(default=0, compare=False)

    @property
    def successes(self) -> list[Settled[B]]: return [s for s in self.items if s.is_fulfilled]

    @property
    def failures(self) -> list[Settled[B]]: return [s for s in self.items if s.is_rejected]

    @property
    def success_rate(self) -> float: return len(self.successes) / len(self.items) if self.items else 0.0

    @property
    def all_ok(self) -> bool: return all(s.is_fulfilled for s in self.items)

    @property
    def all_err(self) -> bool: return all(s.is_rejected for s in self.items)

    def values(self) -> list[B]: return [s.value for s in self.items if s.is_fulfilled]  # type: ignore[misc]

    def errors(self) -> list[BaseException]: return [e for s in self.items if s.is_rejected and (e := s.error)]

    def __len__(self) -> int: return len(self.items)

    def __iter__(self) -> Iterator[Settled[B]]: return iter(self.items)

    def __getitem__(self, index: int) -> Settled[B]: return self.items[index]


class BatchConfig(BaseModel):
    """Validated arguments for a batched run.

    Example:
        >>> config = BatchConfig(batch_size=10, delay_ms=250)
    """

    model_config = ConfigDict(
        frozen=True, extra="forbid", validate_default=True,
        json_schema_extra={"title": "Batch Configuration", "examples": [{"batch_size": 10, "delay_ms": 0}]},
    )

    batch_size: Annotated[int, Field(strict=True, ge=1)]
    delay_ms: Annotated[float, Field(strict=True, ge=0.0, allow_inf_nan=False)] = 0.0
    on_batch_complete: Callable[[BatchProgress], None] | None = Field(default=None, exclude=True)

    @classmethod
    def build(
        cls,
        batch_size: int | None = None,
        delay_ms: float | None = None,
        on_batch_complete: Callable[[BatchProgress], None] | None = None,
    ) -> BatchConfig:
        """Validate call arguments, filling omitted ones from settings.

        Raises:
            ContractViolation: If any argument is out of range
        """
        if batch_size is None or delay_ms is None:
            defaults = get_settings().batch
            batch_size = defaults.size if batch_size is None else batch_size
            delay_ms = defaults.delay_ms if delay_ms is None else delay_ms
        try:
            return cls(batch_size=batch_size, delay_ms=delay_ms, on_batch_complete=on_batch_complete)
        except ValidationError as e:
            raise ContractViolation.from_validation(e) from e


async def _drive(
    operation: Callable[[A], B | Awaitable[B]],
    items: Iterable[A],
    cfg: BatchConfig,
    settle: bool,
) -> tuple[list, int]:
    results: list = []
    total = len(items) if isinstance(items, Sized) else None
    log, start, count = get_logger("batchwise.batch", batch_size=cfg.batch_size, settle=settle), time.perf_counter(), 0

    for index, chunk in enumerate(partition(items, cfg.batch_size)):
        if index and cfg.delay_ms > 0:
            await pause(cfg.delay_ms)

        group: WaitGroup[B] = WaitGroup()
        for item in chunk:
            group.spawn(resolve(operation, item))
        log.debug("batch started", index=index, size=len(chunk))

        t0 = time.perf_counter()
        try:
            results.extend(await (group.wait_settled() if settle else group.wait_all()))
        except Exception as e:
            log.debug("batch aborted", index=index, error=repr(e))
            raise
        elapsed = (time.perf_counter() - t0) * 1000
        count = index + 1
        log.debug("batch completed", index=index, completed=len(results), elapsed_ms=round(elapsed, 2))

        if cfg.on_batch_complete:
            cfg.on_batch_complete(BatchProgress(index, len(chunk), len(results), total, elapsed))

    log.debug("run finished", batches=count, items=len(results), total_ms=round((time.perf_counter() - start) * 1000, 2))
    return results, count


async def run_in_batches(
    operation: Callable[[A], B | Awaitable[B]],
    items: Iterable[A],
    batch_size: int | None = None,
    delay_ms: float | None = None,
    *,
    on_batch_complete: Callable[[BatchProgress], None] | None = None,
) -> list[B]:
    """Run operation over items in consecutive batches, failing fast.

    Each batch runs concurrently and must fully succeed before the next one
    starts. The first failure cancels the batch's pending siblings, stops all
    later batches and is re-raised unchanged; no partial results are returned.

    Args:
        operation: Sync or async callable, invoked once per started item
        items: Work items, in order
        batch_size: Concurrency width (default from BATCHWISE_BATCH__SIZE)
        delay_ms: Pause between batches (default from BATCHWISE_BATCH__DELAY_MS)
        on_batch_complete: Called with BatchProgress after each successful batch

    Returns:
        Results in the same order as items

    Raises:
        ContractViolation: Invalid batch_size or delay_ms, before any batch runs
        Exception: The first failure raised by operation

    Example:
        >>> await run_in_batches(lambda x: x * 2, [1, 2, 3, 4, 5], 2)
        [2, 4, 6, 8, 10]
    """
    cfg = BatchConfig.build(batch_size, delay_ms, on_batch_complete)
    results, _ = await _drive(operation, items, cfg, settle=False)
    return results


async def run_in_batches_settled(
    operation: Callable[[A], B | Awaitable[B]],
    items: Iterable[A],
    batch_size: int | None = None,
    delay_ms: float | None = None,
    *,
    on_batch_complete: Callable[[BatchProgress], None] | None = None,
) -> SettledResults[B]:
    """Run operation over items in consecutive batches, recording every outcome.

    Never aborts early: each batch waits for all its invocations to settle,
    and failures are captured as rejected Settled entries.

    Raises:
        ContractViolation: Invalid batch_size or delay_ms, before any batch runs

    Example:
        >>> results = await run_in_batches_settled(fetch, urls, 5)
        >>> print(f"Success rate: {results.success_rate:.0%}")
    """
    cfg = BatchConfig.build(batch_size, delay_ms, on_batch_complete)
    start = time.perf_counter()
    outcomes, count = await _drive(operation, items, cfg, settle=True)
    return SettledResults(outcomes, (time.perf_counter() - start) * 1000, count)


def run_in_batches_sync(
    operation: Callable[[A], B | Awaitable[B]],
    items: Iterable[A],
    batch_size: int | None = None,
    delay_ms: float | None = None,
    *,
    on_batch_complete: Callable[[BatchProgress], None] | None = None,
) -> list[B]:
    """Synchronous run_in_batches for sync contexts."""
    return run_sync(run_in_batches(operation, items, batch_size, delay_ms, on_batch_complete=on_batch_complete))


def run_in_batches_settled_sync(
    operation: Callable[[A], B | Awaitable[B]],
    items: Iterable[A],
    batch_size: int | None = None,
    delay_ms: float | None = None,
    *,
    on_batch_complete: Callable[[BatchProgress], None] | None = None,
) -> SettledResults[B]:
    """Synchronous run_in_batches_settled for sync contexts."""
    return run_sync(run_in_batches_settled(operation, items, batch_size, delay_ms, on_batch_complete=on_batch_complete))

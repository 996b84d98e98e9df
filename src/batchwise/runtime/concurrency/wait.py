"""Wait strategies for a fixed group of concurrent operations.

Provides a barrier over a group of tasks with two flavors:
    - wait_all: Wait for all, fail fast on first error (siblings cancelled)
    - wait_settled: Wait for all regardless of errors

Plus the inter-batch suspension step:
    - pause: Sleep for a number of milliseconds (no-op for zero)

Example:
    >>> group = WaitGroup()
    >>> for url in urls:
    ...     group.spawn(fetch(url))
    >>> pages = await group.wait_all()

    >>> results = await gather_settled(risky_a(), risky_b())
    >>> [r.is_fulfilled for r in results]
    [True, False]
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

from batchwise.foundation.errors import OperationCancelled

T = TypeVar("T")


class SettledStatus(StrEnum):
    """Status of a settled operation."""
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


@dataclass(slots=True, frozen=True)
class Settled(Generic[T]):
    """Result of a settled operation (success or failure).

    Similar to JavaScript's Promise.allSettled() results.

    Attributes:
        status: 'fulfilled' or 'rejected'
        value: Result value if fulfilled
        error: Exception if rejected
    """

    status: SettledStatus
    value: T | None = None
    error: BaseException | None = None

    @property
    def is_fulfilled(self) -> bool:
        return self.status == SettledStatus.FULFILLED

    @property
    def is_rejected(self) -> bool:
        return self.status == SettledStatus.REJECTED

    def unwrap(self) -> T:
        """Get value or raise stored error."""
        if self.is_rejected:
            raise self.error or RuntimeError("Rejected with no error")
        return self.value  # type: ignore[return-value]

    def unwrap_or(self, default: T) -> T:
        """Get value or return default."""
        return self.value if self.is_fulfilled else default  # type: ignore[return-value]


def fulfilled(value: T) -> Settled[T]:
    return Settled(SettledStatus.FULFILLED, value=value)


def rejected(error: BaseException) -> Settled[T]:
    return Settled(SettledStatus.REJECTED, error=error)


class WaitGroup(Generic[T]):
    """Barrier over a fixed group of concurrently running tasks.

    Tasks are scheduled on spawn() and start in spawn order on the next
    loop iteration. Results are always reported in spawn order, whatever
    order the tasks finish in.

    A group is single-use: wait on it once, then discard it.
    """

    __slots__ = ("_tasks", "_waited")

    def __init__(self) -> None:
        self._tasks: list[asyncio.Future[T]] = []
        self._waited = False

    def __len__(self) -> int:
        return len(self._tasks)

    def spawn(self, aw: Awaitable[T]) -> None:
        """Schedule an awaitable as a member of this group."""
        if self._waited:
            raise RuntimeError("Cannot spawn into a WaitGroup that has already been waited on")
        self._tasks.append(asyncio.ensure_future(aw))

    async def wait_all(self) -> list[T]:
        """Wait until every task succeeds, or until the first one fails.

        On failure the still-pending tasks are cancelled and awaited, then the
        failure is re-raised unchanged. When several tasks have already failed,
        the earliest-spawned one wins and the rest are suppressed. A member
        that cancels itself counts as failed with OperationCancelled.

        Raises:
            Exception: The first failure among the group's tasks
            OperationCancelled: A member raised CancelledError on its own
            asyncio.CancelledError: If the waiting caller is cancelled
        """
        self._waited = True
        pending: set[asyncio.Future[T]] = set(self._tasks)

        try:
            while pending:
                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                if (failure := self._first_failure(done)) is not None:
                    await self._cancel(pending)
                    raise failure
        except asyncio.CancelledError:
            await self._cancel(self._tasks)
            raise

        return [t.result() for t in self._tasks]

    async def wait_settled(self) -> list[Settled[T]]:
        """Wait for every task to reach a terminal state, never raising for task failures."""
        self._waited = True
        if not self._tasks:
            return []

        try:
            await asyncio.wait(self._tasks, return_when=asyncio.ALL_COMPLETED)
        except asyncio.CancelledError:
            await self._cancel(self._tasks)
            raise

        return [_settle(i, t) for i, t in enumerate(self._tasks)]

    def _first_failure(self, done: set[asyncio.Future[T]]) -> BaseException | None:
        # Retrieve every exception so none is reported as "never retrieved"
        failures = [exc for i, t in enumerate(self._tasks) if t in done and (exc := _failure(i, t)) is not None]
        return failures[0] if failures else None

    @staticmethod
    async def _cancel(tasks: list[asyncio.Future[T]] | set[asyncio.Future[T]]) -> None:
        live = [t for t in tasks if not t.done()]
        for t in live:
            t.cancel()
        if live:
            await asyncio.gather(*live, return_exceptions=True)


def _failure(index: int, task: asyncio.Future[T]) -> BaseException | None:
    return OperationCancelled(index) if task.cancelled() else task.exception()


def _settle(index: int, task: asyncio.Future[T]) -> Settled[T]:
    if (exc := _failure(index, task)) is not None:
        return rejected(exc)
    return fulfilled(task.result())


async def gather_settled(*aws: Awaitable[T]) -> list[Settled[T]]:
    """Gather all results, never raising.

    Like Promise.allSettled() - waits for all operations regardless
    of success or failure, returning status for each.

    Example:
        >>> results = await gather_settled(op_1(), op_2())
        >>> for r in results:
        ...     if r.is_fulfilled:
        ...         print(f"Success: {r.value}")
        ...     else:
        ...         print(f"Failed: {r.error}")
    """
    group: WaitGroup[T] = WaitGroup()
    for aw in aws:
        group.spawn(aw)
    return await group.wait_settled()


async def pause(delay_ms: float) -> None:
    """Suspend for delay_ms milliseconds. Zero or negative returns immediately."""
    if delay_ms > 0:
        await asyncio.sleep(delay_ms / 1000)

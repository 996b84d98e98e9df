"""Tests for WaitGroup, Settled and the pause step."""

from __future__ import annotations

import asyncio
import time

import pytest

from batchwise import ErrorCode, OperationCancelled, Settled, SettledStatus, WaitGroup, gather_settled, pause, run_sync
from batchwise.runtime.concurrency import fulfilled, rejected


async def _after(delay: float, value: object) -> object:
    await asyncio.sleep(delay)
    return value


async def _fail(delay: float, exc: BaseException) -> object:
    await asyncio.sleep(delay)
    raise exc


# ─────────────────────────────────────────────────────────────────────────────
# Settled
# ─────────────────────────────────────────────────────────────────────────────


def test_settled_accessors() -> None:
    ok: Settled[int] = fulfilled(3)
    err: Settled[int] = rejected(ValueError("nope"))

    assert ok.is_fulfilled and not ok.is_rejected
    assert ok.status == SettledStatus.FULFILLED == "fulfilled"
    assert ok.unwrap() == 3
    assert err.is_rejected
    assert err.unwrap_or(0) == 0
    with pytest.raises(ValueError, match="nope"):
        err.unwrap()


def test_rejected_without_error_raises_runtime_error() -> None:
    with pytest.raises(RuntimeError):
        Settled(SettledStatus.REJECTED).unwrap()


# ─────────────────────────────────────────────────────────────────────────────
# WaitGroup
# ─────────────────────────────────────────────────────────────────────────────


class TestWaitGroup:

    @pytest.mark.asyncio
    async def test_wait_all_spawn_order(self) -> None:
        group: WaitGroup[object] = WaitGroup()
        for delay, value in [(0.01, "slow"), (0.0, "fast"), (0.005, "mid")]:
            group.spawn(_after(delay, value))
        assert len(group) == 3
        assert await group.wait_all() == ["slow", "fast", "mid"]

    @pytest.mark.asyncio
    async def test_empty_group(self) -> None:
        assert await WaitGroup().wait_all() == []
        assert await WaitGroup().wait_settled() == []

    @pytest.mark.asyncio
    async def test_wait_all_returns_on_first_failure(self) -> None:
        group: WaitGroup[object] = WaitGroup()
        slow = asyncio.ensure_future(_after(5, "never"))
        group.spawn(slow)
        group.spawn(_fail(0.001, KeyError("k")))

        start = time.monotonic()
        with pytest.raises(KeyError):
            await group.wait_all()
        assert time.monotonic() - start < 1
        assert slow.cancelled()

    @pytest.mark.asyncio
    async def test_simultaneous_failures_raise_earliest_spawned(self) -> None:
        group: WaitGroup[object] = WaitGroup()
        group.spawn(_fail(0, ValueError("first")))
        group.spawn(_fail(0, TypeError("second")))
        with pytest.raises(ValueError, match="first"):
            await group.wait_all()

    @pytest.mark.asyncio
    async def test_wait_settled_keeps_every_outcome(self) -> None:
        group: WaitGroup[object] = WaitGroup()
        group.spawn(_fail(0.002, OSError("io")))
        group.spawn(_after(0.0, 1))
        results = await group.wait_settled()
        assert [r.status for r in results] == [SettledStatus.REJECTED, SettledStatus.FULFILLED]
        assert isinstance(results[0].error, OSError)

    @pytest.mark.asyncio
    async def test_self_cancelled_member_is_a_failure(self) -> None:
        slow = asyncio.ensure_future(_after(5, "never"))
        group: WaitGroup[object] = WaitGroup()
        group.spawn(slow)
        group.spawn(_fail(0, asyncio.CancelledError()))
        with pytest.raises(OperationCancelled) as exc_info:
            await group.wait_all()
        assert exc_info.value.index == 1
        assert slow.cancelled()

        group = WaitGroup()
        group.spawn(_after(0, "ok"))
        group.spawn(_fail(0, asyncio.CancelledError()))
        results = await group.wait_settled()
        assert results[0].unwrap() == "ok"
        assert isinstance(results[1].error, OperationCancelled)
        assert results[1].error.code == ErrorCode.CANCELLED

    @pytest.mark.asyncio
    async def test_group_is_single_use(self) -> None:
        group: WaitGroup[object] = WaitGroup()
        await group.wait_all()
        coro = _after(0, 1)
        with pytest.raises(RuntimeError):
            group.spawn(coro)
        coro.close()

    @pytest.mark.asyncio
    async def test_cancelling_waiter_cancels_members(self) -> None:
        member = asyncio.ensure_future(_after(5, "never"))
        group: WaitGroup[object] = WaitGroup()
        group.spawn(member)

        waiter = asyncio.create_task(group.wait_settled())
        await asyncio.sleep(0.01)
        waiter.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiter
        assert member.cancelled()


@pytest.mark.asyncio
async def test_gather_settled() -> None:
    results = await gather_settled(_after(0, "a"), _fail(0, RuntimeError("b")))
    assert results[0].value == "a"
    assert str(results[1].error) == "b"


# ─────────────────────────────────────────────────────────────────────────────
# pause & run_sync
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_pause_sleeps_in_milliseconds() -> None:
    start = time.monotonic()
    await pause(20)
    assert time.monotonic() - start >= 0.018


@pytest.mark.asyncio
@pytest.mark.parametrize("delay", [0, -5])
async def test_pause_non_positive_is_immediate(delay: float) -> None:
    start = time.monotonic()
    await pause(delay)
    assert time.monotonic() - start < 0.01


def test_run_sync_propagates_errors() -> None:
    with pytest.raises(ZeroDivisionError):
        run_sync(_fail(0, ZeroDivisionError()))  # type: ignore[arg-type]

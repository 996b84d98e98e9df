"""Sync/async interoperability utilities.

Provides utilities for bridging synchronous and asynchronous code:
    - run_sync: Run async code from sync context
    - resolve: Call a sync-or-async callable and await the result if needed

These utilities handle the tricky edge cases:
    - Running in an existing event loop (e.g., FastAPI, Jupyter)
    - Operations that are plain functions rather than coroutine functions

Example:
    >>> # Call async from sync
    >>> result = run_sync(async_function())

    >>> # Same call site for sync and async operations
    >>> value = await resolve(operation, item)
"""

from __future__ import annotations

import asyncio
import inspect
import threading
from typing import Awaitable, Callable, Coroutine, TypeVar

A = TypeVar("A")
T = TypeVar("T")


def run_sync(coro: Coroutine[object, object, T]) -> T:
    """Run async coroutine from synchronous context.

    Handles both scenarios:
    1. No running loop → Use asyncio.run()
    2. Called from within event loop → Use a worker thread with its own loop

    Example:
        >>> async def async_operation():
        ...     await asyncio.sleep(1)
        ...     return "done"
        >>>
        >>> result = run_sync(async_operation())
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    # Inside a running loop: it cannot be re-entered, so block on a thread
    return _run_in_thread_loop(coro)


def _run_in_thread_loop(coro: Coroutine[object, object, T]) -> T:
    """Run coroutine in a new thread with its own event loop."""
    result: T | None = None
    error: BaseException | None = None
    done = threading.Event()

    def runner() -> None:
        nonlocal result, error
        try:
            result = asyncio.run(coro)
        except BaseException as e:
            error = e
        finally:
            done.set()

    thread = threading.Thread(target=runner, daemon=True)
    thread.start()
    done.wait()

    if error is not None:
        raise error
    return result  # type: ignore[return-value]


async def resolve(func: Callable[[A], T | Awaitable[T]], arg: A) -> T:
    """Invoke func(arg), awaiting the result when it is awaitable.

    Sync callables run inline on the event loop thread.
    """
    result = func(arg)
    if inspect.isawaitable(result):
        return await result
    return result

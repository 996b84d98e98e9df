"""Concurrency primitives for batch execution.

Key Components:
    - WaitGroup: Barrier over a fixed task group (fail-fast or settled)
    - Settled: Tagged per-task outcome (fulfilled/rejected)
    - pause: Millisecond suspension step
    - Sync/async interop: run_sync, resolve

Example:
    >>> from batchwise.runtime.concurrency import WaitGroup
    >>>
    >>> group = WaitGroup()
    >>> group.spawn(fetch("a"))
    >>> group.spawn(fetch("b"))
    >>> a, b = await group.wait_all()
"""

from __future__ import annotations

from .interop import resolve, run_sync
from .wait import (
    Settled,
    SettledStatus,
    WaitGroup,
    fulfilled,
    gather_settled,
    pause,
    rejected,
)

__all__ = [
    # Wait strategies
    "WaitGroup",
    "Settled",
    "SettledStatus",
    "fulfilled",
    "rejected",
    "gather_settled",
    "pause",
    # Interop
    "run_sync",
    "resolve",
]

"""Runtime: batch scheduling, concurrency primitives, observability."""

from .batch import (
    BatchConfig,
    BatchProgress,
    SettledResults,
    partition,
    run_in_batches,
    run_in_batches_settled,
    run_in_batches_settled_sync,
    run_in_batches_sync,
)
from .concurrency import Settled, SettledStatus, WaitGroup, gather_settled, pause, run_sync

__all__ = [
    "BatchConfig",
    "BatchProgress",
    "SettledResults",
    "partition",
    "run_in_batches",
    "run_in_batches_settled",
    "run_in_batches_settled_sync",
    "run_in_batches_sync",
    "Settled",
    "SettledStatus",
    "WaitGroup",
    "gather_settled",
    "pause",
    "run_sync",
]

"""Batched execution with bounded concurrency.

Runs an operation over many items in fixed-size batches, one batch at a
time, with an optional pause between batches.

Usage:
    from batchwise.runtime.batch import run_in_batches, run_in_batches_settled

    # Fail-fast: first error aborts the run
    doubled = await run_in_batches(double, items, batch_size=10)

    # Settled: every outcome recorded
    results = await run_in_batches_settled(fetch, urls, batch_size=5, delay_ms=200)
    for r in results:
        if r.is_fulfilled:
            print(f"Success: {r.value}")
        else:
            print(f"Failed: {r.error}")
"""

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

__all__ = [
    "BatchConfig",
    "BatchProgress",
    "SettledResults",
    "partition",
    "run_in_batches",
    "run_in_batches_settled",
    "run_in_batches_settled_sync",
    "run_in_batches_sync",
]

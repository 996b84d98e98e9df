"""batchwise - Run many async (or sync) operations in fixed-size batches.

Processes an ordered collection of items with bounded concurrency: items
are grouped into consecutive batches, each batch runs concurrently, and
the next batch starts only once the current one has resolved. An optional
pause can be inserted between batches.

Quick Start (Fail-fast):
    >>> from batchwise import run_in_batches
    >>>
    >>> async def fetch(url: str) -> bytes: ...
    >>>
    >>> pages = await run_in_batches(fetch, urls, batch_size=10, delay_ms=250)
    >>> # Results are in input order; the first failure is raised and stops the run

Settled (Fault-tolerant):
    >>> from batchwise import run_in_batches_settled
    >>>
    >>> results = await run_in_batches_settled(fetch, urls, batch_size=10)
    >>> for r in results:
    ...     print(r.value if r.is_fulfilled else f"failed: {r.error}")
    >>> print(f"{results.success_rate:.0%} succeeded")

From sync code:
    >>> from batchwise import run_in_batches_sync
    >>> run_in_batches_sync(lambda x: x * 2, [1, 2, 3, 4, 5], 2)
    [2, 4, 6, 8, 10]

Configuration (environment):
    BATCHWISE_BATCH__SIZE=25        default batch width when batch_size is omitted
    BATCHWISE_BATCH__DELAY_MS=100   default pause between batches
    BATCHWISE_LOG_LEVEL=DEBUG       log batch lifecycle events
"""

from .foundation import (
    BatchError,
    BatchwiseSettings,
    ContractViolation,
    ErrorCode,
    OperationCancelled,
    clear_settings_cache,
    get_settings,
)
from .runtime import (
    BatchConfig,
    BatchProgress,
    Settled,
    SettledResults,
    SettledStatus,
    WaitGroup,
    gather_settled,
    partition,
    pause,
    run_in_batches,
    run_in_batches_settled,
    run_in_batches_settled_sync,
    run_in_batches_sync,
    run_sync,
)
from .runtime.observability import configure_from_settings, configure_logging, get_logger

__version__ = "0.1.0"

__all__ = [
    # Scheduling
    "run_in_batches",
    "run_in_batches_settled",
    "run_in_batches_sync",
    "run_in_batches_settled_sync",
    "partition",
    "BatchConfig",
    "BatchProgress",
    "SettledResults",
    # Concurrency
    "WaitGroup",
    "Settled",
    "SettledStatus",
    "gather_settled",
    "pause",
    "run_sync",
    # Errors
    "BatchError",
    "ContractViolation",
    "ErrorCode",
    "OperationCancelled",
    # Settings
    "BatchwiseSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
]

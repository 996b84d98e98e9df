"""Standardized errors for batch scheduling.

Operation failures are never wrapped: the fail-fast scheduler re-raises the
caller's own exception, and the settled scheduler stores it on the outcome.
The exceptions here cover what the caller's code cannot express itself:
bad arguments, and an operation that cancelled its own task.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self

from pydantic import ValidationError


class ErrorCode(StrEnum):
    """Standard error codes for scheduler failures."""
    INVALID_PARAMS = "INVALID_PARAMS"
    CANCELLED = "CANCELLED"
    UNKNOWN = "UNKNOWN"


class BatchError(Exception):
    """Base exception for batchwise."""

    __slots__ = ("code",)

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN) -> None:
        self.code = code
        super().__init__(message)


class ContractViolation(BatchError, ValueError):
    """Invalid arguments passed to a scheduler call, raised before any batch starts."""

    __slots__ = ()

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorCode.INVALID_PARAMS)

    @classmethod
    def from_validation(cls, exc: ValidationError) -> Self:
        """Flatten a pydantic ValidationError into a single readable message."""
        parts = [f"{'.'.join(str(p) for p in err['loc']) or 'value'}: {err['msg']}" for err in exc.errors()]
        return cls("; ".join(parts) or str(exc))


class OperationCancelled(BatchError):
    """An operation raised CancelledError without its caller being cancelled.

    Reported as an ordinary item failure, so a self-cancelled item never
    looks like cancellation of the whole run.
    """

    __slots__ = ("index",)

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"operation for item {index} of its batch cancelled itself", ErrorCode.CANCELLED)

"""Error types for batchwise.

- ErrorCode: Standard error codes
- BatchError: Base exception carrying an ErrorCode
- ContractViolation: Invalid scheduler arguments
- OperationCancelled: An operation cancelled its own task
"""

from .errors import BatchError, ContractViolation, ErrorCode, OperationCancelled

__all__ = ["BatchError", "ContractViolation", "ErrorCode", "OperationCancelled"]

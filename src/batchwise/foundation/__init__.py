"""Foundation layer: errors and configuration."""

from .config import BatchwiseSettings, clear_settings_cache, get_settings
from .errors import BatchError, ContractViolation, ErrorCode, OperationCancelled

__all__ = [
    "BatchError",
    "BatchwiseSettings",
    "ContractViolation",
    "ErrorCode",
    "OperationCancelled",
    "clear_settings_cache",
    "get_settings",
]

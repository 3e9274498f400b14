"""Core infrastructure: errors, results and notifications."""

from .error_handling import (
    BaseError,
    DataIntegrityError,
    ErrorCategory,
    ErrorSeverity,
    StorageError,
)
from .notifications import HealthChange, HealthNotifier
from .result_pattern import (
    AppError,
    ErrorKind,
    capacity_error,
    not_found_error,
    result_to_response,
    storage_error,
    validation_error,
    with_result,
)

__all__ = [
    "BaseError",
    "DataIntegrityError",
    "ErrorCategory",
    "ErrorSeverity",
    "StorageError",
    "HealthChange",
    "HealthNotifier",
    "AppError",
    "ErrorKind",
    "capacity_error",
    "not_found_error",
    "result_to_response",
    "storage_error",
    "validation_error",
    "with_result",
]

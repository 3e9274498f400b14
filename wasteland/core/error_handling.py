"""
Error classification for the Wasteland Survivor core.

Exceptions here are raised by the storage backends and by record parsing.
Public engine operations convert them to ``Result`` values (see
``result_pattern``) so callers never see them directly.
"""

import time
from datetime import datetime, timezone
from enum import Enum, auto
from typing import Any, Dict, Optional


class ErrorSeverity(Enum):
    """Error severity levels for classification and handling."""

    CRITICAL = auto()  # Process cannot continue
    HIGH = auto()  # Storage failures that block an operation
    MEDIUM = auto()  # Recoverable errors
    LOW = auto()  # Minor issues


class ErrorCategory(Enum):
    """Error categories for classification and routing."""

    SYSTEM = auto()
    STORAGE = auto()  # Key-value backend I/O
    DATA_INTEGRITY = auto()  # Corrupt or unreadable persisted data


class BaseError(Exception):
    """Base exception class with enhanced error information."""

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """
        Initialize base error with metadata.

        Args:
            message: Human-readable error message
            severity: Error severity level
            category: Error category for classification
            error_code: Unique error code for tracking
            context: Additional context information
            recoverable: Whether error is recoverable
        """
        super().__init__(message)
        self.message = message
        self.severity = severity
        self.category = category
        self.error_code = error_code or self._generate_error_code()
        self.context = context or {}
        self.recoverable = recoverable
        self.timestamp = datetime.now(timezone.utc)

    def _generate_error_code(self) -> str:
        """Generate error code based on category and timestamp."""
        timestamp = int(time.time() * 1000) % 100000
        return f"{self.category.name[:3]}-{self.severity.name[:3]}-{timestamp}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.name,
            "category": self.category.name,
            "context": self.context,
            "recoverable": self.recoverable,
            "timestamp": self.timestamp.isoformat(),
        }


class StorageError(BaseError):
    """Key-value backend read/write failure."""

    def __init__(self, message: str, operation: str, key: Optional[str] = None, **kwargs: Any) -> None:
        context = kwargs.pop("context", {})
        context["operation"] = operation
        if key is not None:
            context["key"] = key
        super().__init__(
            message,
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.STORAGE,
            context=context,
            **kwargs,
        )


class DataIntegrityError(BaseError):
    """Persisted data that cannot be decoded into a domain object."""

    def __init__(self, message: str, source: Optional[str] = None, **kwargs: Any) -> None:
        context = kwargs.pop("context", {})
        if source:
            context["source"] = source
        super().__init__(
            message,
            severity=ErrorSeverity.MEDIUM,
            category=ErrorCategory.DATA_INTEGRITY,
            context=context,
            **kwargs,
        )

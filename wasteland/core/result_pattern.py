"""
Result pattern helpers built on the returns library.

Every public engine and store operation returns ``Result[T, AppError]``:
``Success`` carries the new state, ``Failure`` carries an ``AppError``
describing why nothing changed.
"""

import asyncio
import functools
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, TypeVar

from returns.result import Failure, Result, Success

T = TypeVar("T")
U = TypeVar("U")


class ErrorKind(Enum):
    """Kinds of application errors."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CAPACITY = "capacity"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass(frozen=True)
class AppError:
    """Domain error carried inside a ``Failure``."""

    kind: ErrorKind
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    recoverable: bool = True

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for tool responses."""
        return {
            "error": self.kind.value,
            "message": self.message,
            "details": dict(self.details),
            "recoverable": self.recoverable,
        }

    @classmethod
    def from_exception(
        cls, exc: Exception, kind: ErrorKind = ErrorKind.INTERNAL, **details: Any
    ) -> "AppError":
        """Build an error from a caught exception."""
        merged = {"exception_type": type(exc).__name__}
        merged.update(getattr(exc, "context", {}) or {})
        merged.update(details)
        return cls(kind=kind, message=str(exc), details=merged)


def validation_error(message: str, field: Optional[str] = None, **details: Any) -> AppError:
    """Create a validation error."""
    if field:
        details["field"] = field
    return AppError(ErrorKind.VALIDATION, message, details, recoverable=False)


def not_found_error(resource: str, resource_id: Any, **details: Any) -> AppError:
    """Create a not-found error."""
    details.update({"resource": resource, "id": resource_id})
    return AppError(ErrorKind.NOT_FOUND, f"{resource} not found: {resource_id}", details)


def capacity_error(message: str, capacity: int, **details: Any) -> AppError:
    """Create a capacity error."""
    details["capacity"] = capacity
    return AppError(ErrorKind.CAPACITY, message, details)


def storage_error(message: str, operation: Optional[str] = None, **details: Any) -> AppError:
    """Create a storage error."""
    if operation:
        details["operation"] = operation
    return AppError(ErrorKind.STORAGE, message, details)


def with_result(
    error_kind: ErrorKind = ErrorKind.INTERNAL,
    error_constructor: Optional[Callable[[str], AppError]] = None,
) -> Callable:
    """
    Wrap a function so exceptions become ``Failure(AppError)``.

    Functions that already return a ``Result`` are passed through untouched.
    Works for both sync and async functions.

    Args:
        error_kind: Kind used when building the error from the exception
        error_constructor: Optional factory taking the exception message
    """

    def to_error(exc: Exception) -> AppError:
        if error_constructor is not None:
            return error_constructor(str(exc))
        return AppError.from_exception(exc, kind=error_kind)

    def wrap_value(value: Any) -> Result:
        if isinstance(value, (Success, Failure)):
            return value
        return Success(value)

    def decorator(func: Callable) -> Callable:
        if asyncio.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Result:
                try:
                    return wrap_value(await func(*args, **kwargs))
                except Exception as e:
                    return Failure(to_error(e))

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Result:
            try:
                return wrap_value(func(*args, **kwargs))
            except Exception as e:
                return Failure(to_error(e))

        return wrapper

    return decorator


def collect_results(results: Iterable[Result[T, AppError]]) -> Result[List[T], AppError]:
    """Turn a list of results into a result of a list, failing on the first failure."""
    values: List[T] = []
    for result in results:
        if isinstance(result, Failure):
            return result
        values.append(result.unwrap())
    return Success(values)


async def collect_async_results(
    tasks: Iterable[Awaitable[Result[T, AppError]]],
) -> Result[List[T], AppError]:
    """Await tasks and collect their results."""
    return collect_results(await asyncio.gather(*tasks))


def map_error(
    result: Result[T, AppError], mapper: Callable[[AppError], AppError]
) -> Result[T, AppError]:
    """Transform the error of a failed result."""
    if isinstance(result, Failure):
        return Failure(mapper(result.failure()))
    return result


def chain_results(*steps: Callable[[Any], Result]) -> Callable[[Any], Result]:
    """Compose result-returning functions left to right."""

    def run(value: Any) -> Result:
        result: Result = Success(value)
        for step in steps:
            result = result.bind(step)
        return result

    return run


def unwrap_or_raise(result: Result[T, AppError]) -> T:
    """Return the value or raise ``RuntimeError`` with the error text."""
    if isinstance(result, Failure):
        raise RuntimeError(str(result.failure()))
    return result.unwrap()


def result_to_response(
    result: Result[Any, AppError], serializer: Optional[Callable[[Any], Any]] = None
) -> Dict[str, Any]:
    """Convert a result into the dictionary shape returned by MCP tools."""
    if isinstance(result, Failure):
        return {"success": False, "error": result.failure().to_dict()}
    value = result.unwrap()
    return {"success": True, "data": serializer(value) if serializer else value}

"""
Tests for Result pattern helpers built on the returns library.

These tests cover:
- AppError construction and serialization
- The with_result decorator for sync and async functions
- Result composition helpers and tool responses
"""

import asyncio
from typing import Any, Dict

import pytest
from returns.result import Failure, Success

from wasteland.core.error_handling import StorageError
from wasteland.core.result_pattern import (
    AppError,
    ErrorKind,
    capacity_error,
    chain_results,
    collect_async_results,
    collect_results,
    map_error,
    not_found_error,
    result_to_response,
    storage_error,
    unwrap_or_raise,
    validation_error,
    with_result,
)


class TestAppError:
    """Test AppError functionality."""

    def test_create_validation_error(self):
        """Test creating a validation error."""
        error = validation_error("Invalid age", field="age")

        assert error.kind == ErrorKind.VALIDATION
        assert error.message == "Invalid age"
        assert error.details["field"] == "age"
        assert not error.recoverable

    def test_create_not_found_error(self):
        """Test creating a not found error."""
        error = not_found_error("Character", "123")

        assert error.kind == ErrorKind.NOT_FOUND
        assert "Character not found: 123" in error.message
        assert error.details["resource"] == "Character"
        assert error.details["id"] == "123"

    def test_create_capacity_error(self):
        error = capacity_error("Backpack is full", 15)
        assert error.kind == ErrorKind.CAPACITY
        assert error.details["capacity"] == 15
        assert error.recoverable

    def test_error_to_dict(self):
        """Test converting error to dictionary."""
        error = storage_error("Disk full", operation="set")
        error_dict = error.to_dict()

        assert error_dict["error"] == "storage"
        assert error_dict["message"] == "Disk full"
        assert error_dict["details"]["operation"] == "set"
        assert error_dict["recoverable"] is True

    def test_error_from_exception(self):
        """Test creating AppError from exception."""
        try:
            raise ValueError("Test exception")
        except Exception as e:
            error = AppError.from_exception(e, kind=ErrorKind.VALIDATION)

        assert error.kind == ErrorKind.VALIDATION
        assert error.message == "Test exception"
        assert error.details["exception_type"] == "ValueError"

    def test_error_from_storage_exception_keeps_context(self):
        error = AppError.from_exception(
            StorageError("write failed", operation="set", key="zombie_characters"), kind=ErrorKind.STORAGE
        )
        assert error.details["operation"] == "set"
        assert error.details["key"] == "zombie_characters"


class TestWithResultDecorator:
    """Test the with_result decorator."""

    def test_sync_function_success(self):
        """Test decorator with successful sync function."""

        @with_result(error_kind=ErrorKind.STORAGE)
        def load_record(key: str) -> Dict[str, Any]:
            return {"key": key, "name": "Ava"}

        result = load_record("zombie_character_1")

        assert isinstance(result, Success)
        assert result.unwrap() == {"key": "zombie_character_1", "name": "Ava"}

    def test_sync_function_failure(self):
        """Test decorator with failing sync function."""

        @with_result(error_kind=ErrorKind.STORAGE)
        def load_record(key: str) -> Dict[str, Any]:
            raise StorageError("Read failed", operation="get", key=key)

        result = load_record("zombie_character_1")

        assert isinstance(result, Failure)
        error = result.failure()
        assert error.kind == ErrorKind.STORAGE
        assert "Read failed" in error.message

    @pytest.mark.asyncio
    async def test_async_function_success(self):
        """Test decorator with successful async function."""

        @with_result(error_kind=ErrorKind.INTERNAL)
        async def fetch(value: int) -> int:
            return value * 2

        result = await fetch(21)

        assert result == Success(42)

    @pytest.mark.asyncio
    async def test_async_function_failure(self):
        """Test decorator with failing async function."""

        @with_result(error_kind=ErrorKind.INTERNAL)
        async def fetch(value: int) -> int:
            raise RuntimeError("boom")

        result = await fetch(1)

        assert isinstance(result, Failure)
        assert result.failure().kind == ErrorKind.INTERNAL

    def test_decorator_with_custom_error_constructor(self):
        """Test decorator with custom error constructor."""

        def create_custom_error(msg: str) -> AppError:
            return validation_error(f"Custom: {msg}", field="test")

        @with_result(error_constructor=create_custom_error)
        def process(data: str) -> str:
            if not data:
                raise ValueError("Empty data")
            return data.upper()

        result = process("")

        assert isinstance(result, Failure)
        error = result.failure()
        assert error.kind == ErrorKind.VALIDATION
        assert "Custom: Empty data" in error.message
        assert error.details["field"] == "test"

    def test_decorator_preserves_existing_result(self):
        """Test that decorator preserves functions that already return Result."""

        @with_result()
        def already_returns_result(value: int):
            if value < 0:
                return Failure(validation_error("Value must be positive"))
            return Success(value * 2)

        assert already_returns_result(5) == Success(10)
        assert already_returns_result(-5).failure().kind == ErrorKind.VALIDATION


class TestResultHelpers:
    """Test Result helper functions."""

    def test_collect_results_all_success(self):
        assert collect_results([Success(1), Success(2), Success(3)]) == Success([1, 2, 3])

    def test_collect_results_with_failure(self):
        """Test collecting results with a failure."""
        error = validation_error("Invalid value")

        collected = collect_results([Success(1), Failure(error), Success(3)])

        assert isinstance(collected, Failure)
        assert collected.failure() == error

    @pytest.mark.asyncio
    async def test_collect_async_results(self):
        """Test collecting async results."""

        async def create_result(value: int):
            await asyncio.sleep(0)
            return Success(value)

        collected = await collect_async_results([create_result(1), create_result(2)])

        assert collected == Success([1, 2])

    def test_map_error(self):
        """Test mapping error type."""
        mapped = map_error(
            Failure(validation_error("Test error")),
            lambda e: storage_error(f"Wrapped: {e.message}"),
        )

        assert mapped.failure().kind == ErrorKind.STORAGE
        assert "Wrapped: Test error" in mapped.failure().message

    def test_map_error_preserves_success(self):
        mapped = map_error(Success(42), lambda e: storage_error("Should not be called"))
        assert mapped == Success(42)

    def test_unwrap_or_raise_success(self):
        assert unwrap_or_raise(Success("value")) == "value"

    def test_unwrap_or_raise_failure(self):
        """Test unwrap_or_raise with Failure."""
        with pytest.raises(RuntimeError) as exc_info:
            unwrap_or_raise(Failure(validation_error("Test error")))

        assert "[validation] Test error" in str(exc_info.value)

    def test_result_to_response_success(self):
        """Test converting Success to a tool response."""
        response = result_to_response(Success({"id": "123"}))

        assert response == {"success": True, "data": {"id": "123"}}

    def test_result_to_response_with_serializer(self):
        response = result_to_response(Success([1, 2]), lambda values: sum(values))
        assert response["data"] == 3

    def test_result_to_response_failure(self):
        """Test converting Failure to a tool response."""
        response = result_to_response(Failure(not_found_error("Character", "123")))

        assert response["success"] is False
        assert "data" not in response
        assert response["error"]["error"] == "not_found"
        assert "Character not found" in response["error"]["message"]

    def test_chain_results(self):
        """Test chaining Result-returning operations."""

        def validate(x: int):
            if x < 0:
                return Failure(validation_error("Must be positive"))
            return Success(x)

        def double(x: int):
            return Success(x * 2)

        def add_ten(x: int):
            return Success(x + 10)

        process = chain_results(validate, double, add_ten)

        assert process(5) == Success(20)
        assert process(-5).failure().kind == ErrorKind.VALIDATION

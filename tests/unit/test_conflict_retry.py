"""Tests for optimistic conflict retries."""

from unittest.mock import AsyncMock

import pytest

from chandlery.application.conflict_retry import run_with_conflict_retry
from chandlery.core.exceptions import ConcurrentModificationError, ValidationError


class TestRunWithConflictRetry:
    async def test_success_first_try(self):
        operation = AsyncMock(return_value="ok")

        assert await run_with_conflict_retry(operation, 1, "a", key="b") == "ok"
        operation.assert_awaited_once_with("a", key="b")

    async def test_retries_once(self):
        operation = AsyncMock(side_effect=[ConcurrentModificationError("Order", 1), "ok"])

        assert await run_with_conflict_retry(operation, 1) == "ok"
        assert operation.await_count == 2

    async def test_reraises_original_error(self):
        operation = AsyncMock(side_effect=ConcurrentModificationError("Order", 1))

        with pytest.raises(ConcurrentModificationError):
            await run_with_conflict_retry(operation, 2)

        assert operation.await_count == 3

    async def test_zero_retries(self):
        operation = AsyncMock(side_effect=ConcurrentModificationError("Order", 1))

        with pytest.raises(ConcurrentModificationError):
            await run_with_conflict_retry(operation, 0)

        assert operation.await_count == 1

    async def test_other_errors_not_retried(self):
        operation = AsyncMock(side_effect=ValidationError("x", "bad"))

        with pytest.raises(ValidationError):
            await run_with_conflict_retry(operation, 3)

        assert operation.await_count == 1

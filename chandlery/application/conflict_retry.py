"""Retry of read-modify-write units that lost an optimistic version race."""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
)

from chandlery.config import get_logger
from chandlery.core.exceptions import ConcurrentModificationError

logger = get_logger(__name__)

T = TypeVar("T")


def _log_retry(retry_state: RetryCallState) -> None:
    """Log conflict retries."""
    logger.warning(
        "optimistic_conflict_retry",
        attempt=retry_state.attempt_number,
        error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
    )


async def run_with_conflict_retry(
    operation: Callable[..., Awaitable[T]],
    retries: int,
    *args: Any,
    **kwargs: Any,
) -> T:
    """
    Run ``operation`` and re-run it up to ``retries`` times on a version conflict.

    The operation must re-read its row on every attempt. When the last
    attempt also conflicts, ConcurrentModificationError propagates.
    """
    retry_decorator = retry(
        stop=stop_after_attempt(max(retries, 0) + 1),
        retry=retry_if_exception_type(ConcurrentModificationError),
        before_sleep=_log_retry,
        reraise=True,
    )
    return await retry_decorator(operation)(*args, **kwargs)

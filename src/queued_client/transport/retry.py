"""
Module: transport/retry.py
Description: Retry policy for queued requests.

Retries transient failures (network errors and 5xx responses) with
jittered exponential backoff. Each delay is drawn uniformly from
[0, min(10 minutes, 2^attempt milliseconds)), so the cap dominates once
attempts pass ~20. Authorization failures, 4xx responses and codec or
URL errors are raised on the first occurrence.
"""

import asyncio
from typing import Any, Awaitable, Callable

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_random_exponential,
)

from queued_client.errors import QueuedApiError
from queued_client.utils.logger import get_logger

logger = get_logger(__name__)

# 2^attempt ms == 0.002 * 2^(attempt - 1) s, capped at 600 s.
BACKOFF_MULTIPLIER_SECS = 0.002
BACKOFF_MAX_SECS = 600


def is_retryable(exc: BaseException) -> bool:
    """Whether a failed attempt may succeed if repeated."""
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, QueuedApiError):
        return exc.is_server_error
    return False


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception()
    logger.warning(
        "Retrying queued request",
        attempt=retry_state.attempt_number,
        delay_ms=retry_state.next_action.sleep * 1000,
        error=str(exc),
        error_type=type(exc).__name__
    )


class RetryController:
    """
    Runs an async operation up to max_retries times.

    Attributes:
        max_retries: Total attempts allowed; 1 disables retrying
        sleep: Coroutine function used to wait between attempts
    """

    def __init__(
        self,
        max_retries: int = 1,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self.max_retries = max_retries
        self.sleep = sleep

    def retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_random_exponential(
                multiplier=BACKOFF_MULTIPLIER_SECS,
                max=BACKOFF_MAX_SECS
            ),
            retry=retry_if_exception(is_retryable),
            before_sleep=_log_retry,
            sleep=self.sleep,
            reraise=True,
        )

    async def run(self, fn: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any) -> Any:
        """
        Call fn until it succeeds, fails permanently or runs out of attempts.

        Raises:
            The last exception raised by fn, unchanged
        """
        return await self.retrying()(fn, *args, **kwargs)

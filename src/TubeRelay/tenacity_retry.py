"""Transient retry executor built on Tenacity.

Provides:
- ``build_async_retrying``: configured ``tenacity.AsyncRetrying`` controller
- ``execute_with_retry``: run one coroutine factory with bounded retries

Policy:
- Up to ``max_attempts`` invocations (default 3)
- Linear backoff: after attempt n the caller waits ``n * backoff_step_s``
- Every exception is retried identically (timeouts, HTTP errors, bad JSON)
- On exhaustion the most recent exception is re-raised unchanged

Backoff sleeps are awaited, so other requests handled by the same event loop
keep running while one request waits.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

import tenacity
from tenacity import RetryCallState, retry_if_exception_type

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BACKOFF_STEP_S = 1.0

SleepFn = Callable[[float], Awaitable[Any]]


def _default_before_sleep_hook(retry_state: RetryCallState) -> None:
    """Log the failed attempt and the upcoming wait."""
    outcome = retry_state.outcome
    exc = outcome.exception() if outcome is not None else None
    next_action = retry_state.next_action
    wait_ms = int(next_action.sleep * 1000) if next_action is not None else 0
    LOGGER.warning(
        f"retry attempt={retry_state.attempt_number} wait_ms={wait_ms} "
        f"error={type(exc).__name__ if exc else None}: {exc}"
    )


def build_async_retrying(
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    backoff_step_s: float = DEFAULT_BACKOFF_STEP_S,
    sleep: Optional[SleepFn] = None,
    before_sleep_hook: Optional[Callable[[RetryCallState], None]] = None,
) -> tenacity.AsyncRetrying:
    """Build a Tenacity AsyncRetrying controller.

    Args:
        max_attempts: Total attempts (initial + retries)
        backoff_step_s: Linear backoff step in seconds
        sleep: Awaitable sleep used between attempts (default: asyncio.sleep)
        before_sleep_hook: Optional hook to run before each sleep

    Returns:
        Configured Tenacity AsyncRetrying controller
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
    if backoff_step_s < 0:
        raise ValueError(f"backoff_step_s must be >= 0, got {backoff_step_s}")

    return tenacity.AsyncRetrying(
        retry=retry_if_exception_type(Exception),
        stop=tenacity.stop_after_attempt(max_attempts),
        wait=tenacity.wait_incrementing(start=backoff_step_s, increment=backoff_step_s),
        sleep=sleep or asyncio.sleep,
        before_sleep=before_sleep_hook or _default_before_sleep_hook,
        reraise=True,
    )


async def execute_with_retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    *,
    backoff_step_s: float = DEFAULT_BACKOFF_STEP_S,
    sleep: Optional[SleepFn] = None,
) -> T:
    """Invoke ``operation`` until it succeeds or attempts run out.

    Args:
        operation: Zero-argument callable returning an awaitable
        max_attempts: Total attempts
        backoff_step_s: Linear backoff step in seconds
        sleep: Awaitable sleep override (tests pass a recorder)

    Returns:
        The first successful result

    Raises:
        Exception: The error raised by the final attempt
    """
    retrying = build_async_retrying(
        max_attempts=max_attempts,
        backoff_step_s=backoff_step_s,
        sleep=sleep,
    )
    return await retrying(operation)


__all__ = [
    "DEFAULT_BACKOFF_STEP_S",
    "DEFAULT_MAX_ATTEMPTS",
    "build_async_retrying",
    "execute_with_retry",
]

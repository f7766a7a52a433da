# 📄 File: growsmart/shared/infrastructure/external_apis/retry.py

# 🧭 Purpose (Layman Explanation):
# When a call to the AI service fails or hangs, this helper tries again a couple of times,
# waiting a little longer each time, and gives up with the last error if nothing works.

# 🧪 Purpose (Technical Summary):
# Retry-with-backoff wrapper around an async operation built on tenacity's AsyncRetrying:
# a fixed number of attempts, exponential waits of 2^(attempt-1) * base_delay seconds,
# a per-attempt timeout raced with asyncio.wait_for, and the last error re-raised.

# 🔗 Dependencies:
# - tenacity: retry orchestration (stop/wait strategies, before_sleep logging)
# - asyncio: per-attempt timeout
# - growsmart.shared.core.exceptions: APITimeoutError

# 🔄 Connected Modules / Calls From:
# growsmart.client.chat_session (chat requests from the Python client)

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from growsmart.shared.core.exceptions import APITimeoutError, ExternalAPIError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_BASE_DELAY = 1.0
TIMEOUT_MESSAGE = "Request timeout - Please try again"


def backoff_delay(attempt_number: int, base_delay: float = DEFAULT_BASE_DELAY) -> float:
    """
    Delay to wait after a failed attempt.

    Args:
        attempt_number: 1-based number of the attempt that just failed
        base_delay: Delay after the first failure, in seconds

    Returns:
        float: base_delay * 2^(attempt_number - 1)
    """
    return base_delay * (2 ** (attempt_number - 1))


def is_transient_error(error: BaseException) -> bool:
    """
    True for failures where no HTTP response came back.

    Timeouts and connection errors are worth another attempt; an error
    status means the server answered and asking again won't change that.
    """
    if isinstance(error, APITimeoutError):
        return True
    return isinstance(error, ExternalAPIError) and error.api_status_code is None


async def _with_timeout(operation: Callable[[], Awaitable[T]], timeout_seconds: float) -> T:
    try:
        return await asyncio.wait_for(operation(), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        raise APITimeoutError(timeout_seconds=timeout_seconds, message=TIMEOUT_MESSAGE)


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    base_delay: float = DEFAULT_BASE_DELAY,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    on_retry: Optional[Callable[[int], Any]] = None,
    retry_if: Optional[Callable[[BaseException], bool]] = None,
) -> T:
    """
    Run an async operation with retries and exponential backoff.

    Every attempt races the operation against ``timeout_seconds``; a timeout
    counts as a failed attempt. After attempt n fails the helper waits
    ``base_delay * 2^(n-1)`` seconds (1s, 2s, 4s... with the defaults). Once
    ``max_attempts`` attempts have failed the last error is raised unchanged.

    Args:
        operation: Zero-argument coroutine factory, called once per attempt
        max_attempts: Total number of attempts
        timeout_seconds: Per-attempt timeout
        base_delay: Wait after the first failure
        sleep: Coroutine used for waiting between attempts
        on_retry: Called with the upcoming attempt number before each retry
        retry_if: Decides whether an error is retried; every error is when None.
            Errors it rejects are raised at once.

    Returns:
        The operation's result from the first successful attempt

    Raises:
        Exception: The error raised by the final attempt
    """

    def _before_sleep(retry_state: RetryCallState) -> None:
        before_sleep_log(logger, logging.WARNING)(retry_state)
        if on_retry is not None:
            on_retry(retry_state.attempt_number + 1)

    retrying = AsyncRetrying(
        retry=retry_if_exception(retry_if or (lambda _: True)),
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=base_delay, exp_base=2),
        before_sleep=_before_sleep,
        sleep=sleep,
        reraise=True,
    )

    async for attempt in retrying:
        with attempt:
            attempt_number = attempt.retry_state.attempt_number
            logger.debug(f"Attempt {attempt_number}/{max_attempts}")
            return await _with_timeout(operation, timeout_seconds)

    raise RuntimeError("retry loop exited without a result")

"""
Tests for the retry-with-backoff request wrapper
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, call

import pytest

from growsmart.shared.core.exceptions import APIRateLimitError, APITimeoutError, ExternalAPIError
from growsmart.shared.infrastructure.external_apis.retry import (
    DEFAULT_MAX_ATTEMPTS,
    TIMEOUT_MESSAGE,
    backoff_delay,
    is_transient_error,
    retry_with_backoff,
)


class TestBackoffDelay:
    """Delay between attempts"""

    def test_doubles_after_each_failure(self):
        assert [backoff_delay(n) for n in range(1, 5)] == [1, 2, 4, 8]

    def test_scales_with_base_delay(self):
        assert backoff_delay(3, base_delay=0.5) == 2.0


class TestRetryWithBackoff:
    """Attempts, waits and error propagation"""

    async def test_returns_first_success_without_waiting(self):
        operation = AsyncMock(return_value={"response": "ok"})
        sleep = AsyncMock()

        result = await retry_with_backoff(operation, sleep=sleep)

        assert result == {"response": "ok"}
        assert operation.await_count == 1
        sleep.assert_not_awaited()

    async def test_makes_exactly_three_attempts_then_raises_last_error(self):
        operation = AsyncMock(side_effect=[
            ConnectionError("first"),
            ConnectionError("second"),
            ConnectionError("third"),
        ])
        sleep = AsyncMock()

        with pytest.raises(ConnectionError, match="third"):
            await retry_with_backoff(operation, sleep=sleep)

        assert DEFAULT_MAX_ATTEMPTS == 3
        assert operation.await_count == 3

    async def test_waits_one_then_two_seconds(self):
        operation = AsyncMock(side_effect=ConnectionError("down"))
        sleep = AsyncMock()

        with pytest.raises(ConnectionError):
            await retry_with_backoff(operation, sleep=sleep)

        assert sleep.await_args_list == [call(1), call(2)]

    async def test_recovers_after_a_failure(self):
        operation = AsyncMock(side_effect=[ConnectionError("blip"), "recovered"])
        sleep = AsyncMock()

        result = await retry_with_backoff(operation, sleep=sleep)

        assert result == "recovered"
        assert sleep.await_args_list == [call(1)]

    async def test_reports_upcoming_attempt_numbers(self):
        operation = AsyncMock(side_effect=ConnectionError("down"))
        on_retry = MagicMock()

        with pytest.raises(ConnectionError):
            await retry_with_backoff(operation, sleep=AsyncMock(), on_retry=on_retry)

        assert on_retry.call_args_list == [call(2), call(3)]

    async def test_timeout_counts_as_failed_attempt(self):
        attempts = []

        async def slow_operation():
            attempts.append(1)
            await asyncio.sleep(1)

        with pytest.raises(APITimeoutError) as exc_info:
            await retry_with_backoff(
                slow_operation,
                max_attempts=2,
                timeout_seconds=0.01,
                sleep=AsyncMock(),
            )

        assert len(attempts) == 2
        assert exc_info.value.message == TIMEOUT_MESSAGE
        assert exc_info.value.details["timeout_seconds"] == 0.01

    async def test_respects_custom_attempt_count(self):
        operation = AsyncMock(side_effect=ValueError("bad"))

        with pytest.raises(ValueError):
            await retry_with_backoff(operation, max_attempts=5, sleep=AsyncMock())

        assert operation.await_count == 5

    async def test_rejected_errors_are_raised_at_once(self):
        operation = AsyncMock(side_effect=APIRateLimitError("growsmart"))
        sleep = AsyncMock()

        with pytest.raises(APIRateLimitError):
            await retry_with_backoff(operation, sleep=sleep, retry_if=is_transient_error)

        assert operation.await_count == 1
        sleep.assert_not_awaited()

    async def test_accepted_errors_are_retried(self):
        operation = AsyncMock(side_effect=[ExternalAPIError("Failed to fetch from growsmart: refused"), "ok"])

        result = await retry_with_backoff(operation, sleep=AsyncMock(), retry_if=is_transient_error)

        assert result == "ok"
        assert operation.await_count == 2


class TestIsTransientError:
    """Which failures deserve another attempt"""

    def test_timeout(self):
        assert is_transient_error(APITimeoutError(timeout_seconds=30)) is True

    def test_connection_failure(self):
        assert is_transient_error(ExternalAPIError("Failed to fetch from growsmart: Cannot connect")) is True

    @pytest.mark.parametrize("status", [400, 422, 500, 503])
    def test_error_status(self, status):
        assert is_transient_error(ExternalAPIError("Server answered", api_status_code=status)) is False

    def test_rate_limited(self):
        assert is_transient_error(APIRateLimitError("growsmart")) is False

    def test_other_exceptions(self):
        assert is_transient_error(ValueError("bad body")) is False

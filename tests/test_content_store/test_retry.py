"""Tests for upload retry with exponential backoff."""

from unittest.mock import AsyncMock, patch

import pytest

from mintpipe.content_store.errors import StorePermanentFailure, StoreUnavailable
from mintpipe.content_store.retry import backoff_delay, with_upload_retry


class TestBackoffDelay:
    """Test cases for backoff_delay."""

    def test_grows_exponentially(self):
        assert [backoff_delay(a, 0.5, 100.0) for a in range(4)] == [0.5, 1.0, 2.0, 4.0]

    def test_is_capped(self):
        assert backoff_delay(10, 0.5, 8.0) == 8.0


class TestWithUploadRetry:
    """Test cases for with_upload_retry."""

    @pytest.mark.asyncio
    async def test_returns_first_success_without_sleeping(self):
        func = AsyncMock(return_value="ref")

        with patch("mintpipe.content_store.retry.asyncio.sleep") as mock_sleep:
            result = await with_upload_retry(max_retries=3)(func)("payload")

        assert result == "ref"
        func.assert_awaited_once_with("payload")
        mock_sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_retries_transient_failures_with_backoff(self):
        func = AsyncMock(
            side_effect=[StoreUnavailable("down"), StoreUnavailable("down"), "ref"]
        )

        with patch(
            "mintpipe.content_store.retry.asyncio.sleep", new_callable=AsyncMock
        ) as mock_sleep:
            result = await with_upload_retry(max_retries=2, base_delay=0.1, max_delay=5)(
                func
            )()

        assert result == "ref"
        assert func.await_count == 3
        sleep_calls = [call.args[0] for call in mock_sleep.await_args_list]
        assert sleep_calls == [0.1, 0.2]

    @pytest.mark.asyncio
    async def test_raises_last_error_when_retries_exhausted(self):
        func = AsyncMock(side_effect=StoreUnavailable("still down"))

        with patch("mintpipe.content_store.retry.asyncio.sleep", new_callable=AsyncMock):
            with pytest.raises(StoreUnavailable, match="still down"):
                await with_upload_retry(max_retries=2)(func)()

        assert func.await_count == 3

    @pytest.mark.asyncio
    async def test_zero_retries_makes_single_attempt(self):
        func = AsyncMock(side_effect=StoreUnavailable("down"))

        with pytest.raises(StoreUnavailable):
            await with_upload_retry(max_retries=0)(func)()

        assert func.await_count == 1

    @pytest.mark.asyncio
    async def test_permanent_failure_is_not_retried(self):
        func = AsyncMock(side_effect=StorePermanentFailure("rejected"))

        with pytest.raises(StorePermanentFailure):
            await with_upload_retry(max_retries=5)(func)()

        assert func.await_count == 1

    @pytest.mark.asyncio
    async def test_on_retry_hook_receives_attempt_and_delay(self):
        func = AsyncMock(side_effect=[StoreUnavailable("down"), "ref"])
        seen = []

        with patch("mintpipe.content_store.retry.asyncio.sleep", new_callable=AsyncMock):
            await with_upload_retry(
                max_retries=1,
                base_delay=0.25,
                on_retry=lambda attempt, error, delay: seen.append((attempt, delay)),
            )(func)()

        assert seen == [(0, 0.25)]

    def test_negative_retries_rejected(self):
        with pytest.raises(ValueError):
            with_upload_retry(max_retries=-1)

"""Retry mechanisms for content store uploads."""

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from mintpipe.content_store.errors import StoreUnavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")

RetryHook = Callable[[int, BaseException, float], None]


def backoff_delay(
    attempt: int, base_delay: float, max_delay: float, backoff_factor: float = 2.0
) -> float:
    """Delay before retry number ``attempt + 1`` (attempt is zero based)."""
    return min(base_delay * (backoff_factor**attempt), max_delay)


def with_upload_retry(
    max_retries: int = 0,
    base_delay: float = 0.5,
    max_delay: float = 8.0,
    backoff_factor: float = 2.0,
    retry_on: tuple[type[BaseException], ...] = (StoreUnavailable,),
    on_retry: RetryHook | None = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator that adds retry logic with exponential backoff for uploads.

    Args:
        max_retries: Maximum number of retry attempts (0 disables retry)
        base_delay: Initial delay between retries in seconds
        max_delay: Maximum delay between retries in seconds
        backoff_factor: Multiplier for exponential backoff
        retry_on: Tuple of exception types to retry on
        on_retry: Optional callback invoked as (attempt, error, delay)
            before each sleep

    Returns:
        Decorated coroutine function with retry logic
    """
    if max_retries < 0:
        raise ValueError(f"max_retries must be >= 0, got {max_retries}")

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except retry_on as e:
                    if attempt == max_retries:
                        raise

                    delay = backoff_delay(attempt, base_delay, max_delay, backoff_factor)

                    logger.debug(
                        f"Upload failed (attempt {attempt + 1}/{max_retries + 1}): {e}. "
                        f"Retrying in {delay:.2f}s..."
                    )
                    if on_retry is not None:
                        on_retry(attempt, e, delay)

                    await asyncio.sleep(delay)

            raise RuntimeError("Unexpected retry loop exit")

        return wrapper

    return decorator

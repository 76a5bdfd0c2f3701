import asyncio
from typing import Any, Awaitable, Callable, Optional

from covidash.adapters.retry_tenacity import TenacityRetryAdapter
from covidash.core.config import RetryConfig
from covidash.core.interfaces.retry import RetryPort


async def retry(
        operation: Callable[[], Awaitable[Any]],
        max_attempts: int = 5,
        interval_ms: float = 1000,
        *,
        cancel_event: Optional[asyncio.Event] = None,
) -> Any:
    """
    Invoke `operation` until it succeeds, at most `max_attempts` times,
    sleeping `interval_ms` milliseconds after each failed attempt but the last.

    Returns the first successful result. If every attempt fails, the
    exception of the final attempt is raised unchanged. Setting
    `cancel_event` stops the sequence before its next attempt with
    RetryCancelledError.

    Raises pydantic.ValidationError for max_attempts < 1 or interval_ms < 0.
    """
    config = RetryConfig(max_attempts=max_attempts, interval_ms=interval_ms)
    adapter: RetryPort = TenacityRetryAdapter(
        attempts=config.max_attempts,
        interval=config.interval_seconds,
        cancel_event=cancel_event,
    )
    return await adapter.execute(operation)

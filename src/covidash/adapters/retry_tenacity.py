import asyncio
import inspect
from typing import Any, Awaitable, Callable, Optional, Sequence, Type

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from covidash.core.exceptions import RetryCancelledError
from covidash.core.settings import logger


class TenacityRetryAdapter:
    """Tenacity-based retry adapter implementing RetryPort.

    Runs attempts strictly one after another with a constant wait between a
    failed attempt and the next one. No wait precedes the first attempt or
    follows the last. Only the final failure is raised; earlier ones are
    dropped. Call-time kwargs can override default policy parameters
    (attempts, interval, exception_types, cancel_event).
    """

    def __init__(
        self,
        attempts: int = 5,
        interval: float = 1.0,
        exception_types: Sequence[Type[Exception]] = (Exception,),
        cancel_event: Optional[asyncio.Event] = None,
    ) -> None:
        self.attempts = attempts
        self.interval = interval
        self.exception_types = tuple(exception_types)
        self.cancel_event = cancel_event

    async def execute(self, func: Callable[..., Awaitable[Any]], *args, **kwargs) -> Any:
        attempts = kwargs.pop("attempts", self.attempts)
        interval = kwargs.pop("interval", self.interval)
        exception_types = tuple(kwargs.pop("exception_types", self.exception_types))
        cancel_event = kwargs.pop("cancel_event", self.cancel_event)

        def log_before_sleep(retry_state: RetryCallState) -> None:
            # attempt count only, never the failure reason
            logger.debug(
                f"[retry] attempt {retry_state.attempt_number}/{attempts} failed, "
                f"next attempt in {interval:.3f}s"
            )

        retrying = AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait_fixed(interval),
            retry=(
                retry_if_exception_type(exception_types)
                & retry_if_not_exception_type(RetryCancelledError)
            ),
            before_sleep=log_before_sleep,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                if cancel_event is not None and cancel_event.is_set():
                    raise RetryCancelledError(attempt.retry_state.attempt_number - 1)
                # a synchronous raise from func lands in the same attempt context
                result = func(*args, **kwargs)
                if inspect.isawaitable(result):
                    result = await result
                return result

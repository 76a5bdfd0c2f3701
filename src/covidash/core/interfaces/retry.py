from typing import Protocol, Any, Awaitable, Callable

class RetryPort(Protocol):
    """Abstract retry interface for async operations.

    Implementations invoke an operation sequentially until it succeeds or the
    attempt budget runs out, waiting a fixed interval between attempts.
    The contract keeps the core decoupled from a specific library (tenacity/backoff).
    """
    async def execute(self, func: Callable[..., Awaitable[Any]], *args, **kwargs) -> Any:  # pragma: no cover - protocol
        """Execute an async callable with retry semantics.

        Args:
            func: Async callable returning a result.
            *args/**kwargs: Passed to the callable.
            Supported kw overrides (optional): attempts, interval, exception_types, cancel_event.
        Returns:
            Result of the first successful invocation.
        Raises:
            Propagates the last exception unchanged after exhausting attempts.
            RetryCancelledError when the cancel event is set before an attempt.
        """
        ...

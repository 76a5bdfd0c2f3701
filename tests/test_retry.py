"""Tests for the `retry` helper.

Covers the attempt budget, the fixed interval between attempts, the
"last failure wins" policy and cancellation. Timings use small intervals
and only assert lower bounds (plus generous upper bounds where a delay
must NOT happen) to tolerate scheduler slack.
"""

import asyncio
import time

import pytest
from pydantic import ValidationError
from unittest.mock import AsyncMock

from covidash.core.exceptions import RetryCancelledError
from covidash.utils import retry


class FlakyOperation:
    """Fails with the queued exceptions, then returns `value`; records call times."""

    def __init__(self, failures, value="ok"):
        self._failures = list(failures)
        self.value = value
        self.calls = []

    async def __call__(self):
        self.calls.append(time.monotonic())
        if self._failures:
            raise self._failures.pop(0)
        return self.value


class TestRetryOutcome:

    @pytest.mark.asyncio
    async def test_success_on_first_attempt_calls_once(self):
        op = AsyncMock(return_value=42)

        result = await retry(op, max_attempts=5, interval_ms=0)

        assert result == 42
        assert op.await_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("attempts", [1, 2, 4])
    async def test_always_failing_raises_last_error_after_n_calls(self, attempts):
        errors = [RuntimeError(f"failure {i}") for i in range(1, attempts + 1)]
        op = FlakyOperation(errors)

        with pytest.raises(RuntimeError) as excinfo:
            await retry(op, max_attempts=attempts, interval_ms=0)

        assert len(op.calls) == attempts
        # the final attempt's exception, not an earlier one and not a wrapper
        assert excinfo.value is errors[-1]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("failures", [1, 3])
    async def test_recovers_after_k_failures(self, failures):
        op = FlakyOperation([ValueError("nope")] * failures, value="done")

        result = await retry(op, max_attempts=failures + 1, interval_ms=0)

        assert result == "done"
        assert len(op.calls) == failures + 1

    @pytest.mark.asyncio
    async def test_fail_fail_succeed_waits_between_attempts(self):
        op = FlakyOperation([ConnectionError("a"), ConnectionError("b")])

        started = time.monotonic()
        result = await retry(op, max_attempts=3, interval_ms=10)
        elapsed = time.monotonic() - started

        assert result == "ok"
        assert len(op.calls) == 3
        assert elapsed >= 0.019
        for earlier, later in zip(op.calls, op.calls[1:]):
            assert later - earlier >= 0.009

    @pytest.mark.asyncio
    async def test_single_attempt_fails_without_delay(self):
        op = AsyncMock(side_effect=RuntimeError("boom"))

        started = time.monotonic()
        with pytest.raises(RuntimeError, match="boom"):
            # default interval is a full second; none of it may be spent
            await retry(op, max_attempts=1)
        elapsed = time.monotonic() - started

        assert op.await_count == 1
        assert elapsed < 0.5

    @pytest.mark.asyncio
    async def test_zero_interval_two_attempts(self):
        op = AsyncMock(side_effect=ValueError("x"))

        with pytest.raises(ValueError, match="x"):
            await retry(op, max_attempts=2, interval_ms=0)

        assert op.await_count == 2

    @pytest.mark.asyncio
    async def test_no_delay_after_final_failure(self):
        op = AsyncMock(side_effect=ValueError("x"))

        started = time.monotonic()
        with pytest.raises(ValueError):
            await retry(op, max_attempts=2, interval_ms=200)
        elapsed = time.monotonic() - started

        # one interval between the two attempts, none after the second
        assert 0.19 <= elapsed < 0.39

    @pytest.mark.asyncio
    async def test_synchronous_raise_is_treated_as_failure(self):
        calls = []

        async def succeed():
            return "late"

        def operation():
            calls.append(1)
            if len(calls) < 3:
                raise OSError("raised before any awaitable was returned")
            return succeed()

        result = await retry(operation, max_attempts=3, interval_ms=0)

        assert result == "late"
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_base_exceptions_are_not_retried(self):
        op = AsyncMock(side_effect=asyncio.CancelledError())

        with pytest.raises(asyncio.CancelledError):
            await retry(op, max_attempts=5, interval_ms=0)

        assert op.await_count == 1

    @pytest.mark.asyncio
    async def test_concurrent_calls_have_independent_budgets(self):
        first = FlakyOperation([ValueError("1")], value="first")
        second = FlakyOperation([ValueError("1"), ValueError("2")], value="second")

        results = await asyncio.gather(
            retry(first, max_attempts=2, interval_ms=5),
            retry(second, max_attempts=3, interval_ms=5),
        )

        assert results == ["first", "second"]
        assert len(first.calls) == 2
        assert len(second.calls) == 3


class TestRetryValidation:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("kwargs", [{"max_attempts": 0}, {"interval_ms": -1}])
    async def test_invalid_policy_rejected_before_any_attempt(self, kwargs):
        op = AsyncMock(return_value=1)

        with pytest.raises(ValidationError):
            await retry(op, **kwargs)

        assert op.await_count == 0


class TestRetryCancellation:

    @pytest.mark.asyncio
    async def test_cancelled_before_first_attempt(self):
        op = AsyncMock(return_value=1)
        cancel = asyncio.Event()
        cancel.set()

        with pytest.raises(RetryCancelledError) as excinfo:
            await retry(op, max_attempts=3, interval_ms=0, cancel_event=cancel)

        assert excinfo.value.attempts_made == 0
        assert op.await_count == 0

    @pytest.mark.asyncio
    async def test_cancel_set_by_failing_attempt_stops_next_attempt(self):
        cancel = asyncio.Event()
        calls = []

        async def operation():
            calls.append(1)
            cancel.set()
            raise ConnectionError("down")

        with pytest.raises(RetryCancelledError) as excinfo:
            await retry(operation, max_attempts=5, interval_ms=5, cancel_event=cancel)

        assert excinfo.value.attempts_made == 1
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_cancel_during_interval_stops_next_attempt(self):
        cancel = asyncio.Event()
        calls = []

        async def operation():
            calls.append(1)
            # fires 10ms into the 50ms wait that follows this failure
            asyncio.get_running_loop().call_later(0.01, cancel.set)
            raise ConnectionError("down")

        with pytest.raises(RetryCancelledError) as excinfo:
            await retry(operation, max_attempts=5, interval_ms=50, cancel_event=cancel)

        assert excinfo.value.attempts_made == 1
        assert len(calls) == 1

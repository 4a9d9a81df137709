"""Tests for the lazy-result helpers."""

from __future__ import annotations

import asyncio

from kungfu import Ok, Error, LazyCoroResult

from checkoutkit.errors import Timeout
from checkoutkit.lift import from_awaitable, from_result, with_timeout

from tests.helpers import error_of, run, value_of


def slow(seconds: float, value: int = 1) -> LazyCoroResult[int, str]:
    async def _run() -> Ok[int]:
        await asyncio.sleep(seconds)
        return Ok(value)

    return LazyCoroResult(_run)


class TestWithTimeout:
    def test_fast_computation_passes_through(self) -> None:
        assert value_of(run(with_timeout(slow(0), 1.0, on_timeout=Timeout))) == 1

    def test_deadline_produces_error(self) -> None:
        assert error_of(run(with_timeout(slow(5), 0.01, on_timeout=Timeout))) == Timeout()

    def test_none_disables_deadline(self) -> None:
        computation = slow(0, 3)

        assert with_timeout(computation, None, on_timeout=Timeout) is computation

    def test_inner_error_is_kept(self) -> None:
        result = run(with_timeout(from_result(Error("boom")), 1.0, on_timeout=Timeout))

        assert error_of(result) == "boom"


class TestFromAwaitable:
    def test_exception_becomes_error(self) -> None:
        async def explode() -> int:
            raise RuntimeError("kaput")

        result = run(from_awaitable(explode, on_error=lambda exc: str(exc)))

        assert error_of(result) == "kaput"

    def test_value_becomes_ok(self) -> None:
        async def answer() -> int:
            return 42

        assert value_of(run(from_awaitable(answer, on_error=str))) == 42

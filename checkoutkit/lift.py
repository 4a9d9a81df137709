"""
Lift — turning results, awaitables and deadlines into lazy results.

    from checkoutkit import lift as L

    charge = L.with_timeout(
        L.from_awaitable(lambda: processor.process(method, amount, "usd"), on_error=str),
        seconds=30.0,
        on_timeout=lambda: "payment timed out",
    )
    result = await charge
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from kungfu import Error, LazyCoroResult, Result

from combinators.lift import catching_async

from checkoutkit._types import Lazy


def from_result[T, E](result: Result[T, E]) -> Lazy[T, E]:
    """Lift an already computed Result."""
    async def _run() -> Result[T, E]:
        return result
    return LazyCoroResult(_run)


def from_awaitable[T, E](
    awaitable_fn: Callable[[], Awaitable[T]],
    on_error: Callable[[Exception], E],
) -> Lazy[T, E]:
    """Run ``awaitable_fn`` lazily; an exception becomes ``Error(on_error(exc))``."""
    return catching_async(awaitable_fn, on_error=on_error)


def with_timeout[T, E](
    computation: Lazy[T, E],
    seconds: float | None,
    on_timeout: Callable[[], E],
) -> Lazy[T, E]:
    """
    Bound a lazy computation by a deadline.

    When the deadline passes the inner computation is cancelled and
    ``Error(on_timeout())`` is produced. ``seconds=None`` runs unbounded.
    """
    if seconds is None:
        return computation

    async def _run() -> Result[T, E]:
        try:
            async with asyncio.timeout(seconds):
                return await computation
        except TimeoutError:
            return Error(on_timeout())

    return LazyCoroResult(_run)


__all__ = ("from_result", "from_awaitable", "with_timeout")

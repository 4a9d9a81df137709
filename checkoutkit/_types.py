"""
Shared type aliases and money formatting.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from kungfu import LazyCoroResult

type Lazy[T, E] = LazyCoroResult[T, E]
"""Async computation that has not started yet and may fail with E."""

type Compensator[T] = Callable[[T], Awaitable[None]]
"""Receives the value produced by a completed commit step and undoes it."""


def format_money(amount: float) -> str:
    return f"${amount:.2f}"


__all__ = ("Lazy", "Compensator", "format_money")

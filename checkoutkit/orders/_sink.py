"""
Order sink contract and the in-memory implementation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

import structlog
from kungfu import Result, Ok, Error

from checkoutkit.models import Order

logger = structlog.get_logger(__name__)


class OrderSink(Protocol):
    """Accepts a completed order; returns an acknowledgement id or error text."""

    async def submit(self, order: Order) -> Result[str, str]: ...


@dataclass
class InMemoryOrderSink:
    orders: dict[str, dict[str, Any]] = field(default_factory=dict[str, dict[str, Any]])
    failures_remaining: int = 0
    failure_message: str = "order service unavailable"

    def fail_next(self, times: int = 1, message: str | None = None) -> None:
        self.failures_remaining = times
        if message is not None:
            self.failure_message = message

    async def submit(self, order: Order) -> Result[str, str]:
        if self.failures_remaining > 0:
            self.failures_remaining -= 1
            logger.warning("order_submit_failed", order_number=order.order_number, reason=self.failure_message)
            return Error(self.failure_message)
        if order.order_number in self.orders:
            return Error(f"duplicate order number {order.order_number}")

        self.orders[order.order_number] = order.to_dict()
        logger.info("order_stored", order_number=order.order_number, total=order.total)
        return Ok(order.order_number)


__all__ = ("OrderSink", "InMemoryOrderSink")

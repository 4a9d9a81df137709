"""
Quote services — the async boundary CheckoutFlow talks to.

    LocalQuoteService(engine)                 # no I/O, resolves immediately
    SimulatedQuoteService(engine, simulator)  # mock network in front

Both return a lazy computation; nothing runs until it is awaited, and
cancelling the await leaves no partial state behind.
"""

from __future__ import annotations

from typing import Protocol

import structlog
from kungfu import Result, Ok, Error, LazyCoroResult

from checkoutkit._types import Lazy
from checkoutkit.errors import (
    NetworkError,
    ServiceTemporarilyUnavailable,
    ShippingError,
    Timeout,
)
from checkoutkit.lift import from_result
from checkoutkit.network import FaultKind, NetworkFault, NetworkSimulator
from checkoutkit.shipping._engine import Quotes, ShippingQuoteEngine
from checkoutkit.shipping._request import ShippingRequest

logger = structlog.get_logger(__name__)


class QuoteService(Protocol):
    def quote(
        self,
        request: ShippingRequest,
        promo_code: str | None = None,
    ) -> Lazy[Quotes, ShippingError]: ...


def _log_outcome(request: ShippingRequest, result: Result[Quotes, ShippingError]) -> None:
    destination = f"{request.address.city}, {request.address.region}"
    match result:
        case Ok(quotes):
            logger.info(
                "shipping_quote_completed",
                methods_count=len(quotes),
                cheapest_cost=min((q.adjusted_cost for q in quotes), default=0.0),
                fastest_days=min((q.option.transit_days for q in quotes), default=0),
                cart_total_weight=request.total_weight,
                cart_total_value=request.total_value,
                destination=destination,
            )
        case Error(e):
            logger.warning(
                "shipping_quote_failed",
                error_type=type(e).__name__,
                error_message=e.message,
                cart_items=len(request.cart.lines),
                destination=destination,
            )


class LocalQuoteService:
    def __init__(self, engine: ShippingQuoteEngine | None = None) -> None:
        self.engine = engine or ShippingQuoteEngine()

    def quote(
        self,
        request: ShippingRequest,
        promo_code: str | None = None,
    ) -> Lazy[Quotes, ShippingError]:
        async def _run() -> Result[Quotes, ShippingError]:
            result: Result[Quotes, ShippingError] = self.engine.calculate_shipping(request, promo_code)
            _log_outcome(request, result)
            return result
        return LazyCoroResult(_run)


def fault_to_shipping_error(fault: NetworkFault) -> ShippingError:
    match fault.kind:
        case FaultKind.TIMEOUT:
            return Timeout()
        case FaultKind.SERVER_ERROR:
            return ServiceTemporarilyUnavailable()
        case FaultKind.NO_CONNECTION | FaultKind.INVALID_DATA:
            return NetworkError(fault.message)


class SimulatedQuoteService:
    """Runs the engine behind the mock network (delay + injected faults)."""

    ENDPOINT = "shipping/quote"

    def __init__(
        self,
        engine: ShippingQuoteEngine | None = None,
        simulator: NetworkSimulator | None = None,
    ) -> None:
        self.engine = engine or ShippingQuoteEngine()
        self.simulator = simulator or NetworkSimulator()

    def quote(
        self,
        request: ShippingRequest,
        promo_code: str | None = None,
    ) -> Lazy[Quotes, ShippingError]:
        async def _run() -> Result[Quotes, ShippingError]:
            computation = from_result(self.engine.calculate_shipping(request, promo_code))
            outcome = await self.simulator.run(computation, endpoint=self.ENDPOINT)
            result: Result[Quotes, ShippingError]
            match outcome:
                case Error(NetworkFault() as fault):
                    result = Error(fault_to_shipping_error(fault))
                case _:
                    result = outcome  # type: ignore[assignment]
            _log_outcome(request, result)
            return result
        return LazyCoroResult(_run)


__all__ = (
    "QuoteService",
    "LocalQuoteService",
    "SimulatedQuoteService",
    "fault_to_shipping_error",
)

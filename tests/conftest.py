"""Shared fixtures for checkoutkit tests.

Provides a seeded catalog, addresses, simulated processors and a
CheckoutFlow factory wired to in-memory collaborators.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from checkoutkit.catalog import InMemoryCatalog
from checkoutkit.checkout import CheckoutFlow
from checkoutkit.models import Address, CartLine, CartSnapshot, PaymentType
from checkoutkit.orders import InMemoryOrderSink
from checkoutkit.payments import SimulatedCardProcessor, SimulatedStoreProcessor
from checkoutkit.shipping import LocalQuoteService
from checkoutkit.telemetry import RecordingTelemetry

from tests.helpers import make_address, make_product


@pytest.fixture
def catalog() -> InMemoryCatalog:
    """Demo catalog plus a light 50.00 widget and a 4 lb brick."""
    c = InMemoryCatalog()
    c.seed()
    c.add(make_product("WIDGET", price=50.0, weight=1.0))
    c.add(make_product("BRICK", price=20.0, weight=4.0))
    return c


@pytest.fixture
def home() -> Address:
    return make_address()


@pytest.fixture
def widget_cart() -> CartSnapshot:
    """Subtotal 150.00, weight 3 lbs."""
    return CartSnapshot.of(CartLine("WIDGET", 3, 50.0))


@pytest.fixture
def telemetry() -> RecordingTelemetry:
    return RecordingTelemetry()


@pytest.fixture
def card_processor() -> SimulatedCardProcessor:
    return SimulatedCardProcessor()


@pytest.fixture
def store_processor() -> SimulatedStoreProcessor:
    return SimulatedStoreProcessor()


@pytest.fixture
def order_sink() -> InMemoryOrderSink:
    return InMemoryOrderSink()


@pytest.fixture
def make_flow(
    catalog: InMemoryCatalog,
    telemetry: RecordingTelemetry,
    card_processor: SimulatedCardProcessor,
    store_processor: SimulatedStoreProcessor,
    order_sink: InMemoryOrderSink,
) -> Callable[..., CheckoutFlow]:
    """Factory for flows wired to the in-memory fixtures; keyword overrides win."""

    def _make(**overrides: Any) -> CheckoutFlow:
        dependencies: dict[str, Any] = {
            "products": catalog,
            "quotes": LocalQuoteService(),
            "payments": {
                PaymentType.STRIPE: card_processor,
                PaymentType.STORE_KIT: store_processor,
            },
            "orders": order_sink,
            "telemetry": telemetry,
        }
        dependencies.update(overrides)
        return CheckoutFlow(**dependencies)

    return _make

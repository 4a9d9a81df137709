"""Tests for telemetry sinks and the in-memory catalog."""

from __future__ import annotations

from checkoutkit import telemetry as T
from checkoutkit.catalog import InMemoryCatalog
from checkoutkit.telemetry import RecordingTelemetry, StructlogTelemetry

from tests.helpers import make_product, run


class TestRecordingTelemetry:
    def test_records_breadcrumbs_in_order(self) -> None:
        telemetry = RecordingTelemetry()
        telemetry.breadcrumb(T.CHECKOUT_STARTED)
        telemetry.breadcrumb(T.CHECKOUT_STEP_ENTERED)

        assert telemetry.breadcrumbs == [T.CHECKOUT_STARTED, T.CHECKOUT_STEP_ENTERED]

    def test_messages_filter_by_level(self) -> None:
        telemetry = RecordingTelemetry()
        telemetry.log(T.Level.INFO, "Checkout started", item_count=2)
        telemetry.log(T.Level.ERROR, "Payment failed", provider="card")

        assert telemetry.messages() == ["Checkout started", "Payment failed"]
        assert telemetry.messages(T.Level.ERROR) == ["Payment failed"]
        assert telemetry.logs[0].attributes == {"item_count": 2}


def test_structlog_telemetry_accepts_every_level() -> None:
    telemetry = StructlogTelemetry()
    telemetry.breadcrumb(T.ORDER_SUBMITTED)
    for level in T.Level:
        telemetry.log(level, "Checkout step entered", step="shipping")


class TestCatalog:
    def test_seeded_products_resolve(self) -> None:
        catalog = InMemoryCatalog()
        catalog.seed()

        product = run(catalog.resolve("LAPTOP"))

        assert product is not None
        assert product.name == "MacBook Pro"

    def test_unknown_product_is_none(self) -> None:
        assert run(InMemoryCatalog().resolve("GHOST")) is None

    def test_add_overrides(self) -> None:
        catalog = InMemoryCatalog()
        catalog.seed()
        catalog.add(make_product("CABLE", price=1.0))

        assert run(catalog.resolve("CABLE")).price == 1.0
        assert len(catalog.list_all()) == 7

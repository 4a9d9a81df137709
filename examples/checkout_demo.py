"""
Checkout demo — scripted sessions against the simulated services.

Run: python -m examples.checkout_demo
"""

from __future__ import annotations

import random

from kungfu import Ok, Error

from checkoutkit import CheckoutSettings, NetworkProfile
from checkoutkit.catalog import InMemoryCatalog
from checkoutkit.checkout import CheckoutFlow, CheckoutStep
from checkoutkit.errors import describe, is_retryable
from checkoutkit.models import PaymentType
from checkoutkit.network import NetworkSimulator
from checkoutkit.orders import SqlOrderSink, create_order_database
from checkoutkit.payments import SimulatedCardProcessor, SimulatedStoreProcessor
from checkoutkit.shipping import LocalQuoteService, ShippingQuoteEngine, SimulatedQuoteService
from checkoutkit.telemetry import RecordingTelemetry

from examples._infra import (
    DECLINED_VISA,
    FAR_NORTH,
    GADGETS,
    HOME,
    STORE,
    VISA,
    WORKOUT,
    banner,
    run,
)


async def happy_path(catalog: InMemoryCatalog, sink: SqlOrderSink) -> None:
    banner("1. Happy path with a declined card first")

    telemetry = RecordingTelemetry()
    flow = CheckoutFlow(
        products=catalog,
        quotes=LocalQuoteService(),
        payments={PaymentType.STRIPE: SimulatedCardProcessor()},
        orders=sink,
        telemetry=telemetry,
    )
    await flow.initialize(GADGETS)
    print(f"  [{flow.current_step.step_number}] {flow.current_step.title}: subtotal ${flow.draft.subtotal:.2f}")

    flow.select_shipping_address(HOME)
    await flow.advance()
    for quote in flow.quotes:
        print(f"    {quote.option.display_name:<22} {quote.option.formatted_cost:>8}  {quote.adjustment_reason or ''}")

    best = flow.recommended_quote
    assert best is not None
    flow.select_shipping_option(best.option_id)
    await flow.advance()

    flow.select_payment_method(DECLINED_VISA)
    await flow.advance()
    print(f"  [{flow.current_step.step_number}] total ${flow.draft.total:.2f}")

    match await flow.commit_order():
        case Error(e):
            print(f"  ✗ {describe(e)} (retry: {is_retryable(e)})")
        case Ok(order):
            print(f"  unexpected success {order.order_number}")

    flow.retreat()
    flow.select_payment_method(VISA)
    await flow.advance()
    match await flow.commit_order():
        case Ok(order):
            print(f"  ✓ {order.order_number} {order.status.value} ${order.total:.2f}")
        case Error(e):
            print(f"  ✗ {describe(e)}")

    print(f"  breadcrumbs: {', '.join(telemetry.breadcrumbs)}")


async def flaky_network(catalog: InMemoryCatalog) -> None:
    banner("2. Heavy cart to a remote region over a flaky network")

    simulator = NetworkSimulator(NetworkProfile.unreliable(), rng=random.Random(7), sleep=_no_sleep)
    flow = CheckoutFlow(
        products=catalog,
        quotes=SimulatedQuoteService(ShippingQuoteEngine(), simulator),
        settings=CheckoutSettings(),
    )
    await flow.initialize(WORKOUT)
    flow.select_shipping_address(FAR_NORTH)

    for attempt in range(1, 6):
        match await flow.advance():
            case Ok(step):
                print(f"  attempt {attempt}: entered {step.title}")
                break
            case Error(e):
                print(f"  attempt {attempt}: {describe(e)} (retry: {is_retryable(e)})")

    if flow.current_step is CheckoutStep.SHIPPING:
        for quote in flow.quotes:
            print(f"    {quote.option.name:<22} ${quote.adjusted_cost:.3f}  {quote.adjustment_reason or ''}")


async def store_purchase(catalog: InMemoryCatalog, sink: SqlOrderSink) -> None:
    banner("3. In-app purchase")

    flow = CheckoutFlow(
        products=catalog,
        payments={PaymentType.STORE_KIT: SimulatedStoreProcessor()},
        orders=sink,
        order_numbers=lambda now: f"ORD-{int(now.timestamp())}-IAP",
    )
    await flow.initialize(GADGETS)
    flow.set_promo_code("freeship")
    flow.select_shipping_address(HOME)
    await flow.advance()
    flow.select_shipping_option("express")
    await flow.advance()
    flow.select_payment_method(STORE)

    match await flow.commit_order():
        case Ok(order):
            print(f"  ✓ {order.order_number} via {order.payment_method.display_name}, txn {order.transaction_ref}")
        case Error(e):
            print(f"  ✗ {describe(e)}")


async def _no_sleep(_: float) -> None:
    return None


async def main() -> None:
    catalog = InMemoryCatalog()
    catalog.seed()
    sessions, engine = await create_order_database()
    sink = SqlOrderSink(sessions)

    await happy_path(catalog, sink)
    await flaky_network(catalog)
    await store_purchase(catalog, sink)

    banner("Stored orders")
    for number in await sink.order_numbers():
        print(f"  {number}")
    await engine.dispose()


if __name__ == "__main__":
    run(main)

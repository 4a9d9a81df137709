"""Builders and spies shared by the test modules."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Any

from kungfu import Ok, Error

from checkoutkit.checkout import CheckoutStep
from checkoutkit.models import (
    Address,
    CartLine,
    CartSnapshot,
    Dimensions,
    OrderDraft,
    PaymentMethod,
    PaymentType,
    ProductInfo,
)
from checkoutkit.payments import StoreProduct, SandboxCards
from checkoutkit.shipping import ShippingRequest


def run[T](awaitable: Awaitable[T]) -> T:
    """Drive a coroutine or lazy result to completion."""

    async def _main() -> T:
        return await awaitable

    return asyncio.run(_main())


def make_product(
    product_id: str,
    *,
    price: float = 10.0,
    weight: float = 1.0,
    dimensions: Dimensions | None = None,
    category: str = "general",
) -> ProductInfo:
    return ProductInfo(
        product_id,
        product_id.title(),
        price,
        weight,
        dimensions or Dimensions(4, 4, 4),
        category,
    )


def make_address(
    region: str = "NY",
    *,
    city: str = "New York",
    postal_code: str = "10118",
    street: str = "350 Fifth Avenue",
    country: str = "US",
) -> Address:
    return Address("Ada Lovelace", (street,), city, region, postal_code, country)


def make_request(
    *items: tuple[ProductInfo, int],
    address: Address | None = None,
) -> ShippingRequest:
    """Request whose lines are priced at each product's catalog price."""
    cart = CartSnapshot(tuple(CartLine(p.product_id, qty, p.price) for p, qty in items))
    return ShippingRequest(cart, address or make_address(), {p.product_id: p for p, _ in items})


# Payment methods
CARD = PaymentMethod("pm_card", PaymentType.STRIPE, True, "visa", "4242", SandboxCards.VISA_SUCCESS)
DECLINED_CARD = PaymentMethod("pm_declined", PaymentType.STRIPE, False, "visa", "0002", SandboxCards.VISA_DECLINED)
AUTH_CARD = PaymentMethod("pm_3ds", PaymentType.STRIPE, False, "visa", "3155", SandboxCards.AUTHENTICATION_REQUIRED)
STORE_METHOD = PaymentMethod("pm_store", PaymentType.STORE_KIT, store_product_id=StoreProduct.LARGE_CART.value)
PAYPAL = PaymentMethod("pm_paypal", PaymentType.PAYPAL)


class ListenerSpy:
    def __init__(self) -> None:
        self.steps: list[tuple[CheckoutStep, CheckoutStep]] = []
        self.drafts: list[float] = []

    def step_changed(self, old: CheckoutStep, new: CheckoutStep) -> None:
        self.steps.append((old, new))

    def draft_changed(self, draft: OrderDraft) -> None:
        self.drafts.append(draft.total)


def value_of(result: Any) -> Any:
    """Unwrap an Ok, failing the test on Error."""
    assert isinstance(result, Ok), f"expected Ok, got {result!r}"
    return result.value


def error_of(result: Any) -> Any:
    """Unwrap an Error, failing the test on Ok."""
    assert isinstance(result, Error), f"expected Error, got {result!r}"
    return result.value

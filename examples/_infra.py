"""Shared infrastructure for examples."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine

from checkoutkit.models import Address, CartLine, CartSnapshot, PaymentMethod, PaymentType
from checkoutkit.payments import StoreProduct, SandboxCards


# Addresses
HOME = Address("Ada Lovelace", ("350 Fifth Avenue", "Apt 21"), "New York", "NY", "10118")
FAR_NORTH = Address("Matthew Henson", ("100 Main Street",), "Billings", "MT", "59101")


# Payment methods
VISA = PaymentMethod("pm_visa", PaymentType.STRIPE, True, "visa", "4242", SandboxCards.VISA_SUCCESS)
DECLINED_VISA = PaymentMethod("pm_declined", PaymentType.STRIPE, False, "visa", "0002", SandboxCards.VISA_DECLINED)
STORE = PaymentMethod("pm_store", PaymentType.STORE_KIT, store_product_id=StoreProduct.LARGE_CART.value)


# Carts
GADGETS = CartSnapshot.of(
    CartLine("PHONE", 1, 999.00, {"color": "black"}),
    CartLine("CASE", 2, 29.99),
)
WORKOUT = CartSnapshot.of(CartLine("DUMBBELLS", 1, 89.00), CartLine("CABLE", 1, 19.99))


# Helpers
def banner(title: str) -> None:
    print(f"\n{'─' * 50}\n{title}\n{'─' * 50}")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:
    asyncio.run(main())

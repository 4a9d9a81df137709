"""
Simulated platform in-app-purchase processor.

Purchases a pre-registered store product; the product price, not the
order total, is what the store charges.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum

import structlog

from checkoutkit.errors import PaymentFailureKind
from checkoutkit.models import PaymentMethod
from checkoutkit.payments._types import Cancelled, Charged, Declined, PaymentOutcome

logger = structlog.get_logger(__name__)


class StoreProduct(str, Enum):
    SINGLE_ITEM = "com.checkoutkit.single_item"
    SMALL_CART = "com.checkoutkit.small_cart"
    MEDIUM_CART = "com.checkoutkit.medium_cart"
    LARGE_CART = "com.checkoutkit.large_cart"
    PREMIUM_SHIPPING = "com.checkoutkit.premium_shipping"
    TIP = "com.checkoutkit.tip"


DEFAULT_PRICES: dict[str, float] = {
    StoreProduct.SINGLE_ITEM.value: 9.99,
    StoreProduct.SMALL_CART.value: 29.99,
    StoreProduct.MEDIUM_CART.value: 49.99,
    StoreProduct.LARGE_CART.value: 99.99,
    StoreProduct.PREMIUM_SHIPPING.value: 4.99,
    StoreProduct.TIP.value: 1.99,
}


def suggested_product(cart_total: float) -> StoreProduct:
    """Store product sized to the cart total."""
    if cart_total < 15.0:
        return StoreProduct.SINGLE_ITEM
    if cart_total < 35.0:
        return StoreProduct.SMALL_CART
    if cart_total < 60.0:
        return StoreProduct.MEDIUM_CART
    return StoreProduct.LARGE_CART


@dataclass
class SimulatedStoreProcessor:
    prices: dict[str, float] = field(default_factory=lambda: dict(DEFAULT_PRICES))
    cancel_products: set[str] = field(default_factory=set[str])
    pending_products: set[str] = field(default_factory=set[str])
    purchased: dict[str, str] = field(default_factory=dict[str, str])
    _ids: itertools.count = field(default_factory=lambda: itertools.count(2_000_000_001))

    @property
    def name(self) -> str:
        return "store"

    async def process(self, method: PaymentMethod, amount: float, currency: str) -> PaymentOutcome:
        product_id = method.store_product_id
        if product_id is None or product_id not in self.prices:
            logger.error("store_product_not_found", product_id=product_id)
            return Declined(PaymentFailureKind.PRODUCT_NOT_FOUND, str(product_id))

        if product_id in self.cancel_products:
            logger.info("store_purchase_cancelled", product_id=product_id)
            return Cancelled()
        if product_id in self.pending_products:
            logger.info("store_purchase_pending", product_id=product_id)
            return Declined(PaymentFailureKind.PROVIDER_ERROR, "purchase pending approval")

        transaction_id = str(next(self._ids))
        self.purchased[transaction_id] = product_id
        logger.info(
            "store_purchase_completed",
            product_id=product_id,
            transaction_id=transaction_id,
            price=self.prices[product_id],
            order_total=amount,
        )
        return Charged(transaction_id, self.name)

    async def void(self, transaction_ref: str) -> None:
        product_id = self.purchased.pop(transaction_ref, None)
        logger.info("store_purchase_refunded", transaction_id=transaction_ref, product_id=product_id)


__all__ = ("StoreProduct", "DEFAULT_PRICES", "suggested_product", "SimulatedStoreProcessor")

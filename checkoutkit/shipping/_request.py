"""
Shipping request — cart snapshot + destination + product metadata, with the
derived weight/value/size signals the rules read.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from checkoutkit.config import ShippingRules
from checkoutkit.models import Address, CartLine, CartSnapshot, ProductInfo


@dataclass(frozen=True, slots=True)
class ShippingRequest:
    """
    Input to the quote engine.

    ``products`` maps product id to metadata. Lines whose product is
    missing contribute no weight, value, size or category signals.
    """

    cart: CartSnapshot
    address: Address
    products: Mapping[str, ProductInfo] = field(default_factory=dict[str, ProductInfo])

    def _known(self) -> list[tuple[CartLine, ProductInfo]]:
        return [
            (line, self.products[line.product_id])
            for line in self.cart.lines
            if line.product_id in self.products
        ]

    @property
    def total_weight(self) -> float:
        return sum((p.weight * line.quantity for line, p in self._known()), 0.0)

    @property
    def total_value(self) -> float:
        return sum((line.total_price for line, _ in self._known()), 0.0)

    def has_oversized_items(self, rules: ShippingRules) -> bool:
        return any(
            p.dimensions.exceeds(rules.max_height, rules.max_width, rules.max_depth)
            for _, p in self._known()
        )

    def has_hazardous_items(self, rules: ShippingRules) -> bool:
        return any(p.category in rules.hazardous_categories for _, p in self._known())


__all__ = ("ShippingRequest",)

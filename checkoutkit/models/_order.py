"""
Orders — the mutable draft built during checkout and the immutable record
produced when it completes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from checkoutkit.models._address import Address
from checkoutkit.models._payment import PaymentMethod
from checkoutkit.models._shipping import ShippingOption


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


@dataclass(frozen=True, slots=True)
class OrderItem:
    line_id: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    options: Mapping[str, str] = field(default_factory=dict[str, str])
    image_url: str | None = None

    @property
    def total_price(self) -> float:
        return self.unit_price * self.quantity


@dataclass(slots=True)
class OrderDraft:
    """
    Working state of a checkout.

    After every ``recompute_totals``:
        subtotal == sum(item.unit_price * item.quantity)
        total == subtotal + tax + shipping
    """

    items: tuple[OrderItem, ...] = ()
    shipping_address: Address | None = None
    billing_address: Address | None = None
    shipping_option: ShippingOption | None = None
    payment_method: PaymentMethod | None = None
    subtotal: float = 0.0
    tax: float = 0.0
    shipping: float = 0.0
    total: float = 0.0

    @property
    def effective_billing_address(self) -> Address | None:
        return self.billing_address or self.shipping_address

    def recompute_totals(self, tax_rate: float) -> None:
        self.subtotal = sum((item.total_price for item in self.items), 0.0)
        self.tax = self.subtotal * tax_rate
        self.shipping = self.shipping_option.cost if self.shipping_option else 0.0
        self.total = self.subtotal + self.tax + self.shipping


@dataclass(frozen=True, slots=True)
class Order:
    order_number: str
    items: tuple[OrderItem, ...]
    shipping_address: Address
    billing_address: Address
    payment_method: PaymentMethod
    status: OrderStatus
    subtotal: float
    tax: float
    shipping: float
    total: float
    created_at: datetime
    estimated_delivery: datetime | None = None
    shipping_option: ShippingOption | None = None
    transaction_ref: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe representation (snake_case keys)."""
        return {
            "order_number": self.order_number,
            "status": self.status.value,
            "items": [
                {
                    "line_id": item.line_id,
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity,
                    "unit_price": item.unit_price,
                    "options": dict(item.options),
                    "image_url": item.image_url,
                }
                for item in self.items
            ],
            "shipping_address": _address_dict(self.shipping_address),
            "billing_address": _address_dict(self.billing_address),
            "payment_method": {
                "method_id": self.payment_method.method_id,
                "type": self.payment_method.type.value,
                "display_name": self.payment_method.display_name,
                "transaction_ref": self.payment_method.transaction_ref,
            },
            "shipping_option": self.shipping_option.option_id if self.shipping_option else None,
            "subtotal": self.subtotal,
            "tax": self.tax,
            "shipping": self.shipping,
            "total": self.total,
            "created_at": self.created_at.isoformat(),
            "estimated_delivery": (
                self.estimated_delivery.isoformat() if self.estimated_delivery else None
            ),
            "transaction_ref": self.transaction_ref,
        }


def _address_dict(address: Address) -> dict[str, Any]:
    return {
        "recipient": address.recipient,
        "street_lines": list(address.street_lines),
        "city": address.city,
        "region": address.region,
        "postal_code": address.postal_code,
        "country": address.country,
        "role": address.role.value,
    }


__all__ = ("OrderStatus", "OrderItem", "OrderDraft", "Order")

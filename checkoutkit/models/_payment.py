"""
Payment methods selected during checkout.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class PaymentType(str, Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    APPLE_PAY = "apple_pay"
    PAYPAL = "paypal"
    STRIPE = "stripe"
    STORE_KIT = "store_kit"


@dataclass(frozen=True, slots=True)
class PaymentMethod:
    method_id: str
    type: PaymentType
    is_default: bool = False
    card_brand: str | None = None
    card_last4: str | None = None
    card_number: str | None = None  # test card numbers only
    store_product_id: str | None = None
    transaction_ref: str | None = None

    @property
    def display_name(self) -> str:
        if self.card_brand and self.card_last4:
            return f"{self.card_brand.capitalize()} ••••{self.card_last4}"
        return self.type.value.replace("_", " ").title()

    def with_transaction(self, transaction_ref: str) -> PaymentMethod:
        return replace(self, transaction_ref=transaction_ref)


__all__ = ("PaymentType", "PaymentMethod")

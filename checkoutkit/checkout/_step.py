"""
Checkout steps in their fixed order.
"""

from __future__ import annotations

from enum import IntEnum


class CheckoutStep(IntEnum):
    CART_REVIEW = 0
    SHIPPING = 1
    PAYMENT = 2
    CONFIRMATION = 3

    @property
    def title(self) -> str:
        return _TITLES[self]

    @property
    def step_number(self) -> str:
        return f"{self.value + 1} of {len(CheckoutStep)}"

    def next(self) -> CheckoutStep | None:
        if self is CheckoutStep.CONFIRMATION:
            return None
        return CheckoutStep(self.value + 1)

    def previous(self) -> CheckoutStep | None:
        if self is CheckoutStep.CART_REVIEW:
            return None
        return CheckoutStep(self.value - 1)


_TITLES: dict[CheckoutStep, str] = {
    CheckoutStep.CART_REVIEW: "Review Cart",
    CheckoutStep.SHIPPING: "Shipping",
    CheckoutStep.PAYMENT: "Payment",
    CheckoutStep.CONFIRMATION: "Confirmation",
}


__all__ = ("CheckoutStep",)

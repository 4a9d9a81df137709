"""
Base templates — the fixed shipping catalog, in display order.
"""

from __future__ import annotations

from checkoutkit.models import ShippingOption

STANDARD = "standard"
EXPRESS = "express"
OVERNIGHT = "overnight"
TWO_DAY = "two_day"
SAME_DAY = "same_day"

BASE_TEMPLATES: tuple[ShippingOption, ...] = (
    ShippingOption(STANDARD, "Standard Shipping", "5-7 business days", 0.0, 7),
    ShippingOption(EXPRESS, "Express Shipping", "2-3 business days", 9.99, 3),
    ShippingOption(
        OVERNIGHT, "Overnight Shipping", "1 business day", 24.99, 1, insurance_included=True
    ),
    ShippingOption(TWO_DAY, "Two Day Shipping", "2 business days", 14.99, 2),
    ShippingOption(
        SAME_DAY, "Same Day Delivery", "Same day (orders before 2 PM)", 19.99, 0, is_available=False
    ),
)

__all__ = ("STANDARD", "EXPRESS", "OVERNIGHT", "TWO_DAY", "SAME_DAY", "BASE_TEMPLATES")

"""
Shipping — options and priced quotes.

Both are produced fresh for every quote request and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass

from checkoutkit._types import format_money


@dataclass(frozen=True, slots=True)
class ShippingOption:
    option_id: str
    name: str
    description: str
    cost: float
    transit_days: int
    is_available: bool = True
    tracking_included: bool = True
    insurance_included: bool = False

    @property
    def formatted_cost(self) -> str:
        return "FREE" if self.cost == 0 else format_money(self.cost)

    @property
    def display_name(self) -> str:
        return f"{self.name} - {self.formatted_cost}"

    @property
    def delivery_text(self) -> str:
        if self.transit_days == 1:
            return "1 business day"
        if 2 <= self.transit_days <= 7:
            return f"{self.transit_days} business days"
        return f"{self.transit_days} days"


@dataclass(frozen=True, slots=True)
class ShippingQuote:
    """A base option after the rule pipeline; ``option.cost`` equals ``adjusted_cost``."""

    option: ShippingOption
    original_cost: float
    adjusted_cost: float
    adjustment_reason: str | None = None
    warnings: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.adjusted_cost < 0:
            raise ValueError(f"Quote {self.option.option_id}: adjusted cost must be >= 0")

    @property
    def option_id(self) -> str:
        return self.option.option_id

    @property
    def has_price_adjustment(self) -> bool:
        return self.original_cost != self.adjusted_cost

    @property
    def savings(self) -> float:
        return max(0.0, self.original_cost - self.adjusted_cost)


__all__ = ("ShippingOption", "ShippingQuote")

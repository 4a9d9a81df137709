"""Pydantic configuration models for checkoutkit.

This module provides:
- ShippingRules: constants driving shipping validation and price adjustment
- Timeouts: deadlines for the collaborator calls made during checkout
- UnresolvedProducts: what to do with cart lines whose product is unknown
- CheckoutSettings: top-level settings injected into CheckoutFlow
- NetworkProfile: latency/failure profile for the mock network simulator

All models are frozen; build a new instance with ``model_copy(update=...)``
to change a value.
"""

from __future__ import annotations

from enum import Enum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ShippingRules(BaseModel):
    """Thresholds and lookup tables used by the shipping rule pipeline.

    Example:
        >>> rules = ShippingRules()
        >>> rules.max_weight
        70.0
        >>> rules.model_copy(update={"free_shipping_threshold": 50.0}).free_shipping_threshold
        50.0
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Validation
    max_weight: float = Field(default=70.0, gt=0, description="Cart weight ceiling (lbs)")
    max_height: float = Field(default=36.0, gt=0)
    max_width: float = Field(default=24.0, gt=0)
    max_depth: float = Field(default=24.0, gt=0)
    restricted_regions: frozenset[str] = frozenset({"AK", "HI", "PR"})
    hazardous_categories: frozenset[str] = frozenset({"hazardous"})

    # Adjustments
    heavy_weight_threshold: float = Field(default=5.0, ge=0)
    heavy_surcharge: float = Field(default=5.99, ge=0)
    free_shipping_threshold: float = Field(default=100.0, ge=0)
    same_day_regions: frozenset[str] = frozenset({"CA"})
    heavy_overnight_threshold: float = Field(default=10.0, ge=0)
    insurance_threshold: float = Field(default=500.0, ge=0)

    # Distance multipliers
    remote_cities: frozenset[str] = frozenset({"Anchorage", "Honolulu", "Fairbanks", "Juneau"})
    remote_city_multiplier: float = Field(default=2.5, ge=1.0)
    remote_regions: frozenset[str] = frozenset({"AK", "HI", "MT", "WY", "ND", "SD"})
    remote_region_multiplier: float = Field(default=1.5, ge=1.0)
    low_zip_ceiling: int = Field(default=10000, ge=0)
    low_zip_multiplier: float = Field(default=1.3, ge=1.0)

    # Promotions and recommendation
    promo_codes: dict[str, float] = Field(
        default_factory=lambda: {"FREESHIP": 1.0, "SHIP50": 0.5, "FASTSHIP": 0.3}
    )
    recommended_max_transit_days: int = Field(default=5, ge=0)

    @field_validator("promo_codes")
    @classmethod
    def validate_promo_fractions(cls, v: dict[str, float]) -> dict[str, float]:
        """Promo discounts are fractions in [0, 1]; codes are stored uppercase."""
        normalized: dict[str, float] = {}
        for code, fraction in v.items():
            if not 0.0 <= fraction <= 1.0:
                msg = f"Promo code {code!r} discount must be within [0, 1], got {fraction}"
                raise ValueError(msg)
            normalized[code.upper()] = fraction
        return normalized


class Timeouts(BaseModel):
    """Deadlines (seconds) for collaborator calls. ``None`` disables a deadline."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    quote_seconds: float | None = Field(default=30.0, gt=0)
    payment_seconds: float | None = Field(default=30.0, gt=0)
    submission_seconds: float | None = Field(default=30.0, gt=0)


class UnresolvedProducts(str, Enum):
    """Handling of cart lines whose product cannot be resolved.

    - DROP: leave the line out of the draft and log a warning
    - FAIL: refuse to start checkout
    """

    DROP = "drop"
    FAIL = "fail"


class CheckoutSettings(BaseModel):
    """Settings injected into CheckoutFlow.

    Attributes:
        tax_rate: Fraction applied to the subtotal.
        currency: ISO currency code passed to payment processors.
        unresolved_products: Drop or fail on unknown products at start.
        delivery_estimate_days: Days added to the order date for the
            estimated delivery date.
        timeouts: Collaborator deadlines.
        shipping_rules: Rule constants for the shipping engine.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    tax_rate: float = Field(default=0.08875, ge=0, lt=1)
    currency: str = Field(default="usd", min_length=3, max_length=3)
    unresolved_products: UnresolvedProducts = UnresolvedProducts.DROP
    delivery_estimate_days: int = Field(default=5, ge=0)
    timeouts: Timeouts = Field(default_factory=Timeouts)
    shipping_rules: ShippingRules = Field(default_factory=ShippingRules)


class NetworkProfile(BaseModel):
    """Latency and failure profile for the mock network.

    Rates are cumulative slices of one uniform draw: timeout first, then
    server error, then invalid data, then ``slow_rate`` for slow responses.

    Example:
        >>> NetworkProfile.unreliable().failure_rate
        0.3
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_delay: float = Field(default=0.5, ge=0)
    slow_delay: float = Field(default=3.0, ge=0)
    base_jitter: float = Field(default=0.5, ge=0)
    slow_jitter: float = Field(default=1.0, ge=0)
    failure_rate: float = Field(default=0.1, ge=0, le=1)
    timeout_rate: float = Field(default=0.05, ge=0, le=1)
    server_error_rate: float = Field(default=0.05, ge=0, le=1)
    slow_rate: float = Field(default=0.2, ge=0, le=1)
    online: bool = True

    @model_validator(mode="after")
    def validate_rates_fit(self) -> Self:
        """The rate slices must fit in a single [0, 1] draw."""
        total = self.failure_rate + self.timeout_rate + self.server_error_rate + self.slow_rate
        if total > 1.0:
            msg = f"Network rates add up to {total:.2f}, must not exceed 1.0"
            raise ValueError(msg)
        return self

    @classmethod
    def default(cls) -> NetworkProfile:
        return cls()

    @classmethod
    def fast(cls) -> NetworkProfile:
        return cls(base_delay=0.1, slow_delay=1.0)

    @classmethod
    def slow(cls) -> NetworkProfile:
        return cls(base_delay=2.0, slow_delay=5.0)

    @classmethod
    def unreliable(cls) -> NetworkProfile:
        return cls(
            base_delay=1.0,
            slow_delay=4.0,
            failure_rate=0.3,
            timeout_rate=0.2,
            server_error_rate=0.1,
        )

    @classmethod
    def offline(cls) -> NetworkProfile:
        return cls(online=False)

    @classmethod
    def instant(cls) -> NetworkProfile:
        """No delay and no injected faults."""
        return cls(
            base_delay=0.0,
            slow_delay=0.0,
            base_jitter=0.0,
            slow_jitter=0.0,
            failure_rate=0.0,
            timeout_rate=0.0,
            server_error_rate=0.0,
            slow_rate=0.0,
        )


__all__ = (
    "ShippingRules",
    "Timeouts",
    "UnresolvedProducts",
    "CheckoutSettings",
    "NetworkProfile",
)

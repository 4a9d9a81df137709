"""
Request validation — fail fast before any pricing happens.

Checks run in a fixed order and stop at the first violation:
weight, size, destination, hazardous category, address structure.
"""

from __future__ import annotations

from kungfu import Result, Ok, Error

from checkoutkit.config import ShippingRules
from checkoutkit.errors import (
    CartTooHeavy,
    HazardousItem,
    InvalidAddress,
    OversizedItem,
    ShippingValidationError,
    UnsupportedDestination,
)
from checkoutkit.models import validate_address
from checkoutkit.shipping._request import ShippingRequest


def validate_request(
    request: ShippingRequest,
    rules: ShippingRules,
) -> Result[None, ShippingValidationError]:
    if request.total_weight > rules.max_weight:
        return Error(CartTooHeavy(rules.max_weight))

    if request.has_oversized_items(rules):
        return Error(OversizedItem())

    region = request.address.region.upper()
    if region in rules.restricted_regions:
        return Error(UnsupportedDestination(region))

    if request.has_hazardous_items(rules):
        return Error(HazardousItem())

    if not request.address.country or not request.address.region:
        return Error(InvalidAddress(("missing_country_or_region",)))
    issues = validate_address(request.address)
    if issues:
        return Error(InvalidAddress(tuple(issue.value for issue in issues)))

    return Ok(None)


__all__ = ("validate_request",)

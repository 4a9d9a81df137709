"""
Adjustment rules — applied to every base template, in order, without
short-circuiting.

Each rule reads the request signals and may move the working cost, flip
availability, toggle insurance or append a warning. Rules compound; when
several set a reason, the last one applied wins.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from checkoutkit.config import ShippingRules
from checkoutkit.models import Address, ShippingOption, ShippingQuote
from checkoutkit.shipping._request import ShippingRequest
from checkoutkit.shipping._templates import EXPRESS, OVERNIGHT, SAME_DAY, STANDARD

# ═══════════════════════════════════════════════════════════════════════════════
# Rule context and working quote
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class RuleContext:
    """Request signals computed once per quote request."""

    rules: ShippingRules
    address: Address
    total_weight: float
    total_value: float
    has_oversized: bool
    distance_multiplier: float

    @classmethod
    def from_request(cls, request: ShippingRequest, rules: ShippingRules) -> RuleContext:
        return cls(
            rules=rules,
            address=request.address,
            total_weight=request.total_weight,
            total_value=request.total_value,
            has_oversized=request.has_oversized_items(rules),
            distance_multiplier=distance_multiplier(request.address, rules),
        )


@dataclass(slots=True)
class WorkingQuote:
    template: ShippingOption
    cost: float
    is_available: bool
    insurance_included: bool
    reason: str | None = None
    warnings: list[str] = field(default_factory=list[str])

    @classmethod
    def start(cls, template: ShippingOption) -> WorkingQuote:
        return cls(
            template=template,
            cost=template.cost,
            is_available=template.is_available,
            insurance_included=template.insurance_included,
        )

    def freeze(self) -> ShippingQuote:
        cost = max(0.0, self.cost)
        option = ShippingOption(
            option_id=self.template.option_id,
            name=self.template.name,
            description=self.template.description,
            cost=cost,
            transit_days=self.template.transit_days,
            is_available=self.is_available,
            tracking_included=self.template.tracking_included,
            insurance_included=self.insurance_included,
        )
        return ShippingQuote(
            option=option,
            original_cost=self.template.cost,
            adjusted_cost=cost,
            adjustment_reason=self.reason,
            warnings=tuple(self.warnings),
        )


type Rule = Callable[[WorkingQuote, RuleContext], None]

# ═══════════════════════════════════════════════════════════════════════════════
# Distance multiplier
# ═══════════════════════════════════════════════════════════════════════════════


def distance_multiplier(address: Address, rules: ShippingRules) -> float:
    """Remote city, else remote region, else low ZIP prefix, else 1.0."""
    if address.city in rules.remote_cities:
        return rules.remote_city_multiplier
    if address.region.upper() in rules.remote_regions:
        return rules.remote_region_multiplier
    zip_code = address.postal_code[:5]
    if zip_code.isascii() and zip_code.isdigit() and int(zip_code) < rules.low_zip_ceiling:
        return rules.low_zip_multiplier
    return 1.0


# ═══════════════════════════════════════════════════════════════════════════════
# Rules
# ═══════════════════════════════════════════════════════════════════════════════


def heavy_surcharge(q: WorkingQuote, ctx: RuleContext) -> None:
    if ctx.total_weight > ctx.rules.heavy_weight_threshold and q.template.cost == 0:
        q.cost += ctx.rules.heavy_surcharge
        q.reason = "Heavy item surcharge"


def free_shipping(q: WorkingQuote, ctx: RuleContext) -> None:
    if ctx.total_value > ctx.rules.free_shipping_threshold and q.template.option_id == STANDARD:
        q.cost = 0.0
        threshold = f"{ctx.rules.free_shipping_threshold:g}"
        q.reason = f"Free shipping on orders over ${threshold}"


def same_day_region(q: WorkingQuote, ctx: RuleContext) -> None:
    if q.template.option_id == SAME_DAY and ctx.address.region.upper() in ctx.rules.same_day_regions:
        q.is_available = True


def remote_destination(q: WorkingQuote, ctx: RuleContext) -> None:
    # Scales the surcharge-adjusted cost, so it compounds with heavy_surcharge.
    if ctx.distance_multiplier > 1.0 and q.cost > 0:
        q.cost *= ctx.distance_multiplier
        q.reason = "Remote area delivery"


def oversize_disables_express(q: WorkingQuote, ctx: RuleContext) -> None:
    if q.template.option_id == EXPRESS and ctx.has_oversized:
        q.is_available = False
        q.warnings.append("Express shipping not available for oversized items")


def heavy_overnight_warning(q: WorkingQuote, ctx: RuleContext) -> None:
    if q.template.option_id == OVERNIGHT and ctx.total_weight > ctx.rules.heavy_overnight_threshold:
        q.warnings.append("Heavy packages may delay overnight delivery")


def high_value_insurance(q: WorkingQuote, ctx: RuleContext) -> None:
    if ctx.total_value > ctx.rules.insurance_threshold:
        q.insurance_included = True


RULES: tuple[Rule, ...] = (
    heavy_surcharge,
    free_shipping,
    same_day_region,
    remote_destination,
    oversize_disables_express,
    heavy_overnight_warning,
    high_value_insurance,
)


def apply_rules(
    template: ShippingOption,
    ctx: RuleContext,
    rules: tuple[Rule, ...] = RULES,
) -> ShippingQuote:
    working = WorkingQuote.start(template)
    for rule in rules:
        rule(working, ctx)
    return working.freeze()


__all__ = (
    "RuleContext",
    "WorkingQuote",
    "Rule",
    "distance_multiplier",
    "heavy_surcharge",
    "free_shipping",
    "same_day_region",
    "remote_destination",
    "oversize_disables_express",
    "heavy_overnight_warning",
    "high_value_insurance",
    "RULES",
    "apply_rules",
)

"""
ShippingQuoteEngine — validate, price every base template, rank.

    engine = ShippingQuoteEngine()
    match engine.calculate_shipping(request, promo_code="SHIP50"):
        case Ok(quotes):
            best = recommend(quotes)
        case Error(e):
            print(e.message)

The engine is a pure function of (request, promo code) and holds no
per-request state, so one instance may serve any number of sessions.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from kungfu import Result, Ok, Error

from checkoutkit.config import ShippingRules
from checkoutkit.errors import ShippingValidationError
from checkoutkit.models import ShippingOption, ShippingQuote
from checkoutkit.shipping._request import ShippingRequest
from checkoutkit.shipping._rules import RULES, Rule, RuleContext, apply_rules
from checkoutkit.shipping._templates import BASE_TEMPLATES
from checkoutkit.shipping._validate import validate_request

type Quotes = tuple[ShippingQuote, ...]

PROMO_REASON = "Promotional discount applied"


class ShippingQuoteEngine:
    def __init__(
        self,
        rules: ShippingRules | None = None,
        *,
        templates: Sequence[ShippingOption] = BASE_TEMPLATES,
        pipeline: tuple[Rule, ...] = RULES,
    ) -> None:
        self.rules = rules or ShippingRules()
        self.templates = tuple(templates)
        self._pipeline = pipeline

    def calculate_shipping(
        self,
        request: ShippingRequest,
        promo_code: str | None = None,
    ) -> Result[Quotes, ShippingValidationError]:
        """
        Produce available quotes sorted by adjusted cost.

        Validation failure yields no quotes at all. Ties keep catalog
        order. A promo code, if given, is applied last.
        """
        validation = validate_request(request, self.rules)
        if isinstance(validation, Error):
            return Error(validation.value)

        ctx = RuleContext.from_request(request, self.rules)
        priced = (apply_rules(t, ctx, self._pipeline) for t in self.templates)
        available = [q for q in priced if q.option.is_available]
        ranked = tuple(sorted(available, key=lambda q: q.adjusted_cost))

        if promo_code:
            ranked = apply_promotion(ranked, promo_code, self.rules)
        return Ok(ranked)

    def recommend(self, quotes: Iterable[ShippingQuote]) -> ShippingQuote | None:
        return recommend(quotes, self.rules.recommended_max_transit_days)


def apply_promotion(
    quotes: Iterable[ShippingQuote],
    code: str,
    rules: ShippingRules,
) -> Quotes:
    """Discount every quote by the code's fraction; unknown codes change nothing."""
    fraction = rules.promo_codes.get(code.strip().upper())
    if fraction is None:
        return tuple(quotes)
    return tuple(_discounted(q, fraction) for q in quotes)


def _discounted(quote: ShippingQuote, fraction: float) -> ShippingQuote:
    cost = max(0.0, quote.adjusted_cost - quote.adjusted_cost * fraction)
    o = quote.option
    return ShippingQuote(
        option=ShippingOption(
            option_id=o.option_id,
            name=o.name,
            description=o.description,
            cost=cost,
            transit_days=o.transit_days,
            is_available=o.is_available,
            tracking_included=o.tracking_included,
            insurance_included=o.insurance_included,
        ),
        original_cost=quote.original_cost,
        adjusted_cost=cost,
        adjustment_reason=PROMO_REASON,
        warnings=quote.warnings,
    )


def recommend(
    quotes: Iterable[ShippingQuote],
    max_transit_days: int = 5,
) -> ShippingQuote | None:
    """Cheapest quote arriving within ``max_transit_days``, else cheapest overall."""
    available = [q for q in quotes if q.option.is_available]
    fast_enough = [q for q in available if q.option.transit_days <= max_transit_days]
    pool = fast_enough or available
    if not pool:
        return None
    return min(pool, key=lambda q: q.adjusted_cost)


__all__ = ("Quotes", "PROMO_REASON", "ShippingQuoteEngine", "apply_promotion", "recommend")

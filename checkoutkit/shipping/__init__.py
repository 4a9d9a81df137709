"""
Shipping — quote engine with a fixed rule pipeline.

    from checkoutkit import shipping as SH

    request = SH.ShippingRequest(cart, address, products)
    result = SH.ShippingQuoteEngine().calculate_shipping(request, promo_code="SHIP50")
"""

from checkoutkit.shipping._request import ShippingRequest
from checkoutkit.shipping._templates import (
    STANDARD,
    EXPRESS,
    OVERNIGHT,
    TWO_DAY,
    SAME_DAY,
    BASE_TEMPLATES,
)
from checkoutkit.shipping._validate import validate_request
from checkoutkit.shipping._rules import (
    RuleContext,
    WorkingQuote,
    Rule,
    RULES,
    apply_rules,
    distance_multiplier,
)
from checkoutkit.shipping._engine import (
    Quotes,
    PROMO_REASON,
    ShippingQuoteEngine,
    apply_promotion,
    recommend,
)
from checkoutkit.shipping._service import (
    QuoteService,
    LocalQuoteService,
    SimulatedQuoteService,
    fault_to_shipping_error,
)

__all__ = (
    "ShippingRequest",
    "STANDARD",
    "EXPRESS",
    "OVERNIGHT",
    "TWO_DAY",
    "SAME_DAY",
    "BASE_TEMPLATES",
    "validate_request",
    "RuleContext",
    "WorkingQuote",
    "Rule",
    "RULES",
    "apply_rules",
    "distance_multiplier",
    "Quotes",
    "PROMO_REASON",
    "ShippingQuoteEngine",
    "apply_promotion",
    "recommend",
    "QuoteService",
    "LocalQuoteService",
    "SimulatedQuoteService",
    "fault_to_shipping_error",
)

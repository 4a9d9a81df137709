"""
checkoutkit — checkout flow and shipping quotes for storefront backends.

    from checkoutkit import checkout as CO  # Step-by-step checkout flow
    from checkoutkit import shipping as SH  # Rule-based shipping quotes
    from checkoutkit import payments as P   # Payment processors
    from checkoutkit import orders as O     # Order sinks
    from checkoutkit import network as N    # Mock network
"""

from checkoutkit import models
from checkoutkit import shipping
from checkoutkit import network
from checkoutkit import payments
from checkoutkit import orders
from checkoutkit import checkout
from checkoutkit import catalog
from checkoutkit import telemetry
from checkoutkit import lift
from checkoutkit.config import CheckoutSettings, NetworkProfile, ShippingRules, Timeouts
from checkoutkit._types import Lazy, Compensator

__version__ = "0.1.0"

__all__ = (
    "models",
    "shipping",
    "network",
    "payments",
    "orders",
    "checkout",
    "catalog",
    "telemetry",
    "lift",
    "CheckoutSettings",
    "NetworkProfile",
    "ShippingRules",
    "Timeouts",
    "Lazy",
    "Compensator",
)

"""
Payments — processor contract and simulated providers.

    from checkoutkit import payments as P

    processors = {
        PaymentType.STRIPE: P.SimulatedCardProcessor(),
        PaymentType.STORE_KIT: P.SimulatedStoreProcessor(),
    }

Payment types without a registered processor pass through unprocessed.
"""

from checkoutkit.payments._types import (
    Charged,
    Cancelled,
    Declined,
    PaymentOutcome,
    PaymentProcessor,
)
from checkoutkit.payments._card import MINIMUM_AMOUNT, SandboxCards, SimulatedCardProcessor
from checkoutkit.payments._store import (
    StoreProduct,
    DEFAULT_PRICES,
    suggested_product,
    SimulatedStoreProcessor,
)

__all__ = (
    "Charged",
    "Cancelled",
    "Declined",
    "PaymentOutcome",
    "PaymentProcessor",
    "MINIMUM_AMOUNT",
    "SandboxCards",
    "SimulatedCardProcessor",
    "StoreProduct",
    "DEFAULT_PRICES",
    "suggested_product",
    "SimulatedStoreProcessor",
)

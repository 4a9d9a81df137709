"""
Payment processor contract and outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from checkoutkit.errors import PaymentFailureKind
from checkoutkit.models import PaymentMethod


@dataclass(frozen=True, slots=True)
class Charged:
    transaction_ref: str
    provider: str


@dataclass(frozen=True, slots=True)
class Cancelled:
    """The user backed out; nothing was charged."""


@dataclass(frozen=True, slots=True)
class Declined:
    kind: PaymentFailureKind
    reason: str = ""


type PaymentOutcome = Charged | Cancelled | Declined


class PaymentProcessor(Protocol):
    """
    Provider wrapper keyed by payment type.

    ``process`` reports refusals as outcomes; transport problems may raise
    and are mapped to a network error by the caller. ``void`` undoes a
    successful charge.
    """

    @property
    def name(self) -> str: ...

    async def process(self, method: PaymentMethod, amount: float, currency: str) -> PaymentOutcome: ...

    async def void(self, transaction_ref: str) -> None: ...


__all__ = ("Charged", "Cancelled", "Declined", "PaymentOutcome", "PaymentProcessor")

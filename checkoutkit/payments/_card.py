"""
Simulated card-network processor.

Mirrors the card SDK's test-mode behaviour: amount guards first, then
well-known test card numbers select the outcome.
"""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

import structlog

from checkoutkit.errors import PaymentFailureKind
from checkoutkit.models import PaymentMethod
from checkoutkit.payments._types import Charged, Declined, PaymentOutcome

logger = structlog.get_logger(__name__)

MINIMUM_AMOUNT = 0.50


class SandboxCards:
    VISA_SUCCESS = "4242424242424242"
    VISA_DECLINED = "4000000000000002"
    MASTERCARD_SUCCESS = "5555555555554444"
    AMEX_SUCCESS = "378282246310005"
    CHARGE_CUSTOMER_FAIL = "4000000000000341"
    AUTHENTICATION_REQUIRED = "4000002500003155"


_CARD_OUTCOMES: dict[str, Declined] = {
    SandboxCards.VISA_DECLINED: Declined(PaymentFailureKind.DECLINED, "card_declined"),
    SandboxCards.CHARGE_CUSTOMER_FAIL: Declined(PaymentFailureKind.DECLINED, "charge_failed"),
    SandboxCards.AUTHENTICATION_REQUIRED: Declined(
        PaymentFailureKind.REQUIRES_AUTHENTICATION, "authentication_required"
    ),
}


@dataclass
class SimulatedCardProcessor:
    latency: float = 0.0
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    charges: dict[str, float] = field(default_factory=dict[str, float])
    voided: list[str] = field(default_factory=list[str])

    @property
    def name(self) -> str:
        return "card"

    async def process(self, method: PaymentMethod, amount: float, currency: str) -> PaymentOutcome:
        if amount <= 0:
            logger.error("payment_rejected", amount=amount, currency=currency, error_type="invalid_amount")
            return Declined(PaymentFailureKind.INVALID_AMOUNT)
        if amount < MINIMUM_AMOUNT:
            logger.error(
                "payment_rejected",
                amount=amount,
                currency=currency,
                minimum_required=MINIMUM_AMOUNT,
                error_type="amount_too_small",
            )
            return Declined(PaymentFailureKind.AMOUNT_TOO_SMALL)

        if self.latency:
            await self.sleep(self.latency)

        declined = _CARD_OUTCOMES.get(method.card_number or "")
        if declined is not None:
            logger.warning("payment_declined", method_id=method.method_id, reason=declined.reason)
            return declined

        intent_id = f"pi_test_{uuid.uuid4().hex[:16]}"
        self.charges[intent_id] = amount
        logger.info("payment_processed", intent_id=intent_id, amount=amount, currency=currency)
        return Charged(intent_id, self.name)

    async def void(self, transaction_ref: str) -> None:
        if self.charges.pop(transaction_ref, None) is not None:
            self.voided.append(transaction_ref)
            logger.info("payment_voided", intent_id=transaction_ref)
        else:
            logger.info("payment_void_skipped", intent_id=transaction_ref, reason="unknown_or_already_voided")


__all__ = ("MINIMUM_AMOUNT", "SandboxCards", "SimulatedCardProcessor")

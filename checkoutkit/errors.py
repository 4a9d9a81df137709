"""Error values for checkoutkit.

Expected failures are values, not exceptions: every fallible operation
returns ``Result[T, E]`` where ``E`` is one of the closed unions below.

- ShippingError: validation (user must change cart or address) and
  transient (retry may succeed) failures of a shipping quote request
- PaymentFailureKind: provider-specific reasons a payment was refused
- CheckoutError: failures reported by CheckoutFlow itself

Every variant carries ``message`` (safe to show to the user, no technical
detail) and ``retryable``. Technical details go to the structlog logger.

Exceptions are reserved for broken contracts: calling an operation the
flow's current state does not allow raises CheckoutContractError.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

import structlog

logger = structlog.get_logger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Shipping validation errors (terminal, user must change input)
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CartTooHeavy:
    max_weight: float
    retryable: ClassVar[bool] = False

    @property
    def message(self) -> str:
        return f"Cart is too heavy (max {self.max_weight:g} lbs)"


@dataclass(frozen=True, slots=True)
class OversizedItem:
    retryable: ClassVar[bool] = False

    @property
    def message(self) -> str:
        return "One or more items exceed size limits"


@dataclass(frozen=True, slots=True)
class UnsupportedDestination:
    region: str
    retryable: ClassVar[bool] = False

    @property
    def message(self) -> str:
        return "We don't ship to this location"


@dataclass(frozen=True, slots=True)
class HazardousItem:
    retryable: ClassVar[bool] = False

    @property
    def message(self) -> str:
        return "Cart contains hazardous materials"


@dataclass(frozen=True, slots=True)
class InvalidAddress:
    issues: tuple[str, ...]
    retryable: ClassVar[bool] = False

    @property
    def message(self) -> str:
        return "Shipping address is invalid"


# ═══════════════════════════════════════════════════════════════════════════════
# Shipping transient errors (retry may succeed)
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class NetworkError:
    detail: str = ""
    retryable: ClassVar[bool] = True

    @property
    def message(self) -> str:
        return "Network error occurred during shipping calculation"


@dataclass(frozen=True, slots=True)
class ServiceTemporarilyUnavailable:
    retryable: ClassVar[bool] = True

    @property
    def message(self) -> str:
        return "Shipping calculation service is temporarily unavailable"


@dataclass(frozen=True, slots=True)
class Timeout:
    retryable: ClassVar[bool] = True

    @property
    def message(self) -> str:
        return "Shipping calculation timed out. Please try again"


type ShippingValidationError = CartTooHeavy | OversizedItem | UnsupportedDestination | HazardousItem | InvalidAddress
type ShippingTransientError = NetworkError | ServiceTemporarilyUnavailable | Timeout
type ShippingError = ShippingValidationError | ShippingTransientError


# ═══════════════════════════════════════════════════════════════════════════════
# Payment failure reasons
# ═══════════════════════════════════════════════════════════════════════════════


class PaymentFailureKind(str, Enum):
    """Why a payment provider refused a charge."""

    DECLINED = "declined"
    REQUIRES_AUTHENTICATION = "requires_authentication"
    AMOUNT_TOO_SMALL = "amount_too_small"
    INVALID_AMOUNT = "invalid_amount"
    PRODUCT_NOT_FOUND = "product_not_found"
    PROVIDER_ERROR = "provider_error"

    @property
    def message(self) -> str:
        return _PAYMENT_MESSAGES[self]


_PAYMENT_MESSAGES: dict[PaymentFailureKind, str] = {
    PaymentFailureKind.DECLINED: "Your card was declined",
    PaymentFailureKind.REQUIRES_AUTHENTICATION: "This payment requires additional authentication",
    PaymentFailureKind.AMOUNT_TOO_SMALL: "Payment amount must be at least $0.50",
    PaymentFailureKind.INVALID_AMOUNT: "Invalid payment amount",
    PaymentFailureKind.PRODUCT_NOT_FOUND: "This purchase option is not available",
    PaymentFailureKind.PROVIDER_ERROR: "Payment processing failed",
}


# ═══════════════════════════════════════════════════════════════════════════════
# Checkout errors
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class MissingRequiredData:
    """A step precondition was not met. A correctly gated UI never shows this."""

    missing: tuple[str, ...] = ()
    retryable: ClassVar[bool] = False

    @property
    def message(self) -> str:
        return "Missing required checkout information"


@dataclass(frozen=True, slots=True)
class PaymentFailed:
    kind: PaymentFailureKind
    reason: str = ""
    retryable: ClassVar[bool] = True

    @property
    def message(self) -> str:
        return self.kind.message


@dataclass(frozen=True, slots=True)
class PaymentCancelled:
    """The user backed out of the payment. Not shown as an error banner."""

    retryable: ClassVar[bool] = True

    @property
    def message(self) -> str:
        return "Payment was cancelled"


@dataclass(frozen=True, slots=True)
class CheckoutNetworkError:
    detail: str = ""
    retryable: ClassVar[bool] = True

    @property
    def message(self) -> str:
        return "Network error occurred"


@dataclass(frozen=True, slots=True)
class UnknownProducts:
    """Cart lines reference products the catalog does not know."""

    product_ids: tuple[str, ...]
    retryable: ClassVar[bool] = False

    @property
    def message(self) -> str:
        return "Some items in your cart are no longer available"


type CheckoutError = (
    MissingRequiredData | PaymentFailed | PaymentCancelled | CheckoutNetworkError | UnknownProducts
)

type AnyError = ShippingError | CheckoutError


def describe(error: AnyError) -> str:
    """User-facing message for any error value."""
    return error.message


def is_retryable(error: AnyError) -> bool:
    """Transient errors get a retry action; validation errors do not."""
    return error.retryable


# ═══════════════════════════════════════════════════════════════════════════════
# Contract violations
# ═══════════════════════════════════════════════════════════════════════════════


class CheckoutContractError(Exception):
    """Raised when the flow is driven in a way its state does not allow.

    The user message is safe to display; internal details are logged via
    structlog only.

    Example:
        >>> raise CheckoutContractError(
        ...     "Checkout is already complete",
        ...     internal_details="select_payment_method called at CONFIRMATION",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "checkout_contract_error",
                user_message=user_message,
                internal_details=internal_details,
            )


__all__ = (
    # Shipping
    "CartTooHeavy",
    "OversizedItem",
    "UnsupportedDestination",
    "HazardousItem",
    "InvalidAddress",
    "NetworkError",
    "ServiceTemporarilyUnavailable",
    "Timeout",
    "ShippingValidationError",
    "ShippingTransientError",
    "ShippingError",
    # Payment
    "PaymentFailureKind",
    # Checkout
    "MissingRequiredData",
    "PaymentFailed",
    "PaymentCancelled",
    "CheckoutNetworkError",
    "UnknownProducts",
    "CheckoutError",
    "AnyError",
    "describe",
    "is_retryable",
    "CheckoutContractError",
)

"""Tests for the simulated payment processors."""

from __future__ import annotations

import pytest

from checkoutkit.errors import PaymentFailureKind
from checkoutkit.models import PaymentMethod, PaymentType
from checkoutkit.payments import (
    Cancelled,
    Charged,
    Declined,
    SimulatedCardProcessor,
    SimulatedStoreProcessor,
    StoreProduct,
    SandboxCards,
    suggested_product,
)

from tests.helpers import CARD, STORE_METHOD, run


def card(number: str) -> PaymentMethod:
    return PaymentMethod("pm_test", PaymentType.STRIPE, card_brand="visa", card_last4=number[-4:], card_number=number)


class TestCardProcessor:
    def test_success_returns_intent_reference(self) -> None:
        processor = SimulatedCardProcessor()

        outcome = run(processor.process(CARD, 42.0, "usd"))

        assert isinstance(outcome, Charged)
        assert outcome.transaction_ref.startswith("pi_test_")
        assert len(outcome.transaction_ref) == len("pi_test_") + 16
        assert processor.charges == {outcome.transaction_ref: 42.0}

    @pytest.mark.parametrize(
        ("number", "kind"),
        [
            (SandboxCards.VISA_DECLINED, PaymentFailureKind.DECLINED),
            (SandboxCards.CHARGE_CUSTOMER_FAIL, PaymentFailureKind.DECLINED),
            (SandboxCards.AUTHENTICATION_REQUIRED, PaymentFailureKind.REQUIRES_AUTHENTICATION),
        ],
    )
    def test_test_cards(self, number: str, kind: PaymentFailureKind) -> None:
        outcome = run(SimulatedCardProcessor().process(card(number), 42.0, "usd"))

        assert isinstance(outcome, Declined)
        assert outcome.kind is kind

    @pytest.mark.parametrize(
        ("amount", "kind"),
        [
            (0.0, PaymentFailureKind.INVALID_AMOUNT),
            (-5.0, PaymentFailureKind.INVALID_AMOUNT),
            (0.49, PaymentFailureKind.AMOUNT_TOO_SMALL),
        ],
    )
    def test_amount_guards_run_before_card_checks(self, amount: float, kind: PaymentFailureKind) -> None:
        outcome = run(SimulatedCardProcessor().process(card(SandboxCards.VISA_DECLINED), amount, "usd"))

        assert outcome == Declined(kind)

    def test_minimum_amount_is_accepted(self) -> None:
        assert isinstance(run(SimulatedCardProcessor().process(CARD, 0.50, "usd")), Charged)

    def test_void_releases_charge_once(self) -> None:
        processor = SimulatedCardProcessor()
        charged = run(processor.process(CARD, 10.0, "usd"))
        assert isinstance(charged, Charged)

        run(processor.void(charged.transaction_ref))
        run(processor.void(charged.transaction_ref))

        assert processor.charges == {}
        assert processor.voided == [charged.transaction_ref]

    def test_latency_uses_injected_sleep(self) -> None:
        waits: list[float] = []

        async def sleep(seconds: float) -> None:
            waits.append(seconds)

        run(SimulatedCardProcessor(latency=1.5, sleep=sleep).process(CARD, 10.0, "usd"))

        assert waits == [1.5]


class TestStoreProcessor:
    def test_purchase_returns_numeric_transaction_id(self) -> None:
        processor = SimulatedStoreProcessor()

        outcome = run(processor.process(STORE_METHOD, 120.0, "usd"))

        assert isinstance(outcome, Charged)
        assert outcome.transaction_ref.isdigit()
        assert processor.purchased[outcome.transaction_ref] == StoreProduct.LARGE_CART.value

    def test_transaction_ids_are_unique(self) -> None:
        processor = SimulatedStoreProcessor()

        first = run(processor.process(STORE_METHOD, 1.0, "usd"))
        second = run(processor.process(STORE_METHOD, 1.0, "usd"))

        assert isinstance(first, Charged) and isinstance(second, Charged)
        assert first.transaction_ref != second.transaction_ref

    @pytest.mark.parametrize("product_id", [None, "com.checkoutkit.unknown"])
    def test_unknown_product(self, product_id: str | None) -> None:
        method = PaymentMethod("pm_store", PaymentType.STORE_KIT, store_product_id=product_id)

        outcome = run(SimulatedStoreProcessor().process(method, 10.0, "usd"))

        assert isinstance(outcome, Declined)
        assert outcome.kind is PaymentFailureKind.PRODUCT_NOT_FOUND

    def test_configured_cancellation(self) -> None:
        processor = SimulatedStoreProcessor(cancel_products={StoreProduct.LARGE_CART.value})

        assert run(processor.process(STORE_METHOD, 10.0, "usd")) == Cancelled()

    def test_pending_purchase_is_a_failure(self) -> None:
        processor = SimulatedStoreProcessor(pending_products={StoreProduct.LARGE_CART.value})

        outcome = run(processor.process(STORE_METHOD, 10.0, "usd"))

        assert isinstance(outcome, Declined)
        assert outcome.kind is PaymentFailureKind.PROVIDER_ERROR

    @pytest.mark.parametrize(
        ("total", "product"),
        [
            (9.99, StoreProduct.SINGLE_ITEM),
            (15.0, StoreProduct.SMALL_CART),
            (34.99, StoreProduct.SMALL_CART),
            (59.0, StoreProduct.MEDIUM_CART),
            (250.0, StoreProduct.LARGE_CART),
        ],
    )
    def test_suggested_product(self, total: float, product: StoreProduct) -> None:
        assert suggested_product(total) is product

"""Tests for checkoutkit.models: cart, address, shipping, order records."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest

from checkoutkit.models import (
    AddressIssue,
    CartLine,
    CartSnapshot,
    Dimensions,
    Order,
    OrderDraft,
    OrderItem,
    OrderStatus,
    ShippingOption,
    ShippingQuote,
    validate_address,
)

from tests.helpers import CARD, make_address


class TestCart:
    def test_quantity_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="quantity"):
            CartLine("WIDGET", 0, 10.0)

    def test_unit_price_must_not_be_negative(self) -> None:
        with pytest.raises(ValueError, match="unit price"):
            CartLine("WIDGET", 1, -0.01)

    def test_options_are_read_only(self) -> None:
        line = CartLine("PHONE", 1, 999.0, {"color": "black"})
        with pytest.raises(TypeError):
            line.options["color"] = "white"  # type: ignore[index]

    def test_snapshot_totals(self) -> None:
        cart = CartSnapshot.of(CartLine("A", 2, 10.0), CartLine("B", 1, 5.5), CartLine("A", 1, 10.0))

        assert cart.subtotal == pytest.approx(35.5)
        assert cart.item_count == 4
        assert cart.product_ids == ("A", "B")
        assert not cart.is_empty
        assert CartSnapshot().is_empty

    def test_dimensions_exceed_any_limit(self) -> None:
        assert Dimensions(10, 40, 10).exceeds(36, 24, 24)
        assert Dimensions(25, 10, 10).exceeds(36, 24, 24)
        assert not Dimensions(24, 36, 24).exceeds(36, 24, 24)


class TestAddressValidation:
    def test_valid_us_address(self) -> None:
        assert validate_address(make_address()) == ()

    def test_zip_must_be_five_digits(self) -> None:
        assert AddressIssue.INVALID_POSTAL_CODE in validate_address(make_address(postal_code="1011"))
        assert AddressIssue.INVALID_POSTAL_CODE in validate_address(make_address(postal_code="1011A"))

    def test_region_must_be_two_letters(self) -> None:
        assert validate_address(make_address(region="N1")) == (AddressIssue.INVALID_REGION,)
        assert validate_address(make_address(region="NYC")) == (AddressIssue.INVALID_REGION,)

    def test_short_street_and_city(self) -> None:
        issues = validate_address(make_address(street="1 A", city="X"))
        assert issues == (AddressIssue.INVALID_STREET, AddressIssue.INVALID_CITY)

    def test_other_countries_always_valid(self) -> None:
        assert validate_address(make_address(region="Ontario", postal_code="M5V 2T6", country="CA")) == ()

    def test_issue_messages_are_human_readable(self) -> None:
        assert AddressIssue.INVALID_POSTAL_CODE.message == "Please enter a valid ZIP code"


class TestShipping:
    def test_formatted_cost(self) -> None:
        assert ShippingOption("standard", "Standard", "", 0.0, 7).formatted_cost == "FREE"
        assert ShippingOption("express", "Express", "", 9.99, 3).formatted_cost == "$9.99"

    def test_delivery_text(self) -> None:
        assert ShippingOption("o", "O", "", 1.0, 1).delivery_text == "1 business day"
        assert ShippingOption("s", "S", "", 1.0, 7).delivery_text == "7 business days"

    def test_quote_cost_cannot_be_negative(self) -> None:
        option = ShippingOption("standard", "Standard", "", 0.0, 7)
        with pytest.raises(ValueError):
            ShippingQuote(option, 0.0, -1.0)

    def test_quote_savings(self) -> None:
        option = ShippingOption("express", "Express", "", 5.0, 3)
        quote = ShippingQuote(option, 9.99, 5.0, "Promotional discount applied")

        assert quote.has_price_adjustment
        assert quote.savings == pytest.approx(4.99)
        assert quote.option_id == "express"


class TestOrderDraft:
    def test_recompute_totals(self) -> None:
        draft = OrderDraft(items=(
            OrderItem("1", "A", "A", 2, 25.0),
            OrderItem("2", "B", "B", 1, 100.0),
        ))
        draft.shipping_option = ShippingOption("express", "Express", "", 9.99, 3)

        draft.recompute_totals(0.08875)

        assert draft.subtotal == pytest.approx(150.0)
        assert draft.tax == pytest.approx(13.3125)
        assert draft.shipping == pytest.approx(9.99)
        assert draft.total == pytest.approx(draft.subtotal + draft.tax + draft.shipping)

    def test_recompute_is_idempotent(self) -> None:
        draft = OrderDraft(items=(OrderItem("1", "A", "A", 3, 19.99),))

        draft.recompute_totals(0.08875)
        first = (draft.subtotal, draft.tax, draft.shipping, draft.total)
        draft.recompute_totals(0.08875)

        assert (draft.subtotal, draft.tax, draft.shipping, draft.total) == first

    def test_billing_defaults_to_shipping(self) -> None:
        home = make_address()
        draft = OrderDraft(shipping_address=home)
        assert draft.effective_billing_address == home


class TestOrder:
    def test_to_dict_is_json_safe(self) -> None:
        home = make_address()
        order = Order(
            order_number="ORD-1700000000",
            items=(OrderItem("1", "PHONE", "Phone", 1, 999.0, {"color": "black"}),),
            shipping_address=home,
            billing_address=home,
            payment_method=CARD,
            status=OrderStatus.PROCESSING,
            subtotal=999.0,
            tax=88.66,
            shipping=0.0,
            total=1087.66,
            created_at=datetime(2024, 1, 1, tzinfo=UTC),
        )

        payload = json.loads(json.dumps(order.to_dict()))

        assert payload["order_number"] == "ORD-1700000000"
        assert payload["status"] == "processing"
        assert payload["items"][0]["options"] == {"color": "black"}
        assert payload["shipping_address"]["street_lines"] == ["350 Fifth Avenue"]
        assert payload["payment_method"]["type"] == "stripe"
        assert payload["estimated_delivery"] is None

"""
CheckoutFlow — one checkout session as a linear state machine.

    flow = CheckoutFlow(products=catalog, quotes=LocalQuoteService())
    await flow.initialize(snapshot)

    flow.select_shipping_address(home)
    await flow.advance()                         # CART_REVIEW -> SHIPPING (quotes fetched)
    flow.select_shipping_option(flow.recommended_quote.option_id)
    await flow.advance()                         # SHIPPING -> PAYMENT
    flow.select_payment_method(card)
    await flow.advance()                         # PAYMENT -> CONFIRMATION

    match await flow.commit_order():
        case Ok(order):
            print(order.order_number)
        case Error(e):
            print(e.message)

Steps move by one in either direction, never skipping. Selections are held
apart from the draft and folded into it on each forward move; moving back
keeps what was folded. Operations on one flow must not overlap.
"""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import structlog
from kungfu import Result, Ok, Error, LazyCoroResult

from checkoutkit import lift as L
from checkoutkit import telemetry as T
from checkoutkit.catalog import ProductLookup
from checkoutkit.config import CheckoutSettings, UnresolvedProducts
from checkoutkit.errors import (
    CheckoutContractError,
    CheckoutError,
    CheckoutNetworkError,
    MissingRequiredData,
    PaymentCancelled,
    PaymentFailed,
    ShippingError,
    Timeout,
    UnknownProducts,
)
from checkoutkit.models import (
    Address,
    CartSnapshot,
    Order,
    OrderDraft,
    OrderItem,
    OrderStatus,
    PaymentType,
    PaymentMethod,
    ProductInfo,
    ShippingQuote,
)
from checkoutkit.orders import InMemoryOrderSink, OrderSink
from checkoutkit.payments import Cancelled, Charged, Declined, PaymentProcessor
from checkoutkit.shipping import (
    LocalQuoteService,
    QuoteService,
    Quotes,
    ShippingQuoteEngine,
    ShippingRequest,
    recommend,
)
from checkoutkit.checkout._commit import CommitStep, RecordedCompensator, run_compensators, run_step
from checkoutkit.checkout._listener import FlowListener, Unsubscribe
from checkoutkit.checkout._step import CheckoutStep

logger = structlog.get_logger(__name__)

type AdvanceError = CheckoutError | ShippingError


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class PaymentReceipt:
    """What the payment step hands to the rest of the commit."""

    method: PaymentMethod
    processor: PaymentProcessor | None = None
    transaction_ref: str | None = None

    @property
    def processed(self) -> bool:
        return self.processor is not None


class CheckoutFlow:
    def __init__(
        self,
        *,
        products: ProductLookup,
        quotes: QuoteService | None = None,
        payments: Mapping[PaymentType, PaymentProcessor] | None = None,
        orders: OrderSink | None = None,
        telemetry: T.TelemetrySink | None = None,
        settings: CheckoutSettings | None = None,
        clock: Callable[[], datetime] = _utc_now,
        order_numbers: Callable[[datetime], str] | None = None,
    ) -> None:
        self.settings = settings or CheckoutSettings()
        self._products = products
        self._quote_service = quotes or LocalQuoteService(ShippingQuoteEngine(self.settings.shipping_rules))
        self._payments = dict(payments or {})
        self._orders = orders or InMemoryOrderSink()
        self._telemetry = telemetry or T.StructlogTelemetry()
        self._clock = clock
        self._order_numbers = order_numbers or (lambda now: f"ORD-{int(now.timestamp())}")

        self._step = CheckoutStep.CART_REVIEW
        self._snapshot = CartSnapshot()
        self._catalog: dict[str, ProductInfo] = {}
        self._draft = OrderDraft()
        self._quotes: Quotes = ()
        self._listeners: list[FlowListener] = []
        self._order: Order | None = None

        self._shipping_address: Address | None = None
        self._billing_address: Address | None = None
        self._shipping_quote: ShippingQuote | None = None
        self._payment_method: PaymentMethod | None = None
        self._promo_code: str | None = None

    @classmethod
    async def start(cls, snapshot: CartSnapshot, **dependencies: Any) -> Result[CheckoutFlow, UnknownProducts]:
        """Build a flow and initialize it from ``snapshot``."""
        flow = cls(**dependencies)
        match await flow.initialize(snapshot):
            case Ok(_):
                return Ok(flow)
            case Error(e):
                return Error(e)

    # ═══════════════════════════════════════════════════════════════════════════
    # Read access
    # ═══════════════════════════════════════════════════════════════════════════

    @property
    def current_step(self) -> CheckoutStep:
        return self._step

    @property
    def draft(self) -> OrderDraft:
        return self._draft

    @property
    def snapshot(self) -> CartSnapshot:
        return self._snapshot

    @property
    def quotes(self) -> Quotes:
        return self._quotes

    @property
    def recommended_quote(self) -> ShippingQuote | None:
        return recommend(self._quotes, self.settings.shipping_rules.recommended_max_transit_days)

    @property
    def selected_shipping_address(self) -> Address | None:
        return self._shipping_address

    @property
    def selected_billing_address(self) -> Address | None:
        return self._billing_address

    @property
    def selected_shipping_quote(self) -> ShippingQuote | None:
        return self._shipping_quote

    @property
    def selected_payment_method(self) -> PaymentMethod | None:
        return self._payment_method

    @property
    def promo_code(self) -> str | None:
        return self._promo_code

    @property
    def order(self) -> Order | None:
        return self._order

    @property
    def is_complete(self) -> bool:
        return self._order is not None

    # ═══════════════════════════════════════════════════════════════════════════
    # Listeners
    # ═══════════════════════════════════════════════════════════════════════════

    def subscribe(self, listener: FlowListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit_step(self, old: CheckoutStep, new: CheckoutStep) -> None:
        for listener in tuple(self._listeners):
            listener.step_changed(old, new)

    def _emit_draft(self) -> None:
        for listener in tuple(self._listeners):
            listener.draft_changed(self._draft)

    # ═══════════════════════════════════════════════════════════════════════════
    # Start
    # ═══════════════════════════════════════════════════════════════════════════

    async def initialize(self, snapshot: CartSnapshot) -> Result[OrderDraft, UnknownProducts]:
        """
        Reset to CART_REVIEW and build the draft from ``snapshot``.

        Lines whose product cannot be resolved are dropped or fail the
        start, depending on ``settings.unresolved_products``. Held
        selections are cleared. A flow whose order was placed cannot be
        reused; this raises CheckoutContractError.
        """
        self._ensure_open("initialize")
        catalog: dict[str, ProductInfo] = {}
        for product_id in snapshot.product_ids:
            product = await self._products.resolve(product_id)
            if product is not None:
                catalog[product_id] = product

        unresolved = tuple(pid for pid in snapshot.product_ids if pid not in catalog)
        if unresolved:
            self._telemetry.log(
                T.Level.WARNING,
                "Cart contains unresolved products",
                product_ids=list(unresolved),
                policy=self.settings.unresolved_products.value,
            )
            if self.settings.unresolved_products is UnresolvedProducts.FAIL:
                return Error(UnknownProducts(unresolved))

        old_step = self._step
        self._snapshot = snapshot
        self._catalog = catalog
        self._step = CheckoutStep.CART_REVIEW
        self._quotes = ()
        self._shipping_address = None
        self._billing_address = None
        self._shipping_quote = None
        self._payment_method = None
        self._promo_code = None
        self._draft = OrderDraft(items=tuple(
            OrderItem(
                line_id=uuid.uuid4().hex,
                product_id=line.product_id,
                product_name=catalog[line.product_id].name,
                quantity=line.quantity,
                unit_price=line.unit_price,
                options=line.options,
                image_url=catalog[line.product_id].image_url,
            )
            for line in snapshot.lines
            if line.product_id in catalog
        ))
        self._draft.recompute_totals(self.settings.tax_rate)

        self._telemetry.breadcrumb(T.CHECKOUT_STARTED)
        self._telemetry.log(
            T.Level.INFO,
            "Checkout started",
            item_count=snapshot.item_count,
            total_value=snapshot.subtotal,
        )
        if old_step is not CheckoutStep.CART_REVIEW:
            self._emit_step(old_step, self._step)
        self._emit_draft()
        return Ok(self._draft)

    # ═══════════════════════════════════════════════════════════════════════════
    # Selections
    # ═══════════════════════════════════════════════════════════════════════════

    def _ensure_open(self, operation: str) -> None:
        if self._order is not None:
            raise CheckoutContractError(
                "This order has already been placed",
                internal_details=f"{operation} called after order {self._order.order_number}",
            )

    def select_shipping_address(self, address: Address) -> None:
        """A different address discards the quotes and the selected option."""
        self._ensure_open("select_shipping_address")
        if address != self._shipping_address:
            self._quotes = ()
            self._shipping_quote = None
        self._shipping_address = address

    def select_billing_address(self, address: Address | None) -> None:
        self._ensure_open("select_billing_address")
        self._billing_address = address

    def select_shipping_option(self, option_id: str) -> ShippingQuote:
        self._ensure_open("select_shipping_option")
        for quote in self._quotes:
            if quote.option_id == option_id:
                self._shipping_quote = quote
                return quote
        raise CheckoutContractError(
            "That shipping option is not available",
            internal_details=f"option {option_id!r} not in current quotes "
            f"{[q.option_id for q in self._quotes]}",
        )

    def select_payment_method(self, method: PaymentMethod) -> None:
        self._ensure_open("select_payment_method")
        self._payment_method = method

    def set_promo_code(self, code: str | None) -> None:
        """Takes effect on the next quote request."""
        self._ensure_open("set_promo_code")
        self._promo_code = code.strip().upper() if code and code.strip() else None

    # ═══════════════════════════════════════════════════════════════════════════
    # Transitions
    # ═══════════════════════════════════════════════════════════════════════════

    def _missing(self) -> tuple[str, ...]:
        match self._step:
            case CheckoutStep.CART_REVIEW:
                return () if not self._snapshot.is_empty else ("cart_items",)
            case CheckoutStep.SHIPPING:
                missing = []
                if self._shipping_address is None:
                    missing.append("shipping_address")
                if self._shipping_quote is None:
                    missing.append("shipping_option")
                return tuple(missing)
            case CheckoutStep.PAYMENT:
                return () if self._payment_method is not None else ("payment_method",)
            case CheckoutStep.CONFIRMATION:
                return ()

    def can_advance(self) -> bool:
        return not self._missing()

    async def advance(self) -> Result[CheckoutStep, AdvanceError]:
        """
        Move one step forward.

        Returns the step now current. Nothing changes when the current step
        is incomplete or the shipping quote request fails.
        """
        current = self._step
        target = current.next()
        if target is None:
            return Ok(current)

        missing = self._missing()
        if missing:
            self._telemetry.log(
                T.Level.WARNING,
                "Checkout step incomplete",
                step=current.title,
                missing=list(missing),
            )
            return Error(MissingRequiredData(missing))

        match current:
            case CheckoutStep.CART_REVIEW:
                if self._shipping_address is not None:
                    fetched = await self._fetch_quotes(self._shipping_address)
                    if isinstance(fetched, Error):
                        return Error(fetched.value)
                    self._apply_quotes(fetched.value)
            case CheckoutStep.SHIPPING:
                self._draft.shipping_address = self._shipping_address
                self._draft.billing_address = self._billing_address or self._shipping_address
                self._draft.shipping_option = self._shipping_quote.option if self._shipping_quote else None
            case CheckoutStep.PAYMENT:
                self._draft.payment_method = self._payment_method

        self._draft.recompute_totals(self.settings.tax_rate)
        self._move(current, target)
        self._emit_draft()

        match target:
            case CheckoutStep.PAYMENT:
                self._telemetry.breadcrumb(T.CHECKOUT_SHIPPING_COMPLETED)
            case CheckoutStep.CONFIRMATION:
                self._telemetry.breadcrumb(T.CHECKOUT_PAYMENT_COMPLETED)
        return Ok(target)

    def retreat(self) -> CheckoutStep:
        """Move one step back. The draft keeps everything already folded into it."""
        self._ensure_open("retreat")
        target = self._step.previous()
        if target is None:
            return self._step
        self._move(self._step, target)
        return target

    def _move(self, old: CheckoutStep, new: CheckoutStep) -> None:
        self._telemetry.breadcrumb(T.CHECKOUT_STEP_EXITED)
        self._step = new
        self._telemetry.breadcrumb(T.CHECKOUT_STEP_ENTERED)
        self._telemetry.log(
            T.Level.INFO,
            "Checkout step entered",
            step=new.title.lower(),
            previous_step=old.title.lower(),
            item_count=self._snapshot.item_count,
            total_value=self._draft.total,
        )
        self._emit_step(old, new)

    # ═══════════════════════════════════════════════════════════════════════════
    # Quotes
    # ═══════════════════════════════════════════════════════════════════════════

    async def refresh_quotes(self) -> Result[Quotes, AdvanceError]:
        """
        Re-request quotes for the selected address and promo code.

        Only valid at SHIPPING. On failure the previous quotes and the
        selected option stay as they were.
        """
        self._ensure_open("refresh_quotes")
        if self._step is not CheckoutStep.SHIPPING:
            raise CheckoutContractError(
                "Shipping options can only be refreshed during the shipping step",
                internal_details=f"refresh_quotes called at {self._step.name}",
            )
        if self._shipping_address is None:
            return Error(MissingRequiredData(("shipping_address",)))

        fetched = await self._fetch_quotes(self._shipping_address)
        match fetched:
            case Ok(quotes):
                self._apply_quotes(quotes)
                return Ok(quotes)
            case Error(e):
                return Error(e)

    async def _fetch_quotes(self, address: Address) -> Result[Quotes, ShippingError]:
        request = ShippingRequest(self._snapshot, address, dict(self._catalog))
        result = await L.with_timeout(
            self._quote_service.quote(request, self._promo_code),
            self.settings.timeouts.quote_seconds,
            on_timeout=Timeout,
        )
        if isinstance(result, Error):
            self._telemetry.breadcrumb(T.SHIPPING_QUOTE_FAILED)
            self._telemetry.log(
                T.Level.ERROR,
                "Shipping quote failed",
                error_type=type(result.value).__name__,
                error_message=result.value.message,
                retryable=result.value.retryable,
                destination=f"{address.city}, {address.region}",
            )
        return result

    def _apply_quotes(self, quotes: Quotes) -> None:
        self._quotes = quotes
        if self._shipping_quote is None:
            return
        # keep the selection only if the option is still offered, at its new price
        self._shipping_quote = next(
            (q for q in quotes if q.option_id == self._shipping_quote.option_id),
            None,
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # Commit
    # ═══════════════════════════════════════════════════════════════════════════

    async def commit_order(self) -> Result[Order, CheckoutError]:
        """
        Charge the selected payment method and submit the order.

        Allowed at PAYMENT and CONFIRMATION. If submission fails after a
        successful charge, the charge is voided. On any failure the draft
        and step are unchanged and the call may be retried.
        """
        self._ensure_open("commit_order")
        if self._step < CheckoutStep.PAYMENT:
            raise CheckoutContractError(
                "Please complete the earlier checkout steps first",
                internal_details=f"commit_order called at {self._step.name}",
            )

        method = self._payment_method
        # only the folded address was quoted
        shipping_address = self._draft.shipping_address
        missing = tuple(
            name
            for name, value in (("payment_method", method), ("shipping_address", shipping_address))
            if value is None
        )
        if missing or method is None or shipping_address is None:
            return Error(MissingRequiredData(missing))

        amount = self._draft.total
        compensators: list[RecordedCompensator[Any]] = []
        try:
            paid = await run_step(
                CommitStep(self._charge(method, amount), compensate=self._void),
                compensators,
            )
            if isinstance(paid, Error):
                return Error(paid.value)

            receipt: PaymentReceipt = paid.value
            order = self._build_order(receipt, shipping_address)

            submitted = await run_step(CommitStep(self._submit(order)), compensators)
            if isinstance(submitted, Error):
                await run_compensators(compensators)
                return Error(submitted.value)
        except asyncio.CancelledError:
            await run_compensators(compensators)
            raise

        self._draft.payment_method = order.payment_method
        self._order = order
        self._telemetry.breadcrumb(T.ORDER_SUBMITTED)
        self._telemetry.log(
            T.Level.INFO,
            "Order submitted",
            order_number=order.order_number,
            status=order.status.value,
            total=order.total,
            payment_type=order.payment_method.type.value,
        )
        if self._step is not CheckoutStep.CONFIRMATION:
            self._move(self._step, CheckoutStep.CONFIRMATION)
        self._emit_draft()
        return Ok(order)

    def _charge(self, method: PaymentMethod, amount: float) -> LazyCoroResult[PaymentReceipt, CheckoutError]:
        processor = self._payments.get(method.type)

        async def _run() -> Result[PaymentReceipt, CheckoutError]:
            if processor is None:
                return Ok(PaymentReceipt(method))

            self._telemetry.breadcrumb(T.PAYMENT_STARTED)
            self._telemetry.log(
                T.Level.INFO,
                "Payment started",
                provider=processor.name,
                payment_type=method.type.value,
                amount=amount,
                currency=self.settings.currency,
            )
            outcome = await L.with_timeout(
                L.from_awaitable(
                    lambda: processor.process(method, amount, self.settings.currency),
                    on_error=lambda exc: CheckoutNetworkError(str(exc)),
                ),
                self.settings.timeouts.payment_seconds,
                on_timeout=lambda: CheckoutNetworkError("payment timed out"),
            )

            match outcome:
                case Ok(Charged(transaction_ref=ref)):
                    self._telemetry.breadcrumb(T.PAYMENT_SUCCEEDED)
                    self._telemetry.log(
                        T.Level.INFO,
                        "Payment succeeded",
                        provider=processor.name,
                        transaction_ref=ref,
                        amount=amount,
                    )
                    return Ok(PaymentReceipt(method.with_transaction(ref), processor, ref))
                case Ok(Cancelled()):
                    self._telemetry.breadcrumb(T.PAYMENT_CANCELLED)
                    self._telemetry.log(T.Level.WARNING, "Payment cancelled", provider=processor.name)
                    return Error(PaymentCancelled())
                case Ok(Declined(kind=kind, reason=reason)):
                    self._telemetry.breadcrumb(T.PAYMENT_FAILED)
                    self._telemetry.log(
                        T.Level.ERROR,
                        "Payment failed",
                        provider=processor.name,
                        failure=kind.value,
                        reason=reason,
                    )
                    return Error(PaymentFailed(kind, reason))
                case Error(e):
                    self._telemetry.breadcrumb(T.PAYMENT_FAILED)
                    self._telemetry.log(
                        T.Level.ERROR,
                        "Payment failed",
                        provider=processor.name,
                        failure="network",
                        reason=e.detail,
                    )
                    return Error(e)

        return LazyCoroResult(_run)

    async def _void(self, receipt: PaymentReceipt) -> None:
        if receipt.processor is None or receipt.transaction_ref is None:
            return
        await receipt.processor.void(receipt.transaction_ref)
        self._telemetry.breadcrumb(T.PAYMENT_VOIDED)
        self._telemetry.log(
            T.Level.WARNING,
            "Payment voided",
            provider=receipt.processor.name,
            transaction_ref=receipt.transaction_ref,
        )

    def _submit(self, order: Order) -> LazyCoroResult[str, CheckoutError]:
        async def _run() -> Result[str, CheckoutError]:
            ack = await L.with_timeout(
                L.from_awaitable(lambda: self._orders.submit(order), on_error=str),
                self.settings.timeouts.submission_seconds,
                on_timeout=lambda: "order submission timed out",
            )
            match ack:
                case Ok(Ok(ack_id)):
                    return Ok(ack_id)
                case Ok(Error(reason)) | Error(reason):
                    self._telemetry.log(
                        T.Level.ERROR,
                        "Order submission failed",
                        order_number=order.order_number,
                        reason=reason,
                    )
                    return Error(CheckoutNetworkError(reason))

        return LazyCoroResult(_run)

    def _build_order(self, receipt: PaymentReceipt, shipping_address: Address) -> Order:
        draft = self._draft
        now = self._clock()
        return Order(
            order_number=self._order_numbers(now),
            items=draft.items,
            shipping_address=shipping_address,
            billing_address=draft.billing_address or shipping_address,
            payment_method=receipt.method,
            status=OrderStatus.PROCESSING if receipt.processed else OrderStatus.PENDING,
            subtotal=draft.subtotal,
            tax=draft.tax,
            shipping=draft.shipping,
            total=draft.total,
            created_at=now,
            estimated_delivery=now + timedelta(days=self.settings.delivery_estimate_days),
            shipping_option=draft.shipping_option,
            transaction_ref=receipt.transaction_ref,
        )


__all__ = ("CheckoutFlow", "PaymentReceipt", "AdvanceError")

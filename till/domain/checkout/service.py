# till/domain/checkout/service.py
import asyncio
import logging
from decimal import Decimal
from typing import Awaitable, Callable, Optional

from till.core.errors import BusinessError, CatalogLoadFailed, CheckoutInProgress, EmptyCart, SubmissionFailed
from till.core.money import format_currency
from till.domain.cart import service as cart_service
from till.domain.cart.schemas import Cart
from till.domain.catalog.schemas import Product
from till.domain.payment.schemas import PaymentInput, PaymentMethod
from till.domain.payment.service import reconcile, validate_for_checkout
from till.domain.pricing.schemas import DiscountKind, DiscountSpec, Totals
from till.domain.pricing.service import compute_totals, price_line
from .schemas import (
    CartLineOut,
    Cashier,
    CheckoutReceipt,
    CheckoutState,
    SessionOut,
    TransactionItem,
    TransactionPayload,
)

logger = logging.getLogger(__name__)

# hands the payload to the transaction service, returns the stored record
Submitter = Callable[[TransactionPayload], Awaitable[Optional[dict]]]
CatalogReloader = Callable[[], Awaitable[object]]


def build_transaction_payload(
    cart: Cart,
    discount: DiscountSpec,
    totals: Totals,
    payment: PaymentInput,
    comment: str = "",
    cashier: Optional[Cashier] = None,
) -> TransactionPayload:
    items = []
    for line in cart.lines:
        pricing = price_line(line)
        items.append(
            TransactionItem(
                product=line.product_id,
                product_name=line.product_name,
                quantity=line.quantity,
                price=line.unit_price,
                taxable=line.taxable,
                tax_rate=line.tax_rate,
                subtotal=pricing.subtotal,
                tax=pricing.tax,
                total=pricing.total,
            )
        )

    return TransactionPayload(
        items=items,
        subtotal=totals.subtotal,
        discount=discount.amount,
        discount_type=discount.kind,
        tax=totals.tax_total,
        total=totals.grand_total,
        payment_method=payment.payment_method,
        amount_paid=payment.tendered_amount,
        change=payment.change_due,
        comment=comment,
        cashier=cashier,
    )


class CheckoutCoordinator:
    """Owns one sale from the first scanned item to the submitted transaction.

    State moves ``idle -> awaiting_payment -> submitting`` and from there to
    ``completed`` (immediately back to ``idle`` with a fresh cart) or
    ``failed`` (back to ``awaiting_payment`` with everything kept so the
    operator can retry). Only one submission can be in flight; it is tied to
    the cart generation it was built from.
    """

    def __init__(
        self,
        submit: Submitter,
        cashier: Optional[Cashier] = None,
        reload_catalog: Optional[CatalogReloader] = None,
    ):
        self._submit = submit
        self._reload_catalog = reload_catalog
        self.cashier = cashier

        self.state = CheckoutState.IDLE
        self.cart = Cart()
        self.discount = DiscountSpec()
        self.comment = ""
        self.tender_text = ""
        self.payment_method = PaymentMethod.CASH

        self.generation = 0
        self.last_error: Optional[str] = None
        self._in_flight: Optional[int] = None

    # derived values, recomputed on every read

    @property
    def totals(self) -> Totals:
        return compute_totals(self.cart, self.discount)

    @property
    def payment(self) -> PaymentInput:
        return reconcile(self.totals, self.tender_text, self.payment_method)

    @property
    def in_flight(self) -> bool:
        return self._in_flight is not None

    def _transition(self, new_state: CheckoutState) -> None:
        if new_state != self.state:
            logger.debug(
                "checkout state %s -> %s",
                self.state.value,
                new_state.value,
                extra={"generation": self.generation},
            )
        self.state = new_state

    def _after_cart_change(self) -> None:
        if self.cart.is_empty and self.state == CheckoutState.AWAITING_PAYMENT:
            self._transition(CheckoutState.IDLE)

    def _guard_edit(self) -> None:
        # the submitted cart generation stays frozen until the submission settles
        if self.in_flight:
            raise CheckoutInProgress()

    def _reset_session(self) -> None:
        self.cart = cart_service.clear()
        self.discount = DiscountSpec()
        self.comment = ""
        self.tender_text = ""
        self.generation += 1

    # cart and session edits

    def add_item(self, product: Product) -> Cart:
        self._guard_edit()
        self.cart = cart_service.add_item(self.cart, product)
        return self.cart

    def set_quantity(self, product_id: str, quantity: int) -> Cart:
        self._guard_edit()
        self.cart = cart_service.set_quantity(self.cart, product_id, quantity)
        self._after_cart_change()
        return self.cart

    def remove_item(self, product_id: str) -> Cart:
        self._guard_edit()
        self.cart = cart_service.remove_item(self.cart, product_id)
        self._after_cart_change()
        return self.cart

    def clear(self) -> Cart:
        self._guard_edit()
        self._reset_session()
        self.last_error = None
        self._transition(CheckoutState.IDLE)
        return self.cart

    def set_discount(self, amount: Decimal, kind: DiscountKind = DiscountKind.AMOUNT) -> DiscountSpec:
        self._guard_edit()
        self.discount = DiscountSpec(amount=amount, kind=kind)
        return self.discount

    def set_comment(self, comment: str) -> None:
        self._guard_edit()
        self.comment = comment

    def set_tender(self, raw: str, method: Optional[PaymentMethod] = None) -> PaymentInput:
        self._guard_edit()
        self.tender_text = raw
        if method is not None:
            self.payment_method = method
        return self.payment

    # payment step

    def open_payment(self) -> None:
        self._guard_edit()
        if self.cart.is_empty:
            raise EmptyCart()
        self._transition(CheckoutState.AWAITING_PAYMENT)

    def close_payment(self) -> None:
        self._guard_edit()
        if self.state == CheckoutState.AWAITING_PAYMENT:
            self._transition(CheckoutState.IDLE)

    async def checkout(self) -> CheckoutReceipt:
        if self.in_flight:
            logger.warning("rejected checkout: submission already in flight", extra={"generation": self._in_flight})
            raise CheckoutInProgress()

        totals = self.totals
        payment = reconcile(totals, self.tender_text, self.payment_method)
        validate_for_checkout(self.cart, totals, payment.tendered_amount)

        if self.state == CheckoutState.IDLE:
            self._transition(CheckoutState.AWAITING_PAYMENT)

        payload = build_transaction_payload(
            self.cart, self.discount, totals, payment, self.comment, self.cashier
        )

        self._in_flight = self.generation
        self._transition(CheckoutState.SUBMITTING)
        logger.info(
            "submitting transaction: %d lines, total %s",
            len(payload.items),
            format_currency(payload.total),
            extra={"generation": self.generation, "payment_method": payment.payment_method.value},
        )
        try:
            record = await self._submit(payload)
        except SubmissionFailed as exc:
            self._fail(exc)
            raise
        except Exception as exc:
            logger.exception("transaction submission crashed")
            failure = SubmissionFailed(str(exc) or None)
            self._fail(failure)
            raise failure from exc
        except asyncio.CancelledError:
            logger.warning("transaction submission cancelled", extra={"generation": self.generation})
            self.last_error = SubmissionFailed.default_message
            self._transition(CheckoutState.AWAITING_PAYMENT)
            raise
        finally:
            self._in_flight = None

        self._transition(CheckoutState.COMPLETED)
        receipt = CheckoutReceipt(
            payload=payload,
            transaction=record,
            change_due=payment.change_due,
            change_display=format_currency(payment.change_due),
        )
        logger.info("transaction completed, change %s", receipt.change_display)

        self._reset_session()
        self.last_error = None
        self._transition(CheckoutState.IDLE)

        await self._refresh_catalog()
        return receipt

    def _fail(self, error: BusinessError) -> None:
        self._transition(CheckoutState.FAILED)
        self.last_error = error.message
        logger.warning("transaction submission failed: %s", error.message)
        self._transition(CheckoutState.AWAITING_PAYMENT)

    async def _refresh_catalog(self) -> None:
        if self._reload_catalog is None:
            return
        try:
            await self._reload_catalog()
        except CatalogLoadFailed as exc:
            # the sale is already recorded; stale stock is shown until the next reload
            logger.warning("catalog reload after checkout failed: %s", exc.message)


def session_snapshot(coordinator: CheckoutCoordinator) -> SessionOut:
    totals = coordinator.totals
    payment = reconcile(totals, coordinator.tender_text, coordinator.payment_method)

    lines = []
    for line in coordinator.cart.lines:
        pricing = price_line(line)
        lines.append(CartLineOut(**line.model_dump(), **pricing.model_dump()))

    return SessionOut(
        state=coordinator.state,
        generation=coordinator.generation,
        lines=lines,
        item_count=cart_service.item_count(coordinator.cart),
        discount=coordinator.discount,
        totals=totals,
        payment=payment,
        comment=coordinator.comment,
        last_error=coordinator.last_error,
        display={
            "subtotal": format_currency(totals.subtotal),
            "tax": format_currency(totals.tax_total),
            "discount": format_currency(totals.discount_applied),
            "total": format_currency(totals.grand_total),
            "change": format_currency(payment.change_due),
        },
    )

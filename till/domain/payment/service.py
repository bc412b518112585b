# till/domain/payment/service.py
import re
from decimal import Decimal, InvalidOperation

from till.core.errors import EmptyCart, InsufficientPayment
from till.core.money import ZERO
from till.domain.cart.schemas import Cart
from till.domain.pricing.schemas import Totals
from .schemas import PaymentInput, PaymentMethod

# leading number of a text entry: "12.50", "12.", ".5", "-3", "1e3", "12.50abc"
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_tender(raw) -> Decimal:
    """Read the amount typed into the tender field.

    Anything that does not start with a number counts as nothing tendered.
    """
    if raw is None:
        return ZERO
    if isinstance(raw, Decimal):
        return raw if raw.is_finite() else ZERO
    if isinstance(raw, (int, float)):
        raw = str(raw)

    match = _LEADING_NUMBER.match(str(raw))
    if match is None:
        return ZERO
    try:
        return Decimal(match.group(1))
    except InvalidOperation:
        return ZERO


def change_due(totals: Totals, tendered: Decimal) -> Decimal:
    return max(ZERO, tendered - totals.grand_total)


def reconcile(totals: Totals, raw, method: PaymentMethod = PaymentMethod.CASH) -> PaymentInput:
    tendered = parse_tender(raw)
    return PaymentInput(
        tendered_amount=tendered,
        payment_method=method,
        change_due=change_due(totals, tendered),
    )


def validate_for_checkout(cart: Cart, totals: Totals, tendered: Decimal) -> None:
    if cart.is_empty:
        raise EmptyCart()
    if tendered < totals.grand_total:
        raise InsufficientPayment()

# till/domain/pricing/service.py
from decimal import Decimal
from typing import Optional

from till.core.money import ZERO
from till.domain.cart.schemas import Cart, CartLineItem
from till.domain.cart.service import line_subtotal
from .schemas import DiscountKind, DiscountSpec, LinePricing, Totals

HUNDRED = Decimal("100")


def line_tax(line: CartLineItem) -> Decimal:
    if not line.taxable:
        return ZERO
    return line_subtotal(line) * line.tax_rate / HUNDRED


def price_line(line: CartLineItem) -> LinePricing:
    subtotal = line_subtotal(line)
    tax = line_tax(line)
    return LinePricing(subtotal=subtotal, tax=tax, total=subtotal + tax)


def discount_value(subtotal: Decimal, discount: DiscountSpec) -> Decimal:
    # not capped at the subtotal; the grand total clamp absorbs overshoot
    if discount.kind == DiscountKind.PERCENTAGE:
        return subtotal * discount.amount / HUNDRED
    return discount.amount


def compute_totals(cart: Cart, discount: Optional[DiscountSpec] = None) -> Totals:
    """Price the whole cart.

    Tax is taken on each line's undiscounted subtotal. The discount comes
    off the cart subtotal afterwards and only the final figure is clamped
    at zero.
    """
    discount = discount or DiscountSpec()

    subtotal = ZERO
    tax_total = ZERO
    for line in cart.lines:
        pricing = price_line(line)
        subtotal += pricing.subtotal
        tax_total += pricing.tax

    discount_applied = discount_value(subtotal, discount)
    grand_total = max(ZERO, (subtotal - discount_applied) + tax_total)

    return Totals(
        subtotal=subtotal,
        tax_total=tax_total,
        discount_applied=discount_applied,
        grand_total=grand_total,
    )

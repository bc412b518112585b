# till/domain/cart/service.py
from decimal import Decimal

from till.core.errors import OutOfStock, StockExceeded
from till.domain.catalog.schemas import Product
from .schemas import Cart, CartLineItem


def add_item(cart: Cart, product: Product) -> Cart:
    existing = cart.find(product.id)

    if existing is not None:
        if existing.quantity + 1 > product.stock:
            raise StockExceeded(product.stock)
        lines = tuple(
            line.model_copy(update={"quantity": line.quantity + 1})
            if line.product_id == product.id else line
            for line in cart.lines
        )
        return Cart(lines=lines)

    if product.stock < 1:
        raise OutOfStock()

    line = CartLineItem(
        product_id=product.id,
        product_name=product.name,
        quantity=1,
        unit_price=product.price,
        taxable=product.taxable,
        tax_rate=product.tax_rate,
        image_url=product.image_url,
    )
    return Cart(lines=cart.lines + (line,))


def set_quantity(cart: Cart, product_id: str, quantity: int) -> Cart:
    # stock is only enforced when adding, not on manual quantity changes
    if quantity <= 0:
        return remove_item(cart, product_id)

    lines = tuple(
        line.model_copy(update={"quantity": quantity})
        if line.product_id == product_id else line
        for line in cart.lines
    )
    return Cart(lines=lines)


def remove_item(cart: Cart, product_id: str) -> Cart:
    return Cart(lines=tuple(line for line in cart.lines if line.product_id != product_id))


def clear() -> Cart:
    return Cart()


def line_subtotal(line: CartLineItem) -> Decimal:
    return line.unit_price * line.quantity


def item_count(cart: Cart) -> int:
    return sum(line.quantity for line in cart.lines)

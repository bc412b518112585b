# till/domain/checkout/schemas.py
import enum
from typing import Any, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from till.core.money import Money
from till.domain.pricing.schemas import DiscountKind, DiscountSpec, Totals
from till.domain.payment.schemas import PaymentInput, PaymentMethod


class CheckoutState(str, enum.Enum):
    IDLE = "idle"
    AWAITING_PAYMENT = "awaiting_payment"
    SUBMITTING = "submitting"
    COMPLETED = "completed"
    FAILED = "failed"


class Cashier(BaseModel):
    id: str = ""
    name: str = ""


class TransactionItem(BaseModel):
    product: str
    product_name: str
    quantity: int
    price: Money
    taxable: bool
    tax_rate: Money
    subtotal: Money
    tax: Money
    total: Money

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class TransactionPayload(BaseModel):
    """Body of the transaction submission.

    ``discount`` is the amount the operator typed, not the applied value;
    ``discount_type`` says how to read it.
    """

    items: list[TransactionItem]
    subtotal: Money
    discount: Money
    discount_type: DiscountKind
    tax: Money
    total: Money
    payment_method: PaymentMethod
    amount_paid: Money
    change: Money
    comment: str = ""
    cashier: Optional[Cashier] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def to_request(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class CheckoutReceipt(BaseModel):
    payload: TransactionPayload
    transaction: Optional[dict[str, Any]] = None
    change_due: Money
    change_display: str


class CommentIn(BaseModel):
    comment: str = ""


class CartLineOut(BaseModel):
    product_id: str
    product_name: str
    quantity: int
    unit_price: Money
    taxable: bool
    tax_rate: Money
    image_url: Optional[str] = None
    subtotal: Money
    tax: Money
    total: Money


class SessionOut(BaseModel):
    """Everything the till screen needs to draw the current sale."""

    state: CheckoutState
    generation: int
    lines: list[CartLineOut]
    item_count: int
    discount: DiscountSpec
    totals: Totals
    payment: PaymentInput
    comment: str
    last_error: Optional[str] = None
    display: dict[str, str]

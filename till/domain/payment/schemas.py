# till/domain/payment/schemas.py
import enum
from typing import Optional

from pydantic import BaseModel, Field

from till.core.money import Money


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    CARD = "card"
    CHECK = "check"
    MOBILE = "mobile"


class PaymentInput(BaseModel):
    tendered_amount: Money
    payment_method: PaymentMethod = PaymentMethod.CASH
    change_due: Money = Field(ge=0)


class TenderIn(BaseModel):
    # raw text from the tender field, parsed leniently
    amount: str = ""
    method: Optional[PaymentMethod] = None

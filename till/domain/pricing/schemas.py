# till/domain/pricing/schemas.py
import enum
from decimal import Decimal

from pydantic import BaseModel, Field

from till.core.money import Money


class DiscountKind(str, enum.Enum):
    AMOUNT = "amount"
    PERCENTAGE = "percentage"

    @classmethod
    def _missing_(cls, value):
        # "flat" is what operators tend to call a fixed discount
        if isinstance(value, str) and value.lower() == "flat":
            return cls.AMOUNT
        return None


class DiscountSpec(BaseModel):
    amount: Money = Field(default=Decimal("0"), ge=0)
    kind: DiscountKind = DiscountKind.AMOUNT

    class Config:
        frozen = True


class LinePricing(BaseModel):
    subtotal: Money
    tax: Money
    total: Money


class Totals(BaseModel):
    """Cart totals. Always derived from the cart and discount, never stored."""

    subtotal: Money
    tax_total: Money
    discount_applied: Money
    grand_total: Money = Field(ge=0)

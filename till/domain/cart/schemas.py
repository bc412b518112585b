# till/domain/cart/schemas.py
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from till.core.money import Money


class CartLineItem(BaseModel):
    """One product line in the cart.

    Name, price and tax settings are copied from the product when the line
    is created so later catalog changes do not reprice a sale in progress.
    """

    product_id: str
    product_name: str
    quantity: int = Field(ge=1)
    unit_price: Money = Field(ge=0)
    taxable: bool = False
    tax_rate: Money = Decimal("0")
    image_url: Optional[str] = None

    class Config:
        frozen = True


class Cart(BaseModel):
    lines: tuple[CartLineItem, ...] = ()

    class Config:
        frozen = True

    @model_validator(mode="after")
    def _one_line_per_product(self) -> "Cart":
        ids = [line.product_id for line in self.lines]
        if len(ids) != len(set(ids)):
            raise ValueError("cart lines must have unique product ids")
        return self

    def find(self, product_id: str) -> Optional[CartLineItem]:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def __len__(self) -> int:
        return len(self.lines)


class AddItem(BaseModel):
    product_id: str


class SetQuantity(BaseModel):
    quantity: int

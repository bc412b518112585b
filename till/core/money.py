from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated

from pydantic import PlainSerializer

from till.core.config import settings

CENT = Decimal("0.01")
ZERO = Decimal("0")

# Decimal in memory, plain JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def to_cents(value) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_currency(value, symbol: str | None = None) -> str:
    """Render an amount the way the till displays it, e.g. ``R123.45``."""
    prefix = settings.CURRENCY_SYMBOL if symbol is None else symbol
    return f"{prefix}{to_cents(value)}"

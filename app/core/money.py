"""Money helpers.

Amounts are ``Decimal`` inside the application (``Numeric(12, 2)`` columns)
and plain JSON numbers on the wire.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated

from pydantic.functional_serializers import PlainSerializer

ZERO = Decimal("0")
CENT = Decimal("0.01")


def to_decimal(value: Decimal | float | int | str | None) -> Decimal:
    """Convert a numeric value to Decimal without float artifacts.

    ``None`` becomes zero, so empty aggregates never leak into responses.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_cents(value: Decimal | float | int | str | None) -> Decimal:
    """Round to cents, halves away from zero (the rule SQL ``ROUND`` applies)."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def percent_of(amount: Decimal | float | int, percent: Decimal | float | int) -> Decimal:
    """Return ``percent`` percent of ``amount``, rounded with ``round_cents``."""
    return round_cents(to_decimal(amount) * to_decimal(percent) / 100)


def _serialize_money(v: Decimal | None) -> float | None:
    if v is None:
        return None
    return float(v)


Money = Annotated[Decimal, PlainSerializer(_serialize_money, return_type=float | None)]

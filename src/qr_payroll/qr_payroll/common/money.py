from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from ..core.constants import MAX_QUANTITY

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """Convert a stored numeric value (DECIMAL, int, str, None) to Decimal."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def coerce_quantity(value: Any, *, maximum: Decimal = MAX_QUANTITY) -> Decimal:
    """Lenient parse for raw work inputs.

    Missing, non-numeric, non-finite or negative values become 0; never raises.
    The result is capped at ``maximum`` and rounded to cents, the scale it is stored with.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return ZERO
    try:
        number = to_decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return ZERO
    if not number.is_finite() or number < 0:
        return ZERO
    return round_money(min(number, maximum))


def round_money(value: Decimal) -> Decimal:
    """Round to cents, ties away from zero."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)

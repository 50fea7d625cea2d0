# app/core/money.py
"""Integer minor-unit arithmetic.

Amounts are kept as ``int`` cents everywhere. Percentages come from Numeric
columns and are handled as ``Decimal`` so that ``x.5`` always rounds up.
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[int, float, Decimal, str, None]

CENT = Decimal("1")
TWO_PLACES = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    # str() keeps floats like 19.0 or 10.1 from dragging binary noise along
    return Decimal(str(value))


def round_half_up(value: Number) -> int:
    return int(to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP))


def percent_of(amount_cent: int, percent: Number) -> int:
    """``round(amount * percent / 100)`` in whole minor units."""
    return round_half_up(Decimal(amount_cent) * to_decimal(percent) / Decimal(100))


def weighted_average_cost(prev_stock: int, prev_cost_cent: int, qty: int, unit_cost_cent: int) -> int:
    total_units = prev_stock + qty
    if total_units <= 0:
        return unit_cost_cent
    blended = Decimal(prev_stock * prev_cost_cent + qty * unit_cost_cent) / Decimal(total_units)
    return round_half_up(blended)


def to_major(amount_cent: Number) -> float:
    """Convert minor units to a major-unit amount rounded to 2 decimals."""
    major = (to_decimal(amount_cent) / Decimal(100)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    return float(major)

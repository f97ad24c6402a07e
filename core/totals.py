# core/totals.py
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple

from .models import Cart

TAX_RATE = 0.125
_CENTS = Decimal("0.01")


class Totals(NamedTuple):
    subtotal: float
    tax: float
    total: float


def round2(value: float) -> float:
    """
    Round half-up to 2 decimal places.
    Works on the shortest repr of the float, so 2.675 rounds to 2.68.
    """
    return float(Decimal(repr(value)).quantize(_CENTS, rounding=ROUND_HALF_UP))


def calculate_totals(cart: Cart) -> Totals:
    """
    Each figure is rounded on its own: subtotal first, tax from the rounded
    subtotal, total from the two rounded values.
    """
    subtotal = round2(math.fsum(p.price * qty for p, qty in cart.entries()))
    tax = round2(subtotal * TAX_RATE)
    total = round2(subtotal + tax)
    return Totals(subtotal, tax, total)

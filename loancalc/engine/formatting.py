"""Amount formatting for reports: "1 234,50" style.

Pure functions. No I/O.
"""

import math
from decimal import Context, Decimal, ROUND_HALF_UP

from loancalc.engine.errors import MathematicallyUndefinedError

TWO_PLACES = Decimal("0.01")

# Enough digits to quantize any finite double to cents
_CONTEXT = Context(prec=400)

# Python's "," grouping gives "1,234.50"; swap to space groups and decimal comma
_SEPARATORS = str.maketrans({",": " ", ".": ","})


def format_amount(value: float) -> str:
    """Render an amount with two decimals, space-grouped thousands and a decimal comma.

    Rounding is half away from zero on the shortest decimal repr of the float,
    so 2.675 -> "2,68" and 999.999 -> "1 000,00".
    """
    if not math.isfinite(value):
        raise MathematicallyUndefinedError(f"Cannot format non-finite amount: {value}")

    amount = Decimal(str(value)).quantize(TWO_PLACES, ROUND_HALF_UP, _CONTEXT)
    if amount.is_zero():
        amount = amount.copy_abs()
    return f"{amount:,f}".translate(_SEPARATORS)


def pad_right(text: str, width: int) -> str:
    """Right-justify text in a column of the given width."""
    return text.rjust(width)

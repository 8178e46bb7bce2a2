"""Coercion of loosely typed numeric input."""

import math
from decimal import Decimal
from typing import Any, Optional


def as_number(value: Any) -> Optional[float]:
    """
    Convert a user-supplied value to a float.

    Accepts ints, floats, Decimals and numeric strings. Booleans, NaN
    and anything unparseable give None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return number

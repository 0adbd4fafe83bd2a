from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional


def coerce_number(value: object) -> Optional[float]:
    """Parse a user-entered number; returns None for blanks, junk, NaN and infinities."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        num = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            num = float(text)
        except ValueError:
            return None
    if not math.isfinite(num):
        return None
    return num


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; sliders and tables expect .5 to go up.
    return int(math.floor(float(value) + 0.5))


def round_half_up_places(value: float, places: int = 1) -> float:
    """Half-up rounding to `places` decimals on the exact binary value of `value`."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(float(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))

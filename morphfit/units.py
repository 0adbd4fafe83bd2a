from __future__ import annotations

import math
import re

from .inputs import round_half_up


CM_PER_FOOT = 30.48
CM_PER_INCH = 2.54
LBS_PER_KG = 2.20462

_FEET_RE = re.compile(r"""^\s*(\d+)\s*'\s*(\d+)?\s*(?:"|'')?\s*$""")


def cm_to_feet(cm: float) -> str:
    feet = float(cm) / CM_PER_FOOT
    whole = int(math.floor(feet))
    inches = round_half_up((feet - whole) * 12)
    if inches == 12:
        whole += 1
        inches = 0
    return f"{whole}'{inches}\""


def feet_to_cm(text: str) -> int:
    """Parse `5'11"` (or `5'11`, `6'`) into whole centimetres."""
    m = _FEET_RE.match(text or "")
    if not m:
        raise ValueError(f"Cannot parse feet/inches: {text!r}")
    total_inches = int(m.group(1)) * 12 + int(m.group(2) or 0)
    return round_half_up(total_inches * CM_PER_INCH)


def kg_to_lbs(kg: float) -> int:
    return round_half_up(float(kg) * LBS_PER_KG)


def lbs_to_kg(lbs: float) -> int:
    return round_half_up(float(lbs) / LBS_PER_KG)


def cm_to_inches(cm: float) -> float:
    return float(cm) / CM_PER_INCH

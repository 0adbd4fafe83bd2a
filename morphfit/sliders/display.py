from __future__ import annotations

from typing import Dict, Optional

from ..inputs import round_half_up, round_half_up_places
from ..limits import CIRCUMFERENCES, LimitsConfig
from ..units import LBS_PER_KG, cm_to_feet, cm_to_inches
from .ranges import RangeBounds


CIRCUMFERENCE_STEP = 0.5


def display_range(
    measurement: str,
    use_metric: bool,
    limits: LimitsConfig,
    bounds: Optional[RangeBounds] = None,
) -> Dict[str, float]:
    """Slider min/max/step in display units.

    Circumferences use `bounds` (the adaptive window) when given, otherwise the
    absolute limits.
    """
    absolute = limits.for_measurement(measurement)
    if measurement == "height":
        if use_metric:
            return {"min": absolute.min, "max": absolute.max, "step": 1}
        return {"min": round_half_up(cm_to_inches(absolute.min)), "max": round_half_up(cm_to_inches(absolute.max)), "step": 1}
    if measurement == "weight":
        if use_metric:
            return {"min": absolute.min, "max": absolute.max, "step": 1}
        return {"min": round_half_up(absolute.min * LBS_PER_KG), "max": round_half_up(absolute.max * LBS_PER_KG), "step": 1}

    lo, hi = (bounds.min, bounds.max) if bounds is not None else (absolute.min, absolute.max)
    if use_metric:
        return {"min": lo, "max": hi, "step": CIRCUMFERENCE_STEP}
    return {"min": round_half_up(cm_to_inches(lo)), "max": round_half_up(cm_to_inches(hi)), "step": CIRCUMFERENCE_STEP}


def format_value(value: float, measurement: str, use_metric: bool) -> str:
    if not use_metric:
        if measurement == "height":
            return cm_to_feet(value)
        if measurement == "weight":
            return f"{round_half_up(value * LBS_PER_KG)} lbs"
        if measurement in CIRCUMFERENCES:
            return f"{round_half_up_places(cm_to_inches(value), 1):.1f}\""
        raise KeyError(f"Unknown measurement type: {measurement}")
    unit = "kg" if measurement == "weight" else "cm"
    return f"{round_half_up(value)} {unit}"

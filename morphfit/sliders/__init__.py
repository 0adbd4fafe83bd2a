from __future__ import annotations

from .ranges import RangeBounds, LimitsCache, LimitsKey, baseline_limits, compute_range
from .ticks import SliderTicks, generate_ticks, validate_ticks

__all__ = [
    "RangeBounds",
    "LimitsCache",
    "LimitsKey",
    "baseline_limits",
    "compute_range",
    "SliderTicks",
    "generate_ticks",
    "validate_ticks",
]

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from .ranges import clamped_window


DEFAULT_STEP_COUNT = 12

# Acceptable window width for the default 12-step slider.
_WIDTH_BOUNDS = (10.0, 15.0)


@dataclass(frozen=True)
class SliderTicks:
    min: float
    max: float
    ticks: Tuple[float, ...]
    indicator_position: float
    can_increase: bool
    can_decrease: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "min": self.min,
            "max": self.max,
            "ticks": list(self.ticks),
            "indicator_position": self.indicator_position,
            "can_increase": self.can_increase,
            "can_decrease": self.can_decrease,
        }


def generate_ticks(
    baseline: float,
    domain_min: float,
    domain_max: float,
    step_count: int = DEFAULT_STEP_COUNT,
) -> SliderTicks:
    """Evenly spaced stops across a window of `step_count` units around `baseline`.

    The indicator is the raw baseline and need not sit on a tick when the window
    is pinned to a domain edge. Increase/decrease are judged against the outer
    domain, not the window.
    """
    steps = max(1, int(step_count))
    lo, hi = clamped_window(baseline, domain_min, domain_max, radius=steps / 2.0)
    span = hi - lo
    ticks = tuple(round(lo + i * span / steps, 2) for i in range(steps + 1))
    return SliderTicks(
        min=lo,
        max=hi,
        ticks=ticks,
        indicator_position=baseline,
        can_increase=baseline < domain_max,
        can_decrease=baseline > domain_min,
    )


def validate_ticks(
    result: SliderTicks, expected_indicator: float, step_count: int = DEFAULT_STEP_COUNT
) -> List[str]:
    issues: List[str] = []
    if len(result.ticks) != step_count + 1:
        issues.append(f"Wrong step count: {len(result.ticks) - 1}, expected: {step_count}")
    if result.indicator_position != expected_indicator:
        issues.append(
            f"Wrong indicator position: {result.indicator_position}, expected: {expected_indicator}"
        )
    width = result.max - result.min
    if step_count == DEFAULT_STEP_COUNT and not (_WIDTH_BOUNDS[0] <= width <= _WIDTH_BOUNDS[1]):
        issues.append(f"Range might be wrong: {width}, expected: around {DEFAULT_STEP_COUNT}")
    for i in range(1, len(result.ticks)):
        if result.ticks[i] <= result.ticks[i - 1]:
            issues.append(f"Steps are not increasing at position {i}")
    return issues

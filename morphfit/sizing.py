from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from .limits import LimitsConfig


_SIZING_INPUTS = ("height", "weight", "chest", "waist")


@dataclass(frozen=True)
class SizeRecommendation:
    size: str
    confidence: float
    method: str = "local"
    measurements: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "confidence": self.confidence,
            "method": self.method,
            "measurements": dict(self.measurements),
        }


def recommend_size(measurements: Mapping[str, object], limits: LimitsConfig) -> SizeRecommendation:
    """Offline size pick from chest circumference.

    Missing or unparsable inputs take their limit midpoint; every input is then
    clamped into its absolute limits before the chart lookup.
    """
    used: Dict[str, float] = {}
    for key in _SIZING_INPUTS:
        raw = limits.value_or_midpoint(key, measurements.get(key))
        used[key] = limits.for_measurement(key).clamp(raw)

    chart = limits.size_chart
    size = chart.largest
    for name, upper in chart.ordered_thresholds():
        if used["chest"] < upper:
            size = name
            break
    return SizeRecommendation(size=size, confidence=chart.base_confidence, measurements=used)

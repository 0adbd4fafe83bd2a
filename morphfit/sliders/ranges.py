from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Dict, Optional

from ..estimation.estimator import AnthropometricEstimator
from ..inputs import coerce_number, round_half_up
from ..limits import LimitsConfig
from ..reference.dataset import normalize_gender


logger = logging.getLogger(__name__)

DEFAULT_RADIUS = 6.0


@dataclass(frozen=True)
class RangeBounds:
    min: float
    max: float
    default: float

    @property
    def width(self) -> float:
        return self.max - self.min

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def clamped_window(
    center: float, abs_min: float, abs_max: float, radius: float = DEFAULT_RADIUS
) -> tuple[float, float]:
    """[center - radius, center + radius], slid inside [abs_min, abs_max].

    When the window spills over an edge it is anchored to that edge and keeps a
    width of 2 * radius, or less when the limits themselves are narrower.
    """
    ideal_min = center - radius
    ideal_max = center + radius
    if ideal_min >= abs_min and ideal_max <= abs_max:
        return ideal_min, ideal_max
    if ideal_max > abs_max:
        return max(abs_min, abs_max - 2 * radius), abs_max
    return abs_min, min(abs_max, abs_min + 2 * radius)


def compute_range(
    baseline: float, abs_min: float, abs_max: float, radius: float = DEFAULT_RADIUS
) -> RangeBounds:
    lo, hi = clamped_window(baseline, abs_min, abs_max, radius)
    # default stays on the baseline even if clamping moved the window off it
    return RangeBounds(min=lo, max=hi, default=baseline)


@dataclass(frozen=True)
class LimitsKey:
    measurement: str
    height: int
    weight: int
    gender: str


@dataclass
class LimitsCache:
    """Caller-owned memo of baseline ranges; entries live until clear()."""

    entries: Dict[LimitsKey, RangeBounds] = field(default_factory=dict)

    def get(self, key: LimitsKey) -> Optional[RangeBounds]:
        return self.entries.get(key)

    def put(self, key: LimitsKey, bounds: RangeBounds) -> None:
        self.entries[key] = bounds

    def clear(self) -> None:
        self.entries.clear()

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries


def baseline_limits(
    measurement: str,
    height: object,
    weight: object,
    gender: object,
    estimator: AnthropometricEstimator,
    limits: LimitsConfig,
    cache: Optional[LimitsCache] = None,
) -> RangeBounds:
    """Slider domain for a circumference, anchored on the body's estimated baseline.

    Without a gender or a usable height/weight this is the full absolute range
    with the midpoint as default.
    """
    absolute = limits.for_measurement(measurement)
    gender_key = normalize_gender(gender)
    height_num = coerce_number(height)
    weight_num = coerce_number(weight)
    if gender_key is None or height_num is None or weight_num is None:
        return RangeBounds(min=absolute.min, max=absolute.max, default=absolute.midpoint)

    key = LimitsKey(measurement, round_half_up(height_num), round_half_up(weight_num), gender_key)
    if cache is not None:
        hit = cache.get(key)
        if hit is not None:
            return hit

    estimate = estimator.estimate(height_num, weight_num, gender_key)
    baseline = absolute.clamp(estimate.get(measurement))
    bounds = compute_range(baseline, absolute.min, absolute.max)
    logger.debug(
        "Limits for %s (h=%s w=%s %s): baseline=%.1f range=[%.1f, %.1f] absolute=[%.1f, %.1f]",
        measurement,
        key.height,
        key.weight,
        gender_key,
        baseline,
        bounds.min,
        bounds.max,
        absolute.min,
        absolute.max,
    )
    if cache is not None:
        cache.put(key, bounds)
    return bounds

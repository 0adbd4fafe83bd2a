from __future__ import annotations

from enum import Enum
from typing import Dict, Mapping, Tuple, Union

from .estimation.estimator import MeasurementEstimate
from .inputs import clamp, coerce_number


DEFAULT_NORMALIZATION_FACTOR = 6.0


class MorphTarget(str, Enum):
    """Morph-target names on the avatar rig. Names are matched case-sensitively."""

    CHEST = "Chest Width"
    WAIST = "Waist Thickness"
    HIPS = "Hips Size"

    @classmethod
    def for_measurement(cls, measurement: str) -> "MorphTarget":
        try:
            return MEASUREMENT_MORPHS[measurement]
        except KeyError:
            raise KeyError(f"No morph target for measurement: {measurement}") from None


MEASUREMENT_MORPHS: Dict[str, MorphTarget] = {
    "chest": MorphTarget.CHEST,
    "waist": MorphTarget.WAIST,
    "hips": MorphTarget.HIPS,
}

# Every morph the avatar models expose; anything else is ignored by the rig.
ALLOWED_MORPH_TARGETS: Tuple[str, ...] = (
    "height_200",
    "male_overweight",
    "male_skinny",
    "female_overweight",
    MorphTarget.CHEST.value,
    MorphTarget.HIPS.value,
    MorphTarget.WAIST.value,
    "Shoulder Width",
    "Upperarm Length",
    "Forearm Length",
    "Shin Length",
    "Thigh Length",
    "Neck length",
    "Breast Size",
)


def normalize(current: float, baseline: float, factor: float = DEFAULT_NORMALIZATION_FACTOR) -> float:
    """Signed deformation weight in [-1, 1]; saturates once |current - baseline| >= factor."""
    diff = current - baseline
    if factor <= 0:
        # limit of diff / factor as factor -> 0+
        return float((diff > 0) - (diff < 0))
    return clamp(diff / factor, -1.0, 1.0)


def morph_updates(
    current: Mapping[str, object],
    baselines: Union[MeasurementEstimate, Mapping[str, float]],
    factor: float = DEFAULT_NORMALIZATION_FACTOR,
) -> Dict[str, float]:
    """Morph weights keyed by rig name for each circumference present in both inputs."""
    out: Dict[str, float] = {}
    for measurement, target in MEASUREMENT_MORPHS.items():
        value = coerce_number(current.get(measurement))
        if value is None:
            continue
        if isinstance(baselines, MeasurementEstimate):
            base = baselines.get(measurement)
        else:
            base = coerce_number(baselines.get(measurement))
            if base is None:
                continue
        out[target.value] = normalize(value, base, factor)
    return out

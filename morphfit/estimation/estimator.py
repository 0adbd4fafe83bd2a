from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Dict, Optional

from ..inputs import round_half_up, round_half_up_places
from ..limits import LimitsConfig, default_limits
from ..reference.dataset import ReferenceRepository


logger = logging.getLogger(__name__)

# Closed-form coefficients (per cm height, per kg weight) for genders without a table.
FALLBACK_COEFFICIENTS: Dict[str, tuple[float, float]] = {
    "chest": (0.53, 0.18),
    "waist": (0.42, 0.22),
    "hips": (0.54, 0.26),
    "inseam": (0.45, 0.10),
}


@dataclass(frozen=True)
class MeasurementEstimate:
    chest: float
    waist: float
    hips: float
    inseam: float = 0.0

    def get(self, measurement: str) -> float:
        if measurement not in ("chest", "waist", "hips", "inseam"):
            raise KeyError(f"No estimate for measurement: {measurement}")
        return float(getattr(self, measurement))

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


ZERO_ESTIMATE = MeasurementEstimate(chest=0.0, waist=0.0, hips=0.0, inseam=0.0)


def closed_form_estimate(height: float, weight: float) -> MeasurementEstimate:
    values = {
        key: round_half_up_places(h_coef * height + w_coef * weight, 1)
        for key, (h_coef, w_coef) in FALLBACK_COEFFICIENTS.items()
    }
    return MeasurementEstimate(**values)


class AnthropometricEstimator:
    """Baseline chest/waist/hips for a body from height, weight and gender.

    Male and female use the nearest (height, weight) row of the reference table,
    copied without interpolation. Any other gender uses a linear closed form.
    Height and weight that are missing or non-numeric fall back to the
    configured limit midpoints.
    """

    def __init__(self, repository: ReferenceRepository, limits: Optional[LimitsConfig] = None) -> None:
        self.repository = repository
        self.limits = limits if limits is not None else default_limits()

    def estimate(self, height_cm: object, weight_kg: object, gender: object) -> MeasurementEstimate:
        height = round_half_up(self.limits.value_or_midpoint("height", height_cm))
        weight = round_half_up(self.limits.value_or_midpoint("weight", weight_kg))

        dataset = self.repository.for_gender(gender)
        if dataset is None:
            return closed_form_estimate(height, weight)

        row = dataset.nearest(height, weight)
        if row is None:
            logger.debug("Empty %s reference table; returning zero estimate", dataset.gender)
            return ZERO_ESTIMATE
        return MeasurementEstimate(chest=row.chest, waist=row.waist, hips=row.hips, inseam=row.inseam)

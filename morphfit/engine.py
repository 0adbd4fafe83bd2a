from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

from .estimation.estimator import AnthropometricEstimator, MeasurementEstimate
from .limits import CIRCUMFERENCES, LimitsConfig, load_limits
from .morph import DEFAULT_NORMALIZATION_FACTOR, morph_updates
from .reference.dataset import ReferenceRepository
from .reference.shape_keys import ShapeKeyRepository, ShapeKeys, calculate_shape_keys
from .sizing import SizeRecommendation, recommend_size
from .sliders.ranges import LimitsCache, RangeBounds, baseline_limits
from .sliders.ticks import DEFAULT_STEP_COUNT, SliderTicks, generate_ticks


@dataclass
class SizingEngine:
    """One body's worth of slider and morph numbers, backed by injected tables.

    The reference tables and limits are read-only; the only mutable state is the
    range cache, which belongs to whoever owns the engine.
    """

    repository: ReferenceRepository
    shape_key_tables: ShapeKeyRepository
    limits: LimitsConfig
    cache: LimitsCache = field(default_factory=LimitsCache)
    estimator: AnthropometricEstimator = field(init=False)

    def __post_init__(self) -> None:
        self.estimator = AnthropometricEstimator(self.repository, self.limits)

    @staticmethod
    def default(data_dir: Optional[Path] = None, limits_path: Optional[Path] = None) -> "SizingEngine":
        return SizingEngine(
            repository=ReferenceRepository.load(data_dir),
            shape_key_tables=ShapeKeyRepository.load(data_dir),
            limits=load_limits(limits_path),
        )

    def estimate(self, height: object, weight: object, gender: object) -> MeasurementEstimate:
        return self.estimator.estimate(height, weight, gender)

    def slider_range(self, measurement: str, height: object, weight: object, gender: object) -> RangeBounds:
        return baseline_limits(
            measurement, height, weight, gender, self.estimator, self.limits, cache=self.cache
        )

    def slider_ticks(
        self,
        measurement: str,
        height: object,
        weight: object,
        gender: object,
        step_count: int = DEFAULT_STEP_COUNT,
    ) -> SliderTicks:
        baseline = self.slider_range(measurement, height, weight, gender).default
        absolute = self.limits.for_measurement(measurement)
        return generate_ticks(baseline, absolute.min, absolute.max, step_count)

    def morph_weights(
        self,
        current: Mapping[str, object],
        height: object,
        weight: object,
        gender: object,
        factor: float = DEFAULT_NORMALIZATION_FACTOR,
    ) -> Dict[str, float]:
        """Rig weights for the circumferences the user has set, relative to their baselines."""
        baselines = {m: self.slider_range(m, height, weight, gender).default for m in CIRCUMFERENCES}
        return morph_updates(current, baselines, factor)

    def shape_keys(
        self,
        height: object,
        weight: object,
        chest: object,
        waist: object,
        hips: object,
        gender: object,
    ) -> ShapeKeys:
        values = {
            name: self.limits.value_or_midpoint(name, raw)
            for name, raw in (("height", height), ("weight", weight), ("chest", chest), ("waist", waist), ("hips", hips))
        }
        return calculate_shape_keys(self.shape_key_tables.for_gender(gender), **values)

    def recommend_size(self, measurements: Mapping[str, object]) -> SizeRecommendation:
        return recommend_size(measurements, self.limits)

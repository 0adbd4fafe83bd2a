from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Literal, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic.config import ConfigDict

from .inputs import coerce_number


logger = logging.getLogger(__name__)

MeasurementType = Literal["height", "weight", "chest", "waist", "hips"]
Circumference = Literal["chest", "waist", "hips"]

MEASUREMENT_TYPES: Tuple[str, ...] = ("height", "weight", "chest", "waist", "hips")
CIRCUMFERENCES: Tuple[str, ...] = ("chest", "waist", "hips")

DEFAULT_LIMITS_PATH = Path(__file__).resolve().parent / "data" / "limits.yaml"


class AbsoluteLimits(BaseModel):
    """Hard global bounds for one measurement type, independent of any user."""

    model_config = ConfigDict(frozen=True)

    min: float
    max: float

    @model_validator(mode="after")
    def _ordered(self) -> "AbsoluteLimits":
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2.0

    def clamp(self, value: float) -> float:
        return max(self.min, min(self.max, value))


class SizeChart(BaseModel):
    model_config = ConfigDict(frozen=True)

    # size -> exclusive chest upper bound (cm)
    thresholds: Dict[str, float] = Field(
        default_factory=lambda: {"XS": 90.0, "S": 95.0, "M": 100.0, "L": 105.0}
    )
    largest: str = "XL"
    default_size: str = "M"
    base_confidence: float = 85.0

    def ordered_thresholds(self) -> list[Tuple[str, float]]:
        return sorted(self.thresholds.items(), key=lambda it: it[1])

    @property
    def sizes(self) -> list[str]:
        return [name for name, _ in self.ordered_thresholds()] + [self.largest]


class LimitsConfig(BaseModel):
    """Absolute limits per measurement type plus the local size chart."""

    model_config = ConfigDict(frozen=True)

    measurements: Dict[str, AbsoluteLimits]
    size_chart: SizeChart = Field(default_factory=SizeChart)

    @field_validator("measurements")
    @classmethod
    def _all_types_present(cls, value: Dict[str, AbsoluteLimits]) -> Dict[str, AbsoluteLimits]:
        missing = [k for k in MEASUREMENT_TYPES if k not in value]
        if missing:
            raise ValueError(f"Missing measurement limits: {missing}")
        return value

    def for_measurement(self, measurement: str) -> AbsoluteLimits:
        try:
            return self.measurements[measurement]
        except KeyError:
            raise KeyError(f"Unknown measurement type: {measurement}") from None

    def value_or_midpoint(self, measurement: str, value: object) -> float:
        """Numeric value of a user input, or the measurement's midpoint when unusable."""
        num = coerce_number(value)
        if num is None:
            return self.for_measurement(measurement).midpoint
        return num


def load_limits(path: Optional[Path] = None) -> LimitsConfig:
    cfg_path = Path(path) if path is not None else DEFAULT_LIMITS_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Limits config not found: {cfg_path}")
    data = yaml.safe_load(cfg_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Limits config root must be a mapping")
    try:
        config = LimitsConfig.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid limits config {cfg_path}: {exc}") from exc
    logger.debug("Loaded limits for %s from %s", sorted(config.measurements), cfg_path)
    return config


def default_limits() -> LimitsConfig:
    return load_limits(DEFAULT_LIMITS_PATH)

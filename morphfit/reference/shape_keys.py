from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

import numpy as np

from ..inputs import round_half_up
from .dataset import DATA_DIR, normalize_gender


logger = logging.getLogger(__name__)

# boy = height, kilo = weight; the remaining categories are circumferences.
SHAPE_KEY_CATEGORIES = ("boy", "kilo", "chest", "waist", "hips")


@dataclass(frozen=True)
class ShapeKeyTable:
    """Piecewise-linear shape-key curves keyed by category."""

    curves: Dict[str, Tuple[Tuple[float, float], ...]] = field(default_factory=dict)

    def value(self, category: str, x: float) -> float:
        curve = self.curves.get(category)
        if not curve:
            return 0.0
        xs = np.fromiter((k for k, _ in curve), dtype=np.float64, count=len(curve))
        ys = np.fromiter((v for _, v in curve), dtype=np.float64, count=len(curve))
        # np.interp holds the end values outside the key range
        return float(np.interp(float(x), xs, ys))


def parse_shape_key_table(text: str) -> ShapeKeyTable:
    """Parse `category,key,value` CSV text (header row first)."""
    points: Dict[str, Dict[float, float]] = {}
    for line in text.strip().splitlines()[1:]:
        parts = [p.strip() for p in line.split(",")]
        if len(parts) < 3 or not parts[0]:
            continue
        try:
            key = float(parts[1])
            val = float(parts[2])
        except ValueError:
            continue
        if not (math.isfinite(key) and math.isfinite(val)):
            continue
        points.setdefault(parts[0], {})[key] = val
    curves = {cat: tuple(sorted(pts.items())) for cat, pts in points.items()}
    return ShapeKeyTable(curves=curves)


@dataclass(frozen=True)
class ShapeKeys:
    boy: float
    kilo: float
    chest: float
    waist: float
    hips: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "boy": self.boy,
            "kilo": self.kilo,
            "chest": self.chest,
            "waist": self.waist,
            "hips": self.hips,
        }


@dataclass(frozen=True)
class ShapeKeyRepository:
    male: ShapeKeyTable
    female: ShapeKeyTable

    def for_gender(self, gender: object) -> ShapeKeyTable:
        # Only female has its own curves; every other value uses the male rig.
        return self.female if normalize_gender(gender) == "female" else self.male

    @staticmethod
    def load(data_dir: Optional[Path] = None) -> "ShapeKeyRepository":
        root = Path(data_dir) if data_dir is not None else DATA_DIR
        tables = {}
        for gender in ("male", "female"):
            path = root / f"{gender}_shapekeys.csv"
            if not path.exists():
                raise FileNotFoundError(f"Shape key table not found: {path}")
            tables[gender] = parse_shape_key_table(path.read_text(encoding="utf-8"))
        return ShapeKeyRepository(male=tables["male"], female=tables["female"])


def calculate_shape_keys(
    table: ShapeKeyTable,
    height: float,
    weight: float,
    chest: float,
    waist: float,
    hips: float,
) -> ShapeKeys:
    inputs = {
        "boy": height,
        "kilo": weight,
        "chest": chest,
        "waist": waist,
        "hips": hips,
    }
    out = {cat: round(table.value(cat, round_half_up(val)), 3) for cat, val in inputs.items()}
    logger.debug("Shape keys %s -> %s", inputs, out)
    return ShapeKeys(**out)

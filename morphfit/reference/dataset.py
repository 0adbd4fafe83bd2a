from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Tuple

import numpy as np


logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
REFERENCE_COLUMNS = ("height", "weight", "chest", "waist", "hips", "inseam")
TABLE_GENDERS = ("male", "female")


@dataclass(frozen=True)
class ReferenceRow:
    height: float
    weight: float
    chest: float
    waist: float
    hips: float
    inseam: float


@dataclass(frozen=True)
class ReferenceDataset:
    """Observed bodies for one gender, in source order.

    Order is significant: nearest-neighbour ties resolve to the earliest row.
    """

    gender: str
    rows: Tuple[ReferenceRow, ...] = ()
    _points: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        points = np.asarray(
            [(r.height, r.weight) for r in self.rows], dtype=np.float64
        ).reshape(-1, 2)
        points.setflags(write=False)
        object.__setattr__(self, "_points", points)

    def __len__(self) -> int:
        return len(self.rows)

    def __bool__(self) -> bool:
        return bool(self.rows)

    def nearest(self, height: float, weight: float) -> Optional[ReferenceRow]:
        """Row minimising the Euclidean (height, weight) distance; None when empty."""
        if not self.rows:
            return None
        dist = np.hypot(self._points[:, 0] - height, self._points[:, 1] - weight)
        # argmin returns the first occurrence of the minimum
        return self.rows[int(np.argmin(dist))]


def _parse_row(line: str) -> Optional[ReferenceRow]:
    parts = line.split(",")
    if len(parts) < len(REFERENCE_COLUMNS):
        return None
    values = []
    for raw in parts[: len(REFERENCE_COLUMNS)]:
        try:
            val = float(raw.strip())
        except ValueError:
            return None
        if not math.isfinite(val):
            return None
        values.append(val)
    return ReferenceRow(*values)


def parse_reference_table(text: str, gender: str = "") -> ReferenceDataset:
    """Parse `height,weight,chest,waist,hips,inseam` CSV text (header row first).

    Rows with fewer than six parsable fields are skipped.
    """
    lines = text.strip().splitlines()
    rows = []
    skipped = 0
    for line in lines[1:]:
        if not line.strip():
            continue
        row = _parse_row(line)
        if row is None:
            skipped += 1
            continue
        rows.append(row)
    if skipped:
        logger.debug("Skipped %d malformed reference rows (%s)", skipped, gender or "unnamed")
    return ReferenceDataset(gender=gender, rows=tuple(rows))


def dataset_from_rows(gender: str, rows: Iterable[ReferenceRow]) -> ReferenceDataset:
    return ReferenceDataset(gender=gender, rows=tuple(rows))


def normalize_gender(gender: object) -> Optional[str]:
    if gender is None:
        return None
    text = str(gender).strip().lower()
    return text or None


@dataclass(frozen=True)
class ReferenceRepository:
    """Read-only per-gender reference tables, built once and injected."""

    male: ReferenceDataset
    female: ReferenceDataset

    def for_gender(self, gender: object) -> Optional[ReferenceDataset]:
        """Table for male/female (case-insensitive); None for any other gender."""
        key = normalize_gender(gender)
        if key == "male":
            return self.male
        if key == "female":
            return self.female
        return None

    @staticmethod
    def load(data_dir: Optional[Path] = None) -> "ReferenceRepository":
        root = Path(data_dir) if data_dir is not None else DATA_DIR
        tables = {}
        for gender in TABLE_GENDERS:
            path = root / f"{gender}.csv"
            if not path.exists():
                raise FileNotFoundError(f"Reference table not found: {path}")
            tables[gender] = parse_reference_table(path.read_text(encoding="utf-8"), gender=gender)
            logger.debug("Loaded %d %s reference rows from %s", len(tables[gender]), gender, path)
        return ReferenceRepository(male=tables["male"], female=tables["female"])

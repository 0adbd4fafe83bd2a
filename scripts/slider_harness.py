#!/usr/bin/env python3
from __future__ import annotations

import json

from morphfit.engine import SizingEngine
from morphfit.limits import CIRCUMFERENCES
from morphfit.sliders.ticks import generate_ticks, validate_ticks


# (label, baseline, domain_min, domain_max, expected window)
_WINDOW_CASES = [
    ("centred", 80.0, 60.0, 120.0, (74.0, 86.0)),
    ("at maximum", 137.0, 60.0, 137.0, (125.0, 137.0)),
    ("at minimum", 60.0, 60.0, 120.0, (60.0, 72.0)),
    ("near minimum", 65.0, 60.0, 120.0, (60.0, 72.0)),
    ("narrow domain", 100.0, 95.0, 105.0, (95.0, 105.0)),
]

_BODIES = [
    ("male", 180, 75),
    ("female", 165, 60),
    ("other", 180, 80),
    ("male", 210, 150),
]


def main() -> None:
    failures = 0
    for label, baseline, lo, hi, expected in _WINDOW_CASES:
        result = generate_ticks(baseline, lo, hi)
        issues = validate_ticks(result, baseline)
        ok = (result.min, result.max) == expected
        failures += 0 if ok else 1
        print(f"[{'ok' if ok else 'FAIL'}] {label}: window=({result.min}, {result.max}) expected={expected}")
        for issue in issues:
            print(f"    note: {issue}")

    engine = SizingEngine.default()
    for gender, height, weight in _BODIES:
        report = {
            "body": {"gender": gender, "height": height, "weight": weight},
            "estimate": engine.estimate(height, weight, gender).to_dict(),
            "ranges": {m: engine.slider_range(m, height, weight, gender).to_dict() for m in CIRCUMFERENCES},
        }
        print(json.dumps(report, indent=2))

    print(f"cache entries: {len(engine.cache)}")
    if failures:
        raise SystemExit(1)


if __name__ == "__main__":
    main()

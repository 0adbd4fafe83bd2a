from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict

from .engine import SizingEngine
from .limits import CIRCUMFERENCES
from .morph import DEFAULT_NORMALIZATION_FACTOR, MorphTarget, normalize
from .sliders.ranges import DEFAULT_RADIUS, compute_range
from .sliders.ticks import DEFAULT_STEP_COUNT, generate_ticks, validate_ticks


def _add_body_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--height", required=True, help="Height in cm")
    p.add_argument("--weight", required=True, help="Weight in kg")
    p.add_argument("--gender", default=None, help="male, female, or anything else for the closed-form estimate")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="morphfit",
        description="Body measurement baselines, slider ranges and avatar morph weights.",
    )
    p.add_argument("--data-dir", default=None, help="Directory holding the reference and shape key CSVs.")
    p.add_argument("--limits", default=None, help="Absolute limits YAML (default: packaged limits.yaml).")
    p.add_argument("--out", default=None, help="Optional output JSON path")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr.")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_est = sub.add_parser("estimate", help="Estimate chest/waist/hips from height and weight")
    _add_body_args(p_est)

    p_range = sub.add_parser("range", help="Adaptive slider range for a circumference")
    p_range.add_argument("--measurement", choices=CIRCUMFERENCES, required=True)
    p_range.add_argument("--height", default=None)
    p_range.add_argument("--weight", default=None)
    p_range.add_argument("--gender", default=None)
    p_range.add_argument(
        "--baseline",
        type=float,
        default=None,
        help="Use this baseline directly instead of estimating one from the body.",
    )
    p_range.add_argument("--radius", type=float, default=DEFAULT_RADIUS)

    p_ticks = sub.add_parser("ticks", help="Slider tick values around a baseline")
    p_ticks.add_argument("--baseline", type=float, required=True)
    p_ticks.add_argument("--min", dest="domain_min", type=float, required=True)
    p_ticks.add_argument("--max", dest="domain_max", type=float, required=True)
    p_ticks.add_argument("--steps", type=int, default=DEFAULT_STEP_COUNT)

    p_morph = sub.add_parser("morph", help="Normalised morph weight for a slider value")
    p_morph.add_argument("--current", type=float, required=True)
    p_morph.add_argument("--baseline", type=float, required=True)
    p_morph.add_argument("--factor", type=float, default=DEFAULT_NORMALIZATION_FACTOR)
    p_morph.add_argument("--measurement", choices=CIRCUMFERENCES, default=None)

    p_keys = sub.add_parser("shape-keys", help="Shape key values for a full set of measurements")
    _add_body_args(p_keys)
    p_keys.add_argument("--chest", default=None)
    p_keys.add_argument("--waist", default=None)
    p_keys.add_argument("--hips", default=None)

    p_size = sub.add_parser("size", help="Offline size recommendation")
    p_size.add_argument("--height", default=None)
    p_size.add_argument("--weight", default=None)
    p_size.add_argument("--chest", default=None)
    p_size.add_argument("--waist", default=None)
    return p


def _run(args: argparse.Namespace, engine: SizingEngine) -> Dict[str, Any]:
    if args.cmd == "estimate":
        return engine.estimate(args.height, args.weight, args.gender).to_dict()

    if args.cmd == "range":
        if args.baseline is not None:
            absolute = engine.limits.for_measurement(args.measurement)
            return compute_range(args.baseline, absolute.min, absolute.max, args.radius).to_dict()
        return engine.slider_range(args.measurement, args.height, args.weight, args.gender).to_dict()

    if args.cmd == "ticks":
        result = generate_ticks(args.baseline, args.domain_min, args.domain_max, args.steps)
        out = result.to_dict()
        out["issues"] = validate_ticks(result, args.baseline, args.steps)
        return out

    if args.cmd == "morph":
        out: Dict[str, Any] = {"weight": normalize(args.current, args.baseline, args.factor)}
        if args.measurement:
            out["morph_target"] = MorphTarget.for_measurement(args.measurement).value
        return out

    if args.cmd == "shape-keys":
        keys = engine.shape_keys(args.height, args.weight, args.chest, args.waist, args.hips, args.gender)
        return keys.to_dict()

    if args.cmd == "size":
        measurements = {"height": args.height, "weight": args.weight, "chest": args.chest, "waist": args.waist}
        return engine.recommend_size(measurements).to_dict()

    raise ValueError(f"Unknown command: {args.cmd}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    engine = SizingEngine.default(
        data_dir=Path(args.data_dir) if args.data_dir else None,
        limits_path=Path(args.limits) if args.limits else None,
    )
    out_json = json.dumps(_run(args, engine), indent=2)
    if args.out:
        Path(args.out).write_text(out_json, encoding="utf-8")
    print(out_json)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

import unittest

from morphfit.estimation.estimator import AnthropometricEstimator, MeasurementEstimate
from morphfit.limits import default_limits
from morphfit.reference.dataset import ReferenceRepository
from morphfit.sliders.ranges import LimitsCache, LimitsKey, RangeBounds, baseline_limits, compute_range


class _CountingEstimator:
    def __init__(self, estimate: MeasurementEstimate) -> None:
        self.result = estimate
        self.calls = 0

    def estimate(self, height_cm, weight_kg, gender) -> MeasurementEstimate:
        self.calls += 1
        return self.result


class ComputeRangeTests(unittest.TestCase):
    def test_window_fits_inside_limits(self) -> None:
        self.assertEqual(compute_range(80, 60, 120), RangeBounds(min=74, max=86, default=80))

    def test_window_anchored_at_upper_limit(self) -> None:
        self.assertEqual(compute_range(137, 60, 137), RangeBounds(min=125, max=137, default=137))

    def test_window_anchored_at_lower_limit(self) -> None:
        self.assertEqual(compute_range(60, 60, 120), RangeBounds(min=60, max=72, default=60))
        self.assertEqual(compute_range(65, 60, 120), RangeBounds(min=60, max=72, default=65))

    def test_limits_narrower_than_window(self) -> None:
        self.assertEqual(compute_range(100, 95, 105), RangeBounds(min=95, max=105, default=100))

    def test_default_is_baseline_even_outside_window(self) -> None:
        bounds = compute_range(150, 60, 137)
        self.assertEqual((bounds.min, bounds.max), (125, 137))
        self.assertEqual(bounds.default, 150)

    def test_custom_radius(self) -> None:
        self.assertEqual(compute_range(80, 60, 120, radius=3), RangeBounds(min=77, max=83, default=80))

    def test_width_and_containment_hold_across_limits(self) -> None:
        for abs_min, abs_max in ((61.0, 170.6), (41.5, 154.5), (95.0, 105.0), (60.0, 72.0)):
            v = abs_min
            while v <= abs_max:
                bounds = compute_range(v, abs_min, abs_max)
                self.assertLessEqual(bounds.width, 12 + 1e-9)
                self.assertGreaterEqual(bounds.min, abs_min)
                self.assertLessEqual(bounds.max, abs_max)
                self.assertLessEqual(bounds.min, bounds.default)
                self.assertLessEqual(bounds.default, bounds.max)
                v += 0.7


class BaselineLimitsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.limits = default_limits()

    def test_missing_gender_returns_absolute_limits_with_midpoint(self) -> None:
        est = _CountingEstimator(MeasurementEstimate(100, 80, 110))
        bounds = baseline_limits("chest", 180, 75, None, est, self.limits)
        self.assertEqual((bounds.min, bounds.max), (61, 170.6))
        self.assertAlmostEqual(bounds.default, 115.8)
        self.assertEqual(est.calls, 0)

    def test_non_numeric_body_returns_absolute_limits(self) -> None:
        est = _CountingEstimator(MeasurementEstimate(100, 80, 110))
        bounds = baseline_limits("waist", "", "80", "male", est, self.limits)
        self.assertEqual((bounds.min, bounds.max), (41.5, 154.5))
        self.assertEqual(est.calls, 0)

    def test_baseline_is_clamped_into_absolute_limits(self) -> None:
        est = _CountingEstimator(MeasurementEstimate(200, 80, 110))
        bounds = baseline_limits("chest", 200, 150, "male", est, self.limits)
        self.assertAlmostEqual(bounds.default, 170.6)
        self.assertAlmostEqual(bounds.max, 170.6)
        self.assertAlmostEqual(bounds.min, 158.6)

    def test_cache_reuses_results_by_rounded_key(self) -> None:
        est = _CountingEstimator(MeasurementEstimate(100, 80, 110))
        cache = LimitsCache()
        first = baseline_limits("hips", 180.0, 75, "Male", est, self.limits, cache=cache)
        second = baseline_limits("hips", 180.4, 75.2, "male", est, self.limits, cache=cache)
        self.assertEqual(first, second)
        self.assertEqual(est.calls, 1)
        self.assertIn(LimitsKey("hips", 180, 75, "male"), cache)

        baseline_limits("hips", 180, 76, "male", est, self.limits, cache=cache)
        baseline_limits("waist", 180, 75, "male", est, self.limits, cache=cache)
        self.assertEqual(est.calls, 3)
        self.assertEqual(len(cache), 3)

        cache.clear()
        self.assertEqual(len(cache), 0)

    def test_packaged_male_chest_window(self) -> None:
        estimator = AnthropometricEstimator(ReferenceRepository.load(), self.limits)
        bounds = baseline_limits("chest", 180, 75, "male", estimator, self.limits)
        self.assertAlmostEqual(bounds.default, 102.3)
        self.assertAlmostEqual(bounds.min, 96.3)
        self.assertAlmostEqual(bounds.max, 108.3)

    def test_unknown_measurement_raises(self) -> None:
        est = _CountingEstimator(MeasurementEstimate(100, 80, 110))
        with self.assertRaises(KeyError):
            baseline_limits("neck", 180, 75, "male", est, self.limits)


if __name__ == "__main__":
    unittest.main()

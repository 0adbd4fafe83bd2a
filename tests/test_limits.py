from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from morphfit.limits import AbsoluteLimits, LimitsConfig, default_limits, load_limits


class DefaultLimitsTests(unittest.TestCase):
    def test_packaged_limits(self) -> None:
        limits = default_limits()
        self.assertEqual(limits.for_measurement("height"), AbsoluteLimits(min=137, max=210))
        self.assertEqual(limits.for_measurement("weight"), AbsoluteLimits(min=40, max=150))
        self.assertEqual(limits.for_measurement("chest").max, 170.6)
        self.assertEqual(limits.for_measurement("waist").min, 41.5)
        self.assertEqual(limits.for_measurement("hips").min, 81.1)
        self.assertEqual(limits.size_chart.sizes, ["XS", "S", "M", "L", "XL"])

    def test_midpoints_and_fallbacks(self) -> None:
        limits = default_limits()
        self.assertEqual(limits.for_measurement("height").midpoint, 173.5)
        self.assertEqual(limits.value_or_midpoint("weight", "not a number"), 95.0)
        self.assertEqual(limits.value_or_midpoint("weight", " 82.5 "), 82.5)
        self.assertEqual(limits.value_or_midpoint("weight", float("nan")), 95.0)

    def test_unknown_measurement_raises_key_error(self) -> None:
        with self.assertRaises(KeyError):
            default_limits().for_measurement("neck")


class LoadLimitsTests(unittest.TestCase):
    def _write(self, tmpdir: str, text: str) -> Path:
        path = Path(tmpdir) / "limits.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    def test_missing_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(FileNotFoundError):
                load_limits(Path(tmpdir) / "nope.yaml")

    def test_non_mapping_root_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(ValueError):
                load_limits(self._write(tmpdir, "- 1\n- 2\n"))

    def test_missing_measurement_is_rejected(self) -> None:
        text = (
            "measurements:\n"
            "  height: {min: 137, max: 210}\n"
            "  weight: {min: 40, max: 150}\n"
            "  chest: {min: 61, max: 170}\n"
        )
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(ValueError):
                load_limits(self._write(tmpdir, text))

    def test_inverted_limits_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            AbsoluteLimits(min=10, max=5)

    def test_custom_limits_and_default_size_chart(self) -> None:
        text = (
            "measurements:\n"
            "  height: {min: 120, max: 220}\n"
            "  weight: {min: 30, max: 200}\n"
            "  chest: {min: 50, max: 180}\n"
            "  waist: {min: 40, max: 160}\n"
            "  hips: {min: 70, max: 170}\n"
        )
        with tempfile.TemporaryDirectory() as tmpdir:
            limits = load_limits(self._write(tmpdir, text))
        self.assertIsInstance(limits, LimitsConfig)
        self.assertEqual(limits.for_measurement("height").min, 120)
        self.assertEqual(limits.size_chart.default_size, "M")
        self.assertEqual(limits.size_chart.base_confidence, 85.0)


if __name__ == "__main__":
    unittest.main()

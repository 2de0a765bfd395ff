from __future__ import annotations

import unittest

import numpy as np

from plotkit.errors import InvalidOptionCombinationError
from plotkit.geometry import Box
from plotkit.ticks import Ticks, best_labels, best_ticks, compute_ticks, get_tick_extents, merge_ticks, score_ticks


INTERVALS = [
    (0.0, 1.0),
    (0.3, 7.1),
    (-13.0, 42.0),
    (1e-5, 3e-5),
    (1234.0, 98765.0),
    (-0.002, -0.001),
    (-1e9, 1e9),
]


class BestTicksTests(unittest.TestCase):
    def test_zero_to_hundred_picks_tens(self) -> None:
        ticks = best_ticks(0, 100, 10)
        self.assertEqual(ticks.tolist(), [float(v) for v in range(0, 101, 10)])

    def test_ticks_cover_interval_and_ascend(self) -> None:
        for lo, hi in INTERVALS:
            for ideal in (3, 5, 10):
                with self.subTest(lo=lo, hi=hi, ideal=ideal):
                    ticks = best_ticks(lo, hi, ideal)
                    tol = (hi - lo) / 500
                    self.assertGreater(ticks.size, 0)
                    self.assertTrue(np.all(np.diff(ticks) > 0))
                    self.assertLessEqual(ticks[0], lo + tol)
                    self.assertGreaterEqual(ticks[-1], hi - tol)

    def test_deterministic(self) -> None:
        for lo, hi in INTERVALS:
            self.assertTrue(np.array_equal(best_ticks(lo, hi, 7), best_ticks(lo, hi, 7)))

    def test_equal_endpoints_widen_symmetrically(self) -> None:
        self.assertTrue(np.array_equal(best_ticks(5, 5, 5), best_ticks(0.9 * 5, 1.1 * 5, 5)))
        ticks = best_ticks(5, 5, 5)
        self.assertLessEqual(ticks[0], 4.5 + 1e-9)
        self.assertGreaterEqual(ticks[-1], 5.5 - 1e-9)

    def test_negative_equal_endpoints_keep_order(self) -> None:
        ticks = best_ticks(-5, -5, 5)
        self.assertLessEqual(ticks[0], -5.5 + 1e-9)
        self.assertGreaterEqual(ticks[-1], -4.5 - 1e-9)

    def test_zero_interval_becomes_unit_interval(self) -> None:
        ticks = best_ticks(0, 0)
        self.assertEqual(ticks.size, 11)
        self.assertEqual(ticks[0], 0.0)
        self.assertAlmostEqual(ticks[-1], 1.0)

    def test_rejects_bad_arguments(self) -> None:
        with self.assertRaises(ValueError):
            best_ticks(0, float("inf"))
        with self.assertRaises(ValueError):
            best_ticks(0, 1, 0)
        with self.assertRaises(ValueError):
            best_ticks(2.0, 1.0)


class ScoreTicksTests(unittest.TestCase):
    def test_score_components(self) -> None:
        score, jmin, jmax, nlabels = score_ticks(0.0, 100.0, 0, 1, 10)
        self.assertEqual((jmin, jmax, nlabels), (0, 10, 11))
        # coverage 1 + simplicity 0.75 + 2 * density 0.9 + includes zero 1
        self.assertAlmostEqual(score, 4.55)

    def test_boundary_within_tolerance_snaps(self) -> None:
        _, jmin, jmax, _ = score_ticks(-0.005, 10.0, 0, 0, 10)
        self.assertEqual((jmin, jmax), (0, 10))
        _, jmin, _, _ = score_ticks(-0.5, 10.0, 0, 0, 10)
        self.assertEqual(jmin, -1)


class BestLabelsTests(unittest.TestCase):
    def test_minimal_uniform_precision(self) -> None:
        self.assertEqual(best_labels([1.0, 1.5, 2.0]), ["1", "1.5", "2"])
        self.assertEqual(best_labels([20.0, 30.0, 40.0]), ["20", "30", "40"])

    def test_float_noise_is_hidden(self) -> None:
        labels = best_labels(best_ticks(0, 1, 10))
        self.assertEqual(labels, ["0", "0.1", "0.2", "0.3", "0.4", "0.5", "0.6", "0.7", "0.8", "0.9", "1"])

    def test_large_values_scaled_with_suffix(self) -> None:
        self.assertEqual(best_labels([1e7, 2e7, 3e7]), ["10", "20", "30e6"])

    def test_small_values_scaled_with_suffix(self) -> None:
        self.assertEqual(best_labels([1e-8, 2e-8, 3e-8]), ["0.01", "0.02", "0.03e-6"])

    def test_integers_format_directly(self) -> None:
        self.assertEqual(best_labels([1, 2, 3]), ["1", "2", "3"])
        self.assertEqual(best_labels(np.asarray([4, 5]), "x"), ["4", "5x"])

    def test_labels_round_trip(self) -> None:
        for lo, hi in INTERVALS:
            ticks = best_ticks(lo, hi, 10)
            labels = best_labels(ticks)
            scale = 1.0
            last = labels[-1]
            if "e" in last:
                last, exp = last.split("e")
                scale = 10.0 ** int(exp)
            parsed = [float(s) * scale for s in labels[:-1] + [last]]
            with self.subTest(lo=lo, hi=hi):
                for value, back in zip(ticks.tolist(), parsed, strict=True):
                    if value != 0.0:
                        self.assertLess(abs(value - back) / abs(value), 1e-9)

    def test_empty(self) -> None:
        self.assertEqual(best_labels([]), [])


class TicksTests(unittest.TestCase):
    def test_compute_ticks_for_box(self) -> None:
        ticks = compute_ticks(Box(0.0, 100.0, 0.0, 1.0), 10, 10)
        self.assertEqual(ticks.xticks, tuple(float(v) for v in range(0, 101, 10)))
        self.assertEqual(ticks.xtickstrings[-1], "100")
        self.assertEqual(ticks.ytickstrings[1], "0.1")

    def test_user_ticks_override_per_field(self) -> None:
        user = Ticks(xticks=(0.0, 50.0, 100.0), ytickstrings=None)
        ticks = compute_ticks(Box(0.0, 100.0, 0.0, 1.0), 10, 10, user=user)
        self.assertEqual(ticks.xticks, (0.0, 50.0, 100.0))
        self.assertEqual(ticks.xtickstrings, ("0", "50", "100"))
        self.assertEqual(len(ticks.yticks), 11)

        labelled = compute_ticks(
            Box(0.0, 100.0, 0.0, 1.0),
            user=Ticks(xticks=(0.0, 100.0), xtickstrings=("low", "high")),
        )
        self.assertEqual(labelled.xtickstrings, ("low", "high"))

    def test_merge_ticks_prefers_user_fields(self) -> None:
        computed = Ticks(xticks=(0.0, 1.0), xtickstrings=("0", "1"), yticks=(0.0, 2.0), ytickstrings=("0", "2"))
        merged = merge_ticks(Ticks(ytickstrings=("lo", "hi")), computed)
        self.assertEqual(merged.xticks, (0.0, 1.0))
        self.assertEqual(merged.yticks, (0.0, 2.0))
        self.assertEqual(merged.ytickstrings, ("lo", "hi"))

    def test_label_count_mismatch_rejected(self) -> None:
        with self.assertRaises(InvalidOptionCombinationError):
            compute_ticks(Box(0.0, 1.0, 0.0, 1.0), user=Ticks(xticks=(0.0, 1.0), xtickstrings=("a",)))

    def test_tick_extents(self) -> None:
        ticks = Ticks(xticks=(0.0, 5.0, 10.0), yticks=(-2.0, 2.0))
        self.assertEqual(get_tick_extents(ticks), Box(0.0, 10.0, -2.0, 2.0))
        with self.assertRaises(InvalidOptionCombinationError):
            get_tick_extents(Ticks(xticks=(0.0,)))


if __name__ == "__main__":
    unittest.main()

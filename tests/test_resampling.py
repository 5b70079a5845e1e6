"""Tests for calendar-aligned resampling."""

import unittest
from datetime import datetime, timedelta, timezone

import numpy as np

from burndown_estimator.models import ErrorKind, ProcessingError, ResampleMode
from burndown_estimator.nodes.resampling import (
    bucket_boundaries,
    parse_resample_mode,
    resample_burndown,
    resample_cascade,
)


def utc(year, month, day):
    return datetime(year, month, day, tzinfo=timezone.utc)


class TestBucketBoundaries(unittest.TestCase):
    def test_years_start_on_january_first(self):
        boundaries = bucket_boundaries(utc(2023, 6, 15), utc(2025, 3, 1), ResampleMode.YEAR)

        self.assertEqual(boundaries, [utc(2024, 1, 1), utc(2025, 1, 1)])

    def test_months_start_on_the_first(self):
        boundaries = bucket_boundaries(utc(2024, 1, 15), utc(2024, 4, 1), ResampleMode.MONTH)

        self.assertEqual(boundaries, [utc(2024, 2, 1), utc(2024, 3, 1), utc(2024, 4, 1)])

    def test_months_cross_year_end(self):
        boundaries = bucket_boundaries(utc(2023, 11, 1), utc(2024, 1, 31), ResampleMode.MONTH)

        self.assertEqual(boundaries, [utc(2023, 11, 1), utc(2023, 12, 1), utc(2024, 1, 1)])

    def test_weeks_start_on_monday(self):
        # 2024-01-03 is a Wednesday
        boundaries = bucket_boundaries(utc(2024, 1, 3), utc(2024, 1, 22), ResampleMode.WEEK)

        self.assertEqual(boundaries, [utc(2024, 1, 8), utc(2024, 1, 15), utc(2024, 1, 22)])
        self.assertTrue(all(b.weekday() == 0 for b in boundaries))

    def test_days_include_aligned_start(self):
        boundaries = bucket_boundaries(utc(2024, 1, 1), utc(2024, 1, 3), ResampleMode.DAY)

        self.assertEqual(boundaries, [utc(2024, 1, 1), utc(2024, 1, 2), utc(2024, 1, 3)])

    def test_day_boundary_skips_partial_first_day(self):
        start = utc(2024, 1, 1) + timedelta(hours=10)

        boundaries = bucket_boundaries(start, utc(2024, 1, 3), ResampleMode.DAY)

        self.assertEqual(boundaries, [utc(2024, 1, 2), utc(2024, 1, 3)])

    def test_no_year_inside_short_period(self):
        self.assertEqual(
            bucket_boundaries(utc(2024, 3, 1), utc(2024, 3, 15), ResampleMode.YEAR), []
        )


class TestResampleBurndown(unittest.TestCase):
    def test_day_buckets_sum_rows_born_before_each_start(self):
        daily = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 9.0]])
        start = utc(2024, 1, 1)

        result = resample_burndown(daily, start, start + timedelta(days=3), ResampleMode.DAY)

        self.assertNotIsInstance(result, ProcessingError)
        boundaries, day_axis, matrix = result
        self.assertEqual(len(boundaries), 4)
        self.assertEqual(day_axis[0], start)
        self.assertEqual(len(day_axis), 4)
        np.testing.assert_allclose(
            matrix,
            [
                [0.0, 0.0, 0.0, 0.0],
                [1.0, 2.0, 3.0, 0.0],
                [0.0, 5.0, 6.0, 0.0],
                [0.0, 0.0, 9.0, 0.0],
            ],
        )

    def test_month_bucket_after_start(self):
        daily = np.ones((5, 5))
        start = utc(2024, 1, 30)

        boundaries, day_axis, matrix = resample_burndown(
            daily, start, start + timedelta(days=5), ResampleMode.MONTH
        )

        self.assertEqual(boundaries, [utc(2024, 2, 1)])
        self.assertEqual(day_axis, [utc(2024, 2, d) for d in range(1, 5)])
        np.testing.assert_allclose(matrix, [[2.0, 2.0, 2.0, 0.0]])

    def test_matrix_matches_axes(self):
        daily = np.ones((60, 60))
        start = utc(2024, 1, 10)

        boundaries, day_axis, matrix = resample_burndown(
            daily, start, start + timedelta(days=60), ResampleMode.WEEK
        )

        self.assertEqual(matrix.shape, (len(boundaries), len(day_axis)))

    def test_too_loose(self):
        start = utc(2024, 3, 5)

        result = resample_burndown(
            np.ones((14, 14)), start, start + timedelta(days=14), ResampleMode.YEAR
        )

        self.assertIsInstance(result, ProcessingError)
        self.assertEqual(result.error_type, ErrorKind.TOO_LOOSE)
        self.assertTrue(result.recoverable)

    def test_raw_mode_does_not_aggregate(self):
        start = utc(2024, 1, 1)

        result = resample_burndown(np.ones((2, 2)), start, start, ResampleMode.RAW)

        self.assertIsInstance(result, ProcessingError)
        self.assertEqual(result.error_type, ErrorKind.INVALID_PARAMETER)


class TestResampleMode(unittest.TestCase):
    def test_aliases(self):
        self.assertEqual(parse_resample_mode("A"), ResampleMode.YEAR)
        self.assertEqual(parse_resample_mode("M"), ResampleMode.MONTH)
        self.assertEqual(parse_resample_mode("w"), ResampleMode.WEEK)
        self.assertEqual(parse_resample_mode("D"), ResampleMode.DAY)
        self.assertEqual(parse_resample_mode(" Year "), ResampleMode.YEAR)
        self.assertEqual(parse_resample_mode("raw"), ResampleMode.RAW)

    def test_unknown_mode(self):
        result = parse_resample_mode("fortnight")

        self.assertIsInstance(result, ProcessingError)
        self.assertEqual(result.error_type, ErrorKind.INVALID_PARAMETER)

    def test_cascade_order(self):
        self.assertEqual(
            resample_cascade(ResampleMode.YEAR),
            [ResampleMode.YEAR, ResampleMode.MONTH, ResampleMode.DAY],
        )
        self.assertEqual(resample_cascade(ResampleMode.MONTH), [ResampleMode.MONTH, ResampleMode.DAY])
        self.assertEqual(resample_cascade(ResampleMode.WEEK), [ResampleMode.WEEK, ResampleMode.DAY])
        self.assertEqual(resample_cascade(ResampleMode.DAY), [ResampleMode.DAY])


if __name__ == "__main__":
    unittest.main()

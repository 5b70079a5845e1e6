"""Tests for matrix validation, normalization and date-window cropping."""

import unittest
from datetime import datetime, timedelta, timezone

import numpy as np

from burndown_estimator.models import (
    ErrorKind,
    ProcessedBurndown,
    ProcessingError,
    ProcessingStage,
    ResampleMode,
)
from burndown_estimator.utils import (
    as_sparse_matrix,
    crop_date_window,
    normalize_burndown,
    normalize_matrix,
)

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _processed(matrix):
    cols = len(matrix[0])
    return ProcessedBurndown(
        name="project",
        matrix=matrix,
        date_range=[START + timedelta(days=i) for i in range(cols)],
        labels=[str(i) for i in range(len(matrix))],
        granularity=1,
        sampling=1,
        resample_mode=ResampleMode.DAY,
    )


class TestAsSparseMatrix(unittest.TestCase):
    def test_converts_to_float(self):
        arr = as_sparse_matrix([[1, 2], [0, 3]])

        self.assertEqual(arr.dtype, np.float64)
        self.assertEqual(arr.shape, (2, 2))

    def test_missing_matrix(self):
        result = as_sparse_matrix(None)

        self.assertIsInstance(result, ProcessingError)
        self.assertEqual(result.error_type, ErrorKind.EMPTY_MATRIX)
        self.assertEqual(result.stage, ProcessingStage.VALIDATE)

    def test_stage_is_reported(self):
        result = as_sparse_matrix([], stage=ProcessingStage.INTERPOLATE)

        self.assertEqual(result.stage, ProcessingStage.INTERPOLATE)

    def test_ragged_rows_list_lengths(self):
        result = as_sparse_matrix([[1, 2, 3], [1]])

        self.assertEqual(result.details["row_lengths"], [1, 3])

    def test_flat_list(self):
        result = as_sparse_matrix([1, 2, 3])

        self.assertIsInstance(result, ProcessingError)
        self.assertEqual(result.error_type, ErrorKind.EMPTY_MATRIX)

    def test_flat_array(self):
        result = as_sparse_matrix(np.array([1, 2, 3]))

        self.assertIsInstance(result, ProcessingError)
        self.assertEqual(result.error_type, ErrorKind.EMPTY_MATRIX)

    def test_negative_count(self):
        result = as_sparse_matrix([[5, 2], [0, -1]])

        self.assertIsInstance(result, ProcessingError)
        self.assertEqual(result.error_type, ErrorKind.INVALID_PARAMETER)

    def test_non_finite_count(self):
        result = as_sparse_matrix([[float("nan"), 1.0]])

        self.assertIsInstance(result, ProcessingError)
        self.assertEqual(result.error_type, ErrorKind.INVALID_PARAMETER)

    def test_non_numeric_count(self):
        result = as_sparse_matrix([["ten", 1]])

        self.assertIsInstance(result, ProcessingError)
        self.assertEqual(result.error_type, ErrorKind.INVALID_PARAMETER)


class TestNormalize(unittest.TestCase):
    def test_columns_sum_to_one(self):
        normalized = normalize_matrix(np.array([[10.0, 6.0], [0.0, 4.0]]))

        np.testing.assert_allclose(normalized, [[1.0, 0.6], [0.0, 0.4]])

    def test_zero_column_stays_zero(self):
        normalized = normalize_matrix(np.array([[0.0, 2.0], [0.0, 2.0]]))

        np.testing.assert_allclose(normalized, [[0.0, 0.5], [0.0, 0.5]])

    def test_burndown_copy(self):
        original = _processed([[2.0, 1.0], [2.0, 3.0]])

        normalized = normalize_burndown(original)

        self.assertEqual(normalized.matrix, [[0.5, 0.25], [0.5, 0.75]])
        self.assertEqual(original.matrix, [[2.0, 1.0], [2.0, 3.0]])


class TestCropDateWindow(unittest.TestCase):
    def test_no_window_is_identity(self):
        result = _processed([[1.0, 2.0, 3.0]])

        self.assertIs(crop_date_window(result, None, None), result)

    def test_end_only(self):
        cropped = crop_date_window(
            _processed([[1.0, 2.0, 3.0]]), None, START + timedelta(days=1)
        )

        self.assertEqual(cropped.matrix, [[1.0, 2.0]])
        self.assertEqual(cropped.date_range, [START, START + timedelta(days=1)])

    def test_start_only(self):
        cropped = crop_date_window(
            _processed([[1.0, 2.0, 3.0]]), START + timedelta(days=2), None
        )

        self.assertEqual(cropped.matrix, [[3.0]])

    def test_empty_window(self):
        result = crop_date_window(
            _processed([[1.0, 2.0, 3.0]]),
            START + timedelta(days=5),
            START + timedelta(days=6),
        )

        self.assertIsInstance(result, ProcessingError)
        self.assertEqual(result.error_type, ErrorKind.INVALID_PARAMETER)


if __name__ == "__main__":
    unittest.main()

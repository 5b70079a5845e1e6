"""
Matrix helpers shared by the burndown nodes.

- Sparse matrix validation (rectangular, non-empty, 2-D)
- Column normalization for relative charts
- Date-window cropping of processed output

Validation follows the Result | ProcessingError pattern.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any, TypeAlias

import numpy as np
from numpy.typing import NDArray

from burndown_estimator.models import (
    ErrorKind,
    ProcessedBurndown,
    ProcessingError,
    ProcessingStage,
)

SparseMatrix: TypeAlias = Sequence[Sequence[int]] | NDArray[Any]
DenseMatrix: TypeAlias = NDArray[np.float64]


def as_sparse_matrix(
    matrix: SparseMatrix | None,
    stage: ProcessingStage = ProcessingStage.VALIDATE,
) -> NDArray[np.float64] | ProcessingError:
    """
    Convert an age band x sample matrix to a float array.

    Returns:
        2-D float64 array, or ProcessingError: EMPTY_MATRIX when the matrix
        is absent, empty or not a rectangular 2-D table, INVALID_PARAMETER
        when a count is non-numeric, negative or not finite.
    """
    if isinstance(matrix, np.ndarray) and matrix.ndim != 2:
        return ProcessingError(
            stage=stage,
            error_type=ErrorKind.EMPTY_MATRIX,
            recoverable=False,
            message=f"Burndown matrix must be 2-D, got {matrix.ndim}-D",
        )
    if matrix is None or len(matrix) == 0:
        return ProcessingError(
            stage=stage,
            error_type=ErrorKind.EMPTY_MATRIX,
            recoverable=False,
            message="Burndown matrix has no age bands",
        )
    if any(not isinstance(row, (Sequence, np.ndarray)) for row in matrix):
        return ProcessingError(
            stage=stage,
            error_type=ErrorKind.EMPTY_MATRIX,
            recoverable=False,
            message="Burndown matrix rows must be sequences of counts",
        )
    if len(matrix[0]) == 0:
        return ProcessingError(
            stage=stage,
            error_type=ErrorKind.EMPTY_MATRIX,
            recoverable=False,
            message="Burndown matrix has no samples",
        )

    widths = {len(row) for row in matrix}
    if len(widths) != 1:
        return ProcessingError(
            stage=stage,
            error_type=ErrorKind.EMPTY_MATRIX,
            recoverable=False,
            message="Burndown matrix is not rectangular",
            details={"row_lengths": sorted(widths)},
        )

    try:
        arr = np.asarray(matrix, dtype=np.float64)
    except (TypeError, ValueError) as e:
        return ProcessingError(
            stage=stage,
            error_type=ErrorKind.INVALID_PARAMETER,
            recoverable=False,
            message=f"Burndown matrix holds non-numeric counts: {e}",
        )
    if arr.ndim != 2:
        return ProcessingError(
            stage=stage,
            error_type=ErrorKind.EMPTY_MATRIX,
            recoverable=False,
            message=f"Burndown matrix must be 2-D, got {arr.ndim}-D",
        )
    if not np.all(np.isfinite(arr)) or np.any(arr < 0):
        return ProcessingError(
            stage=stage,
            error_type=ErrorKind.INVALID_PARAMETER,
            recoverable=False,
            message="Burndown matrix counts must be finite and non-negative",
        )
    return arr


def normalize_matrix(matrix: NDArray[Any]) -> NDArray[np.float64]:
    """Scale every column to sum to 1; all-zero columns stay zero."""
    arr = np.asarray(matrix, dtype=np.float64)
    sums = arr.sum(axis=0)
    safe = np.where(sums == 0, 1.0, sums)
    return arr / safe


def normalize_burndown(result: ProcessedBurndown) -> ProcessedBurndown:
    normalized = normalize_matrix(np.asarray(result.matrix, dtype=np.float64))
    return result.model_copy(update={"matrix": normalized.tolist()})


def crop_date_window(
    result: ProcessedBurndown,
    start_date: datetime | None,
    end_date: datetime | None,
) -> ProcessedBurndown | ProcessingError:
    """Keep only the date-axis columns inside ``[start_date, end_date]``."""
    if start_date is None and end_date is None:
        return result

    keep = [
        idx
        for idx, dt in enumerate(result.date_range)
        if (start_date is None or dt >= start_date) and (end_date is None or dt <= end_date)
    ]
    if not keep:
        return ProcessingError(
            stage=ProcessingStage.VALIDATE,
            error_type=ErrorKind.INVALID_PARAMETER,
            recoverable=False,
            message="Date window excludes every sample",
            details={
                "start_date": start_date.isoformat() if start_date else None,
                "end_date": end_date.isoformat() if end_date else None,
            },
        )

    lo, hi = keep[0], keep[-1] + 1
    return result.model_copy(
        update={
            "matrix": [row[lo:hi] for row in result.matrix],
            "date_range": result.date_range[lo:hi],
        }
    )

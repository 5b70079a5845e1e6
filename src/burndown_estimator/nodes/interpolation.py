"""Sparse burndown to dense daily matrix interpolation.

The sparse matrix holds, for every age band ``y`` (``granularity`` days wide)
and sample ``x`` (``sampling`` days wide), the number of lines written during
the band that are still alive at the end of the sample. The dense matrix has
one row per day of birth and one column per day of observation.

Each reachable cell falls into one of three regimes, decided by where the
band's day range sits relative to the sample's day range:

- growth: the band is still being written during the whole sample
- peak: the band stops growing inside the sample, then starts to decay
- decay: the band was complete before the sample began

Cells with ``y * granularity > (x + 1) * sampling`` lie in the future of the
band and stay zero.
"""

from __future__ import annotations

from enum import Enum

import numpy as np
from numpy.typing import NDArray

from burndown_estimator.models import ErrorKind, ProcessingError, ProcessingStage
from burndown_estimator.utils.matrix_utils import DenseMatrix, SparseMatrix, as_sparse_matrix
from burndown_estimator.utils.observer import BurndownObserver, NullObserver


class Regime(str, Enum):
    GROWTH = "growth"
    PEAK = "peak"
    DECAY = "decay"


def classify_cell(y: int, x: int, granularity: int, sampling: int) -> Regime | None:
    """Regime of sparse cell ``(y, x)``; None for cells before the band exists."""
    if y * granularity > (x + 1) * sampling:
        return None
    if (y + 1) * granularity >= (x + 1) * sampling:
        return Regime.GROWTH
    if (y + 1) * granularity >= x * sampling:
        return Regime.PEAK
    return Regime.DECAY


def grow(
    daily: DenseMatrix,
    matrix: NDArray[np.float64],
    y: int,
    x: int,
    granularity: int,
    sampling: int,
    finish_index: int,
    finish_val: float,
) -> None:
    """
    Linear growth of band ``y`` inside sample ``x`` up to ``finish_val``.

    The increase over the previous sample is split evenly between the days
    born inside the window. Days of the band born before the window carry
    their previous column forward.

    Args:
        daily: Dense matrix, written in place
        matrix: Sparse matrix
        y: Age band index
        x: Sample index
        granularity: Days per age band
        sampling: Days per sample
        finish_index: First dense column after the growth
        finish_val: Band total reached at ``finish_index``
    """
    initial = float(matrix[y, x - 1]) if x > 0 else 0.0
    window_start = x * sampling
    band_start = y * granularity
    start_index = max(window_start, band_start)
    if finish_index == start_index:
        return

    avg = (finish_val - initial) / (finish_index - start_index)
    for j in range(window_start, finish_index):
        daily[start_index : j + 1, j] = avg

    if band_start < window_start:
        for j in range(window_start, finish_index):
            daily[band_start:window_start, j] = daily[band_start:window_start, j - 1]


def decay(
    daily: DenseMatrix,
    matrix: NDArray[np.float64],
    y: int,
    x: int,
    granularity: int,
    sampling: int,
    start_index: int,
    start_val: float,
) -> None:
    """
    Linear decay of band ``y`` from ``start_index`` to the end of sample ``x``.

    Every day row of the band shrinks from its value in the column before
    ``start_index`` by the ratio ``matrix[y, x] / start_val``, reached at the
    last column of the sample. Nothing is written when ``start_val`` is zero.
    """
    if start_val == 0:
        return
    k = float(matrix[y, x]) / start_val
    finish_index = (x + 1) * sampling
    scale = finish_index - start_index
    if scale <= 0:
        return

    rows = slice(y * granularity, (y + 1) * granularity)
    if start_index > 0:
        initial = daily[rows, start_index - 1].copy()
    else:
        initial = np.zeros(granularity, dtype=np.float64)
    steps = np.arange(1, scale + 1, dtype=np.float64) / scale
    daily[rows, start_index:finish_index] = initial[:, None] * (1.0 + (k - 1.0) * steps)[None, :]


def estimate_peak(
    matrix: NDArray[np.float64],
    y: int,
    x: int,
    granularity: int,
    sampling: int,
) -> float:
    """
    Estimate the band total on the day band ``y`` stops growing inside sample ``x``.

    The growth rate over the previous sample (or over the part of it the band
    existed for) is extrapolated to the band's last day. A band cannot be
    smaller at its peak than it is at the end of the sample, so when the
    recorded value exceeds the projection the peak is derived from the decay
    slope towards the next sample instead. Without a next sample the recorded
    value is used as is.
    """
    band_end = (y + 1) * granularity
    v1 = float(matrix[y, x - 1]) if x > 0 else 0.0
    v2 = float(matrix[y, x])
    delta = band_end - x * sampling

    previous = 0.0
    if x > 0 and (x - 1) * sampling >= y * granularity:
        if x > 1:
            previous = float(matrix[y, x - 2])
        scale = sampling
    else:
        scale = sampling if x == 0 else x * sampling - y * granularity

    if scale > 0:
        peak = v1 + (v1 - previous) / scale * delta
    else:
        peak = v1

    if v2 > peak:
        if x < matrix.shape[1] - 1:
            k = (v2 - float(matrix[y, x + 1])) / sampling
            peak = v2 + k * ((x + 1) * sampling - band_end)
        else:
            peak = v2
    return peak


def _backfill_creation(
    daily: DenseMatrix,
    value: float,
    y: int,
    x: int,
    granularity: int,
    sampling: int,
) -> None:
    # The band is created inside the sample: spread its total over the days
    # from its first day to the end of the sample.
    band_start = y * granularity
    finish_index = (x + 1) * sampling
    avg = value / (finish_index - band_start)
    for j in range(band_start, finish_index):
        daily[band_start : j + 1, j] = avg


def interpolate_cell(
    daily: DenseMatrix,
    matrix: NDArray[np.float64],
    y: int,
    x: int,
    granularity: int,
    sampling: int,
) -> Regime | None:
    """Fill the dense block of sparse cell ``(y, x)``; returns the regime applied."""
    regime = classify_cell(y, x, granularity, sampling)
    if regime is None:
        return None

    value = float(matrix[y, x])
    if regime == Regime.GROWTH:
        if y * granularity <= x * sampling:
            grow(daily, matrix, y, x, granularity, sampling, (x + 1) * sampling, value)
        elif (x + 1) * sampling > y * granularity:
            grow(daily, matrix, y, x, granularity, sampling, (x + 1) * sampling, value)
            _backfill_creation(daily, value, y, x, granularity, sampling)
    elif regime == Regime.PEAK:
        peak = estimate_peak(matrix, y, x, granularity, sampling)
        band_end = (y + 1) * granularity
        grow(daily, matrix, y, x, granularity, sampling, band_end, peak)
        decay(daily, matrix, y, x, granularity, sampling, band_end, peak)
    elif x > 0:
        decay(daily, matrix, y, x, granularity, sampling, x * sampling, float(matrix[y, x - 1]))
    return regime


def interpolate_burndown_matrix(
    matrix: SparseMatrix,
    granularity: int,
    sampling: int,
    observer: BurndownObserver | None = None,
) -> DenseMatrix | ProcessingError:
    """
    Expand a sparse age band x sample matrix into a day x day matrix.

    Args:
        matrix: Rectangular non-negative counts, ``matrix[band][sample]``
        granularity: Days per age band
        sampling: Days per sample
        observer: Receives one progress tick per age band

    Returns:
        Array of shape ``(rows * granularity, cols * sampling)``, or
        ProcessingError for an empty matrix or non-positive parameters
    """
    sparse = as_sparse_matrix(matrix, stage=ProcessingStage.INTERPOLATE)
    if isinstance(sparse, ProcessingError):
        return sparse
    if granularity <= 0 or sampling <= 0:
        return ProcessingError(
            stage=ProcessingStage.INTERPOLATE,
            error_type=ErrorKind.INVALID_PARAMETER,
            recoverable=False,
            message=f"Invalid sampling ({sampling}) or granularity ({granularity})",
            details={"sampling": sampling, "granularity": granularity},
        )

    observer = observer or NullObserver()
    rows, cols = sparse.shape
    daily = np.zeros((rows * granularity, cols * sampling), dtype=np.float64)
    for y in range(rows):
        for x in range(cols):
            interpolate_cell(daily, sparse, y, x, granularity, sampling)
        observer.progress(y + 1, rows)
    return daily

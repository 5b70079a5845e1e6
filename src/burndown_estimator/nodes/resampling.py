"""Calendar-aligned aggregation of the dense daily burndown matrix."""

from __future__ import annotations

from datetime import datetime, timedelta

import numpy as np

from burndown_estimator import config
from burndown_estimator.models import (
    ErrorKind,
    ProcessingError,
    ProcessingStage,
    ResampleMode,
)
from burndown_estimator.utils.matrix_utils import DenseMatrix
from burndown_estimator.utils.time_utils import day_offset, next_period, period_floor


def parse_resample_mode(value: str | ResampleMode) -> ResampleMode | ProcessingError:
    """Resolve a mode name or alias (``A``, ``M``, ``W``, ``D``)."""
    if isinstance(value, ResampleMode):
        return value
    text = str(value).strip().lower()
    text = config.RESAMPLE_ALIASES.get(text, text)
    try:
        return ResampleMode(text)
    except ValueError:
        return ProcessingError(
            stage=ProcessingStage.VALIDATE,
            error_type=ErrorKind.INVALID_PARAMETER,
            recoverable=False,
            message=f"Unsupported resample mode: {value}",
            details={"resample": str(value)},
        )


def resample_cascade(mode: ResampleMode) -> list[ResampleMode]:
    """``mode`` followed by every finer mode tried when it is too loose."""
    cascade = [mode]
    finer = config.RESAMPLE_FALLBACKS.get(mode.value)
    while finer is not None and len(cascade) <= len(config.RESAMPLE_FALLBACKS):
        cascade.append(ResampleMode(finer))
        finer = config.RESAMPLE_FALLBACKS.get(finer)
    return cascade


def bucket_boundaries(
    start: datetime,
    finish: datetime,
    mode: ResampleMode,
) -> list[datetime]:
    """
    Calendar period starts within ``[start, finish]``.

    Years start on January 1, months on the 1st, weeks on Monday and days at
    midnight. A period that begins before ``start`` is skipped.
    """
    current = period_floor(start, mode)
    if current < start:
        current = next_period(current, mode)

    boundaries: list[datetime] = []
    while current <= finish:
        boundaries.append(current)
        current = next_period(current, mode)
    return boundaries


def resample_burndown(
    daily: DenseMatrix,
    start: datetime,
    finish: datetime,
    mode: ResampleMode,
) -> tuple[list[datetime], list[datetime], DenseMatrix] | ProcessingError:
    """
    Aggregate dense day rows into calendar buckets.

    Output row ``i`` is the sum of the dense rows born between the previous
    bucket start (or ``start``) and the start of bucket ``i``. It is laid out
    on a day axis running from the first bucket start through ``finish`` and
    filled from the first day the bucket's rows exist.

    Args:
        daily: Dense matrix, rows and columns are days since ``start``
        start: Timestamp of dense column and row 0
        finish: End of the observed period
        mode: Calendar bucket size

    Returns:
        (bucket_starts, day_axis, matrix) or ProcessingError (TOO_LOOSE when
        no bucket starts inside the period)
    """
    if mode.is_raw:
        return ProcessingError(
            stage=ProcessingStage.RESAMPLE,
            error_type=ErrorKind.INVALID_PARAMETER,
            recoverable=False,
            message=f"Resample mode '{mode.value}' does not aggregate",
            details={"resample": mode.value},
        )

    boundaries = bucket_boundaries(start, finish, mode)
    if not boundaries:
        return ProcessingError(
            stage=ProcessingStage.RESAMPLE,
            error_type=ErrorKind.TOO_LOOSE,
            recoverable=True,
            message=f"Too loose resampling: {mode.value}. Try finer.",
            details={"resample": mode.value, "start": start.isoformat(), "finish": finish.isoformat()},
        )

    first = boundaries[0]
    first_offset = day_offset(start, first)
    n_days = day_offset(first, finish) + 1
    day_axis = [first + timedelta(days=i) for i in range(n_days)]
    columns = first_offset + np.arange(n_days)
    in_range = columns < daily.shape[1]

    resampled = np.zeros((len(boundaries), n_days), dtype=np.float64)
    for i, boundary in enumerate(boundaries):
        istart = day_offset(start, boundaries[i - 1]) if i > 0 else 0
        ifinish = day_offset(start, boundary)
        j = max(istart - first_offset, 0)

        target = np.arange(j, n_days)
        target = target[in_range[j:]]
        if target.size == 0 or ifinish <= istart:
            continue
        resampled[i, target] = daily[istart:ifinish, columns[target]].sum(axis=0)

    return boundaries, day_axis, resampled

"""Burndown processing pipeline: validate, interpolate, resample, label."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime

import numpy as np

from burndown_estimator.config import MAX_RAW_LABELS
from burndown_estimator.models import (
    BurndownConfig,
    BurndownHeader,
    ErrorKind,
    ProcessedBurndown,
    ProcessingError,
    ProcessingStage,
    ResampleMode,
)
from burndown_estimator.nodes.interpolation import interpolate_burndown_matrix
from burndown_estimator.nodes.labels import bucket_labels, raw_band_labels
from burndown_estimator.nodes.resampling import (
    parse_resample_mode,
    resample_burndown,
    resample_cascade,
)
from burndown_estimator.nodes.survival import report_survival
from burndown_estimator.utils.matrix_utils import (
    DenseMatrix,
    SparseMatrix,
    as_sparse_matrix,
    crop_date_window,
)
from burndown_estimator.utils.observer import BurndownObserver, default_observer
from burndown_estimator.utils.time_utils import (
    as_utc,
    day_offset,
    floor_datetime,
    from_timestamp,
    ticks_to_timedelta,
)


def validate_header(header: BurndownHeader) -> ProcessingError | None:
    """Check the header parameters; None when they are usable."""
    if header.sampling <= 0 or header.granularity <= 0:
        return ProcessingError(
            stage=ProcessingStage.VALIDATE,
            error_type=ErrorKind.INVALID_PARAMETER,
            recoverable=False,
            message=(
                f"Invalid sampling ({header.sampling}) or granularity ({header.granularity})"
            ),
            details={"sampling": header.sampling, "granularity": header.granularity},
        )
    if header.tick_size <= 0:
        return ProcessingError(
            stage=ProcessingStage.VALIDATE,
            error_type=ErrorKind.INVALID_PARAMETER,
            recoverable=False,
            message=f"Invalid tick size ({header.tick_size})",
            details={"tick_size": header.tick_size},
        )
    if header.last < header.start:
        return ProcessingError(
            stage=ProcessingStage.VALIDATE,
            error_type=ErrorKind.INVALID_PARAMETER,
            recoverable=False,
            message=f"Last timestamp ({header.last}) precedes start ({header.start})",
            details={"start": header.start, "last": header.last},
        )
    return None


def zero_after_last(daily: DenseMatrix, start: datetime, last: datetime) -> DenseMatrix:
    """Clear, in place, every dense column from the day of ``last`` on."""
    daily[:, max(day_offset(start, last), 0) :] = 0
    return daily


def resample_with_fallback(
    daily: DenseMatrix,
    start: datetime,
    finish: datetime,
    mode: ResampleMode,
    observer: BurndownObserver,
) -> tuple[ResampleMode, list[datetime], list[datetime], DenseMatrix, list[str]] | ProcessingError:
    """
    Resample with ``mode``, falling back to finer modes while it is too loose.

    Returns:
        (mode_used, bucket_starts, day_axis, matrix, warnings) or the last
        ProcessingError, with the modes attempted in ``details["tried"]``
    """
    cascade = resample_cascade(mode)
    warnings: list[str] = []
    tried = [cascade[0]]
    result = resample_burndown(daily, start, finish, cascade[0])
    for finer in cascade[1:]:
        if not isinstance(result, ProcessingError) or result.error_type != ErrorKind.TOO_LOOSE:
            break
        warning = f"too loose resampling - by {tried[-1].value}, trying by {finer.value}"
        observer.message(warning)
        warnings.append(warning)
        tried.append(finer)
        result = resample_burndown(daily, start, finish, finer)

    if isinstance(result, ProcessingError):
        return result.model_copy(
            update={
                "recoverable": False,
                "details": {**result.details, "tried": [m.value for m in tried]},
            }
        )
    boundaries, day_axis, matrix = result
    return tried[-1], boundaries, day_axis, matrix, warnings


def _raw_burndown(
    header: BurndownHeader,
    name: str,
    sparse: np.ndarray,
    start: datetime,
    mode: ResampleMode,
    observer: BurndownObserver,
) -> ProcessedBurndown:
    rows, cols = sparse.shape
    labels = raw_band_labels(start, rows, header.granularity, header.tick_size)
    warnings: list[str] = []
    if len(labels) > MAX_RAW_LABELS:
        warnings.append("Too many labels - consider resampling.")
        observer.message(warnings[-1])

    date_range = [
        start + ticks_to_timedelta(i * header.sampling, header.tick_size) for i in range(cols)
    ]
    return ProcessedBurndown(
        name=name,
        matrix=sparse.tolist(),
        date_range=date_range,
        labels=labels,
        granularity=header.granularity,
        sampling=header.sampling,
        resample_mode=mode,
        warnings=warnings,
    )


def load_burndown(
    header: BurndownHeader,
    name: str,
    matrix: SparseMatrix,
    config: BurndownConfig | None = None,
    observer: BurndownObserver | None = None,
) -> ProcessedBurndown | ProcessingError:
    """
    Turn a sparse burndown record into a chart-ready processed burndown.

    Raw modes (``no``, ``raw``) return the sparse bands as they are. Any other
    mode interpolates a daily matrix, clears the days after ``header.last``,
    optionally reports the survival ratio, and aggregates into calendar
    buckets, falling back to finer buckets when the requested ones are too
    loose for the period covered.
    """
    cfg = config or BurndownConfig()
    observer = observer or default_observer()

    invalid = validate_header(header)
    if invalid is not None:
        return invalid

    sparse = as_sparse_matrix(matrix)
    if isinstance(sparse, ProcessingError):
        return sparse

    mode = parse_resample_mode(cfg.resample)
    if isinstance(mode, ProcessingError):
        return mode

    start = floor_datetime(from_timestamp(header.start), header.tick_size)
    last = from_timestamp(header.last)
    cols = sparse.shape[1]
    finish = start + ticks_to_timedelta(cols * header.sampling, header.tick_size)

    if mode.is_raw:
        result = _raw_burndown(header, name, sparse, start, mode, observer)
    else:
        observer.message(f"resampling to {mode.value}, please wait...")
        daily = interpolate_burndown_matrix(
            sparse, header.granularity, header.sampling, observer=observer
        )
        if isinstance(daily, ProcessingError):
            return daily
        zero_after_last(daily, start, last)

        survival = report_survival(daily, observer) if cfg.report_survival else []

        resampled = resample_with_fallback(daily, start, finish, mode, observer)
        if isinstance(resampled, ProcessingError):
            return resampled
        used_mode, boundaries, day_axis, resampled_matrix, warnings = resampled

        result = ProcessedBurndown(
            name=name,
            matrix=resampled_matrix.tolist(),
            date_range=day_axis,
            labels=bucket_labels(boundaries, used_mode),
            granularity=header.granularity,
            sampling=header.sampling,
            resample_mode=used_mode,
            warnings=warnings,
            survival_report=survival,
        )

    return crop_date_window(
        result,
        as_utc(cfg.start_date) if cfg.start_date else None,
        as_utc(cfg.end_date) if cfg.end_date else None,
    )


def load_burndowns(
    header: BurndownHeader,
    matrices: Mapping[str, SparseMatrix],
    config: BurndownConfig | None = None,
    observer: BurndownObserver | None = None,
) -> tuple[list[ProcessedBurndown], list[ProcessingError]]:
    """
    Process several named matrices (files, developers) sharing one header.

    Survival reporting is turned off. An entity that fails is reported and
    skipped; its error carries the entity name in ``details["name"]``.
    """
    cfg = (config or BurndownConfig()).model_copy(update={"report_survival": False})
    observer = observer or default_observer()

    results: list[ProcessedBurndown] = []
    errors: list[ProcessingError] = []
    for i, (name, matrix) in enumerate(matrices.items(), start=1):
        observer.message(f"Processing {i}/{len(matrices)}: {name}")
        result = load_burndown(header, name, matrix, cfg, observer)
        if isinstance(result, ProcessingError):
            observer.message(f"failed to process {name}: {result.message}")
            errors.append(result.model_copy(update={"details": {**result.details, "name": name}}))
            continue
        results.append(result)
    return results, errors

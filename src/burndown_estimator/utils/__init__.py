"""Utility modules for burndown-estimator."""

from burndown_estimator.utils.matrix_utils import (
    # Type aliases
    DenseMatrix,
    SparseMatrix,
    # Validation
    as_sparse_matrix,
    # Output shaping
    crop_date_window,
    normalize_burndown,
    normalize_matrix,
)
from burndown_estimator.utils.observer import (
    BurndownObserver,
    LoggingObserver,
    NullObserver,
    RecordingObserver,
    default_observer,
)
from burndown_estimator.utils.time_utils import (
    as_utc,
    day_offset,
    floor_datetime,
    from_timestamp,
    next_period,
    period_floor,
    ticks_to_timedelta,
)

__all__ = [
    # Type aliases
    "DenseMatrix",
    "SparseMatrix",
    # Validation
    "as_sparse_matrix",
    # Output shaping
    "crop_date_window",
    "normalize_burndown",
    "normalize_matrix",
    # Observers
    "BurndownObserver",
    "LoggingObserver",
    "NullObserver",
    "RecordingObserver",
    "default_observer",
    # Time
    "as_utc",
    "day_offset",
    "floor_datetime",
    "from_timestamp",
    "next_period",
    "period_floor",
    "ticks_to_timedelta",
]

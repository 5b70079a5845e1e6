"""Processing nodes for burndown reconstruction and resampling."""

from burndown_estimator.nodes.interpolation import (
    Regime,
    classify_cell,
    decay,
    estimate_peak,
    grow,
    interpolate_burndown_matrix,
    interpolate_cell,
)
from burndown_estimator.nodes.labels import bucket_label, bucket_labels, raw_band_labels
from burndown_estimator.nodes.resampling import (
    bucket_boundaries,
    parse_resample_mode,
    resample_burndown,
    resample_cascade,
)
from burndown_estimator.nodes.survival import (
    format_survival_report,
    report_survival,
    survival_ratios,
)

__all__ = [
    # Interpolation
    "Regime",
    "classify_cell",
    "decay",
    "estimate_peak",
    "grow",
    "interpolate_burndown_matrix",
    "interpolate_cell",
    # Resampling
    "bucket_boundaries",
    "parse_resample_mode",
    "resample_burndown",
    "resample_cascade",
    # Labels
    "bucket_label",
    "bucket_labels",
    "raw_band_labels",
    # Survival
    "format_survival_report",
    "report_survival",
    "survival_ratios",
]

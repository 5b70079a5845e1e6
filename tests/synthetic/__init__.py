"""Synthetic burndown test harness.

Generate sparse burndown records with a known daily ground truth.

Usage:
    from tests.synthetic import generate_burndown, compare_daily_totals

    case = generate_burndown(n_samples=12, granularity=30, sampling=30)
    daily = interpolate_burndown_matrix(case.matrix, 30, 30)
    score = compare_daily_totals(case, daily)
"""

from .data_gen import (
    SyntheticBurndown,
    generate_burndown,
    random_causal_matrix,
    sample_burndown,
)
from .ground_truth import InterpolationScore, band_totals_at_samples, compare_daily_totals

__all__ = [
    # Generation
    "generate_burndown",
    "random_causal_matrix",
    "sample_burndown",
    # Data types
    "SyntheticBurndown",
    "InterpolationScore",
    # Comparison
    "band_totals_at_samples",
    "compare_daily_totals",
]

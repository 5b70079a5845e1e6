"""Running ratio of surviving lines.

This is not a Kaplan-Meier estimate. Column ``i`` reports the lines alive on
day ``i`` divided by the running total of alive lines over days ``0..i``.
"""

from __future__ import annotations

import numpy as np

from burndown_estimator import config
from burndown_estimator.utils.matrix_utils import DenseMatrix
from burndown_estimator.utils.observer import BurndownObserver, NullObserver


def survival_ratios(daily: DenseMatrix) -> np.ndarray:
    """Per-column alive ratio; NaN where nothing has been alive yet."""
    arr = np.asarray(daily, dtype=np.float64)
    if arr.ndim != 2 or arr.size == 0:
        return np.zeros(0, dtype=np.float64)

    alive = np.where(arr > 0, arr, 0.0).sum(axis=0)
    total = np.cumsum(alive)
    with np.errstate(divide="ignore", invalid="ignore"):
        ratios = alive / total
    return np.where(total > 0, ratios, np.nan)


def format_survival_report(ratios: np.ndarray) -> list[str]:
    return [
        config.SURVIVAL_LINE_TEMPLATE.format(days=days, ratio=float(ratio))
        for days, ratio in enumerate(ratios)
    ]


def report_survival(
    daily: DenseMatrix,
    observer: BurndownObserver | None = None,
) -> list[str]:
    """Compute the survival ratios and emit them through ``observer``."""
    observer = observer or NullObserver()
    lines = format_survival_report(survival_ratios(daily))
    observer.message("\n".join([config.SURVIVAL_REPORT_HEADER, *lines]))
    return lines

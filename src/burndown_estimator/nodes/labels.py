"""Row labels for processed burndown matrices."""

from collections.abc import Sequence
from datetime import datetime

from burndown_estimator import config
from burndown_estimator.models import ResampleMode
from burndown_estimator.utils.time_utils import ticks_to_timedelta


def raw_band_labels(
    start: datetime,
    rows: int,
    granularity: int,
    tick_size: float,
) -> list[str]:
    """``"<band start> - <band end>"`` for every age band of the sparse matrix."""
    labels = []
    for i in range(rows):
        band_start = start + ticks_to_timedelta(i * granularity, tick_size)
        band_end = start + ticks_to_timedelta((i + 1) * granularity, tick_size)
        labels.append(
            config.RAW_LABEL_TEMPLATE.format(
                start=band_start.strftime(config.DATE_LABEL_FORMAT),
                end=band_end.strftime(config.DATE_LABEL_FORMAT),
            )
        )
    return labels


def bucket_label(boundary: datetime, mode: ResampleMode) -> str:
    if mode == ResampleMode.YEAR:
        return f"{boundary.year:04d}"
    if mode == ResampleMode.MONTH:
        return boundary.strftime(config.MONTH_LABEL_FORMAT)
    return boundary.strftime(config.DATE_LABEL_FORMAT)


def bucket_labels(boundaries: Sequence[datetime], mode: ResampleMode) -> list[str]:
    return [bucket_label(b, mode) for b in boundaries]

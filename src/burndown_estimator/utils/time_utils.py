"""Timestamp helpers and calendar period arithmetic (all times UTC)."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from burndown_estimator.models import ResampleMode


def from_timestamp(timestamp: float) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def floor_datetime(dt: datetime, tick_size: float) -> datetime:
    """Round ``dt`` down to the nearest multiple of ``tick_size`` seconds since the epoch."""
    if tick_size <= 0:
        return dt
    ticks = dt.timestamp() // tick_size
    return from_timestamp(ticks * tick_size)


def ticks_to_timedelta(ticks: float, tick_size: float) -> timedelta:
    return timedelta(seconds=ticks * tick_size)


def day_offset(origin: datetime, dt: datetime) -> int:
    """Whole days from ``origin`` to ``dt``."""
    return (dt - origin).days


def period_floor(dt: datetime, mode: ResampleMode) -> datetime:
    """Start of the calendar period containing ``dt``."""
    midnight = dt.replace(hour=0, minute=0, second=0, microsecond=0)
    if mode == ResampleMode.YEAR:
        return midnight.replace(month=1, day=1)
    if mode == ResampleMode.MONTH:
        return midnight.replace(day=1)
    if mode == ResampleMode.WEEK:
        return midnight - timedelta(days=midnight.weekday())
    if mode == ResampleMode.DAY:
        return midnight
    raise ValueError(f"Not a calendar resample mode: {mode.value}")


def next_period(dt: datetime, mode: ResampleMode) -> datetime:
    """Start of the period following the one that begins at ``dt``."""
    if mode == ResampleMode.YEAR:
        return dt.replace(year=dt.year + 1)
    if mode == ResampleMode.MONTH:
        if dt.month == 12:
            return dt.replace(year=dt.year + 1, month=1)
        return dt.replace(month=dt.month + 1)
    if mode == ResampleMode.WEEK:
        return dt + timedelta(days=7)
    if mode == ResampleMode.DAY:
        return dt + timedelta(days=1)
    raise ValueError(f"Not a calendar resample mode: {mode.value}")

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

MILLIS_PER_HOUR = 60 * 60 * 1000
MILLIS_PER_DAY = 24 * MILLIS_PER_HOUR

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_millis(value: Optional[datetime]) -> Optional[int]:
    """Epoch milliseconds for a datetime; naive values are read as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - _EPOCH) // timedelta(milliseconds=1)


def from_millis(value: int) -> datetime:
    return _EPOCH + timedelta(milliseconds=value)


def to_iso(value: int) -> str:
    # 2024-01-01T08:00:00.000Z
    return from_millis(value).strftime("%Y-%m-%dT%H:%M:%S.") + f"{value % 1000:03d}Z"


def duration_millis(estimated_hours: Optional[float]) -> int:
    hours = float(estimated_hours or 0.0)
    if hours <= 0:
        return 0
    return int(round(hours * MILLIS_PER_HOUR))


def lag_millis(lag_days: Optional[int]) -> int:
    return int(lag_days or 0) * MILLIS_PER_DAY


__all__ = [
    "MILLIS_PER_HOUR",
    "MILLIS_PER_DAY",
    "to_millis",
    "from_millis",
    "to_iso",
    "duration_millis",
    "lag_millis",
]

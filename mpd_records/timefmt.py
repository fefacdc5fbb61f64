"""Integer-seconds projections used when serializing records."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from .fields import EPOCH

_SECOND = timedelta(seconds=1)


def duration_secs(value: timedelta) -> int:
    return value // _SECOND


def optional_duration_secs(value: Optional[timedelta]) -> Optional[int]:
    if value is None:
        return None
    return duration_secs(value)


def time_secs(value: datetime) -> int:
    # Naive values are taken to be UTC, matching what the decoders produce.
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - EPOCH) // _SECOND


def optional_time_secs(value: Optional[datetime]) -> Optional[int]:
    if value is None:
        return None
    return time_secs(value)

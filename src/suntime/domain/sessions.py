"""Domain models for sun exposure sessions."""

import math
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class SessionRecord:
    """A logged sun exposure session.

    ``duration_minutes`` is the current field; ``exposure_time_minutes`` is
    the name older rows were written with. Use ``session_minutes`` rather than
    reading either field directly.
    """

    id: UUID
    user_id: UUID
    logged_at: datetime
    duration_minutes: float | None = None
    exposure_time_minutes: float | None = None
    uv_index: float | None = None
    skin_type: int | None = None
    sunscreen: bool = False
    cloudy: bool = False


def coerce_minutes(value: object) -> float | None:
    """Return a sanitized non-negative minute count, or None when absent."""
    if value is None or isinstance(value, bool):
        return None
    try:
        minutes = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(minutes) or minutes < 0:
        return 0.0
    return minutes


def session_minutes(record: SessionRecord) -> float:
    """Resolve the duration of a session across both field names."""
    for value in (record.duration_minutes, record.exposure_time_minutes):
        minutes = coerce_minutes(value)
        if minutes is not None:
            return minutes
    return 0.0


def coerce_uv_index(value: object) -> float | None:
    """Return a finite non-negative UV index, or None when unusable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        uv_index = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(uv_index):
        return None
    return max(uv_index, 0.0)

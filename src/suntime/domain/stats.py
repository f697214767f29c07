"""Domain models for statistics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionStatistics:
    """Longitudinal totals derived from a user's session history."""

    total_sessions: int = 0
    total_minutes: float = 0.0
    current_streak_days: int = 0
    average_minutes_per_day: int = 0
    today_minutes: float = 0.0
    monthly_minutes: float = 0.0

"""Statistics over a user's sun exposure history."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta, tzinfo
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from suntime.domain.models import round_half_up
from suntime.domain.sessions import SessionRecord, session_minutes
from suntime.domain.stats import SessionStatistics

logger = logging.getLogger(__name__)

STREAK_LOOKBACK_DAYS = 30
DEFAULT_FETCH_LIMIT = 100


class SessionRepository(Protocol):
    """Persistence interface for exposure sessions."""

    def list_sessions(
        self, user_id: UUID, *, limit: int, descending: bool
    ) -> list[SessionRecord]:
        """Return sessions, newest first when ``descending`` is set.

        Stores that cannot order by date raise when ``descending`` is set.
        """

    def create_session(
        self, user_id: UUID, payload: dict[str, object]
    ) -> SessionRecord:
        """Persist a new session and return it."""


def session_day(record: SessionRecord, tz: tzinfo | None = None) -> date:
    """Calendar day a session belongs to, in ``tz`` when one is given."""
    logged_at = record.logged_at
    if tz is not None and logged_at.tzinfo is not None:
        logged_at = logged_at.astimezone(tz)
    return logged_at.date()


def _sort_key(record: SessionRecord) -> datetime:
    # Naive timestamps are compared as UTC so mixed rows stay sortable.
    if record.logged_at.tzinfo is None:
        return record.logged_at.replace(tzinfo=UTC)
    return record.logged_at


def sort_newest_first(sessions: Iterable[SessionRecord]) -> list[SessionRecord]:
    """Sort sessions by date, most recent first."""
    return sorted(sessions, key=_sort_key, reverse=True)


def current_streak(days_with_sessions: set[date], today: date) -> int:
    """Count consecutive active days walking back from ``today``.

    A missing session today does not end the streak since the day is not
    over yet.
    """
    streak = 0
    for offset in range(STREAK_LOOKBACK_DAYS):
        day = today - timedelta(days=offset)
        if day in days_with_sessions:
            streak += 1
        elif offset > 0:
            break
    return streak


def calculate_session_statistics(
    sessions: Iterable[SessionRecord], today: date, tz: tzinfo | None = None
) -> SessionStatistics:
    """Compute totals, streak and averages from the full history."""
    records = sort_newest_first(sessions)
    if not records:
        return SessionStatistics()

    minutes_by_day: dict[date, float] = {}
    for record in records:
        day = session_day(record, tz)
        minutes_by_day[day] = minutes_by_day.get(day, 0.0) + session_minutes(record)

    total_minutes = sum(minutes_by_day.values())
    month_start = today.replace(day=1)
    monthly_minutes = sum(
        minutes
        for day, minutes in minutes_by_day.items()
        if month_start <= day <= today
    )
    return SessionStatistics(
        total_sessions=len(records),
        total_minutes=total_minutes,
        current_streak_days=current_streak(set(minutes_by_day), today),
        average_minutes_per_day=round_half_up(total_minutes / len(minutes_by_day)),
        today_minutes=minutes_by_day.get(today, 0.0),
        monthly_minutes=monthly_minutes,
    )


@dataclass
class StatsService:
    """Loads session history and derives statistics from it."""

    repository: SessionRepository
    fetch_limit: int = DEFAULT_FETCH_LIMIT

    def fetch_sessions(self, user_id: UUID) -> list[SessionRecord]:
        """Return the user's sessions newest first; empty on store failure."""
        try:
            return self.repository.list_sessions(
                user_id, limit=self.fetch_limit, descending=True
            )
        except Exception as exc:
            logger.warning(
                "Ordered session query failed for user %s (%s); "
                "falling back to client-side sort",
                user_id,
                exc,
            )
        try:
            unordered = self.repository.list_sessions(
                user_id, limit=self.fetch_limit, descending=False
            )
        except Exception:
            logger.exception("Session query failed for user %s", user_id)
            return []
        return sort_newest_first(unordered)

    def get_statistics(self, user_id: UUID, timezone_name: str) -> SessionStatistics:
        """Return statistics with "today" taken in the user's timezone."""
        tz = ZoneInfo(timezone_name)
        today = datetime.now(tz=tz).date()
        return self.statistics_for(user_id, today, tz)

    def statistics_for(
        self, user_id: UUID, today: date, tz: tzinfo | None = None
    ) -> SessionStatistics:
        """Return statistics relative to an explicit ``today``."""
        sessions = self.fetch_sessions(user_id)
        try:
            return calculate_session_statistics(sessions, today, tz)
        except Exception:
            logger.exception("Failed to compute statistics for user %s", user_id)
            return SessionStatistics()

    def log_session(
        self, user_id: UUID, payload: dict[str, object]
    ) -> SessionRecord:
        """Persist a new session."""
        return self.repository.create_session(user_id, payload)

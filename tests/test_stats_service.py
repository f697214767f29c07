"""Tests for session statistics."""

import random
from dataclasses import replace
from datetime import UTC, date, datetime, timedelta
from uuid import uuid4
from zoneinfo import ZoneInfo

from suntime.domain.stats import SessionStatistics
from suntime.services.stats import (
    StatsService,
    calculate_session_statistics,
    current_streak,
)
from tests.conftest import InMemorySessionRepository, make_session

TODAY = date(2026, 10, 19)


def days_ago(count: int) -> date:
    return TODAY - timedelta(days=count)


def test_empty_history_is_all_zero() -> None:
    assert calculate_session_statistics([], TODAY) == SessionStatistics()


def test_streak_counts_consecutive_days_including_today() -> None:
    sessions = [make_session(days_ago(n)) for n in (0, 1, 2, 4)]

    stats = calculate_session_statistics(sessions, TODAY)

    assert stats.current_streak_days == 3


def test_missing_today_does_not_break_streak() -> None:
    stats = calculate_session_statistics([make_session(days_ago(1))], TODAY)

    assert stats.current_streak_days == 1


def test_gap_yesterday_ends_streak() -> None:
    sessions = [make_session(days_ago(2)), make_session(days_ago(3))]

    stats = calculate_session_statistics(sessions, TODAY)

    assert stats.current_streak_days == 0


def test_streak_lookback_is_bounded() -> None:
    active_days = {days_ago(n) for n in range(45)}

    assert current_streak(active_days, TODAY) == 30


def test_average_is_per_active_day() -> None:
    sessions = [make_session(days_ago(0), 30), make_session(days_ago(5), 10)]

    stats = calculate_session_statistics(sessions, TODAY)

    assert stats.average_minutes_per_day == 20
    assert stats.total_minutes == 40
    assert stats.total_sessions == 2


def test_average_groups_sessions_on_same_day() -> None:
    sessions = [
        make_session(days_ago(0), 30, hour=8),
        make_session(days_ago(0), 10, hour=17),
        make_session(days_ago(1), 20),
    ]

    stats = calculate_session_statistics(sessions, TODAY)

    assert stats.average_minutes_per_day == 30


def test_average_rounds_half_up() -> None:
    sessions = [make_session(days_ago(0), 5), make_session(days_ago(1), 0)]

    stats = calculate_session_statistics(sessions, TODAY)

    assert stats.average_minutes_per_day == 3


def test_duration_falls_back_to_legacy_field() -> None:
    sessions = [
        make_session(days_ago(0), 10, exposure_time=99),
        make_session(days_ago(0), None, exposure_time=15),
        make_session(days_ago(0), None),
        make_session(days_ago(0), -5),
        make_session(days_ago(0), float("nan")),
    ]

    stats = calculate_session_statistics(sessions, TODAY)

    assert stats.total_minutes == 25
    assert stats.total_sessions == 5


def test_today_and_monthly_totals() -> None:
    sessions = [
        make_session(date(2026, 10, 19), 5),
        make_session(date(2026, 10, 1), 10),
        make_session(date(2026, 9, 30), 20),
    ]

    stats = calculate_session_statistics(sessions, TODAY)

    assert stats.today_minutes == 5
    assert stats.monthly_minutes == 15
    assert stats.total_minutes == 35


def test_days_are_taken_in_the_given_timezone() -> None:
    record = replace(
        make_session(TODAY, 25), logged_at=datetime(2026, 10, 20, 2, tzinfo=UTC)
    )

    local = calculate_session_statistics(
        [record], TODAY, ZoneInfo("America/New_York")
    )
    utc = calculate_session_statistics([record], TODAY, UTC)

    assert local.today_minutes == 25
    assert utc.today_minutes == 0


def test_statistics_do_not_depend_on_input_order() -> None:
    sessions = [make_session(days_ago(n % 7), 5 + n) for n in range(20)]
    shuffled = list(sessions)
    random.Random(7).shuffle(shuffled)

    assert calculate_session_statistics(
        sessions, TODAY
    ) == calculate_session_statistics(shuffled, TODAY)


def _history(user_id) -> list:  # type: ignore[no-untyped-def]
    return [
        make_session(days_ago(2), 15, user_id=user_id),
        make_session(days_ago(0), 30, user_id=user_id),
        make_session(days_ago(1), 10, user_id=user_id),
        make_session(days_ago(9), 45, user_id=user_id),
    ]


def test_unordered_fallback_matches_ordered_path() -> None:
    user_id = uuid4()
    history = _history(user_id)
    ordered_repo = InMemorySessionRepository(sessions=list(history))
    unordered_repo = InMemorySessionRepository(
        sessions=list(history), ordering_supported=False
    )

    ordered = StatsService(ordered_repo).statistics_for(user_id, TODAY)
    degraded = StatsService(unordered_repo).statistics_for(user_id, TODAY)

    assert ordered == degraded
    assert ordered.current_streak_days == 3
    assert ordered_repo.calls == [True]
    assert unordered_repo.calls == [True, False]


def test_fallback_sorts_newest_first() -> None:
    user_id = uuid4()
    repo = InMemorySessionRepository(
        sessions=_history(user_id), ordering_supported=False
    )

    sessions = StatsService(repo).fetch_sessions(user_id)

    stamps = [record.logged_at for record in sessions]
    assert stamps == sorted(stamps, reverse=True)


def test_store_failure_yields_zero_statistics() -> None:
    user_id = uuid4()
    repo = InMemorySessionRepository(sessions=_history(user_id), available=False)
    service = StatsService(repo)

    assert service.statistics_for(user_id, TODAY) == SessionStatistics()
    assert service.fetch_sessions(user_id) == []


def test_fetch_limit_is_forwarded() -> None:
    user_id = uuid4()
    repo = InMemorySessionRepository(sessions=_history(user_id))

    sessions = StatsService(repo, fetch_limit=2).fetch_sessions(user_id)

    assert [s.duration_minutes for s in sessions] == [30, 10]


def test_get_statistics_uses_current_day() -> None:
    user_id = uuid4()
    now = datetime.now(tz=UTC)
    repo = InMemorySessionRepository(
        sessions=[
            replace(make_session(now.date(), 12, user_id=user_id), logged_at=now)
        ]
    )

    stats = StatsService(repo).get_statistics(user_id, "UTC")

    assert stats.today_minutes == 12
    assert stats.current_streak_days == 1

"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from uuid import UUID, uuid4

import pytest

from suntime.config import Settings
from suntime.containers import AppContainer
from suntime.domain.sessions import SessionRecord, coerce_minutes
from suntime.services.exposure import ExposureService
from suntime.services.skin_tone import ProfileRepository, SkinToneService
from suntime.services.stats import SessionRepository, StatsService


def make_session(  # noqa: PLR0913
    day: date,
    minutes: float | None = 20,
    *,
    user_id: UUID | None = None,
    hour: int = 12,
    exposure_time: float | None = None,
    uv_index: float | None = None,
    skin_type: int | None = None,
    sunscreen: bool = False,
    cloudy: bool = False,
) -> SessionRecord:
    """Build a session logged at ``hour`` on ``day``."""
    return SessionRecord(
        id=uuid4(),
        user_id=user_id or uuid4(),
        logged_at=datetime.combine(day, time(hour=hour)),
        duration_minutes=minutes,
        exposure_time_minutes=exposure_time,
        uv_index=uv_index,
        skin_type=skin_type,
        sunscreen=sunscreen,
        cloudy=cloudy,
    )


@dataclass
class InMemorySessionRepository(SessionRepository):
    """In-memory session repository for tests.

    ``ordering_supported`` and ``available`` simulate a store missing its
    date index and a store that is down.
    """

    sessions: list[SessionRecord] = field(default_factory=list)
    ordering_supported: bool = True
    available: bool = True
    calls: list[bool] = field(default_factory=list)

    def list_sessions(
        self, user_id: UUID, *, limit: int, descending: bool
    ) -> list[SessionRecord]:
        self.calls.append(descending)
        if not self.available:
            raise RuntimeError("store unavailable")
        if descending and not self.ordering_supported:
            raise RuntimeError("The query requires an index")
        rows = [record for record in self.sessions if record.user_id == user_id]
        if descending:
            rows = sorted(rows, key=lambda record: record.logged_at, reverse=True)
        return rows[:limit]

    def create_session(
        self, user_id: UUID, payload: dict[str, object]
    ) -> SessionRecord:
        record = SessionRecord(
            id=uuid4(),
            user_id=user_id,
            logged_at=datetime.fromisoformat(str(payload["date"])),
            duration_minutes=coerce_minutes(payload.get("duration")),
            uv_index=payload.get("uv_index"),
            skin_type=payload.get("skin_type"),
            sunscreen=bool(payload.get("sunscreen", False)),
            cloudy=bool(payload.get("cloudy", False)),
        )
        self.sessions.append(record)
        return record


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    skin_types: dict[UUID, int] = field(default_factory=dict)
    fail_writes: bool = False

    def get_skin_type(self, user_id: UUID) -> int | None:
        return self.skin_types.get(user_id)

    def save_skin_type(self, user_id: UUID, skin_class: int) -> None:
        if self.fail_writes:
            raise RuntimeError("write failed")
        self.skin_types[user_id] = skin_class


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        api_token="api-token",
    )


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def container(
    settings: Settings,
    session_repository: InMemorySessionRepository,
    profile_repository: InMemoryProfileRepository,
) -> AppContainer:
    stats_service = StatsService(session_repository)
    return AppContainer(
        settings=settings,
        stats_service=stats_service,
        exposure_service=ExposureService(stats_service),
        skin_tone_service=SkinToneService(profile_repository),
    )

"""Supabase-backed exposure session repository."""

import logging
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from suntime.domain.sessions import (
    SessionRecord,
    coerce_minutes,
    coerce_uv_index,
)
from suntime.services.stats import SessionRepository

logger = logging.getLogger(__name__)

_COLUMNS = (
    "id, user_id, date, duration, exposure_time, uv_index, skin_type, "
    "sunscreen, cloudy"
)


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for sun exposure sessions."""

    client: Client
    table: str = "sun_sessions"

    def list_sessions(
        self, user_id: UUID, *, limit: int, descending: bool
    ) -> list[SessionRecord]:
        """Return up to ``limit`` sessions for a user."""
        query = (
            self.client.table(self.table)
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
        )
        if descending:
            query = query.order("date", desc=True)
        response = query.limit(limit).execute()
        records = []
        for row in response.data or []:
            record = parse_session_row(row)
            if record is not None:
                records.append(record)
        return records

    def create_session(
        self, user_id: UUID, payload: dict[str, object]
    ) -> SessionRecord:
        """Insert a session row and return it."""
        response = (
            self.client.table(self.table)
            .insert({**payload, "user_id": str(user_id)})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create session")
        record = parse_session_row(response.data[0])
        if record is None:
            raise RuntimeError("Created session has no valid date")
        return record


def parse_timestamp(raw: object) -> datetime | None:
    """Parse an ISO-8601 date or timestamp, accepting a trailing ``Z``."""
    if isinstance(raw, datetime):
        return raw
    if not isinstance(raw, str) or not raw:
        return None
    text = raw.strip()
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def parse_uuid(raw: object) -> UUID | None:
    """Parse a UUID column value, returning None when malformed."""
    if isinstance(raw, UUID):
        return raw
    if not isinstance(raw, str):
        return None
    try:
        return UUID(raw)
    except ValueError:
        return None


def parse_session_row(row: dict[str, object]) -> SessionRecord | None:
    """Build a session from a row; rows without a usable date or id are dropped."""
    logged_at = parse_timestamp(row.get("date"))
    if logged_at is None:
        logger.warning("Skipping session %s with invalid date", row.get("id"))
        return None
    session_id = parse_uuid(row.get("id"))
    user_id = parse_uuid(row.get("user_id"))
    if session_id is None or user_id is None:
        logger.warning("Skipping session %s with invalid id", row.get("id"))
        return None
    skin_type = row.get("skin_type")
    return SessionRecord(
        id=session_id,
        user_id=user_id,
        logged_at=logged_at,
        duration_minutes=coerce_minutes(row.get("duration")),
        exposure_time_minutes=coerce_minutes(row.get("exposure_time")),
        uv_index=coerce_uv_index(row.get("uv_index")),
        skin_type=int(skin_type) if isinstance(skin_type, int) else None,
        sunscreen=bool(row.get("sunscreen", False)),
        cloudy=bool(row.get("cloudy", False)),
    )

"""Per-user session, statistics and score endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from suntime.api.auth import require_api_token
from suntime.api.models import SessionCreate  # noqa: TC001
from suntime.api.serializers import score_view, session_view, statistics_view
from suntime.services.exposure import DEFAULT_SKIN_TYPE

if TYPE_CHECKING:
    from suntime.containers import AppContainer

router = APIRouter(
    prefix="/users", tags=["users"], dependencies=[Depends(require_api_token)]
)


def _timezone_name(request: Request, timezone: str | None) -> str:
    container: AppContainer = request.app.state.container
    name = timezone or container.settings.default_timezone
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown timezone: {name}",
        ) from exc
    return name


@router.get("/{user_id}/stats")
async def user_stats(
    user_id: UUID, request: Request, timezone: str | None = None
) -> dict[str, object]:
    """Return lifetime statistics for a user."""
    container: AppContainer = request.app.state.container
    tz_name = _timezone_name(request, timezone)
    stats = container.stats_service.get_statistics(user_id, tz_name)
    return {"stats": statistics_view(stats)}


@router.get("/{user_id}/sessions")
async def list_sessions(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the user's sessions, newest first."""
    container: AppContainer = request.app.state.container
    sessions = container.stats_service.fetch_sessions(user_id)
    return {"sessions": [session_view(record) for record in sessions]}


@router.post("/{user_id}/sessions", status_code=status.HTTP_201_CREATED)
async def create_session(
    user_id: UUID, session: SessionCreate, request: Request
) -> dict[str, object]:
    """Log a finished session."""
    container: AppContainer = request.app.state.container
    record = container.stats_service.log_session(
        user_id, session.model_dump(mode="json")
    )
    return {"session": session_view(record)}


@router.get("/{user_id}/score/today")
async def today_score(
    user_id: UUID,
    request: Request,
    timezone: str | None = None,
    uv_index: float | None = Query(default=None, ge=0, allow_inf_nan=False),
    skin_type: int | None = Query(default=None, ge=1, le=6),
) -> dict[str, object]:
    """Return today's exposure score."""
    container: AppContainer = request.app.state.container
    tz_name = _timezone_name(request, timezone)
    resolved_skin_type = (
        skin_type
        or container.skin_tone_service.get_skin_type(user_id)
        or DEFAULT_SKIN_TYPE
    )
    score = container.exposure_service.get_today_score(
        user_id, tz_name, skin_type=resolved_skin_type, uv_index=uv_index
    )
    return {"score": score_view(score)}

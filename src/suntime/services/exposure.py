"""Daily UV exposure scoring."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from uuid import UUID
from zoneinfo import ZoneInfo

from suntime.domain.exposure import (
    ExposureScore,
    ExposureStatus,
    Priority,
    Recommendation,
)
from suntime.domain.models import round_half_up
from suntime.domain.sessions import (
    SessionRecord,
    coerce_minutes,
    coerce_uv_index,
    session_minutes,
)
from suntime.services.stats import StatsService, session_day

logger = logging.getLogger(__name__)

DEFAULT_SKIN_TYPE = 3
DEFAULT_SAFE_LIMIT = 120

SKIN_FACTORS: dict[int, float] = {1: 1.4, 2: 1.2, 3: 1.0, 4: 0.8, 5: 0.6, 6: 0.5}
SAFE_LIMITS: dict[int, int] = {1: 80, 2: 100, 3: 120, 4: 150, 5: 180, 6: 220}


@dataclass(frozen=True)
class _Band:
    upper: int | None
    status: ExposureStatus
    color: str
    recommendation: Recommendation


_NO_EXPOSURE = _Band(
    upper=None,
    status=ExposureStatus.NO_EXPOSURE,
    color="#9E9E9E",
    recommendation=Recommendation(
        message=(
            "No sun exposure logged today. "
            "A short session helps Vitamin D production."
        ),
        short_message="No sun yet today",
        icon="🌥️",
        priority=Priority.LOW,
    ),
)

# Upper bounds are exclusive; the last band is open ended.
_BANDS: tuple[_Band, ...] = (
    _Band(
        upper=40,
        status=ExposureStatus.LOW,
        color="#2196F3",
        recommendation=Recommendation(
            message=(
                "Consider getting a bit more sun exposure "
                "for Vitamin D production."
            ),
            short_message="Consider more sun",
            icon="🌤️",
            priority=Priority.LOW,
        ),
    ),
    _Band(
        upper=80,
        status=ExposureStatus.OPTIMAL,
        color="#4CAF50",
        recommendation=Recommendation(
            message=(
                "Great! You have reached an optimal level of sun exposure. "
                "Maintain this routine."
            ),
            short_message="Good! Maintain routine.",
            icon="✅",
            priority=Priority.OPTIMAL,
        ),
    ),
    _Band(
        upper=120,
        status=ExposureStatus.HIGH,
        color="#FF9800",
        recommendation=Recommendation(
            message=(
                "Your exposure is high. Use protection (sunscreen/hat) "
                "if going out again."
            ),
            short_message="Use protection if going out",
            icon="🔆",
            priority=Priority.CAUTION,
        ),
    ),
    _Band(
        upper=None,
        status=ExposureStatus.EXCESSIVE,
        color="#F44336",
        recommendation=Recommendation(
            message=(
                "Your sun exposure is excessive. Please reduce sun exposure "
                "to avoid skin damage."
            ),
            short_message="Reduce exposure immediately",
            icon="⚠️",
            priority=Priority.WARNING,
        ),
    ),
)


def protection_factor(*, sunscreen: bool, cloudy: bool) -> float:
    """Fraction of UV that reaches the skin."""
    if sunscreen and cloudy:
        return 0.35
    if sunscreen:
        return 0.5
    if cloudy:
        return 0.7
    return 1.0


def raw_exposure(
    minutes: float,
    uv_index: float,
    skin_type: int,
    *,
    sunscreen: bool = False,
    cloudy: bool = False,
) -> float:
    """Unnormalized exposure units for one session."""
    skin_factor = SKIN_FACTORS.get(skin_type, 1.0)
    return (
        uv_index
        * minutes
        * skin_factor
        * protection_factor(sunscreen=sunscreen, cloudy=cloudy)
    )


def band_for(score: int) -> _Band:
    """Return the band a rounded score falls into."""
    for band in _BANDS:
        if band.upper is None or score < band.upper:
            return band
    return _BANDS[-1]


def _build_score(
    total_raw: float,
    skin_type: int,
    total_minutes: float,
    session_count: int,
) -> ExposureScore:
    safe_limit = SAFE_LIMITS.get(skin_type, DEFAULT_SAFE_LIMIT)
    score = max(round_half_up(total_raw / safe_limit * 100), 0)
    band = band_for(score)
    return ExposureScore(
        score=score,
        raw_exposure=round_half_up(total_raw),
        status=band.status,
        status_color=band.color,
        recommendation=band.recommendation,
        total_minutes=total_minutes,
        session_count=session_count,
    )


def calculate_exposure_score(
    duration: float,
    uv_index: float = 5,
    skin_type: int = DEFAULT_SKIN_TYPE,
    *,
    sunscreen: bool = False,
    cloudy: bool = False,
) -> ExposureScore:
    """Score a single prospective session."""
    minutes = coerce_minutes(duration) or 0.0
    raw = raw_exposure(
        minutes,
        coerce_uv_index(uv_index) or 0.0,
        skin_type,
        sunscreen=sunscreen,
        cloudy=cloudy,
    )
    return _build_score(raw, skin_type, minutes, 1)


def calculate_daily_exposure_score(
    sessions: Iterable[SessionRecord],
    *,
    skin_type: int = DEFAULT_SKIN_TYPE,
    uv_index: float | None = None,
) -> ExposureScore:
    """Score one day's sessions against the skin type's safe limit.

    Sessions without a usable UV index use ``uv_index``; when that is also
    missing or not finite they contribute minutes but no exposure.
    """
    records = list(sessions)
    if not records:
        return no_exposure_score()

    ambient_uv = coerce_uv_index(uv_index)
    total_raw = 0.0
    total_minutes = 0.0
    for record in records:
        minutes = session_minutes(record)
        session_uv = coerce_uv_index(record.uv_index)
        if session_uv is None:
            session_uv = ambient_uv
        total_raw += raw_exposure(
            minutes,
            session_uv or 0.0,
            record.skin_type or skin_type,
            sunscreen=record.sunscreen,
            cloudy=record.cloudy,
        )
        total_minutes += minutes
    return _build_score(total_raw, skin_type, total_minutes, len(records))


def no_exposure_score() -> ExposureScore:
    """Score for a day without any sessions."""
    return ExposureScore(
        score=0,
        raw_exposure=0,
        status=_NO_EXPOSURE.status,
        status_color=_NO_EXPOSURE.color,
        recommendation=_NO_EXPOSURE.recommendation,
    )


def sessions_on_day(
    sessions: Iterable[SessionRecord], day: date, tz: tzinfo | None = None
) -> list[SessionRecord]:
    """Return the sessions that fall on ``day``."""
    return [record for record in sessions if session_day(record, tz) == day]


@dataclass
class ExposureService:
    """Scores a user's exposure for the current day."""

    stats_service: StatsService

    def get_today_score(
        self,
        user_id: UUID,
        timezone_name: str,
        *,
        skin_type: int = DEFAULT_SKIN_TYPE,
        uv_index: float | None = None,
    ) -> ExposureScore:
        """Return today's score in the user's timezone."""
        tz = ZoneInfo(timezone_name)
        today = datetime.now(tz=tz).date()
        return self.score_for_day(
            user_id, today, tz, skin_type=skin_type, uv_index=uv_index
        )

    def score_for_day(
        self,
        user_id: UUID,
        day: date,
        tz: tzinfo | None = None,
        *,
        skin_type: int = DEFAULT_SKIN_TYPE,
        uv_index: float | None = None,
    ) -> ExposureScore:
        """Return the score for an explicit calendar day."""
        history = self.stats_service.fetch_sessions(user_id)
        sessions = sessions_on_day(history, day, tz)
        logger.debug("Scoring %d sessions for user %s", len(sessions), user_id)
        return calculate_daily_exposure_score(
            sessions, skin_type=skin_type, uv_index=uv_index
        )

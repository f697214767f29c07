"""Domain models for exposure scoring."""

from dataclasses import dataclass
from enum import StrEnum


class ExposureStatus(StrEnum):
    """Band a daily score falls into."""

    NO_EXPOSURE = "NoExposure"
    LOW = "Low"
    OPTIMAL = "Optimal"
    HIGH = "High"
    EXCESSIVE = "Excessive"


class Priority(StrEnum):
    """Urgency of a recommendation."""

    LOW = "low"
    OPTIMAL = "optimal"
    CAUTION = "caution"
    WARNING = "warning"


@dataclass(frozen=True)
class Recommendation:
    """User-facing advice for a score band."""

    message: str
    short_message: str
    icon: str
    priority: Priority


@dataclass(frozen=True)
class ExposureScore:
    """Score for one day (or one prospective session)."""

    score: int
    raw_exposure: int
    status: ExposureStatus
    status_color: str
    recommendation: Recommendation
    total_minutes: float = 0.0
    session_count: int = 0

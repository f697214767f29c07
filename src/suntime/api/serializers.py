"""Plain-dict views of domain objects for JSON responses."""

from dataclasses import asdict

from suntime.domain.exposure import ExposureScore
from suntime.domain.sessions import SessionRecord, session_minutes
from suntime.domain.skin import SkinClassification
from suntime.domain.stats import SessionStatistics
from suntime.services.skin_tone import describe_skin_type


def classification_view(classification: SkinClassification) -> dict[str, object]:
    info = describe_skin_type(classification.skin_class)
    return {
        "skin_class": classification.skin_class,
        "representative_color": classification.representative_color.as_dict(),
        "confidence": classification.confidence.value,
        "name": info.name if info else None,
        "description": info.description if info else None,
    }


def score_view(score: ExposureScore) -> dict[str, object]:
    view = asdict(score)
    view["status"] = score.status.value
    view["recommendation"]["priority"] = score.recommendation.priority.value
    return view


def statistics_view(stats: SessionStatistics) -> dict[str, object]:
    return asdict(stats)


def session_view(record: SessionRecord) -> dict[str, object]:
    return {
        "id": str(record.id),
        "user_id": str(record.user_id),
        "date": record.logged_at.isoformat(),
        "minutes": session_minutes(record),
        "uv_index": record.uv_index,
        "skin_type": record.skin_type,
        "sunscreen": record.sunscreen,
        "cloudy": record.cloudy,
    }

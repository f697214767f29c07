"""Domain models for skin classification."""

from dataclasses import dataclass
from enum import StrEnum

from suntime.domain.models import ColorSample

MIN_SKIN_CLASS = 1
MAX_SKIN_CLASS = 6


class Confidence(StrEnum):
    """How much the classifier trusts its answer."""

    HIGH = "high"
    LOW = "low"


@dataclass(frozen=True)
class SkinClassification:
    """Detected skin class with its reference color."""

    skin_class: int
    representative_color: ColorSample
    confidence: Confidence

    def __post_init__(self) -> None:
        if not MIN_SKIN_CLASS <= self.skin_class <= MAX_SKIN_CLASS:
            raise ValueError(f"skin_class out of range: {self.skin_class}")


@dataclass(frozen=True)
class SkinTypeInfo:
    """Display data for a skin class."""

    name: str
    description: str

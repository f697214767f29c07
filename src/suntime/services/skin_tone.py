"""Heuristic skin tone classification from image bytes."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from suntime.domain.models import ColorSample, round_half_up
from suntime.domain.skin import Confidence, SkinClassification, SkinTypeInfo
from suntime.services.image_decoder import decode_image_payload

logger = logging.getLogger(__name__)

MIN_BUFFER_BYTES = 1000
MIN_SAMPLES = 3000
MAX_SAMPLES = 20000
SAMPLE_STRIDE = 4
SCAN_START = 0.20
SCAN_END = 0.80
BLUE_TOLERANCE = 15
FALLBACK_SKIN_CLASS = 3
FALLBACK_COLOR = ColorSample(210, 175, 145)

# Lower bound on normalized brightness for each class, brightest first.
BRIGHTNESS_THRESHOLDS: tuple[tuple[float, int], ...] = (
    (0.75, 1),
    (0.65, 2),
    (0.50, 3),
    (0.35, 4),
    (0.20, 5),
)

REFERENCE_COLORS: dict[int, ColorSample] = {
    1: ColorSample(255, 224, 210),
    2: ColorSample(245, 205, 180),
    3: ColorSample(230, 180, 150),
    4: ColorSample(200, 145, 105),
    5: ColorSample(165, 115, 80),
    6: ColorSample(100, 70, 50),
}

SKIN_TYPES: dict[int, SkinTypeInfo] = {
    1: SkinTypeInfo("Type I - Very Fair", "Always burns, never tans"),
    2: SkinTypeInfo("Type II - Fair", "Burns easily, tans minimally"),
    3: SkinTypeInfo("Type III - Medium", "Sometimes burns, tans gradually"),
    4: SkinTypeInfo("Type IV - Olive", "Rarely burns, tans easily"),
    5: SkinTypeInfo("Type V - Brown", "Very rarely burns, tans very easily"),
    6: SkinTypeInfo("Type VI - Dark", "Never burns, deeply pigmented"),
}


class ProfileRepository(Protocol):
    """Persistence interface for the user's skin profile."""

    def get_skin_type(self, user_id: UUID) -> int | None:
        """Return the stored skin class, if any."""

    def save_skin_type(self, user_id: UUID, skin_class: int) -> None:
        """Store the detected skin class."""


def fallback_classification() -> SkinClassification:
    """Mid-range answer used whenever sampling is not possible."""
    return SkinClassification(
        skin_class=FALLBACK_SKIN_CLASS,
        representative_color=FALLBACK_COLOR,
        confidence=Confidence.LOW,
    )


def classify_brightness(color: ColorSample) -> int:
    """Map an average color to a skin class by normalized brightness."""
    brightness = (color.r + color.g + color.b) / 3 / 255
    for threshold, skin_class in BRIGHTNESS_THRESHOLDS:
        if brightness > threshold:
            return skin_class
    return 6


def is_skin_like(r: int, g: int, b: int) -> bool:
    """Loose warm-tone filter that tolerates cool undertones."""
    return r >= g and g >= b - BLUE_TOLERANCE


def average_skin_color(buffer: bytes) -> tuple[ColorSample, int]:
    """Average skin-like triplets from the middle of the buffer."""
    start = int(len(buffer) * SCAN_START)
    end = int(len(buffer) * SCAN_END)
    total_r = total_g = total_b = 0
    count = 0
    for index in range(start, end - 2, SAMPLE_STRIDE):
        r, g, b = buffer[index], buffer[index + 1], buffer[index + 2]
        if not is_skin_like(r, g, b):
            continue
        total_r += r
        total_g += g
        total_b += b
        count += 1
        if count >= MAX_SAMPLES:
            break
    if count == 0:
        return FALLBACK_COLOR, 0
    average = ColorSample(
        r=round_half_up(total_r / count),
        g=round_half_up(total_g / count),
        b=round_half_up(total_b / count),
    )
    return average, count


def classify_skin_tone(buffer: bytes | None) -> SkinClassification:
    """Classify a raw image byte buffer; never raises."""
    if buffer is None or len(buffer) < MIN_BUFFER_BYTES:
        return fallback_classification()
    try:
        average, count = average_skin_color(buffer)
    except Exception:
        logger.exception("Skin tone sampling failed")
        return fallback_classification()
    if count < MIN_SAMPLES:
        logger.info("Only %d skin-like samples found, using fallback", count)
        return fallback_classification()

    skin_class = classify_brightness(average)
    return SkinClassification(
        skin_class=skin_class,
        representative_color=REFERENCE_COLORS[skin_class],
        confidence=Confidence.HIGH,
    )


def describe_skin_type(skin_class: int) -> SkinTypeInfo | None:
    """Return display data for a skin class, if known."""
    return SKIN_TYPES.get(skin_class)


@dataclass
class SkinToneService:
    """Classifies captured photos and records the result on the profile."""

    profile_repository: ProfileRepository

    def classify_image(
        self, payload: str | bytes | None, user_id: UUID | None = None
    ) -> SkinClassification:
        """Decode, classify and optionally persist the detected class."""
        classification = classify_skin_tone(decode_image_payload(payload))
        if user_id is not None:
            try:
                self.profile_repository.save_skin_type(
                    user_id, classification.skin_class
                )
            except Exception:
                logger.exception("Failed to store skin type for user %s", user_id)
        return classification

    def get_skin_type(self, user_id: UUID) -> int | None:
        """Return the stored skin class for a user; None when unavailable."""
        try:
            return self.profile_repository.get_skin_type(user_id)
        except Exception:
            logger.exception("Failed to load skin type for user %s", user_id)
            return None

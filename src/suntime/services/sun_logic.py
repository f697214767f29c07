"""Safe exposure time and UV/vitamin D advice."""

from suntime.domain.advice import UvCategory, VitaminDStatus
from suntime.domain.models import round_half_up

MIN_SAFE_MINUTES = 2
MAX_SAFE_MINUTES = 300
HIGH_UV_THRESHOLD = 7
DEFAULT_BASE_MINUTES = 60

SKIN_MULTIPLIERS: dict[int, float] = {1: 0.5, 2: 0.7, 3: 1.0, 4: 1.5, 5: 2.0, 6: 2.5}

# (lowest UV, highest UV, base minutes); UV values between ranges use the default.
_BASE_MINUTES: tuple[tuple[float, float, int], ...] = (
    (0, 2, 60),
    (3, 5, 30),
    (6, 7, 15),
    (8, 10, 8),
    (11, float("inf"), 3),
)

# Exclusive upper bound for each category.
_UV_CATEGORIES: tuple[tuple[float, UvCategory], ...] = (
    (3, UvCategory("Low", "#4CAF50")),
    (6, UvCategory("Moderate", "#FFB800")),
    (8, UvCategory("High", "#FF9800")),
    (11, UvCategory("Very High", "#FF5722")),
)
_EXTREME_UV = UvCategory("Extreme", "#9C27B0")

_VITAMIN_D_BANDS: tuple[tuple[float, VitaminDStatus], ...] = (
    (12, VitaminDStatus("Severe Deficiency", 30, "Increase safe exposure by 30 mins.")),
    (20, VitaminDStatus("Deficiency", 20, "Increase safe exposure by 20 mins.")),
    (30, VitaminDStatus("Insufficient", 15, "Increase safe exposure by 15 mins.")),
)
_SUFFICIENT_MAX = 50
_SUFFICIENT = VitaminDStatus("Sufficient", 0, "Maintain normal exposure.")
_HIGH_VITAMIN_D = VitaminDStatus("High", -10, "Reduce exposure time.")


def base_minutes(uv_index: float) -> int:
    """Unadjusted safe minutes for a UV index."""
    for low, high, minutes in _BASE_MINUTES:
        if low <= uv_index <= high:
            return minutes
    return DEFAULT_BASE_MINUTES


def environment_factor(*, cloudy: bool, sunscreen: bool) -> float:
    factor = 1.0
    if cloudy:
        factor *= 1.3
    if sunscreen:
        factor *= 1.5
    return factor


def calculate_safe_time(
    uv_index: float,
    skin_type: int,
    *,
    cloudy: bool = False,
    sunscreen: bool = False,
    vitamin_d_adjustment: int = 0,
) -> int:
    """Return recommended safe minutes in the sun.

    Positive vitamin D adjustments are ignored at high UV.
    """
    safe_time = (
        base_minutes(uv_index)
        * SKIN_MULTIPLIERS.get(skin_type, 1.0)
        * environment_factor(cloudy=cloudy, sunscreen=sunscreen)
    )
    if not (uv_index >= HIGH_UV_THRESHOLD and vitamin_d_adjustment > 0):
        safe_time += vitamin_d_adjustment
    return max(MIN_SAFE_MINUTES, min(MAX_SAFE_MINUTES, round_half_up(safe_time)))


def uv_category(uv_index: float) -> UvCategory:
    """Name and color of the band a UV index falls into."""
    for upper, category in _UV_CATEGORIES:
        if uv_index < upper:
            return category
    return _EXTREME_UV


def vitamin_d_status(level: float) -> VitaminDStatus:
    """Clinical band for a serum vitamin D level in ng/mL."""
    for upper, status in _VITAMIN_D_BANDS:
        if level < upper:
            return status
    if level <= _SUFFICIENT_MAX:
        return _SUFFICIENT
    return _HIGH_VITAMIN_D

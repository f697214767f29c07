"""Shared domain primitives."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ColorSample:
    """An 8-bit RGB triplet."""

    r: int
    g: int
    b: int

    def as_dict(self) -> dict[str, int]:
        """Return the sample as a JSON-friendly mapping."""
        return {"r": self.r, "g": self.g, "b": self.b}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 rounded upward."""
    return math.floor(value + 0.5)

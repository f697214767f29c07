"""Domain models for safe exposure advice."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UvCategory:
    """Named UV index band."""

    level: str
    color: str


@dataclass(frozen=True)
class VitaminDStatus:
    """Clinical vitamin D band and the exposure adjustment it implies."""

    status: str
    adjustment: int
    message: str

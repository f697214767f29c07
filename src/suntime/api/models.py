"""Request models for the HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class ClassifyRequest(BaseModel):
    """Captured photo submitted for skin tone detection."""

    image: str
    user_id: UUID | None = None


class SessionCreate(BaseModel):
    """A finished sun exposure session."""

    date: datetime
    duration: float = Field(ge=0, allow_inf_nan=False)
    uv_index: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    skin_type: int | None = Field(default=None, ge=1, le=6)
    sunscreen: bool = False
    cloudy: bool = False

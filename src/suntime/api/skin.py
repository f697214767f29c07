"""Skin tone detection endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from suntime.api.auth import require_api_token
from suntime.api.models import ClassifyRequest  # noqa: TC001
from suntime.api.serializers import classification_view

if TYPE_CHECKING:
    from suntime.containers import AppContainer

router = APIRouter(
    prefix="/skin", tags=["skin"], dependencies=[Depends(require_api_token)]
)


@router.post("/classify")
async def classify(body: ClassifyRequest, request: Request) -> dict[str, object]:
    """Detect the skin class from a base64 photo."""
    container: AppContainer = request.app.state.container
    classification = container.skin_tone_service.classify_image(
        body.image, user_id=body.user_id
    )
    return {"classification": classification_view(classification)}

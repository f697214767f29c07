"""FastAPI application factory."""

from dataclasses import asdict

from fastapi import FastAPI, Query

from suntime.api.skin import router as skin_router
from suntime.api.users import router as users_router
from suntime.app_logging import configure_logging
from suntime.containers import AppContainer
from suntime.services.sun_logic import (
    calculate_safe_time,
    uv_category,
    vitamin_d_status,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    app = FastAPI()
    app.state.container = container

    app.include_router(users_router)
    app.include_router(skin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/advice/safe-time")
    async def safe_time(
        uv_index: float = Query(ge=0, allow_inf_nan=False),
        skin_type: int = Query(default=3, ge=1, le=6),
        cloudy: bool = False,
        sunscreen: bool = False,
        vitamin_d: float | None = Query(default=None, ge=0, allow_inf_nan=False),
    ) -> dict[str, object]:
        """Return safe minutes for the given conditions."""
        vitamin = vitamin_d_status(vitamin_d) if vitamin_d is not None else None
        minutes = calculate_safe_time(
            uv_index,
            skin_type,
            cloudy=cloudy,
            sunscreen=sunscreen,
            vitamin_d_adjustment=vitamin.adjustment if vitamin else 0,
        )
        return {
            "safe_minutes": minutes,
            "uv_category": asdict(uv_category(uv_index)),
            "vitamin_d": asdict(vitamin) if vitamin else None,
        }

    return app

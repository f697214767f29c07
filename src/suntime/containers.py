"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from suntime.adapters.supabase_profile_repository import SupabaseProfileRepository
from suntime.adapters.supabase_session_repository import SupabaseSessionRepository
from suntime.config import Settings
from suntime.services.exposure import ExposureService
from suntime.services.skin_tone import SkinToneService
from suntime.services.stats import StatsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    stats_service: StatsService
    exposure_service: ExposureService
    skin_tone_service: SkinToneService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    session_repository = SupabaseSessionRepository(
        supabase_client, table=resolved_settings.sessions_table
    )
    profile_repository = SupabaseProfileRepository(
        supabase_client, table=resolved_settings.profiles_table
    )
    stats_service = StatsService(
        session_repository, fetch_limit=resolved_settings.sessions_fetch_limit
    )
    return AppContainer(
        settings=resolved_settings,
        stats_service=stats_service,
        exposure_service=ExposureService(stats_service),
        skin_tone_service=SkinToneService(profile_repository),
    )

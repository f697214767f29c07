"""Supabase-backed skin profile repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from suntime.services.skin_tone import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for the skin profile."""

    client: Client
    table: str = "profiles"

    def get_skin_type(self, user_id: UUID) -> int | None:
        """Return the stored skin class for a user, if present."""
        response = (
            self.client.table(self.table)
            .select("skin_type")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("skin_type")
        return value if isinstance(value, int) else None

    def save_skin_type(self, user_id: UUID, skin_class: int) -> None:
        """Update the skin class on the user's profile."""
        self.client.table(self.table).update(
            {
                "skin_type": skin_class,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", str(user_id)).execute()

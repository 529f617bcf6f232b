"""Supabase repository for key/value game settings."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from team_wrapped.services.reveal import SettingsRepository


@dataclass
class SupabaseSettingsRepository(SettingsRepository):
    """Supabase implementation for the game_settings table."""

    client: Client

    def get_setting(self, key: str) -> str | None:
        """Return a setting value, if present."""
        response = (
            self.client.table("game_settings")
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("value")
        return str(value) if value is not None else None

    def set_setting(self, key: str, value: str | None) -> None:
        """Store or clear a setting value."""
        self.client.table("game_settings").upsert(
            {
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="key",
        ).execute()

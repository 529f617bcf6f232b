"""Supabase admin data access."""

from dataclasses import dataclass

from supabase import Client

from team_wrapped.adapters.supabase_game_repository import parse_guess, parse_session
from team_wrapped.domain.game import GameSession, Guess
from team_wrapped.services.admin import AdminRepository

# PostgREST refuses unfiltered deletes; no row has the nil UUID.
_NIL_UUID = "00000000-0000-0000-0000-000000000000"


@dataclass
class SupabaseAdminRepository(AdminRepository):
    """Supabase implementation for admin queries."""

    client: Client

    def list_sessions(self) -> list[GameSession]:
        """Return every game session."""
        response = (
            self.client.table("game_sessions")
            .select("id, player_id, card_order, is_completed, completed_at")
            .execute()
        )
        return [parse_session(row) for row in response.data or []]

    def list_all_guesses(self) -> list[Guess]:
        """Return every stored guess."""
        response = (
            self.client.table("guesses")
            .select(
                "id, session_id, card_participant_id, guessed_participant_id, "
                "card_index"
            )
            .execute()
        )
        return [parse_guess(row) for row in response.data or []]

    def reset_game(self) -> None:
        """Delete all guesses, sessions and non-admin participants."""
        self.client.table("guesses").delete().neq("id", _NIL_UUID).execute()
        self.client.table("game_sessions").delete().neq("id", _NIL_UUID).execute()
        self.client.table("participants").delete().eq("is_admin", False).execute()
        self.client.table("participants").update({"photo_url": None}).eq(
            "is_admin", True
        ).execute()

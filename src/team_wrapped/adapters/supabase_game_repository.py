"""Supabase-backed game session and guess repository."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from team_wrapped.domain.game import GameSession, Guess
from team_wrapped.services.game import GameRepository

_SESSION_COLUMNS = "id, player_id, card_order, is_completed, completed_at"
_GUESS_COLUMNS = (
    "id, session_id, card_participant_id, guessed_participant_id, card_index"
)


@dataclass
class SupabaseGameRepository(GameRepository):
    """Supabase implementation for game sessions and guesses."""

    client: Client

    def get_session(self, session_id: UUID) -> GameSession | None:
        """Return a session by id, if present."""
        response = (
            self.client.table("game_sessions")
            .select(_SESSION_COLUMNS)
            .eq("id", str(session_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_session(response.data[0])

    def get_session_for_player(self, player_id: UUID) -> GameSession | None:
        """Return the player's session, if one was created."""
        response = (
            self.client.table("game_sessions")
            .select(_SESSION_COLUMNS)
            .eq("player_id", str(player_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_session(response.data[0])

    def insert_session_if_absent(
        self, player_id: UUID, card_order: Sequence[UUID]
    ) -> GameSession | None:
        """Insert the session, leaving an existing row for the player untouched."""
        response = (
            self.client.table("game_sessions")
            .upsert(
                {
                    "player_id": str(player_id),
                    "card_order": [str(card_id) for card_id in card_order],
                    "is_completed": False,
                },
                on_conflict="player_id",
                ignore_duplicates=True,
            )
            .execute()
        )
        if not response.data:
            return None
        return parse_session(response.data[0])

    def mark_completed(self, session_id: UUID, completed_at: datetime) -> bool:
        """Flag a not-yet-completed session as completed."""
        response = (
            self.client.table("game_sessions")
            .update({"is_completed": True, "completed_at": completed_at.isoformat()})
            .eq("id", str(session_id))
            .eq("is_completed", False)
            .execute()
        )
        return bool(response.data)

    def list_guesses(self, session_id: UUID) -> list[Guess]:
        """Return the session's guesses ordered by card index."""
        response = (
            self.client.table("guesses")
            .select(_GUESS_COLUMNS)
            .eq("session_id", str(session_id))
            .order("card_index")
            .execute()
        )
        return [parse_guess(row) for row in response.data or []]

    def upsert_guess(
        self,
        session_id: UUID,
        card_participant_id: UUID,
        guessed_participant_id: UUID,
        card_index: int,
    ) -> Guess:
        """Insert a guess or overwrite the one stored for the same card."""
        response = (
            self.client.table("guesses")
            .upsert(
                {
                    "session_id": str(session_id),
                    "card_participant_id": str(card_participant_id),
                    "guessed_participant_id": str(guessed_participant_id),
                    "card_index": card_index,
                },
                on_conflict="session_id,card_participant_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save guess")
        return parse_guess(response.data[0])

    def delete_guess(self, session_id: UUID, card_participant_id: UUID) -> None:
        """Delete the guess for a card, if present."""
        self.client.table("guesses").delete().eq("session_id", str(session_id)).eq(
            "card_participant_id", str(card_participant_id)
        ).execute()


def parse_session(row: dict[str, object]) -> GameSession:
    completed_raw = row.get("completed_at")
    return GameSession(
        id=UUID(str(row["id"])),
        player_id=UUID(str(row["player_id"])),
        card_order=tuple(UUID(str(card_id)) for card_id in row.get("card_order") or []),
        is_completed=bool(row.get("is_completed", False)),
        completed_at=(
            datetime.fromisoformat(completed_raw)
            if isinstance(completed_raw, str) and completed_raw
            else None
        ),
    )


def parse_guess(row: dict[str, object]) -> Guess:
    return Guess(
        id=UUID(str(row["id"])),
        session_id=UUID(str(row["session_id"])),
        card_participant_id=UUID(str(row["card_participant_id"])),
        guessed_participant_id=UUID(str(row["guessed_participant_id"])),
        card_index=int(row["card_index"]),
    )

"""Supabase-backed participant repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from team_wrapped.domain.participants import Participant, RosterEntry
from team_wrapped.services.participants import ParticipantRepository

_COLUMNS = "id, name, email, photo_url, artist_1, artist_2, artist_3, is_admin"


@dataclass
class SupabaseParticipantRepository(ParticipantRepository):
    """Supabase implementation for participant persistence."""

    client: Client

    def find_by_email(self, email: str) -> Participant | None:
        """Return the participant for a lowercased email, if present."""
        response = (
            self.client.table("participants")
            .select(_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_participant(response.data[0])

    def get(self, participant_id: UUID) -> Participant | None:
        """Return a participant by id, if present."""
        response = (
            self.client.table("participants")
            .select(_COLUMNS)
            .eq("id", str(participant_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_participant(response.data[0])

    def list_all(self) -> list[Participant]:
        """Return every participant ordered by name."""
        response = (
            self.client.table("participants").select(_COLUMNS).order("name").execute()
        )
        return [parse_participant(row) for row in response.data or []]

    def list_eligible(self) -> list[Participant]:
        """Return participants with a photo, ordered by name."""
        response = (
            self.client.table("participants")
            .select(_COLUMNS)
            .not_.is_("photo_url", "null")
            .order("name")
            .execute()
        )
        return [parse_participant(row) for row in response.data or []]

    def update_profile(
        self, participant_id: UUID, name: str | None, photo_url: str | None
    ) -> Participant | None:
        """Set the provided profile fields and return the updated row."""
        payload: dict[str, object] = {}
        if name:
            payload["name"] = name
        if photo_url:
            payload["photo_url"] = photo_url
        if not payload:
            return None
        response = (
            self.client.table("participants")
            .update(payload)
            .eq("id", str(participant_id))
            .execute()
        )
        if not response.data:
            return None
        return parse_participant(response.data[0])

    def upsert_from_roster(self, entry: RosterEntry) -> Participant:
        """Insert a roster row or update name and artists on email conflict."""
        response = (
            self.client.table("participants")
            .upsert(
                {
                    "name": entry.name,
                    "email": entry.email,
                    "artist_1": entry.artist_1,
                    "artist_2": entry.artist_2,
                    "artist_3": entry.artist_3,
                },
                on_conflict="email",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to upsert participant")
        return parse_participant(response.data[0])

    def ensure_admin(self, name: str, email: str) -> Participant:
        """Create an admin participant or promote the existing one."""
        existing = self.find_by_email(email)
        if existing is not None:
            response = (
                self.client.table("participants")
                .update({"is_admin": True})
                .eq("id", str(existing.id))
                .execute()
            )
        else:
            response = (
                self.client.table("participants")
                .insert(
                    {
                        "name": name,
                        "email": email,
                        "artist_1": "Admin",
                        "artist_2": "Admin",
                        "artist_3": "Admin",
                        "is_admin": True,
                    }
                )
                .execute()
            )
        if not response.data:
            raise RuntimeError("Failed to seed admin participant")
        return parse_participant(response.data[0])


def parse_participant(row: dict[str, object]) -> Participant:
    return Participant(
        id=UUID(str(row["id"])),
        name=str(row["name"]),
        email=str(row["email"]),
        photo_url=row.get("photo_url") or None,
        artists=(
            str(row.get("artist_1") or ""),
            str(row.get("artist_2") or ""),
            str(row.get("artist_3") or ""),
        ),
        is_admin=bool(row.get("is_admin", False)),
    )

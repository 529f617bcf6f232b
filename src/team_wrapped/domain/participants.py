"""Domain models for participants."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Participant:
    """Represents a participant stored in the database."""

    id: UUID
    name: str
    email: str
    photo_url: str | None
    artists: tuple[str, str, str]
    is_admin: bool = False

    @property
    def is_registered(self) -> bool:
        """Participants join the game once they have uploaded a photo."""
        return self.photo_url is not None


@dataclass(frozen=True)
class RosterEntry:
    """A single roster row from an admin import."""

    name: str
    email: str
    artist_1: str
    artist_2: str
    artist_3: str


@dataclass(frozen=True)
class RegistrationStatus:
    """Photo registration progress across non-admin participants."""

    total: int
    with_photo: int

    @property
    def missing_photo(self) -> int:
        return self.total - self.with_photo

    @property
    def all_registered(self) -> bool:
        return self.total > 0 and self.total == self.with_photo


@dataclass(frozen=True)
class ImportResult:
    """Outcome of a roster import."""

    imported: int
    errors: list[str]

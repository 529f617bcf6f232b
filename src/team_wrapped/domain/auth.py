"""Authentication claims."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class SessionClaims:
    """Identity carried by a signed session token."""

    participant_id: UUID
    email: str
    name: str
    is_admin: bool
    photo_url: str | None = None

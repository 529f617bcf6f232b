"""Pydantic request models for the HTTP API."""

from uuid import UUID

from pydantic import BaseModel


class LoginRequest(BaseModel):
    email: str | None = None


class ProfileUpdateRequest(BaseModel):
    name: str | None = None
    photo_url: str | None = None


class GuessRequest(BaseModel):
    """Select or clear the guessed participant for a card."""

    card_participant_id: UUID
    guessed_participant_id: UUID | None = None
    card_index: int


class RosterImportRequest(BaseModel):
    participants: list[dict[str, object]]


class RevealRequest(BaseModel):
    reveal_at: str | None = None


class SeedAdminRequest(BaseModel):
    name: str
    email: str

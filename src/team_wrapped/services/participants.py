"""Participant roster and registration logic."""

import csv
import io
import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from team_wrapped.domain.errors import InvalidInput, NotFound
from team_wrapped.domain.participants import (
    ImportResult,
    Participant,
    RegistrationStatus,
    RosterEntry,
)

logger = logging.getLogger(__name__)

ROSTER_FIELDS = ("name", "email", "artist_1", "artist_2", "artist_3")


class ParticipantRepository(Protocol):
    """Persistence interface for participants."""

    def find_by_email(self, email: str) -> Participant | None:
        """Return the participant for a lowercased email, if present."""

    def get(self, participant_id: UUID) -> Participant | None:
        """Return a participant by id, if present."""

    def list_all(self) -> list[Participant]:
        """Return every participant ordered by name."""

    def list_eligible(self) -> list[Participant]:
        """Return participants with a photo, ordered by name."""

    def update_profile(
        self, participant_id: UUID, name: str | None, photo_url: str | None
    ) -> Participant | None:
        """Set the provided profile fields and return the updated row."""

    def upsert_from_roster(self, entry: RosterEntry) -> Participant:
        """Insert a roster row or update name and artists on email conflict."""

    def ensure_admin(self, name: str, email: str) -> Participant:
        """Create an admin participant or promote the existing one."""


@dataclass
class ParticipantService:
    """Application service for the participant roster."""

    repository: ParticipantRepository

    def find_by_email(self, email: str) -> Participant | None:
        """Look up a participant by email, ignoring case and whitespace."""
        return self.repository.find_by_email(normalize_email(email))

    def get(self, participant_id: UUID) -> Participant:
        """Return a participant or raise NotFound."""
        participant = self.repository.get(participant_id)
        if participant is None:
            raise NotFound("Participant not found")
        return participant

    def list_all(self) -> list[Participant]:
        return self.repository.list_all()

    def list_eligible(self) -> list[Participant]:
        return self.repository.list_eligible()

    def registration_status(self) -> RegistrationStatus:
        """Count photo registrations among non-admin participants."""
        players = [p for p in self.repository.list_all() if not p.is_admin]
        return RegistrationStatus(
            total=len(players),
            with_photo=sum(1 for p in players if p.is_registered),
        )

    def update_profile(
        self, participant_id: UUID, name: str | None, photo_url: str | None
    ) -> Participant:
        """Complete registration by setting a display name and/or photo."""
        cleaned_name = name.strip() if name else None
        if not cleaned_name and not photo_url:
            raise InvalidInput("Nothing to update")
        updated = self.repository.update_profile(
            participant_id, cleaned_name or None, photo_url or None
        )
        if updated is None:
            raise NotFound("Participant not found")
        logger.info(
            "Participant profile updated",
            extra={"participant_id": str(participant_id)},
        )
        return updated

    def import_roster(self, rows: list[dict[str, object]]) -> ImportResult:
        """Upsert roster rows, collecting per-row errors instead of aborting."""
        imported = 0
        errors: list[str] = []
        for row in rows:
            entry = _roster_entry(row)
            if entry is None:
                email = str(row.get("email") or "").strip() or "no email"
                errors.append(f"Incomplete data for: {email}")
                continue
            try:
                self.repository.upsert_from_roster(entry)
            except Exception as exc:
                logger.exception(
                    "Roster import failed for row", extra={"email": entry.email}
                )
                errors.append(f"Failed to import {entry.email}: {exc}")
                continue
            imported += 1
        logger.info(
            "Roster import finished",
            extra={"imported": imported, "errors": len(errors)},
        )
        return ImportResult(imported=imported, errors=errors)

    def seed_admin(self, name: str, email: str) -> Participant:
        """Create or promote an admin participant."""
        cleaned = normalize_email(email)
        if not cleaned or not name.strip():
            raise InvalidInput("Name and email are required")
        return self.repository.ensure_admin(name.strip(), cleaned)


def normalize_email(email: str) -> str:
    """Emails are unique case-insensitively and stored lowercased."""
    return email.strip().lower()


def parse_roster_csv(text: str) -> list[dict[str, object]]:
    """Parse a roster CSV with a name,email,artist_1..3 header row."""
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    if reader.fieldnames is None:
        raise InvalidInput("CSV file is empty")
    headers = {field.strip().lower(): field for field in reader.fieldnames if field}
    missing = [name for name in ROSTER_FIELDS if name not in headers]
    if missing:
        raise InvalidInput(f"CSV is missing columns: {', '.join(missing)}")
    rows = []
    for record in reader:
        row = {name: record.get(headers[name]) or "" for name in ROSTER_FIELDS}
        if not any(str(value).strip() for value in row.values()):
            continue
        rows.append(row)
    return rows


def _roster_entry(row: dict[str, object]) -> RosterEntry | None:
    values = {name: str(row.get(name) or "").strip() for name in ROSTER_FIELDS}
    if not all(values.values()):
        return None
    return RosterEntry(
        name=values["name"],
        email=normalize_email(values["email"]),
        artist_1=values["artist_1"],
        artist_2=values["artist_2"],
        artist_3=values["artist_3"],
    )


def serialize_registration(status: RegistrationStatus) -> dict[str, object]:
    return {
        "total": status.total,
        "with_photo": status.with_photo,
        "missing_photo": status.missing_photo,
        "all_registered": status.all_registered,
    }

"""Admin-controlled reveal of correct answers."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from team_wrapped.domain.errors import InvalidInput
from team_wrapped.domain.game import CorrectAnswer
from team_wrapped.services.game import GameRepository

REVEAL_AT_KEY = "reveal_at"


class SettingsRepository(Protocol):
    """Persistence interface for key/value game settings."""

    def get_setting(self, key: str) -> str | None:
        """Return a setting value, if present."""

    def set_setting(self, key: str, value: str | None) -> None:
        """Store or clear a setting value."""


@dataclass
class RevealService:
    """Gate that exposes correct answers once the reveal time passes."""

    settings_repository: SettingsRepository
    game_repository: GameRepository

    def get_reveal_at(self) -> datetime | None:
        raw = self.settings_repository.get_setting(REVEAL_AT_KEY)
        if not raw:
            return None
        return _as_utc(datetime.fromisoformat(raw))

    def set_reveal_at(self, value: datetime | str | None) -> datetime | None:
        """Set or clear the reveal time."""
        if value in {None, ""}:
            self.settings_repository.set_setting(REVEAL_AT_KEY, None)
            return None
        if isinstance(value, str):
            try:
                value = datetime.fromisoformat(value)
            except ValueError as exc:
                raise InvalidInput("Invalid reveal date") from exc
        reveal_at = _as_utc(value)
        self.settings_repository.set_setting(REVEAL_AT_KEY, reveal_at.isoformat())
        return reveal_at

    def is_reveal_enabled(self, now: datetime | None = None) -> bool:
        reveal_at = self.get_reveal_at()
        if reveal_at is None:
            return False
        return (now or datetime.now(tz=UTC)) >= reveal_at

    def correct_answers(self, session_id: UUID) -> dict[UUID, CorrectAnswer]:
        """Return, per guessed card, whether the guess was right and who owns it."""
        return {
            guess.card_participant_id: CorrectAnswer(
                is_correct=guess.is_correct,
                correct_participant_id=guess.card_participant_id,
            )
            for guess in self.game_repository.list_guesses(session_id)
        }


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)

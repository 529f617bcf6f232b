"""Admin domain models."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

STATUS_NOT_STARTED = "not_started"
STATUS_IN_PROGRESS = "in_progress"
STATUS_COMPLETED = "completed"


@dataclass(frozen=True)
class ScoreRow:
    """Admin view of a single player's result."""

    participant_id: UUID
    name: str
    email: str
    photo_url: str | None
    score: int
    guessed: int
    total_cards: int
    is_completed: bool
    completed_at: datetime | None

    @property
    def status(self) -> str:
        if self.is_completed:
            return STATUS_COMPLETED
        if self.total_cards == 0 or self.guessed == 0:
            return STATUS_NOT_STARTED
        return STATUS_IN_PROGRESS

    @property
    def percent(self) -> float | None:
        """Correct-answer ratio, or None when there is nothing to score yet."""
        if self.total_cards == 0 or self.status == STATUS_NOT_STARTED:
            return None
        return self.score / self.total_cards


@dataclass(frozen=True)
class GameStats:
    """Aggregate counters for the admin dashboard."""

    total_participants: int
    registered_with_photo: int
    completed_games: int
    in_progress: int

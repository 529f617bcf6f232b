"""Domain models for game sessions and guesses."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class GameSession:
    """A player's fixed card order and completion state."""

    id: UUID
    player_id: UUID
    card_order: tuple[UUID, ...]
    is_completed: bool
    completed_at: datetime | None

    @property
    def total_cards(self) -> int:
        return len(self.card_order)


@dataclass(frozen=True)
class Guess:
    """A player's current answer for one card."""

    id: UUID
    session_id: UUID
    card_participant_id: UUID
    guessed_participant_id: UUID
    card_index: int

    @property
    def is_correct(self) -> bool:
        return self.card_participant_id == self.guessed_participant_id


@dataclass(frozen=True)
class Card:
    """One participant's artist list as shown to a player."""

    id: UUID
    index: int
    artists: tuple[str, str, str]


@dataclass(frozen=True)
class CorrectAnswer:
    """Revealed answer for a guessed card."""

    is_correct: bool
    correct_participant_id: UUID


@dataclass(frozen=True)
class GameBoard:
    """Everything a player needs to render the game."""

    session: GameSession
    is_new: bool
    cards: list[Card]
    guesses: dict[UUID, UUID]
    participants: list[dict[str, object]]
    reveal_enabled: bool
    correct_answers: dict[UUID, CorrectAnswer]

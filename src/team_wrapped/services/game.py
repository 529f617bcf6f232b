"""Game session assignment, guess ledger and scoring."""

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from team_wrapped.domain.errors import (
    AlreadyCompleted,
    IncompleteGuesses,
    InvalidInput,
    NotFound,
)
from team_wrapped.domain.game import GameSession, Guess

logger = logging.getLogger(__name__)


class GameRepository(Protocol):
    """Persistence interface for game sessions and guesses."""

    def get_session(self, session_id: UUID) -> GameSession | None:
        """Return a session by id, if present."""

    def get_session_for_player(self, player_id: UUID) -> GameSession | None:
        """Return the player's session, if one was created."""

    def insert_session_if_absent(
        self, player_id: UUID, card_order: Sequence[UUID]
    ) -> GameSession | None:
        """Insert a session unless the player already has one.

        Returns None when another request created the player's session first.
        """

    def mark_completed(self, session_id: UUID, completed_at: datetime) -> bool:
        """Flag a not-yet-completed session as completed; false if nothing changed."""

    def list_guesses(self, session_id: UUID) -> list[Guess]:
        """Return the session's guesses ordered by card index."""

    def upsert_guess(
        self,
        session_id: UUID,
        card_participant_id: UUID,
        guessed_participant_id: UUID,
        card_index: int,
    ) -> Guess:
        """Insert a guess or overwrite the one stored for the same card."""

    def delete_guess(self, session_id: UUID, card_participant_id: UUID) -> None:
        """Delete the guess for a card, if present."""


def shuffle_card_order(
    player_id: UUID, eligible_ids: Sequence[UUID], rng: random.Random | None = None
) -> tuple[UUID, ...]:
    """Return a uniformly shuffled copy of the eligible ids minus the player."""
    candidates = [pid for pid in dict.fromkeys(eligible_ids) if pid != player_id]
    return tuple((rng or random).sample(candidates, k=len(candidates)))


@dataclass
class GameService:
    """Owns the per-player card order, the guess ledger and scoring."""

    repository: GameRepository
    rng: random.Random = field(default_factory=random.SystemRandom)

    def get_or_create_session(
        self, player_id: UUID, eligible_ids: Sequence[UUID]
    ) -> tuple[GameSession, bool]:
        """Return the player's session, creating it with a fresh card order.

        An existing card order is never recomputed, even if the eligible
        roster changed since it was generated.
        """
        existing = self.repository.get_session_for_player(player_id)
        if existing is not None:
            return existing, False

        card_order = shuffle_card_order(player_id, eligible_ids, self.rng)
        created = self.repository.insert_session_if_absent(player_id, card_order)
        if created is not None:
            logger.info(
                "Game session created",
                extra={"player_id": str(player_id), "cards": len(card_order)},
            )
            return created, True

        # Lost a concurrent first-load race; the winner's row is authoritative.
        winner = self.repository.get_session_for_player(player_id)
        if winner is None:
            raise RuntimeError("Game session vanished after insert conflict")
        return winner, False

    def session_for_player(self, player_id: UUID) -> GameSession:
        """Return the player's session or raise NotFound."""
        session = self.repository.get_session_for_player(player_id)
        if session is None:
            raise NotFound("Game session not found")
        return session

    def save_guess(
        self,
        session_id: UUID,
        card_participant_id: UUID,
        guessed_participant_id: UUID,
        card_index: int,
    ) -> Guess:
        """Record or replace the guess for a card."""
        session = self._open_session(session_id)
        if card_participant_id not in session.card_order:
            raise InvalidInput("Card does not belong to this game")
        return self.repository.upsert_guess(
            session_id=session_id,
            card_participant_id=card_participant_id,
            guessed_participant_id=guessed_participant_id,
            card_index=card_index,
        )

    def remove_guess(self, session_id: UUID, card_participant_id: UUID) -> None:
        """Withdraw the guess for a card; a missing guess is a no-op."""
        self._open_session(session_id)
        self.repository.delete_guess(session_id, card_participant_id)

    def complete_session(
        self, session_id: UUID, now: datetime | None = None
    ) -> GameSession:
        """Lock the session once every card has a guess."""
        session = self._open_session(session_id)
        guesses = self.repository.list_guesses(session_id)
        missing = session.total_cards - len(guesses)
        if missing > 0:
            raise IncompleteGuesses(missing)
        completed_at = now or datetime.now(tz=UTC)
        if not self.repository.mark_completed(session_id, completed_at):
            raise AlreadyCompleted()
        logger.info("Game session completed", extra={"session_id": str(session_id)})
        return GameSession(
            id=session.id,
            player_id=session.player_id,
            card_order=session.card_order,
            is_completed=True,
            completed_at=completed_at,
        )

    def list_guesses(self, session_id: UUID) -> list[Guess]:
        return self.repository.list_guesses(session_id)

    def score(self, session_id: UUID) -> int:
        """Count guesses naming the card's actual owner."""
        guesses = self.repository.list_guesses(session_id)
        return sum(1 for guess in guesses if guess.is_correct)

    def _open_session(self, session_id: UUID) -> GameSession:
        session = self.repository.get_session(session_id)
        if session is None:
            raise NotFound("Game session not found")
        if session.is_completed:
            raise AlreadyCompleted()
        return session

"""Assembles the player's game board."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from team_wrapped.domain.auth import SessionClaims
from team_wrapped.domain.errors import Forbidden
from team_wrapped.domain.game import Card, GameBoard
from team_wrapped.domain.participants import Participant
from team_wrapped.services.game import GameService
from team_wrapped.services.participants import (
    ParticipantService,
    serialize_registration,
)
from team_wrapped.services.reveal import RevealService
from team_wrapped.services.window import GameWindow

_UNKNOWN_ARTISTS = ("?", "?", "?")


@dataclass
class GameBoardService:
    """Read-side composition of session, cards, guesses and reveal state."""

    participant_service: ParticipantService
    game_service: GameService
    reveal_service: RevealService
    game_window: GameWindow
    require_full_registration: bool = True

    def ensure_window_open(self, now: datetime | None = None) -> None:
        """Raise Forbidden when the game is outside its availability window."""
        status = self.game_window.status(now or datetime.now(tz=UTC))
        if not status.open:
            raise Forbidden(status.message)

    def load_board(
        self, claims: SessionClaims, now: datetime | None = None
    ) -> GameBoard:
        """Fetch or create the player's session and build the board view."""
        now = now or datetime.now(tz=UTC)
        self.ensure_window_open(now)
        player = self.participant_service.get(claims.participant_id)
        if not player.is_registered and not player.is_admin:
            raise Forbidden("Upload a photo to join the game")

        if self.require_full_registration:
            registration = self.participant_service.registration_status()
            if not registration.all_registered:
                raise Forbidden(
                    "Waiting for every participant to register with a photo. "
                    f"{registration.missing_photo} of {registration.total} missing.",
                    registration_status=serialize_registration(registration),
                )

        eligible = self.participant_service.list_eligible()
        session, is_new = self.game_service.get_or_create_session(
            player.id, [participant.id for participant in eligible]
        )
        guesses = self.game_service.list_guesses(session.id)
        by_id = {participant.id: participant for participant in eligible}
        cards = [
            Card(
                id=card_id,
                index=index,
                artists=_artists_for(card_id, by_id, self.participant_service),
            )
            for index, card_id in enumerate(session.card_order)
        ]
        grid = [
            {
                "id": participant.id,
                "name": participant.name,
                "photo_url": participant.photo_url,
            }
            for participant in eligible
            if participant.id != player.id
        ]

        reveal_open = self.reveal_service.is_reveal_enabled(now)
        can_see_answers = player.is_admin or reveal_open
        correct_answers = (
            self.reveal_service.correct_answers(session.id)
            if can_see_answers and session.is_completed
            else {}
        )
        return GameBoard(
            session=session,
            is_new=is_new,
            cards=cards,
            guesses={
                guess.card_participant_id: guess.guessed_participant_id
                for guess in guesses
            },
            participants=grid,
            reveal_enabled=can_see_answers,
            correct_answers=correct_answers,
        )


def _artists_for(
    card_id: UUID,
    by_id: dict[UUID, Participant],
    participant_service: ParticipantService,
) -> tuple[str, str, str]:
    participant = by_id.get(card_id)
    if participant is None:
        # Card owners can lose their photo after the order was fixed.
        participant = participant_service.repository.get(card_id)
    if participant is None:
        return _UNKNOWN_ARTISTS
    return participant.artists

"""Player game endpoints."""

from fastapi import APIRouter, Depends

from team_wrapped.api.dependencies import current_claims, get_container
from team_wrapped.api.schemas import GuessRequest
from team_wrapped.containers import AppContainer
from team_wrapped.domain.auth import SessionClaims
from team_wrapped.domain.game import GameBoard, Guess

router = APIRouter(prefix="/api/game", tags=["game"])


@router.get("/session")
async def game_session(
    claims: SessionClaims = Depends(current_claims),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Fetch or create the player's game session with its cards."""
    board = container.board_service.load_board(claims)
    return _serialize_board(board)


@router.post("/guess")
async def save_guess(
    payload: GuessRequest,
    claims: SessionClaims = Depends(current_claims),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Save a guess for a card, or remove it when no participant is given."""
    container.board_service.ensure_window_open()
    game_service = container.game_service
    session = game_service.session_for_player(claims.participant_id)
    if payload.guessed_participant_id is None:
        game_service.remove_guess(session.id, payload.card_participant_id)
        return {"success": True, "removed": True}
    container.participant_service.get(payload.guessed_participant_id)
    guess = game_service.save_guess(
        session_id=session.id,
        card_participant_id=payload.card_participant_id,
        guessed_participant_id=payload.guessed_participant_id,
        card_index=payload.card_index,
    )
    return {"success": True, "guess": _serialize_guess(guess)}


@router.post("/submit")
async def submit_game(
    claims: SessionClaims = Depends(current_claims),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Lock the player's answers once every card has a guess."""
    container.board_service.ensure_window_open()
    game_service = container.game_service
    session = game_service.session_for_player(claims.participant_id)
    game_service.complete_session(session.id)
    return {"success": True, "message": "Game submitted"}


def _serialize_guess(guess: Guess) -> dict[str, object]:
    return {
        "id": str(guess.id),
        "session_id": str(guess.session_id),
        "card_participant_id": str(guess.card_participant_id),
        "guessed_participant_id": str(guess.guessed_participant_id),
        "card_index": guess.card_index,
    }


def _serialize_board(board: GameBoard) -> dict[str, object]:
    return {
        "session_id": str(board.session.id),
        "is_completed": board.session.is_completed,
        "cards": [
            {"id": str(card.id), "index": card.index, "artists": list(card.artists)}
            for card in board.cards
        ],
        "guesses": {
            str(card_id): str(guessed_id)
            for card_id, guessed_id in board.guesses.items()
        },
        "participants": [
            {**participant, "id": str(participant["id"])}
            for participant in board.participants
        ],
        "total_cards": board.session.total_cards,
        "reveal_enabled": board.reveal_enabled,
        "correct_answers": {
            str(card_id): {
                "is_correct": answer.is_correct,
                "correct_participant_id": str(answer.correct_participant_id),
            }
            for card_id, answer in board.correct_answers.items()
        },
    }

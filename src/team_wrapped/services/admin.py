"""Admin service for reporting and game operations."""

import csv
import io
import logging
from collections import Counter
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from team_wrapped.domain.admin import (
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_NOT_STARTED,
    GameStats,
    ScoreRow,
)
from team_wrapped.domain.game import GameSession, Guess
from team_wrapped.services.participants import ParticipantRepository

logger = logging.getLogger(__name__)

TOP_ARTISTS_LIMIT = 10
EXPORT_HEADER = ["Name", "Email", "Score", "Total Cards", "Completed", "Completed At"]


class AdminRepository(Protocol):
    """Persistence interface for admin data."""

    def list_sessions(self) -> list[GameSession]:
        """Return every game session."""

    def list_all_guesses(self) -> list[Guess]:
        """Return every stored guess."""

    def reset_game(self) -> None:
        """Delete all guesses, sessions and non-admin participants."""


@dataclass
class AdminService:
    """Service for admin dashboards."""

    admin_repository: AdminRepository
    participant_repository: ParticipantRepository

    def scores(self) -> list[ScoreRow]:
        """Return one row per registered participant, best scores first."""
        sessions = {s.player_id: s for s in self.admin_repository.list_sessions()}
        guesses_by_session = _group_guesses(self.admin_repository.list_all_guesses())
        rows = []
        for participant in self.participant_repository.list_eligible():
            session = sessions.get(participant.id)
            guesses = guesses_by_session.get(session.id, []) if session else []
            rows.append(
                ScoreRow(
                    participant_id=participant.id,
                    name=participant.name,
                    email=participant.email,
                    photo_url=participant.photo_url,
                    score=sum(1 for guess in guesses if guess.is_correct),
                    guessed=len(guesses),
                    total_cards=session.total_cards if session else 0,
                    is_completed=bool(session and session.is_completed),
                    completed_at=session.completed_at if session else None,
                )
            )
        rows.sort(key=_score_sort_key)
        return rows

    def stats(self) -> dict[str, object]:
        """Return counters and chart series for the dashboard."""
        participants = self.participant_repository.list_all()
        sessions = self.admin_repository.list_sessions()
        guesses_by_session = _group_guesses(self.admin_repository.list_all_guesses())
        session_by_player = {session.player_id: session for session in sessions}

        artists = Counter(
            artist
            for participant in participants
            for artist in participant.artists
            if artist
        )
        score_distribution = Counter(
            sum(1 for g in guesses_by_session.get(session.id, []) if g.is_correct)
            for session in sessions
            if session.is_completed
        )
        completions_by_day = Counter(
            session.completed_at.date().isoformat()
            for session in sessions
            if session.is_completed and session.completed_at
        )
        registration = Counter(
            "with_photo" if participant.is_registered else "without_photo"
            for participant in participants
        )
        progress = Counter(
            _progress(session_by_player.get(participant.id))
            for participant in participants
        )
        totals = GameStats(
            total_participants=len(participants),
            registered_with_photo=registration["with_photo"],
            completed_games=sum(1 for s in sessions if s.is_completed),
            in_progress=sum(1 for s in sessions if not s.is_completed),
        )
        return {
            "totals": totals,
            "top_artists": [
                {"artist": artist, "count": count}
                for artist, count in artists.most_common(TOP_ARTISTS_LIMIT)
            ],
            "score_distribution": [
                {"score": score, "count": count}
                for score, count in sorted(score_distribution.items())
            ],
            "completion_by_day": [
                {"date": day, "completions": count}
                for day, count in sorted(completions_by_day.items())
            ],
            "registration_status": [
                {"status": status, "count": count}
                for status, count in registration.items()
            ],
            "game_progress": [
                {"status": status, "count": count}
                for status, count in progress.items()
            ],
        }

    def export_csv(self, rows: list[ScoreRow] | None = None) -> str:
        """Render score rows as CSV."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(EXPORT_HEADER)
        for row in self.scores() if rows is None else rows:
            writer.writerow(
                [
                    row.name,
                    row.email,
                    row.score,
                    row.total_cards,
                    "Yes" if row.is_completed else "No",
                    row.completed_at.isoformat() if row.completed_at else "",
                ]
            )
        return buffer.getvalue()

    def reset(self) -> None:
        """Wipe the game while keeping admins, who must re-register a photo."""
        self.admin_repository.reset_game()
        logger.warning("Game data reset by admin")


def serialize_score(row: ScoreRow) -> dict[str, object]:
    return {
        "participant_id": str(row.participant_id),
        "name": row.name,
        "email": row.email,
        "photo_url": row.photo_url,
        "score": row.score,
        "guessed": row.guessed,
        "total_cards": row.total_cards,
        "percent": row.percent,
        "status": row.status,
        "is_completed": row.is_completed,
        "completed_at": row.completed_at.isoformat() if row.completed_at else None,
    }


def _group_guesses(guesses: list[Guess]) -> dict[UUID, list[Guess]]:
    grouped: dict[UUID, list[Guess]] = {}
    for guess in guesses:
        grouped.setdefault(guess.session_id, []).append(guess)
    return grouped


def _progress(session: GameSession | None) -> str:
    if session is None:
        return STATUS_NOT_STARTED
    if session.is_completed:
        return STATUS_COMPLETED
    return STATUS_IN_PROGRESS


def _score_sort_key(row: ScoreRow) -> tuple[int, int, float]:
    if row.completed_at is None:
        return (-row.score, 1, 0.0)
    return (-row.score, 0, row.completed_at.timestamp())

"""Tests for the database schema definition."""

import re
from pathlib import Path

SCHEMA = Path(__file__).resolve().parents[1] / "db" / "schema.sql"


def _column(table: str, column: str) -> str:
    text = SCHEMA.read_text(encoding="utf-8")
    body = re.search(rf"CREATE TABLE IF NOT EXISTS {table} \((.*?)\n\);", text, re.S)
    assert body is not None
    for line in body.group(1).splitlines():
        if line.strip().startswith(f"{column} "):
            return line
    raise AssertionError(f"{table}.{column} not found")


def test_guesses_survive_participant_deletion() -> None:
    for column in ("card_participant_id", "guessed_participant_id"):
        line = _column("guesses", column)
        assert "REFERENCES participants(id)" in line
        assert "CASCADE" not in line


def test_guesses_and_sessions_cascade_from_their_owner() -> None:
    assert "ON DELETE CASCADE" in _column("guesses", "session_id")
    assert "ON DELETE CASCADE" in _column("game_sessions", "player_id")

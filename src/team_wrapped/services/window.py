"""Game availability window."""

from dataclasses import dataclass
from datetime import UTC, datetime


@dataclass(frozen=True)
class WindowStatus:
    """Whether the game is open, with a message when it is not."""

    open: bool
    message: str | None = None


@dataclass(frozen=True)
class GameWindow:
    """Time-gated availability; a missing bound leaves that side open."""

    start: datetime | None = None
    end: datetime | None = None

    def is_open(self, now: datetime) -> bool:
        """Return true when the game accepts play at ``now``."""
        return self.status(now).open

    def status(self, now: datetime) -> WindowStatus:
        """Return the window status with a user-facing message."""
        if self.start is not None and now < _aware(self.start):
            start = _aware(self.start)
            return WindowStatus(
                open=False,
                message=(
                    f"The game opens on {start:%d/%m/%Y} at {start:%H:%M} UTC"
                ),
            )
        if self.end is not None and now > _aware(self.end):
            return WindowStatus(open=False, message="The game has ended")
        return WindowStatus(open=True)


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)

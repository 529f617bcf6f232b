"""Error taxonomy surfaced to players and admins."""

from http import HTTPStatus


class GameError(Exception):
    """Base class for errors recovered at the request boundary."""

    status_code: int = HTTPStatus.BAD_REQUEST
    default_message = "Request failed"

    def __init__(self, message: str | None = None, **details: object) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def payload(self) -> dict[str, object]:
        """Return the JSON body for this error."""
        return {"error": self.message, **self.details}


class Unauthenticated(GameError):
    status_code = HTTPStatus.UNAUTHORIZED
    default_message = "Not authenticated"


class Forbidden(GameError):
    status_code = HTTPStatus.FORBIDDEN
    default_message = "Access denied"


class NotFound(GameError):
    status_code = HTTPStatus.NOT_FOUND
    default_message = "Not found"


class InvalidInput(GameError):
    status_code = HTTPStatus.BAD_REQUEST
    default_message = "Invalid data"


class IncompleteGuesses(GameError):
    """Raised when a player submits before answering every card."""

    status_code = HTTPStatus.BAD_REQUEST

    def __init__(self, missing: int) -> None:
        self.missing = missing
        super().__init__(f"{missing} cards left to complete", missing=missing)


class AlreadyCompleted(GameError):
    status_code = HTTPStatus.BAD_REQUEST
    default_message = "Game already submitted"

"""Request-scoped dependencies shared by the routers."""

from fastapi import Cookie, Depends, Request

from team_wrapped.containers import AppContainer
from team_wrapped.domain.auth import SessionClaims
from team_wrapped.domain.errors import Forbidden
from team_wrapped.domain.participants import Participant

SESSION_COOKIE = "session"


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


def current_claims(
    session: str | None = Cookie(default=None),
    container: AppContainer = Depends(get_container),
) -> SessionClaims:
    """Resolve the signed session cookie into identity claims."""
    return container.token_service.verify(session)


def require_admin(
    claims: SessionClaims = Depends(current_claims),
    container: AppContainer = Depends(get_container),
) -> Participant:
    """Ensure the caller's participant row carries the admin flag."""
    participant = container.participant_service.get(claims.participant_id)
    if not participant.is_admin:
        raise Forbidden()
    return participant

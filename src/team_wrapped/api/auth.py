"""Login, logout and current-identity endpoints."""

from fastapi import APIRouter, Depends, Response

from team_wrapped.api.dependencies import SESSION_COOKIE, current_claims, get_container
from team_wrapped.api.schemas import LoginRequest
from team_wrapped.containers import AppContainer
from team_wrapped.domain.auth import SessionClaims
from team_wrapped.domain.errors import InvalidInput, NotFound
from team_wrapped.domain.participants import Participant

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login")
async def login(
    payload: LoginRequest,
    response: Response,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Sign in with a roster email and set the session cookie."""
    if not payload.email or not payload.email.strip():
        raise InvalidInput("Email is required")
    participant = container.participant_service.find_by_email(payload.email)
    if participant is None:
        raise NotFound("Email not found in the participant list")

    token = container.token_service.issue(
        SessionClaims(
            participant_id=participant.id,
            email=participant.email,
            name=participant.name,
            is_admin=participant.is_admin,
            photo_url=participant.photo_url,
        )
    )
    response.set_cookie(
        SESSION_COOKIE,
        token,
        max_age=container.token_service.max_age_seconds,
        httponly=True,
        secure=container.settings.secure_cookies,
        samesite="lax",
        path="/",
    )
    return {
        "success": True,
        "participant": _serialize_participant(participant),
        "needs_registration": not participant.is_registered,
    }


@router.post("/logout")
async def logout(response: Response) -> dict[str, object]:
    """Clear the session cookie."""
    response.delete_cookie(SESSION_COOKIE, path="/")
    return {"success": True}


@router.get("/me")
async def me(
    claims: SessionClaims = Depends(current_claims),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the signed-in participant's current profile."""
    participant = container.participant_service.get(claims.participant_id)
    return {
        **_serialize_participant(participant),
        "needs_registration": not participant.is_registered,
    }


def _serialize_participant(participant: Participant) -> dict[str, object]:
    return {
        "id": str(participant.id),
        "name": participant.name,
        "email": participant.email,
        "photo_url": participant.photo_url,
        "is_admin": participant.is_admin,
    }

"""Participant listing, profile and photo upload endpoints."""

from fastapi import APIRouter, Depends, File, UploadFile

from team_wrapped.api.dependencies import current_claims, get_container
from team_wrapped.api.schemas import ProfileUpdateRequest
from team_wrapped.containers import AppContainer
from team_wrapped.domain.auth import SessionClaims
from team_wrapped.services.participants import serialize_registration

router = APIRouter(prefix="/api", tags=["participants"])


@router.get("/participants")
async def list_participants(
    all: bool = False,  # noqa: A002
    claims: SessionClaims = Depends(current_claims),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """List participants without exposing their artists.

    With ``all=true`` every roster entry is returned together with the
    registration progress, for the waiting screen.
    """
    service = container.participant_service
    if all:
        return {
            "participants": [
                {
                    "id": str(p.id),
                    "name": p.name,
                    "photo_url": p.photo_url,
                    "has_photo": p.is_registered,
                }
                for p in service.list_all()
            ],
            "registration_status": serialize_registration(
                service.registration_status()
            ),
        }
    return {
        "participants": [
            {"id": str(p.id), "name": p.name, "photo_url": p.photo_url}
            for p in service.list_eligible()
        ]
    }


@router.put("/participants")
async def update_profile(
    payload: ProfileUpdateRequest,
    claims: SessionClaims = Depends(current_claims),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Complete registration by setting the caller's name and/or photo."""
    updated = container.participant_service.update_profile(
        claims.participant_id, payload.name, payload.photo_url
    )
    return {
        "success": True,
        "participant": {
            "id": str(updated.id),
            "name": updated.name,
            "photo_url": updated.photo_url,
        },
    }


@router.post("/upload")
async def upload_photo(
    file: UploadFile | None = File(default=None),
    claims: SessionClaims = Depends(current_claims),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Upload a profile photo and return its public URL."""
    content = await file.read() if file is not None else b""
    url = container.photo_service.upload_photo(
        participant_id=claims.participant_id,
        filename=file.filename if file is not None else None,
        content_type=file.content_type if file is not None else None,
        content=content,
    )
    return {"url": url}


"""Admin API endpoints.

Game administration under ``/api/admin`` requires a signed-in participant
flagged as admin. The ``/admin`` operator routes use a static token header
and exist to bootstrap the first admin.
"""

from dataclasses import asdict
from datetime import UTC, datetime

from fastapi import (
    APIRouter,
    Depends,
    File,
    Header,
    HTTPException,
    UploadFile,
    status,
)
from fastapi.responses import JSONResponse, Response

from team_wrapped.api.dependencies import get_container, require_admin
from team_wrapped.api.schemas import (
    RevealRequest,
    RosterImportRequest,
    SeedAdminRequest,
)
from team_wrapped.containers import AppContainer
from team_wrapped.domain.errors import InvalidInput
from team_wrapped.domain.participants import ImportResult
from team_wrapped.services.admin import serialize_score
from team_wrapped.services.participants import parse_roster_csv

router = APIRouter(prefix="/admin", tags=["operator"])
api_router = APIRouter(
    prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)]
)


def _get_admin_token(container: AppContainer = Depends(get_container)) -> str:
    return container.settings.admin_token


async def require_admin_token(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid operator token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin_token)])
async def admin_health() -> dict[str, str]:
    """Operator health check endpoint."""
    return {"status": "ok"}


@router.post("/bootstrap", dependencies=[Depends(require_admin_token)])
async def bootstrap_admin(
    payload: SeedAdminRequest, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Create or promote an admin participant."""
    admin = container.participant_service.seed_admin(payload.name, payload.email)
    return {"success": True, "participant_id": str(admin.id), "email": admin.email}


@api_router.get("/scores")
async def scores(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return every registered player's score with the overall counters."""
    rows = container.admin_service.scores()
    stats = container.admin_service.stats()
    return {
        "scores": [serialize_score(row) for row in rows],
        "stats": asdict(stats["totals"]),
    }


@api_router.get("/export")
async def export_scores(
    format: str = "json",  # noqa: A002
    container: AppContainer = Depends(get_container),
) -> Response:
    """Export scores as JSON or as a CSV download."""
    rows = container.admin_service.scores()
    if format == "csv":
        day = datetime.now(tz=UTC).date().isoformat()
        return Response(
            content=container.admin_service.export_csv(rows),
            media_type="text/csv",
            headers={
                "Content-Disposition": (
                    f'attachment; filename="team-wrapped-results-{day}.csv"'
                )
            },
        )
    if format != "json":
        raise InvalidInput("Unsupported export format")
    return JSONResponse({"scores": [serialize_score(row) for row in rows]})


@api_router.get("/participants")
async def participants(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the full roster, artists included."""
    return {
        "participants": [
            {
                "id": str(p.id),
                "name": p.name,
                "email": p.email,
                "photo_url": p.photo_url,
                "artist_1": p.artists[0],
                "artist_2": p.artists[1],
                "artist_3": p.artists[2],
                "is_admin": p.is_admin,
            }
            for p in container.participant_service.list_all()
        ]
    }


@api_router.get("/stats")
async def stats(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return chart series for the admin dashboard."""
    data = container.admin_service.stats()
    return {**data, "totals": asdict(data["totals"])}


@api_router.post("/import")
async def import_roster(
    payload: RosterImportRequest, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Upsert roster rows sent as JSON."""
    result = container.participant_service.import_roster(payload.participants)
    return _serialize_import(result)


@api_router.post("/import/csv")
async def import_roster_csv(
    file: UploadFile = File(...), container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Upsert roster rows from an uploaded CSV file."""
    try:
        text = (await file.read()).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidInput("CSV must be UTF-8 encoded") from exc
    rows = parse_roster_csv(text)
    result = container.participant_service.import_roster(rows)
    return _serialize_import(result)


@api_router.get("/reveal")
async def get_reveal(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the reveal date and whether answers are visible now."""
    return _serialize_reveal(container)


@api_router.post("/reveal")
async def set_reveal(
    payload: RevealRequest, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Set or clear the date from which players see correct answers."""
    container.reveal_service.set_reveal_at(payload.reveal_at)
    return {"success": True, **_serialize_reveal(container)}


@api_router.post("/reset")
async def reset(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Delete all game data, keeping admin participants."""
    container.admin_service.reset()
    return {"success": True, "message": "Game data cleared. Admins preserved."}


def _serialize_import(result: ImportResult) -> dict[str, object]:
    return {"imported": result.imported, "errors": result.errors}


def _serialize_reveal(container: AppContainer) -> dict[str, object]:
    reveal_at = container.reveal_service.get_reveal_at()
    return {
        "reveal_at": reveal_at.isoformat() if reveal_at else None,
        "is_enabled": container.reveal_service.is_reveal_enabled(),
    }

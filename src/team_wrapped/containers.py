"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from team_wrapped.adapters.supabase_admin_repository import SupabaseAdminRepository
from team_wrapped.adapters.supabase_game_repository import SupabaseGameRepository
from team_wrapped.adapters.supabase_participant_repository import (
    SupabaseParticipantRepository,
)
from team_wrapped.adapters.supabase_photo_storage import SupabasePhotoStorage
from team_wrapped.adapters.supabase_settings_repository import (
    SupabaseSettingsRepository,
)
from team_wrapped.config import Settings, build_game_window
from team_wrapped.services.admin import AdminService
from team_wrapped.services.board import GameBoardService
from team_wrapped.services.game import GameService
from team_wrapped.services.participants import ParticipantService
from team_wrapped.services.photos import PhotoService
from team_wrapped.services.reveal import RevealService
from team_wrapped.services.tokens import TokenService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    token_service: TokenService
    participant_service: ParticipantService
    game_service: GameService
    board_service: GameBoardService
    reveal_service: RevealService
    photo_service: PhotoService
    admin_service: AdminService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    participant_repository = SupabaseParticipantRepository(supabase_client)
    game_repository = SupabaseGameRepository(supabase_client)
    settings_repository = SupabaseSettingsRepository(supabase_client)
    admin_repository = SupabaseAdminRepository(supabase_client)
    photo_storage = SupabasePhotoStorage(
        supabase_client, bucket=resolved_settings.photo_bucket
    )

    participant_service = ParticipantService(participant_repository)
    game_service = GameService(game_repository)
    reveal_service = RevealService(
        settings_repository=settings_repository,
        game_repository=game_repository,
    )
    board_service = GameBoardService(
        participant_service=participant_service,
        game_service=game_service,
        reveal_service=reveal_service,
        game_window=build_game_window(resolved_settings),
        require_full_registration=resolved_settings.require_full_registration,
    )
    photo_service = PhotoService(
        storage=photo_storage, max_bytes=resolved_settings.max_photo_bytes
    )
    admin_service = AdminService(
        admin_repository=admin_repository,
        participant_repository=participant_repository,
    )
    token_service = TokenService(
        secret=resolved_settings.session_secret,
        ttl_days=resolved_settings.session_ttl_days,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=resolved_settings,
        token_service=token_service,
        participant_service=participant_service,
        game_service=game_service,
        board_service=board_service,
        reveal_service=reveal_service,
        photo_service=photo_service,
        admin_service=admin_service,
        close_resources=close_resources,
    )

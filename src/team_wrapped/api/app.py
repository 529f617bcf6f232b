"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from team_wrapped.api.admin import api_router as admin_api_router
from team_wrapped.api.admin import router as operator_router
from team_wrapped.api.auth import router as auth_router
from team_wrapped.api.game import router as game_router
from team_wrapped.api.participants import router as participants_router
from team_wrapped.app_logging import configure_logging
from team_wrapped.containers import AppContainer
from team_wrapped.domain.errors import GameError, InvalidInput


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Starting team wrapped API",
            extra={"environment": container.settings.environment},
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(auth_router)
    app.include_router(participants_router)
    app.include_router(game_router)
    app.include_router(admin_api_router)
    app.include_router(operator_router)

    @app.exception_handler(GameError)
    async def handle_game_error(request: Request, exc: GameError) -> JSONResponse:
        logger.info(
            "Request rejected",
            extra={
                "path": request.url.path,
                "error": type(exc).__name__,
                "detail": exc.message,
            },
        )
        return JSONResponse(
            status_code=exc.status_code, content=jsonable_encoder(exc.payload())
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        error = InvalidInput()
        logger.info(
            "Invalid request payload",
            extra={"path": request.url.path, "errors": exc.errors()},
        )
        return JSONResponse(status_code=error.status_code, content=error.payload())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception(
            "Unhandled error", extra={"path": request.url.path}, exc_info=exc
        )
        return JSONResponse(
            status_code=500, content={"error": "Internal server error"}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app

"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from http import HTTPStatus
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import NoteshareError
from modules.notes.routes import admin_router, private_router, public_router

from .models.errors import ErrorResponse
from .routes import health, users

logger = logging.getLogger(__name__)


async def noteshare_error_handler(request: Request, exc: NoteshareError) -> JSONResponse:
    """
    Render domain errors as ErrorResponse.

    `details` stays server-side: it can carry row data or provider replies.
    """
    status_code = exc.status_code
    if exc.is_server_error:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.to_dict())

    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    body = ErrorResponse(
        error=HTTPStatus(status_code).phrase,
        detail=exc.message,
        code=exc.code,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(),
        headers=headers,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not settings.admin_api_key:
        logger.info("ADMIN_API_KEY not set; admin access disabled")
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Notes sharing API with anonymous, user and admin access tiers",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(NoteshareError, noteshare_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(public_router, prefix="/api/public-notes", tags=["public-notes"])
    app.include_router(private_router, prefix="/api/private-notes", tags=["private-notes"])
    app.include_router(admin_router, prefix="/api/admin/notes", tags=["admin"])

    return app


# Application instance for uvicorn
app = create_app()

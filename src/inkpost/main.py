# src/inkpost/main.py
"""Main entry point for the Inkpost application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from inkpost.api.v1 import (
    auth_router,
    comments_router,
    images_router,
    posts_router,
    tags_router,
    users_router,
)
from inkpost.core.errors import BlogError, InternalError, ValidationError
from inkpost.core.logging import configure_logging
from inkpost.core.settings import Settings
from inkpost.db.session import build_session_factory

logger = logging.getLogger(__name__)


def _register_error_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(BlogError)
    async def handle_blog_error(request: Request, exc: BlogError) -> JSONResponse:
        body: dict[str, object] = {"success": False, "detail": exc.message}
        if isinstance(exc, ValidationError) and exc.field:
            body["field"] = exc.field
        if isinstance(exc, InternalError):
            cause = exc.__cause__
            body["error"] = str(cause) if settings.debug and cause is not None else None
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "detail": InternalError.default_message,
                "error": str(exc) if settings.debug else None,
            },
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application around one settings instance.

    Args:
        settings: Configuration to use. When omitted it is read from the
            environment once, here.
    """
    settings = settings or Settings()  # type: ignore[call-arg]
    configure_logging(settings)

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Blog backend with posts, tags, likes and comments",
        version=settings.app_version,
    )
    app.state.settings = settings
    app.state.session_factory = build_session_factory(settings)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Add GZip middleware for compression
    app.add_middleware(GZipMiddleware)

    _register_error_handlers(app, settings)

    # Include API routers
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(users_router, prefix="/api/v1")
    app.include_router(posts_router, prefix="/api/v1")
    app.include_router(comments_router, prefix="/api/v1")
    app.include_router(tags_router, prefix="/api/v1")
    app.include_router(images_router, prefix="/api/v1")

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint with basic information about the API."""
        return {
            "name": f"{settings.app_name} API",
            "version": settings.app_version,
            "docs": "/docs",
            "redoc": "/redoc",
        }

    logger.info("%s %s configured", settings.app_name, settings.app_version)
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("inkpost.main:create_app", factory=True, host="0.0.0.0", port=8000)

"""FastAPI application."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from reel.config import Settings
from reel.domain.error import StoreError
from reel.interface.api.routes import comments, health, videos
from reel.util.di.container import create_container, setup_di
from reel.util.observability import instrument_fastapi


async def store_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Report store failures as a generic 500."""
    logfire.error(
        "Store failure while handling request",
        path=request.url.path,
        error=str(exc),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler so unexpected failures never leak internals."""
    logfire.error(
        "Unhandled error while handling request",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Reel API",
        description="Comment core for Reel - threaded video comments with likes, reports and moderation",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    container = create_container()
    setup_di(app_instance, container)

    app_instance.add_exception_handler(StoreError, store_error_handler)
    app_instance.add_exception_handler(Exception, unhandled_error_handler)

    app_instance.include_router(health.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(videos.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()

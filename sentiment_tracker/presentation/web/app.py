"""FastAPI web application factory."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sentiment_tracker.domain.exceptions import (
    DuplicateSourceError,
    ExternalServiceError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from sentiment_tracker.infrastructure.config.container import Container
from sentiment_tracker.presentation.web.routes import api

logger = logging.getLogger(__name__)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(DuplicateSourceError)
    async def _duplicate(request: Request, exc: DuplicateSourceError):
        return JSONResponse(
            status_code=409,
            content={
                "error": "duplicate_url",
                "message": str(exc),
                "existing_post_id": exc.existing_post_id,
                "existing_date": exc.existing_date.isoformat() if exc.existing_date else None,
            },
        )

    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(ExternalServiceError)
    async def _external(request: Request, exc: ExternalServiceError):
        return JSONResponse(status_code=503, content={"error": f"AI analysis failed: {exc}"})

    @app.exception_handler(StorageError)
    async def _storage(request: Request, exc: StorageError):
        logger.error(f"Storage error on {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": "Internal storage error"})


def create_app(container: Container) -> FastAPI:
    app = FastAPI(title=container.config.name, version="0.1.0")

    # Container lives on app state
    app.state.container = container

    _register_error_handlers(app)
    app.include_router(api.router, prefix="/api")

    return app

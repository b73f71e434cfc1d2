"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from layoutcore.api.routes import router
from layoutcore.config import get_settings
from layoutcore.exceptions import ClassificationError, GeometryError, LayoutCoreError
from layoutcore.logging_config import setup_logging


async def layoutcore_exception_handler(request: Request, exc: LayoutCoreError) -> JSONResponse:
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    if isinstance(exc, GeometryError):
        status_code = 422
    elif isinstance(exc, ClassificationError):
        status_code = status.HTTP_502_BAD_GATEWAY

    logger.error("{}: {} {}", type(exc).__name__, exc.message, exc.details)
    return JSONResponse(
        status_code=status_code,
        content={
            "error": type(exc).__name__,
            "message": exc.message,
            "details": exc.details,
        },
    )


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(level=settings.log_level, json_format=settings.log_json)

    app = FastAPI(
        title="Facility Layout Core",
        description="Shared walls, door placement and rectangle merging for layout editors",
        version="0.1.0",
    )

    # CORS for the browser-based editor
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(LayoutCoreError, layoutcore_exception_handler)
    app.include_router(router, prefix="/api")

    return app


app = create_app()

"""FastAPI server for erdiagram."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from erdiagram import __version__
from erdiagram.api.routes import diagram, health
from erdiagram.utils.config import get_config
from erdiagram.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app."""
    setup_logging(level=get_config().get("logging.level", "INFO"))
    logger.info("Starting erdiagram API server")

    yield

    logger.info("Shutting down erdiagram API server")


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="erdiagram API",
        description="Schema relationship diagram engine",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_config().get("api.cors_origins", ["*"]),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred",
                "detail": str(exc),
            },
        )

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "erdiagram API",
            "version": __version__,
            "description": "Schema relationship diagram engine",
            "endpoints": {
                "health": "/health",
                "layout": "/api/v1/diagram/layout",
                "render": "/api/v1/diagram/render",
                "docs": "/docs",
            },
        }

    app.include_router(health.router)
    app.include_router(diagram.router)

    return app

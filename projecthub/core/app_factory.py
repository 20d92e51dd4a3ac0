"""Application factory helpers to keep projecthub/main.py lightweight."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session

from projecthub import __version__
from projecthub.api.router import api_router
from projecthub.core.config import settings
from projecthub.core.database import get_db
from projecthub.core.error_handlers import register_exception_handlers
from projecthub.core.logging_config import setup_logging
from projecthub.core.middleware import LoggingMiddleware, limiter
from projecthub.models import registry  # noqa: F401 - registers every table

logger = logging.getLogger(__name__)


def _configure_app(app: FastAPI) -> None:
    app.add_middleware(LoggingMiddleware)

    origins = settings.cors_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.api_prefix)


def _register_routes(app: FastAPI) -> None:
    @app.get(f"{settings.api_prefix}/health", tags=["Health"])
    async def health():
        return {"status": "OK", "message": "API is running"}

    @app.get("/readyz", tags=["Health"])
    def readyz(db: Session = Depends(get_db)):
        try:
            db.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(f"Readiness check failed (Database): {e}")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Database unavailable",
            )
        return {"status": "ready", "database": "connected"}


def _lifespan_factory():
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"{settings.app_name} {__version__} starting ({settings.environment})")
        yield
        logger.info(f"{settings.app_name} shutting down")

    return lifespan


def create_app() -> FastAPI:
    """Build the FastAPI application with logging, error handlers, middleware and routes."""
    setup_logging(
        log_level=settings.log_level,
        log_dir=settings.log_dir,
        app_name=settings.app_name,
        use_json=settings.use_json_logs,
        use_colors=settings.environment.lower() != "production",
    )

    app = FastAPI(
        title="ProjectHub API",
        version=__version__,
        lifespan=_lifespan_factory(),
    )
    app.state.environment = settings.environment
    app.state.limiter = limiter

    register_exception_handlers(app)
    _configure_app(app)
    _register_routes(app)
    return app

"""FastAPI application factory and main entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from orthosim import models  # noqa: F401  (registers tables on Base.metadata)
from orthosim.api.v1.router import api_router
from orthosim.common.request_id import RequestIDMiddleware
from orthosim.core.config import settings
from orthosim.core.errors import (
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from orthosim.core.logging import setup_logging
from orthosim.core.security_headers import SecurityHeadersMiddleware
from orthosim.core.seed_auth import seed_demo_accounts
from orthosim.db.base import Base
from orthosim.db.engine import engine

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    setup_logging()
    # Create tables outside prod/staging (those use alembic migrations)
    if settings.ENV in ("dev", "test"):
        Base.metadata.create_all(bind=engine)
    seed_demo_accounts()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    docs_enabled = settings.ENV != "prod"
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=API_VERSION,
        description="OrthoSim VR orthopedic surgery training backend",
        openapi_url="/openapi.json" if docs_enabled else None,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        lifespan=lifespan,
    )

    # Add middleware (order matters - first added is outermost)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint - API information."""
        return {
            "message": settings.PROJECT_NAME,
            "version": API_VERSION,
            "docs_url": "/docs" if docs_enabled else None,
        }

    return app


app = create_app()

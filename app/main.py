"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import (
    auth_router,
    documents_router,
    events_router,
    links_router,
    notices_router,
    profile_router,
    public_router,
    results_router,
    series_router,
    timeline_router,
)
from app.config import settings
from app.db import engine
from app.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    configure_logging()
    logger.info("Starting club profile service (%s)", settings.app_env)
    yield
    await engine.dispose()


app = FastAPI(
    title="Club Profile Service",
    description="Backend for club profiles, event calendars, results and race timelines",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware (can't use allow_origins=["*"] with allow_credentials=True)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed payloads are client errors: 400, never retried."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "message": "Invalid request body",
            "details": jsonable_encoder(exc.errors()),
        },
    )


# Include routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(profile_router, prefix="/api/v1")
app.include_router(links_router, prefix="/api/v1")
app.include_router(public_router, prefix="/api/v1")
app.include_router(series_router, prefix="/api/v1")
app.include_router(events_router, prefix="/api/v1")
app.include_router(notices_router, prefix="/api/v1")
app.include_router(documents_router, prefix="/api/v1")
app.include_router(results_router, prefix="/api/v1")
app.include_router(timeline_router, prefix="/api/v1")


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy", "service": "club-profile-service"}


@app.get("/")
async def root() -> dict:
    """Root endpoint."""
    return {
        "service": "Club Profile Service",
        "version": "0.1.0",
        "docs": "/docs",
    }

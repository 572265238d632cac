# src/communify/main.py
"""Main entry point for the Communify application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from communify.api.v1 import communities_router, users_router
from communify.core.logging import configure_logging
from communify.core.settings import settings
from communify.services.directory import get_remote_directory

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Communify API",
    description="Communities, events and invitation-code membership",
    version=settings.app_version,
)

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

# Include API routers
app.include_router(communities_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging(settings.log_level)
    if settings.remote_directory_enabled:
        # Fails fast when DIRECTORY_BASE_URL is missing.
        get_remote_directory()
    logger.info(
        "%s starting with %s community directory",
        settings.app_name,
        "remote" if settings.remote_directory_enabled else "sql",
    )


@app.on_event("shutdown")
async def on_shutdown() -> None:
    if settings.remote_directory_enabled:
        await get_remote_directory().close()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Communify API",
        "version": settings.app_version,
        "description": "Communities, events and invitation-code membership",
        "docs": "/docs",
        "redoc": "/redoc"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("communify.main:app", host="0.0.0.0", port=8000, reload=settings.debug)

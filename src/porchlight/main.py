# src/porchlight/main.py
"""Main entry point for the Porchlight application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from porchlight.api.v1 import (
    addresses_router,
    admin_router,
    questions_router,
    reviews_router,
    users_router,
)
from porchlight.core.logging import configure_logging
from porchlight.core.security import AdminAllowList
from porchlight.core.settings import settings

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Porchlight API",
    description="Neighborhood reviews: search addresses, rate them, browse the results",
    version=settings.app_version,
)

# The allow-list is fixed for the lifetime of the process.
app.state.admin_allow_list = AdminAllowList(settings.admin_emails)

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
app.include_router(addresses_router, prefix="/api/v1")
app.include_router(reviews_router, prefix="/api/v1")
app.include_router(questions_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    allow_list: AdminAllowList = app.state.admin_allow_list
    if not allow_list.configured:
        logger.warning("ADMIN_EMAILS is empty; only users granted the admin role can administer")
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Porchlight API",
        "version": settings.app_version,
        "description": "Neighborhood reviews API",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("porchlight.main:app", host="0.0.0.0", port=8000, reload=settings.debug)

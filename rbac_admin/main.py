"""
FastAPI Application Entry Point

This module initializes the FastAPI application and configures:
- Logging
- Middleware (request logging, CORS)
- Exception handlers mapping domain errors to HTTP status codes
- Health endpoints

Entity services are consumed through rbac_admin.api.dependencies.provide_service;
this application exposes no entity routes of its own.
"""

import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from rbac_admin.api.errors import register_exception_handlers
from rbac_admin.api.schemas import HealthResponse
from rbac_admin.core.setting import settings
from rbac_admin.db.session import create_tables, get_session
from rbac_admin.middleware.logging import add_logging_middleware, configure_logging

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="RBAC Admin Service",
    description="Service layer for users, roles, permissions, infractions and payments",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

register_exception_handlers(app)
add_logging_middleware(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Health"])
async def root():
    return {
        "message": "RBAC Admin Service",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(session: AsyncSession = Depends(get_session)) -> HealthResponse:
    """
    Health check endpoint for monitoring.

    Reports "degraded" instead of failing when the database is unreachable,
    so the process itself stays observable.
    """
    try:
        await session.execute(text("SELECT 1"))
        return HealthResponse(status="healthy", database="ok")
    except Exception as e:
        logger.error(f"Database health check failed: {e}", exc_info=True)
        return HealthResponse(status="degraded", database="unavailable")


@app.on_event("startup")
async def startup_event():
    """Create the schema when running without migrations (development)."""
    if settings.CREATE_TABLES_ON_STARTUP:
        logger.info("Creating database tables")
        await create_tables()

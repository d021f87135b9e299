# app/main.py
"""
FastAPI application entry point.
"""

import os
import sys
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import APP_VERSION, IS_PRODUCTION
from app.core.logging_config import get_logger, setup_logging
from app.core.request_logging import REQUEST_ID_HEADER, RequestLoggingMiddleware
from app.core.sentry_config import capture_exception, init_sentry
from app.core.storage import RecordNotFoundError, StorageError
from app.database.database import create_tables, get_db
from app.routes.export import router as export_router
from app.routes.holidays import router as holidays_router
from app.routes.notifications import router as notifications_router
from app.routes.shifts import router as shifts_router
from app.routes.statistics import router as statistics_router
from app.routes.workplaces import router as workplaces_router

# Setup logging FIRST (before any other imports that might log)
setup_logging()
logger = get_logger(__name__)

sentry_enabled = init_sentry()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        "Application starting up",
        extra={"extra_fields": {"production": IS_PRODUCTION, "python_version": sys.version}},
    )

    try:
        create_tables()
        logger.info("Database tables created/verified")
    except SQLAlchemyError:
        logger.exception("Failed to create database tables")
        raise

    yield

    logger.info("Application shutting down")


app = FastAPI(
    title="Shiftbook",
    description="Personal shift tracking with earnings, overlap checks and statistics",
    version=APP_VERSION,
    lifespan=lifespan,
)

# CORS Configuration
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin.strip()]

if IS_PRODUCTION:
    # Production: only the listed origins
    if not CORS_ORIGINS:
        logger.warning(
            "Production mode but no CORS_ORIGINS set. CORS will block all cross-origin requests."
        )

    allowed_origins = CORS_ORIGINS
    allowed_methods = ["GET", "POST", "PUT", "DELETE"]
    logger.info("CORS configured for production with origins: %s", allowed_origins)
else:
    # Development: permissive
    allowed_origins = ["*"]
    allowed_methods = ["*"]
    logger.info("CORS configured for development (permissive)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=allowed_methods,
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(workplaces_router)
app.include_router(shifts_router)
app.include_router(statistics_router)
app.include_router(export_router)
app.include_router(holidays_router)
app.include_router(notifications_router)


@app.exception_handler(RecordNotFoundError)
async def record_not_found_handler(request: Request, exc: RecordNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc)
    capture_exception(exc, {"request": {"method": request.method, "path": request.url.path}})
    return JSONResponse(status_code=500, content={"detail": "Could not save changes"})


@app.get("/health", tags=["health"])
async def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint for monitoring.

    Returns 200 OK if the database answers, 503 otherwise.
    """
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Health check failed - database connection error: %s", e, exc_info=True)
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "service": "shiftbook",
                "database": "disconnected",
                "error": "Database connection failed",
            },
        ) from e

    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "service": "shiftbook",
            "version": APP_VERSION,
            "database": "connected",
        },
    )

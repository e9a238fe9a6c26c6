"""FastAPI application entry point.

Configures CORS, structured logging, lifespan events (storage, sessions,
APScheduler), domain error handlers and router registration.
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from app.core.config import settings
from app.core.errors import (
    ConflictError,
    EmailDeliveryError,
    InvalidDataError,
    NotFoundError,
    PreconditionFailedError,
    TalentDirectoryError,
    TransientStoreError,
)
from app.core.logging import setup_logging
from app.db.seed import seed_sample_talents
from app.db.storage import build_storage
from app.models.enums import StorageBackend
from app.routers import auth, email_settings, health, talents
from app.scheduler.jobs import shutdown_scheduler, start_scheduler
from app.services.sessions import SessionStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: build storage and sessions, run the scheduler."""
    setup_logging()
    logger.info("Application starting up")

    storage = build_storage()
    if settings.SEED_SAMPLE_DATA and storage.backend == StorageBackend.memory:
        seed_sample_talents(storage.talents)

    sessions = SessionStore(ttl_seconds=settings.SESSION_TTL_SECONDS)
    application.state.storage = storage
    application.state.sessions = sessions

    start_scheduler(sessions)
    yield
    shutdown_scheduler()
    logger.info("Application shutting down")


app = FastAPI(
    title="Talent Directory API",
    description="Talent profile directory with filtered listing, notes and templated outreach email",
    version="0.1.0",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# CORS Configuration
# ---------------------------------------------------------------------------
_raw_origins = settings.ALLOWED_ORIGINS.strip()
if _raw_origins == "*":
    _allowed_origins: list[str] = ["*"]
else:
    _allowed_origins = [o.strip() for o in _raw_origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins,
    # Session cookies only cross origins that are listed explicitly
    allow_credentials=_allowed_origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Error Handlers
# ---------------------------------------------------------------------------
_STATUS_BY_ERROR: dict[type[TalentDirectoryError], int] = {
    NotFoundError: 404,
    ConflictError: 409,
    InvalidDataError: 400,
    PreconditionFailedError: 400,
    EmailDeliveryError: 500,
    TransientStoreError: 500,
}


@app.exception_handler(TalentDirectoryError)
async def domain_error_handler(request: Request, exc: TalentDirectoryError) -> JSONResponse:
    status_code = _STATUS_BY_ERROR.get(type(exc), 500)
    detail = str(exc)
    if isinstance(exc, TransientStoreError):
        logger.error(
            "storage_error",
            extra={"path": request.url.path, "error_message": str(exc)},
        )
        detail = "Internal server error"
    return JSONResponse(status_code=status_code, content={"detail": detail})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Invalid request data",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


# ---------------------------------------------------------------------------
# Router Registration
# ---------------------------------------------------------------------------
app.include_router(health.router, tags=["Health"])
app.include_router(auth.router, prefix="/api", tags=["Auth"])
app.include_router(talents.router, prefix="/api/talents", tags=["Talents"])
app.include_router(email_settings.router, prefix="/api/settings", tags=["Settings"])

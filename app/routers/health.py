"""Health check endpoint.

Returns service status including storage connectivity, scheduler state and
the number of live sessions.
"""

import logging
from typing import Any

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from app.core.errors import TransientStoreError
from app.scheduler.jobs import is_scheduler_running

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(request: Request) -> Any:
    """Return health status with a real storage round trip.

    Returns 200 OK when healthy, 503 when the database is down.
    """
    storage = request.app.state.storage
    db_status = "disconnected"

    try:
        storage.talents.list_talents(page=1, limit=1)
        db_status = "connected"
    except TransientStoreError:
        logger.warning("Health check: storage probe failed", exc_info=True)

    scheduler_status = "running" if is_scheduler_running() else "stopped"

    payload: dict[str, Any] = {
        "status": "ok" if db_status == "connected" else "degraded",
        "storage": storage.backend.value,
        "database": db_status,
        "scheduler": scheduler_status,
        "active_sessions": len(request.app.state.sessions),
    }

    if db_status != "connected":
        return JSONResponse(status_code=503, content=payload)

    return payload

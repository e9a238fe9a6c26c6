"""APScheduler job definitions and scheduler management.

Initializes a BackgroundScheduler with an IntervalTrigger that evicts expired
sessions, and provides start/shutdown/status helpers for the FastAPI
lifespan.
"""

from __future__ import annotations

import logging

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from app.core.config import settings
from app.services.sessions import SessionStore

logger = logging.getLogger(__name__)

# Module-level scheduler instance (singleton)
scheduler = BackgroundScheduler()

PRUNE_SESSIONS_JOB_ID = "prune_sessions"


def start_scheduler(sessions: SessionStore) -> None:
    """Register the session-pruning job and start the background scheduler."""
    scheduler.add_job(
        sessions.prune_expired,
        IntervalTrigger(minutes=settings.SESSION_PRUNE_INTERVAL_MINUTES),
        id=PRUNE_SESSIONS_JOB_ID,
        replace_existing=True,
    )
    scheduler.start()
    logger.info(
        "scheduler_started",
        extra={
            "interval_minutes": settings.SESSION_PRUNE_INTERVAL_MINUTES,
        },
    )


def shutdown_scheduler() -> None:
    """Shutdown the scheduler without waiting for running jobs."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("scheduler_stopped")


def is_scheduler_running() -> bool:
    """Check if the scheduler is currently running."""
    return scheduler.running

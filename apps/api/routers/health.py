"""Health check router — liveness, readiness and storage location.

Readiness pings the ledger store from a worker thread with a timeout: the
ping takes the store's shared lock, so a long-running write would otherwise
hang the probe.
"""

import asyncio

import structlog
from fastapi import APIRouter, Depends

from apps.api.core.errors import CommandResponse
from apps.api.deps import get_store
from packages.ledger_store import LedgerStore

router = APIRouter(tags=["health"])
logger = structlog.get_logger()

STORE_TIMEOUT_SECONDS = 2


@router.get("/health")
async def health_liveness():
    """Liveness probe — returns 200 if the API process is running."""
    return {"status": "healthy", "service": "api"}


@router.get("/health/ready")
async def health_readiness(store: LedgerStore = Depends(get_store)):
    """Readiness probe — checks that the ledger database answers."""
    status = {
        "status": "healthy",
        "services": {
            "api": "up",
            "database": "unknown",
        },
    }

    try:
        loop = asyncio.get_running_loop()
        alive = await asyncio.wait_for(
            loop.run_in_executor(None, store.ping),
            timeout=STORE_TIMEOUT_SECONDS,
        )
        status["services"]["database"] = "up" if alive else "down"
        if not alive:
            status["status"] = "degraded"
    except asyncio.TimeoutError:
        status["services"]["database"] = "timeout"
        status["status"] = "degraded"
        logger.warning("database_health_timeout", timeout_s=STORE_TIMEOUT_SECONDS)
    except Exception as e:
        status["services"]["database"] = "down"
        status["status"] = "degraded"
        logger.warning("database_health_failed", error=str(e))

    return status


@router.get("/health/db-path", response_model=CommandResponse)
async def get_db_path(store: LedgerStore = Depends(get_store)):
    """Location of the ledger database file."""
    return CommandResponse.ok(store.database_path)

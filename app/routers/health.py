# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# /health        process is up, with environment and version
# /health/ready  MongoDB answers a ping and the unique indexes exist
# /health/live   process liveness only
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from core.services.user_store import UserStore
from lib.mongo_client import MongoClient

router = APIRouter()

API_VERSION = "1.0.0"

# Stores whose unique indexes must exist before the API is ready
INDEXED_STORES = (UserStore,)


class ReadinessChecks(BaseModel):
    database: str
    indexes: str


class ReadinessResponse(BaseModel):
    status: str
    checks: ReadinessChecks
    timestamp: str


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


async def _check_database() -> str:
    try:
        await MongoClient.ping()
    except Exception as e:
        return f"unhealthy: {str(e)[:50]}"
    return "healthy"


def _check_indexes() -> str:
    pending = [store.collection_name for store in INDEXED_STORES if not store.indexes_ready]
    if pending:
        return f"pending: {', '.join(pending)}"
    return "ready"


@router.get("/health")
async def health_check():
    """Basic status for load balancers."""
    return {
        "status": "healthy",
        "timestamp": _timestamp(),
        "environment": settings.ENVIRONMENT,
        "version": API_VERSION,
    }


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    Reports "degraded" while MongoDB does not answer or while the unique
    email index has not been created yet.
    """
    checks = ReadinessChecks(database=await _check_database(), indexes=_check_indexes())
    ready = checks.database == "healthy" and checks.indexes == "ready"
    return ReadinessResponse(
        status="ready" if ready else "degraded",
        checks=checks,
        timestamp=_timestamp(),
    )


@router.get("/health/live")
async def liveness_check():
    return {"status": "alive", "timestamp": _timestamp()}

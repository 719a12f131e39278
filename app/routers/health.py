# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers:
# - /health: static process info
# - /health/ready: queries the tools table and calls the Supabase Auth
#   health endpoint; "degraded" if either fails
# - /health/live: process is up
# =============================================================================

from datetime import datetime, timezone

import httpx
from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from lib.supabase_client import SupabaseClient

router = APIRouter()

API_VERSION = "1.0.0"

AUTH_HEALTH_TIMEOUT = 5.0


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual service checks."""
    database: str
    auth: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _unhealthy(exc: Exception) -> str:
    return f"unhealthy: {str(exc)[:50]}"


# =============================================================================
# Dependency Checks
# =============================================================================

def check_database() -> str:
    """Run the cheapest real query against the tools table."""
    try:
        client = SupabaseClient.get_client()
        client.table("tools").select("id").limit(1).execute()
    except Exception as e:
        return _unhealthy(e)
    return "healthy"


def check_auth() -> str:
    """Call Supabase Auth's own health endpoint with the anon key."""
    try:
        response = httpx.get(
            f"{settings.SUPABASE_URL.rstrip('/')}/auth/v1/health",
            headers={"apikey": settings.SUPABASE_ANON_KEY},
            timeout=AUTH_HEALTH_TIMEOUT,
        )
        response.raise_for_status()
    except httpx.HTTPError as e:
        return _unhealthy(e)
    return "healthy"


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
def readiness_check():
    """
    Readiness check endpoint.

    Both checks do network I/O, so this runs in the threadpool.
    """
    checks = ChecksResponse(database=check_database(), auth=check_auth())

    all_healthy = checks.database == "healthy" and checks.auth == "healthy"

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    """
    return LivenessResponse(
        status="alive",
        timestamp=_now(),
    )

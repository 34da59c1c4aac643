"""Health check endpoints for the JSON Feed service."""

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def health_check():
    """Liveness probe."""
    return {"ok": True}


@router.get("/readyz")
async def readiness_check():
    """Readiness probe. The service holds no connections that need warming up."""
    return {"ok": True}

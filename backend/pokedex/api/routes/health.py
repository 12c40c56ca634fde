"""Health & Readiness Checks — liveness and readiness endpoints.

Invariants:
    - GET /api/health/ always returns 200 if process is up (liveness)
    - GET /api/health/ready triggers the one-time dataset load and returns 503
      if it failed (readiness)
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from pokedex.core.errors import PokedexError
from pokedex.infrastructure.dataset_store import DatasetStore, get_dataset_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness check. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "pokedex-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(store: DatasetStore = Depends(get_dataset_store)):
    """Readiness check — the dataset must be loadable."""
    try:
        records = await store.load_async()
    except (PokedexError, OSError) as e:
        logger.error(f"Dataset readiness check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "dataset_unavailable",
            },
        )
    return {
        "status": "ready",
        "checks": {"dataset": "loaded", "records": len(records)},
    }

"""Health check endpoints."""

from fastapi import APIRouter

from ammswap import __version__
from ammswap.config import get_settings
from ammswap.registry import get_registry

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "ammswap"}


@router.get("/health/detailed")
async def detailed_health():
    """Detailed health check with configuration info."""
    settings = get_settings()
    registry = get_registry(settings.registry_file)
    return {
        "status": "healthy",
        "service": "ammswap",
        "version": __version__,
        "chains": [chain.key for chain in registry.chains()],
        "config": settings.get_safe_dict(),
    }

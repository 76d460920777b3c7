"""
Health check endpoints for the API.
"""
from fastapi import APIRouter, Depends
from typing import Dict, Any
from datetime import datetime

from sitebuilder.config import settings
from sitebuilder.dependencies import get_generation_service
from sitebuilder.generation.service import GenerationService
from sitebuilder.storage import ProjectStorage, get_storage

router = APIRouter()


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.
    Returns API status and version information.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT
    }


@router.get("/health/storage")
async def storage_health(
    storage: ProjectStorage = Depends(get_storage)
) -> Dict[str, Any]:
    """
    Check project storage health by counting stored rows.
    """
    try:
        storage_stats = storage.get_storage_stats()

        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            **storage_stats,
        }

    except Exception as e:
        return {
            "status": "unhealthy",
            "timestamp": datetime.now().isoformat(),
            "error": str(e)
        }


@router.get("/health/ai")
async def ai_health(
    generation: GenerationService = Depends(get_generation_service)
) -> Dict[str, Any]:
    """
    Report whether generation uses the model or the static templates.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "mode": "ai" if generation.is_available else "mock",
        "model": generation.model_name,
    }

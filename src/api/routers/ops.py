import logging
import os

from fastapi import APIRouter, Depends, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from api.dependencies import get_provider_config
from taskmaster.config import ProviderConfig

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check(config: ProviderConfig = Depends(get_provider_config)) -> dict:
    """Health check endpoint for container orchestration."""
    return {
        "status": "healthy",
        "profile": os.getenv("DEPLOYMENT_PROFILE", "unknown"),
        "analysis_mode": "provider" if config.is_configured else "heuristic",
    }


@router.get("/metrics")
async def metrics() -> Response:
    """
    Prometheus scrape endpoint.
    """
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)

"""Health check endpoints."""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Response, status

from geosearch.core.dependencies import get_elasticsearch_index
from geosearch.domain.exceptions import UpstreamError
from geosearch.infrastructure.elasticsearch.client import ElasticsearchIndex

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def simple_health_check() -> Dict[str, str]:
    """
    Simple health check for load balancer - no dependency checks.

    Returns HTTP 200 OK if the application is running.
    """
    return {"status": "ok"}


@router.get("/health/detailed")
async def detailed_health_check(
    response: Response,
    index: ElasticsearchIndex = Depends(get_elasticsearch_index),
) -> Dict[str, Any]:
    """
    Health check including the search index.

    Returns HTTP 200 if the index answers, HTTP 503 otherwise.
    """
    try:
        info = await index.ping()
    except UpstreamError as e:
        logger.error(f"Search index health check failed: {e}")
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {
            "status": "unhealthy",
            "index": {"status": "unhealthy", "message": str(e)},
        }

    return {
        "status": "healthy",
        "index": {
            "status": "healthy",
            "cluster_name": info.get("cluster_name"),
            "version": (info.get("version") or {}).get("number"),
        },
    }

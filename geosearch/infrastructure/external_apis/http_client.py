"""Shared HTTP client with connection pooling for index calls."""
import httpx
import logging
from typing import Optional

from geosearch.config import Settings

logger = logging.getLogger(__name__)

# Global shared client for connection pooling
_shared_client: Optional[httpx.AsyncClient] = None


def create_client(settings: Settings) -> httpx.AsyncClient:
    """Build a pooled async client from settings.

    Connection pool settings:
    - Max connections: HTTP_MAX_CONNECTIONS
    - Max keepalive: HTTP_MAX_KEEPALIVE
    - Timeout: ELASTIC_SEARCH_TIMEOUT_SECONDS
    """
    limits = httpx.Limits(
        max_connections=settings.HTTP_MAX_CONNECTIONS,
        max_keepalive_connections=settings.HTTP_MAX_KEEPALIVE,
    )
    return httpx.AsyncClient(
        timeout=settings.ELASTIC_SEARCH_TIMEOUT_SECONDS,
        limits=limits,
    )


def get_shared_client(settings: Settings) -> httpx.AsyncClient:
    """Get or create the shared HTTP client."""
    global _shared_client

    if _shared_client is None:
        _shared_client = create_client(settings)
        logger.info(
            f"HTTP client initialized: max_conn={settings.HTTP_MAX_CONNECTIONS}, "
            f"keepalive={settings.HTTP_MAX_KEEPALIVE}, "
            f"timeout={settings.ELASTIC_SEARCH_TIMEOUT_SECONDS}s"
        )

    return _shared_client


async def close_shared_client():
    """Close the shared HTTP client. Call this when shutting down."""
    global _shared_client

    if _shared_client is not None:
        await _shared_client.aclose()
        _shared_client = None
        logger.info("HTTP client closed")

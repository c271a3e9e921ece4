#!/usr/bin/env python3
"""
Drop and recreate the boundary index that stores uploaded parent shapes.

Usage:
    python scripts/create_boundary_index.py
"""
import argparse
import asyncio
import logging
import sys

from geosearch.config import Settings
from geosearch.application.services.ingestion import recreate_index
from geosearch.domain.exceptions import GeoSearchError
from geosearch.infrastructure.elasticsearch.client import ElasticsearchIndex
from geosearch.infrastructure.elasticsearch.mappings import BOUNDARY_MAPPINGS
from geosearch.infrastructure.external_apis.http_client import create_client

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def create_boundary_index(settings: Settings, index: str) -> None:
    async with create_client(settings) as http:
        client = ElasticsearchIndex(http, settings.ELASTIC_SEARCH_URL)
        await recreate_index(client, index, BOUNDARY_MAPPINGS)


def main():
    settings = Settings()

    parser = argparse.ArgumentParser(description='Recreate the boundary file index')
    parser.add_argument('--index', default=settings.BOUNDARY_FILE_INDEX,
                        help="Index to (re)create, defaults to BOUNDARY_FILE_INDEX")
    args = parser.parse_args()

    try:
        asyncio.run(create_boundary_index(settings, args.index))
    except GeoSearchError as e:
        logger.error(f"Failed to create boundary index: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

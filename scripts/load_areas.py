#!/usr/bin/env python3
"""
Load areal units (LSOA, MSOA, towns...) from a GeoJSON FeatureCollection
into the dataset index.

The index is dropped and recreated first. Features whose geometry is not a
valid polygon or multipolygon are logged and skipped.

Usage:
    python scripts/load_areas.py --file lsoa_2011.geojson
"""
import argparse
import asyncio
import json
import logging
import sys

from geosearch.config import Settings
from geosearch.application.services.ingestion import (
    ProgressReporter,
    bulk_load,
    iter_area_documents,
    recreate_index,
)
from geosearch.constants import BULK_BATCH_SIZE
from geosearch.domain.exceptions import GeoSearchError
from geosearch.infrastructure.elasticsearch.client import ElasticsearchIndex
from geosearch.infrastructure.elasticsearch.mappings import AREA_MAPPINGS
from geosearch.infrastructure.external_apis.http_client import create_client

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def load_areas(settings: Settings, filename: str, index: str, batch_size: int) -> int:
    with open(filename, encoding="utf-8") as f:
        feature_collection = json.load(f)

    async with create_client(settings) as http:
        client = ElasticsearchIndex(http, settings.ELASTIC_SEARCH_URL)
        await recreate_index(client, index, AREA_MAPPINGS)

        progress = ProgressReporter(f"areas -> {index}")
        loaded = await bulk_load(
            client,
            index,
            iter_area_documents(feature_collection),
            batch_size=batch_size,
            on_batch=progress.record,
        )
        progress.finish()
        return loaded


def main():
    settings = Settings()

    parser = argparse.ArgumentParser(description='Load GeoJSON areal units into the search index')
    parser.add_argument('--file', required=True, help="Path to the GeoJSON FeatureCollection")
    parser.add_argument('--index', default=settings.DATASET_INDEX,
                        help="Index to (re)create, defaults to DATASET_INDEX")
    parser.add_argument('--batch-size', type=int, default=BULK_BATCH_SIZE,
                        help="Documents per bulk request")
    args = parser.parse_args()

    logger.info("=" * 50)
    logger.info(f"Loading areas from {args.file} into {args.index}")
    logger.info("=" * 50)

    try:
        loaded = asyncio.run(load_areas(settings, args.file, args.index, args.batch_size))
    except (GeoSearchError, ValueError, OSError) as e:
        logger.error(f"Failed to load areas: {e}")
        sys.exit(1)

    logger.info(f"Loaded {loaded} areas")


if __name__ == "__main__":
    main()

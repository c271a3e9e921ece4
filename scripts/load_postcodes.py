#!/usr/bin/env python3
"""
Load postcode pins from an NSPL CSV into the postcode index.

The index is dropped and recreated first. Rows are indexed in batches and
a running total is logged every few seconds.

Usage:
    python scripts/load_postcodes.py --file NSPL_FEB_2020_UK.csv
"""
import argparse
import asyncio
import csv
import logging
import sys

from geosearch.config import Settings
from geosearch.application.services.ingestion import (
    ProgressReporter,
    bulk_load,
    iter_postcode_documents,
    recreate_index,
)
from geosearch.constants import BULK_BATCH_SIZE
from geosearch.domain.exceptions import GeoSearchError
from geosearch.infrastructure.elasticsearch.client import ElasticsearchIndex
from geosearch.infrastructure.elasticsearch.mappings import POSTCODE_MAPPINGS
from geosearch.infrastructure.external_apis.http_client import create_client

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def load_postcodes(settings: Settings, filename: str, index: str, batch_size: int) -> int:
    async with create_client(settings) as http:
        client = ElasticsearchIndex(http, settings.ELASTIC_SEARCH_URL)
        await recreate_index(client, index, POSTCODE_MAPPINGS)

        progress = ProgressReporter(f"postcodes -> {index}")
        with open(filename, newline="", encoding="utf-8-sig") as f:
            loaded = await bulk_load(
                client,
                index,
                iter_postcode_documents(csv.reader(f)),
                batch_size=batch_size,
                on_batch=progress.record,
            )
        progress.finish()
        return loaded


def main():
    settings = Settings()

    parser = argparse.ArgumentParser(description='Load NSPL postcodes into the search index')
    parser.add_argument('--file', required=True, help="Path to the NSPL CSV file")
    parser.add_argument('--index', default=settings.POSTCODE_INDEX,
                        help="Index to (re)create, defaults to POSTCODE_INDEX")
    parser.add_argument('--batch-size', type=int, default=BULK_BATCH_SIZE,
                        help="Documents per bulk request")
    args = parser.parse_args()

    logger.info("=" * 50)
    logger.info(f"Loading postcodes from {args.file} into {args.index}")
    logger.info("=" * 50)

    try:
        loaded = asyncio.run(load_postcodes(settings, args.file, args.index, args.batch_size))
    except (GeoSearchError, ValueError, OSError) as e:
        logger.error(f"Failed to load postcodes: {e}")
        sys.exit(1)

    logger.info(f"Loaded {loaded} postcodes")


if __name__ == "__main__":
    main()

"""Bulk loading of postcode pins and areal units into the index."""
import logging
import time
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence

from geosearch.constants import BULK_BATCH_SIZE, PROGRESS_INTERVAL_SECONDS
from geosearch.domain.entities.postcode import PostcodeLocation
from geosearch.domain.entities.search_result import SearchResult
from geosearch.domain.exceptions import InvalidRequestError, UnexpectedStatusCode
from geosearch.domain.value_objects.geo_shape import shape_from_geojson
from geosearch.infrastructure.elasticsearch.client import ElasticsearchIndex

logger = logging.getLogger(__name__)

_AREA_FIELDS = {name for name in SearchResult.__dataclass_fields__ if name != "location"}


class ProgressReporter:
    """Running total of indexed documents, logged at most once per interval.

    Pass ``record`` as the ``on_batch`` callback of ``bulk_load``.
    """

    def __init__(
        self,
        label: str,
        interval: float = PROGRESS_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.label = label
        self.total = 0
        self._interval = interval
        self._clock = clock
        self._last_report = clock()

    def record(self, count: int) -> None:
        self.total += count
        now = self._clock()
        if now - self._last_report >= self._interval:
            logger.info(f"{self.label}: total uploaded {self.total}")
            self._last_report = now

    def finish(self) -> None:
        logger.info(f"{self.label}: finished, total uploaded {self.total}")


async def recreate_index(client: ElasticsearchIndex, index: str, mappings: Dict[str, Any]) -> None:
    """Drop ``index`` if present and create it again with ``mappings``."""
    try:
        await client.delete_index(index)
    except UnexpectedStatusCode as e:
        if e.status_code != 404:
            raise
        logger.warning(f"Index {index} does not exist, continuing")

    await client.create_index(index, mappings)
    logger.info(f"Created index {index}")


async def bulk_load(
    client: ElasticsearchIndex,
    index: str,
    documents: Iterable[Dict[str, Any]],
    batch_size: int = BULK_BATCH_SIZE,
    on_batch: Optional[Callable[[int], None]] = None,
) -> int:
    """Index ``documents`` in batches; returns the number indexed.

    ``on_batch`` is called with the size of each batch once it is stored.
    """
    loaded = 0
    batch: List[Dict[str, Any]] = []

    for document in documents:
        batch.append(document)
        if len(batch) == batch_size:
            loaded += await _flush(client, index, batch, on_batch)
            batch = []

    # last partial batch
    if batch:
        loaded += await _flush(client, index, batch, on_batch)

    return loaded


async def _flush(
    client: ElasticsearchIndex,
    index: str,
    batch: List[Dict[str, Any]],
    on_batch: Optional[Callable[[int], None]],
) -> int:
    await client.bulk_index(index, batch)
    if on_batch is not None:
        on_batch(len(batch))
    return len(batch)


def iter_postcode_documents(rows: Iterator[Sequence[str]]) -> Iterator[Dict[str, Any]]:
    """Turn NSPL CSV rows into postcode documents.

    The first row is the header. The postcode is column 0; ``lat`` and
    ``long`` are located by header name. Rows with unparsable coordinates
    are logged and skipped.

    Raises:
        ValueError: the file is empty or the header has no lat or long column
    """
    header = next(rows, None)
    if header is None:
        raise ValueError("empty postcode file")
    try:
        lat_col = header.index("lat")
        long_col = header.index("long")
    except ValueError:
        raise ValueError("missing latitude or longitude header") from None

    for line_number, row in enumerate(rows, start=2):
        try:
            latitude = float(row[lat_col])
            longitude = float(row[long_col])
        except (IndexError, ValueError) as e:
            logger.error(f"Skipping row {line_number}: bad coordinates: {e}")
            continue

        yield PostcodeLocation.from_raw(row[0], latitude, longitude).to_dict()


def iter_area_documents(feature_collection: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
    """Turn a GeoJSON FeatureCollection into areal unit documents.

    Feature properties are matched case-insensitively against the known
    area fields. Features whose geometry fails shape validation are skipped.
    """
    for position, feature in enumerate(feature_collection.get("features", [])):
        properties = feature.get("properties") or {}
        geometry = feature.get("geometry") or feature.get("location") or {}

        try:
            shape = shape_from_geojson(geometry)
        except InvalidRequestError as e:
            logger.warning(
                f"Skipping feature {position} ({properties.get('name', 'unnamed')}): {e}"
            )
            continue

        document = {
            key.lower(): value
            for key, value in properties.items()
            if key.lower() in _AREA_FIELDS
        }
        document["location"] = shape.to_dict()
        yield document

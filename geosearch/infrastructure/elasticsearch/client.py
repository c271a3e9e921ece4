"""Elasticsearch implementation of the SearchIndex port."""
import json
import logging
from typing import Any, Dict, Iterable, Optional, Tuple

import httpx

from geosearch.domain.exceptions import (
    BulkRequestFailed,
    IndexUnavailable,
    UnexpectedStatusCode,
    UnparsableResponse,
)
from geosearch.domain.repositories.search_index import Hit, HitList, SearchIndex
from geosearch.domain.value_objects.geo_shape import GeoShape
from geosearch.domain.value_objects.relation import SearchRelation
from geosearch.infrastructure.elasticsearch import queries

logger = logging.getLogger(__name__)


class ElasticsearchIndex(SearchIndex):
    """Client for the Elasticsearch REST API.

    Every call is a single attempt; retrying is left to the caller.
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str):
        self._client = client
        self._base_url = base_url.rstrip("/")

    # ── SearchIndex port ─────────────────────────────────────────

    async def find_by_exact_term(self, index: str, field: str, value: str) -> HitList:
        body = await self.search(index, queries.term_query(field, value))
        return _to_hit_list(body)

    async def search_by_geo_shape(
        self,
        index: str,
        shape: GeoShape,
        relation: SearchRelation,
        limit: int,
        offset: int,
    ) -> HitList:
        query = queries.geo_shape_query(shape, relation, limit, offset)
        body = await self.search(index, query)
        return _to_hit_list(body)

    async def search_by_name(self, index: str, name: str, limit: int, offset: int) -> HitList:
        body = await self.search(index, queries.name_query(name, limit, offset))
        return _to_hit_list(body)

    async def index_document(self, index: str, document: Dict[str, Any]) -> int:
        # wait_for makes the document visible to the next search
        _, status = await self.call_elastic(
            "POST", f"{index}/_doc", payload=document, params={"refresh": "wait_for"}
        )
        return status

    # ── Index administration ─────────────────────────────────────

    async def search(self, index: str, query: Dict[str, Any]) -> Dict[str, Any]:
        """Run a raw search body against ``index``."""
        body, _ = await self.call_elastic("POST", f"{index}/_search", payload=query)
        return body

    async def create_index(self, index: str, mappings: Dict[str, Any]) -> int:
        _, status = await self.call_elastic("PUT", index, payload=mappings)
        return status

    async def delete_index(self, index: str) -> int:
        _, status = await self.call_elastic("DELETE", index)
        return status

    async def bulk_index(self, index: str, documents: Iterable[Dict[str, Any]]) -> int:
        """Index many documents in one request.

        Raises:
            BulkRequestFailed: the index rejected one or more documents
        """
        lines = []
        for document in documents:
            lines.append(json.dumps({"index": {"_index": index}}))
            lines.append(json.dumps(document))
        content = "\n".join(lines) + "\n"

        body, status = await self.call_elastic(
            "POST",
            "_bulk",
            content=content,
            headers={"Content-Type": "application/x-ndjson"},
        )

        if body.get("errors"):
            failed = sum(
                1 for item in body.get("items", [])
                if item.get("index", {}).get("error")
            )
            logger.error(f"Bulk request to {index} rejected {failed} documents")
            raise BulkRequestFailed(failed)

        return status

    async def ping(self) -> Dict[str, Any]:
        """Return cluster info; raises if the index is unreachable."""
        body, _ = await self.call_elastic("GET", "")
        return body

    # ── Transport ────────────────────────────────────────────────

    async def call_elastic(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
        content: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Tuple[Dict[str, Any], int]:
        """Send one request to the index and decode its JSON body.

        Returns:
            (decoded body, status code)

        Raises:
            IndexUnavailable: the request could not be sent or timed out
            UnexpectedStatusCode: the index answered outside 2xx
            UnparsableResponse: the body is not a JSON object
        """
        url = f"{self._base_url}/{path}" if path else self._base_url

        try:
            response = await self._client.request(
                method, url, json=payload, params=params, content=content, headers=headers
            )
        except httpx.HTTPError as e:
            logger.error(f"Failed to call elastic: {method} {url}: {e}")
            raise IndexUnavailable() from e

        if not 200 <= response.status_code < 300:
            logger.error(
                f"Unexpected status code from elastic: {method} {url} "
                f"-> {response.status_code}: {response.text[:500]}"
            )
            raise UnexpectedStatusCode(response.status_code)

        try:
            body = response.json()
        except ValueError as e:
            logger.error(f"Failed to decode elastic response: {method} {url}: {e}")
            raise UnparsableResponse() from e

        if not isinstance(body, dict):
            raise UnparsableResponse()

        return body, response.status_code


def _to_hit_list(body: Dict[str, Any]) -> HitList:
    """Decode the ``hits`` section of a search response."""
    try:
        hits = body["hits"]
        total = hits.get("total", 0)
        # Elasticsearch 7+ reports {"value": n, "relation": "eq"}
        if isinstance(total, dict):
            total = total.get("value", 0)
        return HitList(
            hits=[
                Hit(source=hit["_source"], score=hit.get("_score") or 0.0)
                for hit in hits.get("hits", [])
            ],
            total=int(total),
        )
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        logger.error(f"Malformed search response: {e}")
        raise UnparsableResponse() from e

"""Composes request parameters into index queries and result envelopes.

Every search runs its stages strictly in order. The first failing stage
raises and nothing after it runs, so a caller either gets a complete
envelope or an exception.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Union

from geosearch.config import Settings
from geosearch.constants import (
    BOUNDARY_ID_FIELD,
    DEFAULT_CIRCLE_SEGMENTS,
    DEFAULT_LIMIT,
    DEFAULT_OFFSET,
    PARENT_RELATION,
    POSTCODE_FIELD,
)
from geosearch.application.dto.search_dto import SearchResultsDTO
from geosearch.domain.entities.boundary import BoundaryDocument
from geosearch.domain.entities.postcode import PostcodeLocation, normalise_postcode
from geosearch.domain.entities.search_result import SearchResult
from geosearch.domain.exceptions import (
    BoundaryNotFound,
    InvalidRequestError,
    PostcodeNotFound,
    UnparsableResponse,
)
from geosearch.domain.repositories.search_index import HitList, SearchIndex
from geosearch.domain.value_objects.distance import parse_distance
from geosearch.domain.value_objects.page_window import (
    PageWindow,
    clamp_pagination,
    parse_page_param,
)
from geosearch.domain.value_objects.relation import SearchRelation
from geosearch.utils.shapes import circle_to_polygon

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostcodeSearchParams:
    """Raw request values for a radius search around a postcode."""
    postcode: str
    distance: str
    limit: Optional[str] = None
    offset: Optional[str] = None
    relation: Optional[str] = None


@dataclass(frozen=True)
class ParentSearchParams:
    """Raw request values for a search inside a stored boundary."""
    boundary_id: str
    limit: Optional[str] = None
    offset: Optional[str] = None


@dataclass(frozen=True)
class PlaceNameSearchParams:
    """Raw request values for a text search on area names."""
    name: str
    limit: Optional[str] = None
    offset: Optional[str] = None


SearchParams = Union[PostcodeSearchParams, ParentSearchParams, PlaceNameSearchParams]


class QueryAssembler:
    """Runs the postcode, parent and place-name searches against the index."""

    def __init__(self, index: SearchIndex, settings: Settings):
        self._index = index
        self._settings = settings

    async def assemble_and_run(self, params: SearchParams) -> SearchResultsDTO:
        """Dispatch ``params`` to the matching search."""
        if isinstance(params, PostcodeSearchParams):
            return await self.search_postcode(
                params.postcode,
                params.distance,
                limit=params.limit,
                offset=params.offset,
                relation=params.relation,
            )
        if isinstance(params, ParentSearchParams):
            return await self.search_parent(
                params.boundary_id, limit=params.limit, offset=params.offset
            )
        if isinstance(params, PlaceNameSearchParams):
            return await self.search_place_name(
                params.name, limit=params.limit, offset=params.offset
            )
        raise TypeError(f"Unsupported search parameters: {type(params).__name__}")

    async def search_postcode(
        self,
        postcode: str,
        distance: str,
        limit: Optional[str] = None,
        offset: Optional[str] = None,
        relation: Optional[str] = None,
    ) -> SearchResultsDTO:
        """Find areal units near a postcode.

        Args:
            postcode: Postcode in any spacing or case, e.g. "CF14 3UZ"
            distance: Radius as "value,unit", e.g. "1,km"
            limit: Requested page size, default 50
            offset: Requested page start, default 0
            relation: "within" (default) or "intersects"

        Returns:
            Result envelope

        Raises:
            InvalidRequestError: a request value is malformed
            PostcodeNotFound: the postcode is not in the postcode index
            UpstreamError: the index failed
        """
        postcode = normalise_postcode(postcode)
        logger.info(
            f"Incoming postcode search: postcode={postcode}, distance={distance!r}, "
            f"limit={limit!r}, offset={offset!r}, relation={relation!r}"
        )

        try:
            requested_limit = parse_page_param("limit", limit, DEFAULT_LIMIT)
            requested_offset = parse_page_param("offset", offset, DEFAULT_OFFSET)
            search_relation = SearchRelation.parse(relation)
            radius = parse_distance(distance)
            page = clamp_pagination(
                requested_limit, requested_offset, self._settings.MAX_SEARCH_RESULTS_OFFSET
            )
        except InvalidRequestError as e:
            logger.warning(f"Rejected postcode search for {postcode}: {e}")
            raise

        hits = await self._index.find_by_exact_term(
            self._settings.POSTCODE_INDEX, POSTCODE_FIELD, postcode
        )
        if len(hits) == 0:
            logger.warning(f"Postcode not found: {postcode}")
            raise PostcodeNotFound(postcode)

        try:
            location = PostcodeLocation.from_source(hits.first().source)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Stored postcode {postcode} has no usable pin: {e}")
            raise UnparsableResponse() from e

        try:
            shape = circle_to_polygon(location.pin, radius.to_metres(), DEFAULT_CIRCLE_SEGMENTS)
        except InvalidRequestError as e:
            logger.warning(f"Failed to build search circle for {postcode}: {e}")
            raise

        logger.info(
            f"Querying {self._settings.DATASET_INDEX} around {postcode}: "
            f"limit={page.limit}, offset={page.offset}, relation={search_relation.value}"
        )
        results = await self._index.search_by_geo_shape(
            self._settings.DATASET_INDEX, shape, search_relation, page.limit, page.offset
        )
        return _build_envelope(results, page)

    async def search_parent(
        self,
        boundary_id: str,
        limit: Optional[str] = None,
        offset: Optional[str] = None,
    ) -> SearchResultsDTO:
        """Find areal units intersecting a stored boundary.

        Raises:
            InvalidRequestError: limit or offset is malformed
            BoundaryNotFound: no boundary has this id
            UpstreamError: the index failed or holds an invalid shape
        """
        logger.info(
            f"Incoming parent search: id={boundary_id}, limit={limit!r}, offset={offset!r}"
        )

        page = self._parse_page(limit, offset, f"parent search for {boundary_id}")

        hits = await self._index.find_by_exact_term(
            self._settings.BOUNDARY_FILE_INDEX, BOUNDARY_ID_FIELD, boundary_id
        )
        if len(hits) == 0:
            logger.warning(f"Boundary not found: {boundary_id}")
            raise BoundaryNotFound(boundary_id)

        try:
            boundary = BoundaryDocument.from_source(hits.first().source)
        except InvalidRequestError as e:
            # Shape was validated on the way in, so a bad one here is index-side
            logger.error(f"Stored boundary {boundary_id} has an invalid shape: {e}")
            raise UnparsableResponse() from e

        logger.info(
            f"Querying {self._settings.DATASET_INDEX} inside boundary {boundary_id}: "
            f"limit={page.limit}, offset={page.offset}"
        )
        results = await self._index.search_by_geo_shape(
            self._settings.DATASET_INDEX,
            boundary.location,
            SearchRelation(PARENT_RELATION),
            page.limit,
            page.offset,
        )
        return _build_envelope(results, page)

    async def search_place_name(
        self,
        name: str,
        limit: Optional[str] = None,
        offset: Optional[str] = None,
    ) -> SearchResultsDTO:
        """Text search on area names; items keep their stored location."""
        logger.info(
            f"Incoming place name search: name={name!r}, limit={limit!r}, offset={offset!r}"
        )

        page = self._parse_page(limit, offset, f"place name search for {name!r}")

        logger.info(
            f"Querying {self._settings.DATASET_INDEX} by name: "
            f"limit={page.limit}, offset={page.offset}"
        )
        results = await self._index.search_by_name(
            self._settings.DATASET_INDEX, name, page.limit, page.offset
        )
        return _build_envelope(results, page, include_location=True)

    def _parse_page(self, limit: Optional[str], offset: Optional[str], context: str) -> PageWindow:
        try:
            return clamp_pagination(
                parse_page_param("limit", limit, DEFAULT_LIMIT),
                parse_page_param("offset", offset, DEFAULT_OFFSET),
                self._settings.MAX_SEARCH_RESULTS_OFFSET,
            )
        except InvalidRequestError as e:
            logger.warning(f"Rejected {context}: {e}")
            raise


def _build_envelope(
    results: HitList, page: PageWindow, include_location: bool = False
) -> SearchResultsDTO:
    items = [
        SearchResult.from_source(hit.source, include_location=include_location).to_dict()
        for hit in results.hits
    ]
    return SearchResultsDTO(
        count=len(items),
        limit=page.limit,
        offset=page.offset,
        total_count=results.total,
        items=items,
    )

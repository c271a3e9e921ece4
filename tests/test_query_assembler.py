"""Tests for the query assembler over a mocked index."""
import pytest

from geosearch.application.dto.search_dto import SearchResultsDTO
from geosearch.application.services.query_assembler import (
    ParentSearchParams,
    PlaceNameSearchParams,
    PostcodeSearchParams,
    QueryAssembler,
)
from geosearch.domain.exceptions import (
    BoundaryNotFound,
    EmptyDistance,
    IndexUnavailable,
    InvalidDistance,
    InvalidRelation,
    OffsetExceedsMaximum,
    ParameterParseError,
    PostcodeNotFound,
    UnparsableResponse,
)
from geosearch.domain.repositories.search_index import Hit, HitList
from geosearch.domain.value_objects.geo_shape import Polygon
from geosearch.domain.value_objects.relation import SearchRelation

pytestmark = pytest.mark.unit


@pytest.fixture
def assembler(mock_index, settings):
    return QueryAssembler(index=mock_index, settings=settings)


class TestPostcodeSearch:
    """Test radius searches around a postcode."""

    async def test_happy_path(self, assembler, mock_index, postcode_hits, area_hits):
        mock_index.find_by_exact_term.return_value = postcode_hits
        mock_index.search_by_geo_shape.return_value = area_hits

        results = await assembler.search_postcode("CF14 3UZ", "1,km")

        mock_index.find_by_exact_term.assert_awaited_once_with(
            "test_postcode", "postcode", "cf143uz"
        )
        index, shape, relation, limit, offset = mock_index.search_by_geo_shape.await_args.args
        assert index == "test_geolocation"
        assert isinstance(shape, Polygon)
        assert len(shape.outer_ring) == 31
        assert relation is SearchRelation.WITHIN
        assert (limit, offset) == (50, 0)

        assert results.count == 2
        assert results.total_count == 120
        assert results.limit == 50
        assert results.offset == 0
        assert [item["name"] for item in results.items] == ["Cardiff 032A", "Cardiff 032B"]

    async def test_items_omit_location(self, assembler, mock_index, postcode_hits, area_hits):
        mock_index.find_by_exact_term.return_value = postcode_hits
        mock_index.search_by_geo_shape.return_value = area_hits

        results = await assembler.search_postcode("cf143uz", "1,km")

        assert all("location" not in item for item in results.items)

    async def test_circle_is_centred_on_pin(self, assembler, mock_index, postcode_hits):
        mock_index.find_by_exact_term.return_value = postcode_hits

        await assembler.search_postcode("CF14 3UZ", "1,km")

        shape = mock_index.search_by_geo_shape.await_args.args[1]
        longitudes = [point[0] for point in shape.outer_ring]
        latitudes = [point[1] for point in shape.outer_ring]
        assert min(longitudes) < -3.227882 < max(longitudes)
        assert min(latitudes) < 51.48609 < max(latitudes)

    async def test_relation_and_window_are_passed(self, assembler, mock_index, postcode_hits):
        mock_index.find_by_exact_term.return_value = postcode_hits

        results = await assembler.search_postcode(
            "CF14 3UZ", "2,miles", limit="100", offset="950", relation="intersects"
        )

        _, _, relation, limit, offset = mock_index.search_by_geo_shape.await_args.args
        assert relation is SearchRelation.INTERSECTS
        assert (limit, offset) == (50, 950)
        assert (results.limit, results.offset) == (50, 950)

    async def test_postcode_not_found(self, assembler, mock_index):
        with pytest.raises(PostcodeNotFound) as exc_info:
            await assembler.search_postcode("ZZ99 9ZZ", "1,km")

        assert str(exc_info.value) == "postcode not found"
        mock_index.search_by_geo_shape.assert_not_awaited()

    @pytest.mark.parametrize("kwargs,error", [
        ({"distance": ""}, EmptyDistance),
        ({"distance": "1,parsecs"}, InvalidDistance),
        ({"distance": "1,km", "relation": "contains"}, InvalidRelation),
        ({"distance": "1,km", "limit": "lots"}, ParameterParseError),
        ({"distance": "1,km", "offset": "1000"}, OffsetExceedsMaximum),
    ])
    async def test_bad_request_never_reaches_index(self, assembler, mock_index, kwargs, error):
        with pytest.raises(error):
            await assembler.search_postcode("CF14 3UZ", **kwargs)

        mock_index.find_by_exact_term.assert_not_awaited()
        mock_index.search_by_geo_shape.assert_not_awaited()

    async def test_limit_parse_error_precedes_relation_error(self, assembler):
        with pytest.raises(ParameterParseError):
            await assembler.search_postcode("CF14 3UZ", "", limit="x", relation="bad")

    async def test_stored_pin_without_location(self, assembler, mock_index):
        mock_index.find_by_exact_term.return_value = HitList(
            hits=[Hit(source={"postcode": "cf143uz"})], total=1
        )

        with pytest.raises(UnparsableResponse):
            await assembler.search_postcode("CF14 3UZ", "1,km")

    async def test_index_failure_propagates(self, assembler, mock_index, postcode_hits):
        mock_index.find_by_exact_term.return_value = postcode_hits
        mock_index.search_by_geo_shape.side_effect = IndexUnavailable()

        with pytest.raises(IndexUnavailable):
            await assembler.search_postcode("CF14 3UZ", "1,km")


class TestParentSearch:
    """Test searches inside a stored boundary."""

    async def test_happy_path(self, assembler, mock_index, boundary_hits, area_hits):
        mock_index.find_by_exact_term.return_value = boundary_hits
        mock_index.search_by_geo_shape.return_value = area_hits

        results = await assembler.search_parent(
            "7d8f5a2e-0000-4000-8000-000000000001", limit="10", offset="5"
        )

        mock_index.find_by_exact_term.assert_awaited_once_with(
            "test_boundary_files", "id", "7d8f5a2e-0000-4000-8000-000000000001"
        )
        index, shape, relation, limit, offset = mock_index.search_by_geo_shape.await_args.args
        assert index == "test_geolocation"
        assert shape.to_dict() == boundary_hits.first().source["location"]
        assert relation is SearchRelation.INTERSECTS
        assert (limit, offset) == (10, 5)

        # count is the number of items on this page, not the index total
        assert results.count == 2
        assert results.total_count == 120

    async def test_boundary_not_found(self, assembler, mock_index):
        with pytest.raises(BoundaryNotFound):
            await assembler.search_parent("missing")

        mock_index.search_by_geo_shape.assert_not_awaited()

    async def test_invalid_stored_shape(self, assembler, mock_index):
        mock_index.find_by_exact_term.return_value = HitList(
            hits=[Hit(source={"id": "broken", "location": {"type": "polygon", "coordinates": []}})],
            total=1,
        )

        with pytest.raises(UnparsableResponse):
            await assembler.search_parent("broken")

    async def test_offset_exceeds_maximum(self, assembler, mock_index):
        with pytest.raises(OffsetExceedsMaximum):
            await assembler.search_parent("any", offset="2000")

        mock_index.find_by_exact_term.assert_not_awaited()


class TestPlaceNameSearch:
    """Test text search on area names."""

    async def test_items_keep_location(self, assembler, mock_index, area_hits):
        mock_index.search_by_name.return_value = area_hits

        results = await assembler.search_place_name("Cardiff")

        mock_index.search_by_name.assert_awaited_once_with("test_geolocation", "Cardiff", 50, 0)
        assert results.items[0]["location"] == {"type": "polygon", "coordinates": []}
        assert "location" not in results.items[1]
        assert results.count == 2


class TestAssembleAndRun:
    """Test dispatch on parameter type."""

    async def test_dispatches_postcode(self, assembler, mock_index, postcode_hits):
        mock_index.find_by_exact_term.return_value = postcode_hits

        results = await assembler.assemble_and_run(
            PostcodeSearchParams(postcode="CF14 3UZ", distance="1,km")
        )

        assert results.count == 0
        mock_index.search_by_geo_shape.assert_awaited_once()

    async def test_dispatches_parent(self, assembler, mock_index, boundary_hits):
        mock_index.find_by_exact_term.return_value = boundary_hits

        await assembler.assemble_and_run(ParentSearchParams(boundary_id="abc"))

        assert mock_index.search_by_geo_shape.await_args.args[2] is SearchRelation.INTERSECTS

    async def test_dispatches_place_name(self, assembler, mock_index):
        await assembler.assemble_and_run(PlaceNameSearchParams(name="Cardiff"))
        mock_index.search_by_name.assert_awaited_once()

    async def test_unknown_params(self, assembler):
        with pytest.raises(TypeError):
            await assembler.assemble_and_run({"postcode": "CF14 3UZ"})

    def test_envelope_to_dict(self):
        envelope = SearchResultsDTO(count=1, limit=50, offset=0, total_count=7, items=[{"name": "x"}])
        assert envelope.to_dict() == {
            "count": 1,
            "items": [{"name": "x"}],
            "limit": 50,
            "offset": 0,
            "total_count": 7,
        }

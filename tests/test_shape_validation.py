"""Tests for GeoShape validation."""
import pytest

from geosearch.domain.exceptions import (
    EmptyCoordinates,
    EmptyShape,
    InvalidCoordinates,
    InvalidShape,
    InvalidType,
    MissingShape,
    MissingType,
    TooFewCoordinates,
    TooFewPolygons,
)
from geosearch.domain.value_objects.geo_shape import (
    MultiPolygon,
    Polygon,
    ShapeType,
    shape_from_document,
    shape_from_geojson,
    validate_shape,
)

SQUARE = [[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]
TRIANGLE = [[5, 5], [6, 5], [5, 6], [5, 5]]

pytestmark = pytest.mark.unit


class TestValidatePolygon:
    """Test polygon payloads."""

    def test_valid_polygon(self):
        shape = validate_shape("polygon", [SQUARE])

        assert isinstance(shape, Polygon)
        assert shape.type is ShapeType.POLYGON
        assert shape.outer_ring[0] == (0.0, 0.0)
        assert shape.to_dict() == {
            "type": "polygon",
            "coordinates": [[[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0], [0.0, 0.0]]],
        }

    def test_polygon_with_hole(self):
        hole = [[0.2, 0.2], [0.4, 0.2], [0.4, 0.4], [0.2, 0.2]]
        shape = validate_shape("polygon", [SQUARE, hole])
        assert len(shape.rings) == 2

    def test_shape_is_immutable(self):
        shape = validate_shape("polygon", [SQUARE])
        with pytest.raises(AttributeError):
            shape.rings = ()

    def test_missing_type(self):
        with pytest.raises(MissingType):
            validate_shape("", [SQUARE])
        with pytest.raises(MissingType):
            validate_shape(None, [SQUARE])

    def test_invalid_type(self):
        with pytest.raises(InvalidType) as exc_info:
            validate_shape("circle", [SQUARE])
        assert "circle" in str(exc_info.value)

    def test_type_is_case_sensitive(self):
        with pytest.raises(InvalidType):
            validate_shape("Polygon", [SQUARE])

    def test_missing_coordinates(self):
        with pytest.raises(MissingShape):
            validate_shape("polygon", None)

    def test_no_rings(self):
        with pytest.raises(EmptyShape):
            validate_shape("polygon", [])

    def test_empty_ring(self):
        with pytest.raises(EmptyShape):
            validate_shape("polygon", [[]])

    def test_ring_with_three_points(self):
        with pytest.raises(TooFewCoordinates):
            validate_shape("polygon", [[[0, 0], [1, 0], [0, 0]]])

    def test_null_point(self):
        with pytest.raises(EmptyCoordinates):
            validate_shape("polygon", [[[0, 0], None, [1, 1], [0, 0]]])

    @pytest.mark.parametrize("point", [
        [],
        [1],
        [1, 2, 3],
        ["1", 2],
        [True, 2],
        "ab",
    ])
    def test_point_not_two_numbers(self, point):
        with pytest.raises(InvalidCoordinates):
            validate_shape("polygon", [[[0, 0], point, [1, 1], [0, 0]]])

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan"), 10 ** 400])
    def test_non_finite_coordinate(self, value):
        with pytest.raises(InvalidCoordinates):
            validate_shape("polygon", [[[value, 0], [1, 0], [1, 1], [value, 0]]])

    def test_three_dimensional_point_rejected_on_upload(self):
        with pytest.raises(InvalidCoordinates):
            validate_shape("polygon", [[[0, 0, 5], [1, 0, 5], [1, 1, 5], [0, 0, 5]]])

    def test_open_ring(self):
        with pytest.raises(InvalidShape):
            validate_shape("polygon", [[[0, 0], [1, 0], [1, 1], [0, 1]]])

    def test_non_list_nesting(self):
        with pytest.raises(InvalidShape):
            validate_shape("polygon", "not a ring")

    def test_point_checks_precede_closure_check(self):
        # open ring whose second point is also malformed
        with pytest.raises(InvalidCoordinates):
            validate_shape("polygon", [[[0, 0], [1], [1, 1], [0, 1]]])

    def test_first_failing_ring_wins(self):
        with pytest.raises(TooFewCoordinates):
            validate_shape("polygon", [[[0, 0], [1, 1], [0, 0]], []])


class TestValidateMultiPolygon:
    """Test multipolygon payloads."""

    def test_valid_multipolygon(self):
        shape = validate_shape("multipolygon", [[SQUARE], [TRIANGLE]])

        assert isinstance(shape, MultiPolygon)
        assert len(shape.polygons) == 2
        assert shape.to_dict()["type"] == "multipolygon"
        assert len(shape.to_dict()["coordinates"]) == 2

    def test_single_polygon_is_too_few(self):
        with pytest.raises(TooFewPolygons):
            validate_shape("multipolygon", [[SQUARE]])

    def test_each_polygon_is_checked(self):
        with pytest.raises(InvalidShape):
            validate_shape("multipolygon", [[SQUARE], [[[5, 5], [6, 5], [5, 6], [6, 6]]]])

    def test_empty_member_polygon(self):
        with pytest.raises(EmptyShape):
            validate_shape("multipolygon", [[SQUARE], []])


class TestShapeFromDocument:
    """Test rebuilding stored shapes."""

    def test_accepts_geojson_capitalisation(self):
        shape = shape_from_document({"type": "Polygon", "coordinates": [SQUARE]})
        assert isinstance(shape, Polygon)

    def test_missing_type(self):
        with pytest.raises(MissingType):
            shape_from_document({"coordinates": [SQUARE]})

    def test_stored_single_part_multipolygon_is_rejected(self):
        with pytest.raises(TooFewPolygons):
            shape_from_document({"type": "multipolygon", "coordinates": [[SQUARE]]})


class TestShapeFromGeojson:
    """Test shapes read from GeoJSON source files."""

    def test_single_part_multipolygon(self):
        shape = shape_from_geojson({"type": "MultiPolygon", "coordinates": [[SQUARE]]})

        assert isinstance(shape, MultiPolygon)
        assert len(shape.polygons) == 1

    def test_elevation_is_dropped(self):
        ring = [[0, 0, 12.5], [1, 0, 13], [1, 1, 11], [0, 0, 12.5]]

        shape = shape_from_geojson({"type": "Polygon", "coordinates": [ring]})

        assert shape.outer_ring == ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 0.0))

    def test_ring_rules_still_apply(self):
        with pytest.raises(TooFewCoordinates):
            shape_from_geojson({"type": "Polygon", "coordinates": [[[0, 0], [1, 1], [0, 0]]]})

    def test_empty_multipolygon(self):
        with pytest.raises(TooFewPolygons):
            shape_from_geojson({"type": "MultiPolygon", "coordinates": []})

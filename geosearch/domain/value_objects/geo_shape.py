"""GeoShape value objects and structural validation of GeoJSON-like payloads.

A GeoShape is either a ``Polygon`` or a ``MultiPolygon``. Both are frozen and
only ever built from validated input, so consumers can trust that every ring
is closed and every point is a ``(longitude, latitude)`` pair of floats.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, List, Tuple, Union

from geosearch.constants import MIN_MULTIPOLYGON_POLYGONS, MIN_RING_POINTS, POINT_ARITY
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

Point = Tuple[float, float]
Ring = Tuple[Point, ...]


class ShapeType(str, Enum):
    POLYGON = "polygon"
    MULTIPOLYGON = "multipolygon"


@dataclass(frozen=True)
class Polygon:
    """Polygon made of one or more closed rings."""
    rings: Tuple[Ring, ...]

    type: ClassVar[ShapeType] = ShapeType.POLYGON

    @property
    def outer_ring(self) -> Ring:
        return self.rings[0]

    def coordinates(self) -> List[List[List[float]]]:
        return [[list(point) for point in ring] for ring in self.rings]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the GeoJSON-like form the index expects."""
        return {"type": self.type.value, "coordinates": self.coordinates()}


@dataclass(frozen=True)
class MultiPolygon:
    """Two or more independent polygons."""
    polygons: Tuple[Polygon, ...]

    type: ClassVar[ShapeType] = ShapeType.MULTIPOLYGON

    def coordinates(self) -> List[List[List[List[float]]]]:
        return [polygon.coordinates() for polygon in self.polygons]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the GeoJSON-like form the index expects."""
        return {"type": self.type.value, "coordinates": self.coordinates()}


GeoShape = Union[Polygon, MultiPolygon]


def validate_shape(
    shape_type: Any,
    coordinates: Any,
    min_polygons: int = MIN_MULTIPOLYGON_POLYGONS,
    allow_elevation: bool = False,
) -> GeoShape:
    """Validate a ``{type, coordinates}`` payload and build its GeoShape.

    Checks run outer-to-inner and stop at the first violation.

    Args:
        shape_type: "polygon" or "multipolygon"
        coordinates: nested sequences of [longitude, latitude] points
        min_polygons: fewest polygons a multipolygon may hold
        allow_elevation: accept [longitude, latitude, elevation] points and
            drop the elevation

    Returns:
        The validated, immutable Polygon or MultiPolygon

    Raises:
        MissingType, InvalidType, MissingShape, TooFewPolygons, EmptyShape,
        TooFewCoordinates, EmptyCoordinates, InvalidCoordinates, InvalidShape
    """
    if not shape_type:
        raise MissingType()

    try:
        kind = ShapeType(shape_type)
    except ValueError:
        raise InvalidType(str(shape_type)) from None

    if coordinates is None:
        raise MissingShape()

    if kind is ShapeType.POLYGON:
        return _build_polygon(coordinates, allow_elevation)

    if not _is_sequence(coordinates):
        raise InvalidShape()
    if len(coordinates) < min_polygons:
        raise TooFewPolygons()
    return MultiPolygon(
        polygons=tuple(_build_polygon(polygon, allow_elevation) for polygon in coordinates)
    )


def _build_polygon(rings: Any, allow_elevation: bool) -> Polygon:
    if rings is None or (_is_sequence(rings) and len(rings) == 0):
        raise EmptyShape()
    if not _is_sequence(rings):
        raise InvalidShape()
    return Polygon(rings=tuple(_build_ring(ring, allow_elevation) for ring in rings))


def _build_ring(ring: Any, allow_elevation: bool) -> Ring:
    if ring is None or (_is_sequence(ring) and len(ring) == 0):
        raise EmptyShape()
    if not _is_sequence(ring):
        raise InvalidShape()

    if len(ring) < MIN_RING_POINTS:
        raise TooFewCoordinates()

    points = []
    for point in ring:
        if point is None:
            raise EmptyCoordinates()
        if not _is_sequence(point):
            raise InvalidCoordinates()
        if len(point) != POINT_ARITY and not (allow_elevation and len(point) == POINT_ARITY + 1):
            raise InvalidCoordinates()
        if not all(_is_coordinate(value) for value in point):
            raise InvalidCoordinates()
        points.append((float(point[0]), float(point[1])))

    # Ring must be closed
    if points[0] != points[-1]:
        raise InvalidShape()

    return tuple(points)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_coordinate(value: Any) -> bool:
    """Finite int or float; JSON such as 1e400 decodes to inf."""
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def shape_from_document(location: Dict[str, Any]) -> GeoShape:
    """Build a GeoShape from a stored ``location`` object.

    Stored type names may be capitalised (``"Polygon"``) as in GeoJSON files.
    """
    shape_type = location.get("type")
    if isinstance(shape_type, str):
        shape_type = shape_type.lower()
    return validate_shape(shape_type, location.get("coordinates"))


def shape_from_geojson(geometry: Dict[str, Any]) -> GeoShape:
    """Build a GeoShape from a GeoJSON file geometry.

    Single-part MultiPolygons and 3-D positions are accepted; elevations
    are dropped.
    """
    shape_type = geometry.get("type")
    if isinstance(shape_type, str):
        shape_type = shape_type.lower()
    return validate_shape(
        shape_type, geometry.get("coordinates"), min_polygons=1, allow_elevation=True
    )

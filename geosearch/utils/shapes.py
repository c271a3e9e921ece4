"""Circle approximation on a sphere for radius searches.

The index can only match documents against polygons, so a "within N km of a
point" search is turned into a regular polygon whose vertices lie on the
circle of that radius around the point.
"""
import math

from geosearch.constants import EARTH_RADIUS_METRES, MAX_CIRCLE_SEGMENTS
from geosearch.domain.exceptions import (
    InvalidLatitude,
    InvalidLongitude,
    TooFewSegments,
    TooManySegments,
)
from geosearch.domain.value_objects.coordinates import Coordinates
from geosearch.domain.value_objects.geo_shape import Point, Polygon

TWO_PI = 2 * math.pi


def circle_to_polygon(center: Coordinates, radius_metres: float, segments: int) -> Polygon:
    """Approximate a circle around ``center`` as a closed polygon.

    Vertices are generated clockwise starting due north, one per segment,
    and the ring is closed by repeating the first vertex, giving
    ``segments + 1`` points in [longitude, latitude] order.

    Args:
        center: Circle centre
        radius_metres: Great-circle radius in metres
        segments: Number of polygon sides (at most 180)

    Returns:
        Single-ring Polygon

    Raises:
        TooManySegments: segments exceeds 180
        TooFewSegments: segments is below 1
        InvalidLatitude: center latitude outside [-90, 90]
        InvalidLongitude: center longitude outside [-180, 180]
    """
    _validate_input(center, segments)

    points = [
        _destination(center, radius_metres, (TWO_PI * -i) / segments)
        for i in range(segments)
    ]
    # Repeat first vertex to close the ring
    points.append(points[0])

    return Polygon(rings=(tuple(points),))


def _validate_input(center: Coordinates, segments: int) -> None:
    if segments > MAX_CIRCLE_SEGMENTS:
        raise TooManySegments()
    if segments < 1:
        raise TooFewSegments()
    if not center.is_valid_latitude():
        raise InvalidLatitude()
    if not center.is_valid_longitude():
        raise InvalidLongitude()


def _to_radians(degrees: float) -> float:
    return (degrees * math.pi) / 180


def _to_degrees(radians: float) -> float:
    return (radians * 180) / math.pi


def _destination(center: Coordinates, distance: float, bearing: float) -> Point:
    """Point reached travelling ``distance`` metres from ``center`` along ``bearing``."""
    lat1 = _to_radians(center.latitude)
    lon1 = _to_radians(center.longitude)

    # angular distance
    d_by_r = distance / EARTH_RADIUS_METRES

    lat = math.asin(
        math.sin(lat1) * math.cos(d_by_r)
        + math.cos(lat1) * math.sin(d_by_r) * math.cos(bearing)
    )
    lon = lon1 + math.atan2(
        math.sin(bearing) * math.sin(d_by_r) * math.cos(lat1),
        math.cos(d_by_r) - math.sin(lat1) * math.sin(lat),
    )

    return (_to_degrees(lon), _to_degrees(lat))

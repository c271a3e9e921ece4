"""Exception hierarchy for geosearch.

Every error belongs to one of three categories which the API layer maps to
an HTTP status: invalid request (400), not found (404) and upstream (500).
"""
from typing import Optional


class GeoSearchError(Exception):
    """Base exception for all geosearch errors."""

    message = "geosearch error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


# ===== Invalid request (400) =====

class InvalidRequestError(GeoSearchError):
    """The caller supplied a malformed value."""


class EmptyDistance(InvalidRequestError):
    message = "empty query term: distance"


class InvalidDistance(InvalidRequestError):
    """Distance is not a number and unit of distance separated by a comma."""

    def __init__(self, distance: str):
        self.distance = distance
        super().__init__(
            f"invalid distance value: {distance}. Should contain a number and "
            "unit of distance separated by a comma e.g. 40,km"
        )


class TooManySegments(InvalidRequestError):
    message = "too many segments"


class TooFewSegments(InvalidRequestError):
    message = "at least one segment is required"


class InvalidLatitude(InvalidRequestError):
    message = "latitude has to be between -90 and 90"


class InvalidLongitude(InvalidRequestError):
    message = "longitude has to be between -180 and 180"


class MissingType(InvalidRequestError):
    message = "missing type value in request"


class InvalidType(InvalidRequestError):
    def __init__(self, shape_type: str):
        self.shape_type = shape_type
        super().__init__(
            f"invalid type value: {shape_type}. "
            "Should be one of the following: polygon, multipolygon"
        )


class MissingShape(InvalidRequestError):
    message = "missing coordinates value in request"


class EmptyShape(InvalidRequestError):
    message = "empty shape"


class TooFewCoordinates(InvalidRequestError):
    message = "invalid number of coordinates, need a minimum of 4 values"


class EmptyCoordinates(InvalidRequestError):
    message = "missing coordinates in array"


class InvalidCoordinates(InvalidRequestError):
    message = "should contain two coordinates, representing [longitude, latitude]"


class InvalidShape(InvalidRequestError):
    message = (
        "invalid list of coordinates, the first and last coordinates "
        "should be the same to complete boundary line"
    )


class TooFewPolygons(InvalidRequestError):
    message = "invalid number of polygons, a multipolygon needs a minimum of 2 polygons"


class OffsetExceedsMaximum(InvalidRequestError):
    def __init__(self, max_offset: int):
        self.max_offset = max_offset
        super().__init__(
            "the maximum offset has been reached, "
            f"the offset cannot be more than {max_offset}"
        )


class ParameterParseError(InvalidRequestError):
    """A pagination parameter is not an integer."""

    def __init__(self, name: str, value: str):
        self.name = name
        self.value = value
        super().__init__(
            "failed to parse query parameters, values must be an integer"
        )


class InvalidRelation(InvalidRequestError):
    def __init__(self, relation: str):
        self.relation = relation
        super().__init__(
            f'incorrect relation value: {relation}. '
            'It Should be either "within" or "intersects"'
        )


class InvalidRequestBody(InvalidRequestError):
    message = "failed to parse json body"


# ===== Not found (404) =====

class NotFoundError(GeoSearchError):
    """A document the request depends on does not exist."""


class PostcodeNotFound(NotFoundError):
    def __init__(self, postcode: str):
        self.postcode = postcode
        super().__init__("postcode not found")


class BoundaryNotFound(NotFoundError):
    def __init__(self, boundary_id: str):
        self.boundary_id = boundary_id
        super().__init__("invalid id, boundary file does not exist")


# ===== Upstream (500) =====

class UpstreamError(GeoSearchError):
    """The index failed or answered with something unusable."""


class IndexUnavailable(UpstreamError):
    message = "failed to call search index"


class UnexpectedStatusCode(UpstreamError):
    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"unexpected status code from search index: {status_code}")


class UnparsableResponse(UpstreamError):
    message = "failed to unmarshal data from search index"


class BulkRequestFailed(UpstreamError):
    def __init__(self, failed: int):
        self.failed = failed
        super().__init__(f"search index rejected {failed} documents in bulk request")

"""Application constants that never change across environments.

These are physical facts, wire-format values, or fixed request defaults that
should never vary between dev/staging/prod.
"""

# ===== Geographic Constants =====
EARTH_RADIUS_METRES = 6378137  # WGS84 equatorial radius
MAX_CIRCLE_SEGMENTS = 180
DEFAULT_CIRCLE_SEGMENTS = 30
MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0

# ===== Distance Units =====
METRES_PER_KILOMETRE = 1000
METRES_PER_MILE = 1609.34

# ===== Shape Rules =====
MIN_RING_POINTS = 4
MIN_MULTIPOLYGON_POLYGONS = 2
POINT_ARITY = 2

# ===== Request Defaults =====
DEFAULT_LIMIT = 50
DEFAULT_OFFSET = 0
DEFAULT_RELATION = "within"
PARENT_RELATION = "intersects"

# ===== Index Document Fields =====
POSTCODE_FIELD = "postcode"
BOUNDARY_ID_FIELD = "id"
LOCATION_FIELD = "location"
NAME_FIELD = "name"

# ===== Ingestion =====
BULK_BATCH_SIZE = 500
PROGRESS_INTERVAL_SECONDS = 5

# ===== HTTP Messages =====
INTERNAL_ERROR_MESSAGE = "internal server error"

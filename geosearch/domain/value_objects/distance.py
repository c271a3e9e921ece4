"""Distance value object and the "value,unit" request parser."""
import logging
import math
import re
from dataclasses import dataclass
from enum import Enum

from geosearch.constants import METRES_PER_KILOMETRE, METRES_PER_MILE
from geosearch.domain.exceptions import EmptyDistance, InvalidDistance

logger = logging.getLogger(__name__)

_MAGNITUDE_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)(e[+-]?\d+)?$")


class DistanceUnit(str, Enum):
    """Recognised distance units."""
    KILOMETRES = "kilometres"
    MILES = "miles"


# Note "m" is miles, not metres. Existing clients depend on it.
UNIT_TOKENS = {
    "km": DistanceUnit.KILOMETRES,
    "kilometre": DistanceUnit.KILOMETRES,
    "kilometres": DistanceUnit.KILOMETRES,
    "kilometer": DistanceUnit.KILOMETRES,
    "kilometers": DistanceUnit.KILOMETRES,
    "m": DistanceUnit.MILES,
    "miles": DistanceUnit.MILES,
}

_METRES_PER_UNIT = {
    DistanceUnit.KILOMETRES: METRES_PER_KILOMETRE,
    DistanceUnit.MILES: METRES_PER_MILE,
}


@dataclass(frozen=True)
class Distance:
    """Immutable distance value object."""
    magnitude: float
    unit: DistanceUnit

    def __post_init__(self):
        """Validate distance."""
        if self.magnitude < 0:
            raise ValueError(f"Distance cannot be negative, got {self.magnitude}")

    def to_metres(self) -> float:
        """Convert to metres, falling back to kilometres for an unknown unit."""
        multiplier = _METRES_PER_UNIT.get(self.unit)
        if multiplier is None:
            logger.warning(f"Unrecognizable unit value {self.unit!r}: defaulting to kilometres")
            multiplier = METRES_PER_KILOMETRE
        return self.magnitude * multiplier


def parse_distance(raw: str) -> Distance:
    """Parse a request distance such as ``"40,km"`` or ``"5,miles"``.

    Raises:
        EmptyDistance: raw is empty
        InvalidDistance: raw is not a non-negative number and a known unit
            separated by a single comma
    """
    if not raw:
        raise EmptyDistance()

    tokens = raw.lower().split(",")
    if len(tokens) != 2:
        raise InvalidDistance(raw)

    value, unit_token = tokens
    if not _MAGNITUDE_RE.match(value):
        raise InvalidDistance(raw)

    magnitude = float(value)
    if not math.isfinite(magnitude) or magnitude < 0:
        raise InvalidDistance(raw)

    unit = UNIT_TOKENS.get(unit_token)
    if unit is None:
        raise InvalidDistance(raw)

    return Distance(magnitude=magnitude, unit=unit)

"""Postcode domain entity."""
from dataclasses import dataclass
from typing import Any, Dict

from geosearch.domain.value_objects.coordinates import Coordinates


def normalise_postcode(raw: str) -> str:
    """Index form of a postcode: no spaces, lower-case, e.g. 'CF14 3UZ' -> 'cf143uz'."""
    return raw.replace(" ", "").lower()


@dataclass
class PostcodeLocation:
    """Postcode with its pin location."""
    postcode: str
    postcode_raw: str
    pin: Coordinates

    @classmethod
    def from_raw(cls, raw: str, latitude: float, longitude: float) -> "PostcodeLocation":
        return cls(
            postcode=normalise_postcode(raw),
            postcode_raw=raw,
            pin=Coordinates(latitude=latitude, longitude=longitude),
        )

    @classmethod
    def from_source(cls, source: Dict[str, Any]) -> "PostcodeLocation":
        """Build from an index hit ``_source``.

        Raises:
            KeyError, TypeError, ValueError: source lacks a usable pin
        """
        location = source["pin"]["location"]
        return cls(
            postcode=source.get("postcode", ""),
            postcode_raw=source.get("postcode_raw", ""),
            pin=Coordinates(
                latitude=float(location["lat"]),
                longitude=float(location["lon"]),
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the document stored in the postcode index."""
        return {
            "postcode": self.postcode,
            "postcode_raw": self.postcode_raw,
            "pin": {"location": self.pin.to_dict()},
        }

"""Boundary (parent area) domain entity."""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict

from geosearch.domain.value_objects.geo_shape import GeoShape, shape_from_document


@dataclass
class BoundaryDocument:
    """Uploaded parent shape, looked up later by id."""
    location: GeoShape
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @classmethod
    def from_source(cls, source: Dict[str, Any]) -> "BoundaryDocument":
        """Build from an index hit ``_source``.

        Raises:
            InvalidRequestError: the stored location is not a valid shape
        """
        return cls(
            id=source.get("id", ""),
            location=shape_from_document(source.get("location") or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "location": self.location.to_dict()}

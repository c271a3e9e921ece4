"""Data Transfer Objects for search API responses."""
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class SearchResultsDTO:
    """Result envelope returned by every search."""
    count: int
    limit: int
    offset: int
    total_count: int
    items: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "items": self.items,
            "limit": self.limit,
            "offset": self.offset,
            "total_count": self.total_count,
        }


@dataclass
class BoundaryCreatedDTO:
    """Stored boundary document."""
    id: str
    location: Dict[str, Any]

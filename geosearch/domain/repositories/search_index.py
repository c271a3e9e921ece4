"""Search index interface - abstraction for the geospatial document store."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List

from geosearch.domain.value_objects.geo_shape import GeoShape
from geosearch.domain.value_objects.relation import SearchRelation


@dataclass
class Hit:
    """Single ranked document returned by the index."""
    source: Dict[str, Any]
    score: float = 0.0


@dataclass
class HitList:
    """Ranked hits plus the index's reported total."""
    hits: List[Hit] = field(default_factory=list)
    total: int = 0

    def __len__(self) -> int:
        return len(self.hits)

    def first(self) -> Hit:
        return self.hits[0]


class SearchIndex(ABC):
    """Repository interface for the search index.

    Implementations raise UpstreamError subclasses when the index cannot be
    reached or answers with something unusable.
    """

    @abstractmethod
    async def find_by_exact_term(self, index: str, field: str, value: str) -> HitList:
        """Find documents whose ``field`` exactly equals ``value``."""
        pass

    @abstractmethod
    async def search_by_geo_shape(
        self,
        index: str,
        shape: GeoShape,
        relation: SearchRelation,
        limit: int,
        offset: int,
    ) -> HitList:
        """Find documents whose location has ``relation`` to ``shape``."""
        pass

    @abstractmethod
    async def search_by_name(self, index: str, name: str, limit: int, offset: int) -> HitList:
        """Full-text match on document name, best score first."""
        pass

    @abstractmethod
    async def index_document(self, index: str, document: Dict[str, Any]) -> int:
        """Store a document and return the index's status code."""
        pass

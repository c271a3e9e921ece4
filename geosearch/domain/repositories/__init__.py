"""Repository interfaces."""
from geosearch.domain.repositories.search_index import Hit, HitList, SearchIndex

__all__ = [
    "Hit",
    "HitList",
    "SearchIndex",
]

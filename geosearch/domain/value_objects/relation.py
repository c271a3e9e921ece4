"""Spatial relation used to match a search shape against indexed documents."""
from enum import Enum
from typing import Optional

from geosearch.constants import DEFAULT_RELATION
from geosearch.domain.exceptions import InvalidRelation


class SearchRelation(str, Enum):
    INTERSECTS = "intersects"
    WITHIN = "within"

    @classmethod
    def parse(cls, raw: Optional[str], default: str = DEFAULT_RELATION) -> "SearchRelation":
        """Parse a requested relation, case-insensitively.

        An absent or empty value gives ``default``.
        """
        if not raw:
            return cls(default)
        try:
            return cls(raw.lower())
        except ValueError:
            raise InvalidRelation(raw) from None

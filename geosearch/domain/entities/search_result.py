"""Areal unit returned by a geo-shape search."""
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional


@dataclass
class SearchResult:
    """Areal unit (LSOA, MSOA, town...) stored in the dataset index."""
    name: str
    code: str = ""
    hierarchy: str = ""
    lsoa11nm: Optional[str] = None
    lsoa11nmw: Optional[str] = None
    msoa11nm: Optional[str] = None
    msoa11nmw: Optional[str] = None
    shape_area: Optional[float] = None
    shape_length: Optional[float] = None
    stated_area: Optional[float] = None
    stated_length: Optional[float] = None
    tcity15nm: Optional[str] = None
    location: Optional[Dict[str, Any]] = None

    @classmethod
    def from_source(cls, source: Dict[str, Any], include_location: bool = False) -> "SearchResult":
        """Build from an index hit ``_source``, ignoring unknown fields."""
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in source.items() if key in known}
        if not include_location:
            values.pop("location", None)
        values.setdefault("name", "")
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, omitting empty optional fields."""
        return {key: value for key, value in asdict(self).items() if value is not None}

"""Pydantic schemas for search requests and responses."""
from pydantic import BaseModel
from typing import Any, Dict, List, Optional


class SearchResultsResponseSchema(BaseModel):
    """Result envelope schema."""
    count: int
    items: List[Dict[str, Any]]
    limit: int
    offset: int
    total_count: int


class BoundaryRequestSchema(BaseModel):
    """Uploaded boundary shape.

    Coordinates are left untyped here; their structure is checked by the
    shape validator so each violation gets its own message.
    """
    type: Optional[str] = None
    coordinates: Optional[Any] = None


class BoundaryResponseSchema(BaseModel):
    """Stored boundary schema."""
    id: str
    location: Dict[str, Any]


class ErrorResponseSchema(BaseModel):
    """Error body schema."""
    detail: str

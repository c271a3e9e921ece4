"""Request bodies sent to the search index."""
from typing import Any, Dict

from geosearch.constants import LOCATION_FIELD, NAME_FIELD
from geosearch.domain.value_objects.geo_shape import GeoShape
from geosearch.domain.value_objects.relation import SearchRelation


def term_query(field: str, value: str) -> Dict[str, Any]:
    """Exact match on a keyword field."""
    return {"query": {"term": {field: value}}}


def geo_shape_query(
    shape: GeoShape,
    relation: SearchRelation,
    limit: int,
    offset: int,
    field: str = LOCATION_FIELD,
) -> Dict[str, Any]:
    """Match every document whose ``field`` has ``relation`` to ``shape``."""
    return {
        "from": offset,
        "size": limit,
        "query": {
            "bool": {
                "must": {"match_all": {}},
                "filter": {
                    "geo_shape": {
                        field: {
                            "shape": shape.to_dict(),
                            "relation": relation.value,
                        }
                    }
                },
            }
        },
        "track_total_hits": True,
    }


def name_query(name: str, limit: int, offset: int) -> Dict[str, Any]:
    """Text match on area name, highest score first."""
    return {
        "from": offset,
        "size": limit,
        "query": {"bool": {"should": [{"match": {NAME_FIELD: name}}]}},
        "sort": [{"_score": {"order": "desc"}}],
        "track_total_hits": True,
    }

"""Index settings and mappings used when (re)creating indices."""

POSTCODE_MAPPINGS = {
    "mappings": {
        "properties": {
            "postcode": {"type": "keyword"},
            "postcode_raw": {"type": "keyword"},
            "pin": {
                "properties": {
                    "location": {"type": "geo_point"},
                }
            },
        }
    }
}

AREA_MAPPINGS = {
    "mappings": {
        "properties": {
            "name": {"type": "text"},
            "code": {"type": "keyword"},
            "hierarchy": {"type": "keyword"},
            "lsoa11nm": {"type": "text"},
            "lsoa11nmw": {"type": "text"},
            "msoa11nm": {"type": "text"},
            "msoa11nmw": {"type": "text"},
            "tcity15nm": {"type": "text"},
            "shape_area": {"type": "double"},
            "shape_length": {"type": "double"},
            "stated_area": {"type": "double"},
            "stated_length": {"type": "double"},
            "location": {"type": "geo_shape"},
        }
    }
}

BOUNDARY_MAPPINGS = {
    "mappings": {
        "properties": {
            "id": {"type": "keyword"},
            "location": {"type": "geo_shape"},
        }
    }
}

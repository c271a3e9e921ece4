"""
Pytest configuration and shared fixtures for geosearch tests.

This module provides test fixtures for:
- Settings built without reading the environment
- A mocked SearchIndex port
- FastAPI test client wired to the mocked index
- Sample index documents
"""

from typing import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from geosearch.config import Settings, get_settings
from geosearch.core.dependencies import get_elasticsearch_index, get_search_index
from geosearch.domain.repositories.search_index import Hit, HitList, SearchIndex
from geosearch.main import app


# ==============================================================================
# SETTINGS FIXTURES
# ==============================================================================

@pytest.fixture
def settings() -> Settings:
    """Settings with fixed index names, ignoring any .env file."""
    return Settings(
        _env_file=None,
        ELASTIC_SEARCH_URL="http://elastic.test:9200",
        DATASET_INDEX="test_geolocation",
        POSTCODE_INDEX="test_postcode",
        BOUNDARY_FILE_INDEX="test_boundary_files",
        MAX_SEARCH_RESULTS_OFFSET=1000,
    )


# ==============================================================================
# MOCK INDEX FIXTURES
# ==============================================================================

@pytest.fixture
def mock_index():
    """Mock SearchIndex port. Every lookup returns no hits unless a test says otherwise."""
    index = MagicMock(spec=SearchIndex)
    index.find_by_exact_term = AsyncMock(return_value=HitList())
    index.search_by_geo_shape = AsyncMock(return_value=HitList())
    index.search_by_name = AsyncMock(return_value=HitList())
    index.index_document = AsyncMock(return_value=201)
    return index


@pytest.fixture
def mock_elasticsearch():
    """Mock index client for the health endpoint."""
    client = MagicMock()
    client.ping = AsyncMock(
        return_value={"cluster_name": "test-cluster", "version": {"number": "7.10.2"}}
    )
    return client


@pytest.fixture
def client(settings, mock_index, mock_elasticsearch) -> Generator[TestClient, None, None]:
    """Create a FastAPI test client backed by the mocked index."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_search_index] = lambda: mock_index
    app.dependency_overrides[get_elasticsearch_index] = lambda: mock_elasticsearch

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ==============================================================================
# TEST DATA FACTORIES
# ==============================================================================

@pytest.fixture
def postcode_hits() -> HitList:
    """Postcode index answer for CF14 3UZ."""
    return HitList(
        hits=[
            Hit(
                source={
                    "postcode": "cf143uz",
                    "postcode_raw": "CF14 3UZ",
                    "pin": {"location": {"lat": 51.48609, "lon": -3.227882}},
                },
                score=1.0,
            )
        ],
        total=1,
    )


@pytest.fixture
def square_coordinates():
    """Closed single-ring polygon coordinates in [lon, lat] order."""
    return [[
        [-3.3, 51.4],
        [-3.1, 51.4],
        [-3.1, 51.6],
        [-3.3, 51.6],
        [-3.3, 51.4],
    ]]


@pytest.fixture
def boundary_hits(square_coordinates) -> HitList:
    """Boundary index answer for a stored square."""
    return HitList(
        hits=[
            Hit(
                source={
                    "id": "7d8f5a2e-0000-4000-8000-000000000001",
                    "location": {"type": "polygon", "coordinates": square_coordinates},
                }
            )
        ],
        total=1,
    )


@pytest.fixture
def area_hits() -> HitList:
    """Dataset index answer with two areal units."""
    return HitList(
        hits=[
            Hit(
                source={
                    "name": "Cardiff 032A",
                    "code": "W01001718",
                    "hierarchy": "lsoa",
                    "lsoa11nm": "Cardiff 032A",
                    "shape_area": 251234.5,
                    "location": {"type": "polygon", "coordinates": []},
                },
                score=1.0,
            ),
            Hit(
                source={
                    "name": "Cardiff 032B",
                    "code": "W01001719",
                    "hierarchy": "lsoa",
                    "lsoa11nm": "Cardiff 032B",
                },
                score=0.8,
            ),
        ],
        total=120,
    )


# ==============================================================================
# MARKERS
# ==============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: Mark test as an integration test"
    )

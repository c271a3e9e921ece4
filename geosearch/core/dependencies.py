"""Dependency injection for FastAPI routes.
Routes depend on the SearchIndex abstraction, never on the HTTP client."""
from fastapi import Depends

from geosearch.config import Settings, get_settings
from geosearch.domain.repositories.search_index import SearchIndex
from geosearch.infrastructure.elasticsearch.client import ElasticsearchIndex
from geosearch.infrastructure.external_apis.http_client import get_shared_client
from geosearch.application.services.query_assembler import QueryAssembler
from geosearch.application.use_cases.create_boundary import CreateBoundaryUseCase


def get_elasticsearch_index(settings: Settings = Depends(get_settings)) -> ElasticsearchIndex:
    """Get the index client over the shared connection pool."""
    return ElasticsearchIndex(get_shared_client(settings), settings.ELASTIC_SEARCH_URL)


def get_search_index(index: ElasticsearchIndex = Depends(get_elasticsearch_index)) -> SearchIndex:
    """Get the search index port."""
    return index


def get_query_assembler(
    index: SearchIndex = Depends(get_search_index),
    settings: Settings = Depends(get_settings),
) -> QueryAssembler:
    """Get query assembler."""
    return QueryAssembler(index=index, settings=settings)


def get_create_boundary_use_case(
    index: SearchIndex = Depends(get_search_index),
    settings: Settings = Depends(get_settings),
) -> CreateBoundaryUseCase:
    """Get create boundary use case."""
    return CreateBoundaryUseCase(index=index, settings=settings)

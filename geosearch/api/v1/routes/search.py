"""Search API routes - thin layer delegating to the query assembler.

Query parameters are taken as raw strings; parsing and range checks happen
in the domain so that every malformed value gets the same error body.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from pydantic import ValidationError

from geosearch.core.dependencies import get_create_boundary_use_case, get_query_assembler
from geosearch.application.services.query_assembler import (
    ParentSearchParams,
    PlaceNameSearchParams,
    PostcodeSearchParams,
    QueryAssembler,
)
from geosearch.application.use_cases.create_boundary import CreateBoundaryUseCase
from geosearch.api.v1.schemas.search_schemas import (
    BoundaryRequestSchema,
    BoundaryResponseSchema,
    ErrorResponseSchema,
    SearchResultsResponseSchema,
)
from geosearch.domain.exceptions import InvalidRequestBody

router = APIRouter(
    prefix="/search",
    tags=["search"],
    responses={
        400: {"model": ErrorResponseSchema},
        404: {"model": ErrorResponseSchema},
        500: {"model": ErrorResponseSchema},
    },
)


@router.get("/postcodes/{postcode}", response_model=SearchResultsResponseSchema)
async def search_postcode(
    postcode: str,
    distance: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    relation: Optional[str] = None,
    assembler: QueryAssembler = Depends(get_query_assembler),
):
    """
    Find areal units within a distance of a postcode.

    `distance` is a number and unit separated by a comma, e.g. `1,km` or `5,miles`.
    """
    results = await assembler.assemble_and_run(
        PostcodeSearchParams(
            postcode=postcode,
            distance=distance or "",
            limit=limit,
            offset=offset,
            relation=relation,
        )
    )
    return SearchResultsResponseSchema(**results.to_dict())


@router.get("/parent/{boundary_id}", response_model=SearchResultsResponseSchema)
async def search_parent(
    boundary_id: str,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    assembler: QueryAssembler = Depends(get_query_assembler),
):
    """Find areal units intersecting a previously uploaded boundary."""
    results = await assembler.assemble_and_run(
        ParentSearchParams(boundary_id=boundary_id, limit=limit, offset=offset)
    )
    return SearchResultsResponseSchema(**results.to_dict())


@router.post(
    "/parent",
    response_model=BoundaryResponseSchema,
    status_code=status.HTTP_201_CREATED,
)
async def create_parent(
    request: Request,
    use_case: CreateBoundaryUseCase = Depends(get_create_boundary_use_case),
):
    """
    Upload a boundary shape.

    Body is `{"type": "polygon" | "multipolygon", "coordinates": [...]}` with
    points in [longitude, latitude] order. Returns the generated id to pass to
    `GET /search/parent/{id}`.
    """
    try:
        body = BoundaryRequestSchema.model_validate(await request.json())
    except (ValueError, ValidationError):
        raise InvalidRequestBody() from None

    created = await use_case.execute(body.type, body.coordinates)
    return BoundaryResponseSchema(id=created.id, location=created.location)


@router.get("/places/{name}", response_model=SearchResultsResponseSchema)
async def search_place_name(
    name: str,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    assembler: QueryAssembler = Depends(get_query_assembler),
):
    """Text search on area names, best match first. Items include their location."""
    results = await assembler.assemble_and_run(
        PlaceNameSearchParams(name=name, limit=limit, offset=offset)
    )
    return SearchResultsResponseSchema(**results.to_dict())

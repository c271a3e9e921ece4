"""Use case: store an uploaded boundary shape for later parent searches."""
import logging
from typing import Any

from geosearch.config import Settings
from geosearch.application.dto.search_dto import BoundaryCreatedDTO
from geosearch.domain.entities.boundary import BoundaryDocument
from geosearch.domain.exceptions import InvalidRequestError
from geosearch.domain.repositories.search_index import SearchIndex
from geosearch.domain.value_objects.geo_shape import validate_shape

logger = logging.getLogger(__name__)


class CreateBoundaryUseCase:
    """Validate a shape and index it under a freshly generated id."""

    def __init__(self, index: SearchIndex, settings: Settings):
        self._index = index
        self._settings = settings

    async def execute(self, shape_type: Any, coordinates: Any) -> BoundaryCreatedDTO:
        """Execute use case to create a boundary document.

        Args:
            shape_type: "polygon" or "multipolygon"
            coordinates: nested [longitude, latitude] points

        Returns:
            BoundaryCreatedDTO with the generated id and the stored shape

        Raises:
            InvalidRequestError: the shape fails validation
            UpstreamError: the index failed
        """
        try:
            shape = validate_shape(shape_type, coordinates)
        except InvalidRequestError as e:
            logger.warning(f"Rejected boundary upload: {e}")
            raise

        document = BoundaryDocument(location=shape)
        await self._index.index_document(self._settings.BOUNDARY_FILE_INDEX, document.to_dict())

        logger.info(f"Stored boundary {document.id} ({shape.type.value})")
        return BoundaryCreatedDTO(id=document.id, location=document.location.to_dict())

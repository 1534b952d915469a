"""Image lookup API router."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.dependencies import get_image_service
from app.schemas.image_schema import ImageLookupRequest, ImageResult
from app.schemas.response_schema import ApiResponse, success_response
from app.services.image_service import ImageLookupService

router = APIRouter(prefix="/api/v1/images", tags=["images"])

ImageServiceDep = Annotated[ImageLookupService, Depends(get_image_service)]


@router.post("", response_model=ApiResponse[dict[str, ImageResult]])
async def lookup_images(
    request: ImageLookupRequest,
    image_service: ImageServiceDep,
) -> dict:
    """Find an image for each name; misses come back with a null fallback."""
    result = await image_service.lookup(request.names)
    return success_response(result)

"""Image API endpoints."""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import FileResponse
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from pictureteam.auth.bearer import get_current_user, get_services
from pictureteam.auth.tokens import UserInfo
from pictureteam.schemas.image import (
    BindCategoriesRequest,
    CreateImageRequest,
    CreateImageResponse,
    ImageItem,
    ImageRatingResponse,
    RateImageRequest,
    SearchImagesResponse,
)
from pictureteam.services import ImageService, RatingService, Services
from pictureteam.services.storage import ImageStorage
from pictureteam.utils.logger import logger
from pictureteam.utils.serialization import serialize_uuid

router = APIRouter(prefix="/api/images", tags=["images"])


def get_image_service(services: Services = Depends(get_services)) -> ImageService:
    return services.images


def get_rating_service(services: Services = Depends(get_services)) -> RatingService:
    return services.ratings


@router.post("", response_model=CreateImageResponse)
def create_image(
    request: CreateImageRequest,
    user: UserInfo = Depends(get_current_user),
    image_service: ImageService = Depends(get_image_service),
) -> CreateImageResponse:
    """
    Create image metadata owned by the caller.

    The binary is uploaded afterwards with POST /api/images/{image_id}.

    Args:
        request: Title, optional description and category IDs

    Returns:
        ID of the created image
    """
    image_id = image_service.create(user.id, request.title, request.description, request.categories)
    return CreateImageResponse(id=serialize_uuid(image_id))


@router.get("", response_model=SearchImagesResponse)
def search_images(
    search: Optional[str] = Query(None, description="Text to match in title or description"),
    offset: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    _user: UserInfo = Depends(get_current_user),
    image_service: ImageService = Depends(get_image_service),
) -> SearchImagesResponse:
    """Search uploaded images."""
    images = image_service.search(search, offset, limit)
    return SearchImagesResponse(images=[ImageItem.from_orm(i) for i in images])


@router.post("/{image_id}", status_code=status.HTTP_204_NO_CONTENT)
async def upload_image(
    image_id: UUID,
    request: Request,
    _user: UserInfo = Depends(get_current_user),
    image_service: ImageService = Depends(get_image_service),
) -> Response:
    """
    Upload the binary for an image.

    Only the first file part of the multipart body is read.
    """
    form = await request.form()
    try:
        part = next(
            (value for _, value in form.multi_items() if isinstance(value, UploadFile)),
            None,
        )
        if part is None:
            await run_in_threadpool(image_service.save_image, image_id, None, None)
        else:
            await run_in_threadpool(image_service.save_image, image_id, part.filename, part.file)
    finally:
        await form.close()

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{image_id}")
def download_image(
    image_id: UUID,
    _user: UserInfo = Depends(get_current_user),
    image_service: ImageService = Depends(get_image_service),
) -> FileResponse:
    """Download an uploaded image."""
    path = image_service.get_image(image_id)
    logger.debug(f"Serving image {image_id} from {path}")
    return FileResponse(path, media_type=ImageStorage.content_type(path))


@router.get("/{image_id}/info", response_model=ImageItem)
def get_image_info(
    image_id: UUID,
    _user: UserInfo = Depends(get_current_user),
    image_service: ImageService = Depends(get_image_service),
) -> ImageItem:
    """Get image metadata and its categories."""
    return ImageItem.from_orm(image_service.get_image_info(image_id))


@router.put("/{image_id}/categories", status_code=status.HTTP_204_NO_CONTENT)
def bind_categories(
    image_id: UUID,
    request: BindCategoriesRequest,
    user: UserInfo = Depends(get_current_user),
    image_service: ImageService = Depends(get_image_service),
) -> Response:
    """Add missing category bindings to one of the caller's images."""
    image_service.bind_categories(image_id, user.id, request.categories)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{image_id}/rating", status_code=status.HTTP_204_NO_CONTENT)
def rate_image(
    image_id: UUID,
    request: RateImageRequest,
    user: UserInfo = Depends(get_current_user),
    rating_service: RatingService = Depends(get_rating_service),
) -> Response:
    """Rate another user's image from 1 to 5, replacing any earlier rating."""
    rating_service.rate(image_id, user.id, request.rating)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{image_id}/rating", response_model=ImageRatingResponse)
def get_image_rating(
    image_id: UUID,
    _user: UserInfo = Depends(get_current_user),
    rating_service: RatingService = Depends(get_rating_service),
) -> ImageRatingResponse:
    """Average rating and rating count of an image."""
    return ImageRatingResponse.from_summary(rating_service.ratings(image_id))

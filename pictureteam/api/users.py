"""User API endpoints."""
from typing import List

from fastapi import APIRouter, Depends

from pictureteam.api.images import get_image_service, get_rating_service
from pictureteam.auth.bearer import get_current_user
from pictureteam.auth.tokens import UserInfo
from pictureteam.schemas.image import ImageItem, UserRatingItem
from pictureteam.services import ImageService, RatingService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me/images", response_model=List[ImageItem])
def get_my_images(
    user: UserInfo = Depends(get_current_user),
    image_service: ImageService = Depends(get_image_service),
) -> List[ImageItem]:
    """All images owned by the caller, uploaded or not."""
    return [ImageItem.from_orm(i) for i in image_service.images_by_owner(user.id)]


@router.get("/ratings", response_model=List[UserRatingItem])
def get_user_ratings(
    _user: UserInfo = Depends(get_current_user),
    rating_service: RatingService = Depends(get_rating_service),
) -> List[UserRatingItem]:
    """Average rating each user has received on their images."""
    return [UserRatingItem.from_orm(r) for r in rating_service.user_averages()]

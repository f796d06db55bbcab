"""Schemas for images and ratings."""
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, Field

from pictureteam.services.images import ImageWithCategories
from pictureteam.services.ratings import RatingSummary, UserRating
from pictureteam.utils.serialization import serialize_datetime, serialize_uuid, serialize_uuids


class CreateImageRequest(BaseModel):
    """Request schema for /api/images endpoint."""
    title: str
    description: Optional[str] = None
    categories: List[UUID] = Field(default_factory=list, description="Category IDs")


class CreateImageResponse(BaseModel):
    id: str


class BindCategoriesRequest(BaseModel):
    categories: List[UUID]


class ImageItem(BaseModel):
    id: str
    ownerId: str
    title: str
    description: Optional[str] = None
    categories: List[str]
    created: Optional[str] = None
    uploadDate: Optional[str] = None

    @classmethod
    def from_orm(cls, obj: ImageWithCategories) -> "ImageItem":
        """Convert an image and its categories to response model."""
        image = obj.image
        return cls(
            id=serialize_uuid(image.id),
            ownerId=serialize_uuid(image.owner_id),
            title=image.title,
            description=image.description,
            categories=serialize_uuids(c.id for c in obj.categories),
            created=serialize_datetime(image.created),
            uploadDate=serialize_datetime(image.upload_date),
        )


class SearchImagesResponse(BaseModel):
    images: List[ImageItem]


class RateImageRequest(BaseModel):
    """Request schema for /api/images/{id}/rating endpoint."""
    rating: int = Field(..., description="Rating between 1 and 5")


class ImageRatingResponse(BaseModel):
    average: float
    ratingCount: int

    @classmethod
    def from_summary(cls, summary: RatingSummary) -> "ImageRatingResponse":
        return cls(average=summary.average, ratingCount=summary.count)


class UserRatingItem(BaseModel):
    email: str
    averageRating: Optional[float] = None

    @classmethod
    def from_orm(cls, obj: UserRating) -> "UserRatingItem":
        return cls(email=obj.email, averageRating=obj.average_rating)

"""Schemas for category management."""
from typing import List
from pydantic import BaseModel, Field

from pictureteam.services.categories import CategoryWithCount
from pictureteam.utils.serialization import serialize_uuid


class CategoryRequest(BaseModel):
    """Request schema for creating or renaming a category."""
    name: str = Field(..., description="Alphabetic category name")


class CreateCategoryResponse(BaseModel):
    id: str


class CategoryItem(BaseModel):
    id: str
    name: str
    imageCount: int

    @classmethod
    def from_orm(cls, obj: CategoryWithCount) -> "CategoryItem":
        """Convert a category with its image count to response model."""
        return cls(
            id=serialize_uuid(obj.category.id),
            name=obj.category.name,
            imageCount=obj.image_count,
        )


class CategoriesResponse(BaseModel):
    categories: List[CategoryItem]

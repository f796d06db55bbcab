"""Pydantic schemas for request/response validation."""
from pictureteam.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from pictureteam.schemas.category import CategoriesResponse, CategoryRequest, CreateCategoryResponse
from pictureteam.schemas.image import (
    CreateImageRequest,
    CreateImageResponse,
    ImageItem,
    ImageRatingResponse,
    RateImageRequest,
    SearchImagesResponse,
)

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "RegisterResponse",
    "CategoriesResponse",
    "CategoryRequest",
    "CreateCategoryResponse",
    "CreateImageRequest",
    "CreateImageResponse",
    "ImageItem",
    "ImageRatingResponse",
    "RateImageRequest",
    "SearchImagesResponse",
]

"""Category API endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from pictureteam.auth.bearer import get_current_user, get_services, require_admin
from pictureteam.auth.tokens import UserInfo
from pictureteam.schemas.category import (
    CategoriesResponse,
    CategoryItem,
    CategoryRequest,
    CreateCategoryResponse,
)
from pictureteam.services import CategoryService, Services
from pictureteam.utils.serialization import serialize_uuid

router = APIRouter(prefix="/api/categories", tags=["categories"])


def get_category_service(services: Services = Depends(get_services)) -> CategoryService:
    return services.categories


@router.get("", response_model=CategoriesResponse)
def get_categories(
    _user: UserInfo = Depends(get_current_user),
    category_service: CategoryService = Depends(get_category_service),
) -> CategoriesResponse:
    """List all categories with the number of images in each."""
    categories = category_service.list()
    return CategoriesResponse(categories=[CategoryItem.from_orm(c) for c in categories])


@router.post("", response_model=CreateCategoryResponse)
def create_category(
    request: CategoryRequest,
    _admin: UserInfo = Depends(require_admin),
    category_service: CategoryService = Depends(get_category_service),
) -> CreateCategoryResponse:
    """
    Create a new category. Admin only.

    Args:
        request: Category name

    Returns:
        ID of the created category
    """
    category_id = category_service.create(request.name)
    return CreateCategoryResponse(id=serialize_uuid(category_id))


@router.put("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def rename_category(
    category_id: UUID,
    request: CategoryRequest,
    _admin: UserInfo = Depends(require_admin),
    category_service: CategoryService = Depends(get_category_service),
) -> Response:
    """Rename a category. Admin only."""
    category_service.rename(category_id, request.name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: UUID,
    _admin: UserInfo = Depends(require_admin),
    category_service: CategoryService = Depends(get_category_service),
) -> Response:
    """Delete a category and detach it from all images. Admin only."""
    category_service.delete(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

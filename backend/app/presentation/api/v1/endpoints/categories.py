"""Category endpoints: public reads and admin CRUD."""

from fastapi import APIRouter, Depends, Query, Request, status

from app.application.schemas import (
    ApiResponse,
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    DeletedResponse,
    PaginatedData,
)
from app.application.services import CategoryService
from app.domain.entities import Category, User
from app.infrastructure.dependencies import get_category_service, require_admin
from app.presentation.api.responses import ok, paginated

router = APIRouter(prefix="/categories", tags=["Categories"])


def _to_response(category: Category) -> CategoryResponse:
    return CategoryResponse.model_validate(category, from_attributes=True)


@router.get("", response_model=ApiResponse[PaginatedData[CategoryResponse]])
async def list_categories(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    active: bool | None = None,
    search: str | None = Query(None, max_length=200),
    service: CategoryService = Depends(get_category_service),
) -> ApiResponse[PaginatedData[CategoryResponse]]:
    result = await service.list_categories(page=page, limit=limit, active=active, search=search)
    return ok(request, paginated(result, _to_response), "Categories retrieved")


@router.get("/slug/{slug}", response_model=ApiResponse[CategoryResponse])
async def get_category_by_slug(
    slug: str,
    request: Request,
    service: CategoryService = Depends(get_category_service),
) -> ApiResponse[CategoryResponse]:
    category = await service.get_by_slug(slug)
    return ok(request, _to_response(category), "Category retrieved")


@router.get("/{category_id}", response_model=ApiResponse[CategoryResponse])
async def get_category(
    category_id: str,
    request: Request,
    service: CategoryService = Depends(get_category_service),
) -> ApiResponse[CategoryResponse]:
    category = await service.get_category(category_id)
    return ok(request, _to_response(category), "Category retrieved")


@router.post(
    "",
    response_model=ApiResponse[CategoryResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    data: CategoryCreate,
    request: Request,
    _admin: User = Depends(require_admin),
    service: CategoryService = Depends(get_category_service),
) -> ApiResponse[CategoryResponse]:
    category = await service.create_category(data)
    return ok(request, _to_response(category), "Category created", status.HTTP_201_CREATED)


@router.patch("/{category_id}", response_model=ApiResponse[CategoryResponse])
async def update_category(
    category_id: str,
    data: CategoryUpdate,
    request: Request,
    _admin: User = Depends(require_admin),
    service: CategoryService = Depends(get_category_service),
) -> ApiResponse[CategoryResponse]:
    category = await service.update_category(category_id, data)
    return ok(request, _to_response(category), "Category updated")


@router.delete("/{category_id}", response_model=ApiResponse[DeletedResponse])
async def delete_category(
    category_id: str,
    request: Request,
    _admin: User = Depends(require_admin),
    service: CategoryService = Depends(get_category_service),
) -> ApiResponse[DeletedResponse]:
    await service.delete_category(category_id)
    return ok(request, DeletedResponse(deleted=True, id=category_id), "Category deleted")

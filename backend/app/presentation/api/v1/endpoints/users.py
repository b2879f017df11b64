"""User administration endpoints."""

from fastapi import APIRouter, Depends, Query, Request, status

from app.application.schemas import (
    ApiResponse,
    PasswordChange,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from app.application.services import UserService
from app.domain.entities import User
from app.infrastructure.dependencies import get_current_user, get_user_service, require_admin
from app.presentation.api.responses import ok

router = APIRouter(prefix="/users", tags=["Users"])


def _to_response(user: User) -> UserResponse:
    return UserResponse.model_validate(user, from_attributes=True)


@router.get("", response_model=ApiResponse[list[UserResponse]])
async def list_users(
    request: Request,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    _admin: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[list[UserResponse]]:
    users = await service.list_users(skip=skip, limit=limit)
    return ok(request, [_to_response(u) for u in users], "Users retrieved")


@router.post(
    "",
    response_model=ApiResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    data: UserCreate,
    request: Request,
    _admin: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[UserResponse]:
    user = await service.create_user(data)
    return ok(request, _to_response(user), "User created", status.HTTP_201_CREATED)


@router.patch("/me/password", response_model=ApiResponse[UserResponse])
async def change_own_password(
    data: PasswordChange,
    request: Request,
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[UserResponse]:
    user = await service.change_password(user, data)
    return ok(request, _to_response(user), "Password changed")


@router.get("/{user_id}", response_model=ApiResponse[UserResponse])
async def get_user(
    user_id: str,
    request: Request,
    _admin: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[UserResponse]:
    user = await service.get_user(user_id)
    return ok(request, _to_response(user), "User retrieved")


@router.patch("/{user_id}", response_model=ApiResponse[UserResponse])
async def update_user(
    user_id: str,
    data: UserUpdate,
    request: Request,
    _admin: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[UserResponse]:
    user = await service.update_user(user_id, data)
    return ok(request, _to_response(user), "User updated")

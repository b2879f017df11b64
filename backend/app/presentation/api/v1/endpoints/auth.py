"""Sign-in endpoints."""

from fastapi import APIRouter, Depends, Request

from app.application.schemas import ApiResponse, LoginRequest, LoginResponse, UserResponse
from app.application.services import AuthService
from app.domain.entities import User
from app.infrastructure.dependencies import get_auth_service, get_current_user
from app.presentation.api.responses import ok

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(
    data: LoginRequest,
    request: Request,
    service: AuthService = Depends(get_auth_service),
) -> ApiResponse[LoginResponse]:
    result = await service.login(data.email, data.password)
    body = LoginResponse(
        user=UserResponse.model_validate(result.user, from_attributes=True),
        token=result.token,
        expires_in=result.expires_in,
    )
    return ok(request, body, "Login successful")


@router.get("/me", response_model=ApiResponse[UserResponse])
async def me(
    request: Request,
    user: User = Depends(get_current_user),
) -> ApiResponse[UserResponse]:
    return ok(request, UserResponse.model_validate(user, from_attributes=True), "Current user")


@router.post("/logout", response_model=ApiResponse[bool])
async def logout(
    request: Request,
    user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> ApiResponse[bool]:
    return ok(request, await service.logout(user), "Logged out")

"""Top-level API router: mounts the versioned routers under /api."""

from fastapi import APIRouter

from app.application.schemas import ApiResponse
from app.presentation.api.v1.router import router as v1_router

# Failure envelopes shared by every route, documented once for OpenAPI.
_ERROR_RESPONSES = {
    400: {"model": ApiResponse[None], "description": "Invalid input"},
    404: {"model": ApiResponse[None], "description": "Resource not found"},
    422: {"model": ApiResponse[None], "description": "Request validation failed"},
    500: {"model": ApiResponse[None], "description": "Unexpected server error"},
}

router = APIRouter(prefix="/api", responses=_ERROR_RESPONSES)
router.include_router(v1_router)

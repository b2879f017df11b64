"""Envelope builders used by every endpoint and exception handler."""

from datetime import datetime, timezone
from typing import Any, Callable, TypeVar

from fastapi import Request
from pydantic import BaseModel

from app.application.schemas import ApiResponse, PaginatedData
from app.domain.entities import Page

T = TypeVar("T")
S = TypeVar("S", bound=BaseModel)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def ok(request: Request, data: T, message: str = "OK", status_code: int = 200) -> ApiResponse[T]:
    """Wrap a successful result."""
    return ApiResponse(
        success=True,
        status_code=status_code,
        message=message,
        data=data,
        error=None,
        timestamp=_timestamp(),
        path=request.url.path,
    )


def paginated(page: Page[Any], to_schema: Callable[[Any], S]) -> PaginatedData[S]:
    return PaginatedData(
        items=[to_schema(item) for item in page.items],
        total=page.total,
        page=page.page,
        limit=page.limit,
        total_pages=page.total_pages,
    )


def failure_body(request: Request, status_code: int, message: str, error: str) -> dict[str, Any]:
    """JSON-ready failure envelope (``data`` is always null)."""
    envelope = ApiResponse[None](
        success=False,
        status_code=status_code,
        message=message,
        data=None,
        error=error,
        timestamp=_timestamp(),
        path=request.url.path,
    )
    return envelope.model_dump(by_alias=True)

"""Response envelope shared by every endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base DTO: camelCase on the wire, snake_case in Python.

    Request bodies accept either spelling; responses are always camelCase.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(CamelModel, Generic[T]):
    """Uniform success/failure wrapper: ``{success, statusCode, message, data, error, timestamp}``."""

    success: bool
    status_code: int
    message: str
    data: T | None = None
    error: str | None = None
    timestamp: str
    path: str | None = None


class PaginatedData(CamelModel, Generic[T]):
    """One page of results."""

    items: list[T]
    total: int
    page: int
    limit: int
    total_pages: int


class DeletedResponse(CamelModel):
    deleted: bool
    id: str

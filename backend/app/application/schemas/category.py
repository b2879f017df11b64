"""Pydantic DTOs for the Category feature."""

from datetime import datetime

from pydantic import Field

from .common import CamelModel


class CategoryCreate(CamelModel):
    """Schema for creating a new category."""

    name: str = Field(..., min_length=1, max_length=120, examples=["Piante da frutto"])
    slug: str | None = Field(None, max_length=160)
    description: str = ""
    display_order: int = Field(0, ge=0)
    active: bool = True


class CategoryUpdate(CamelModel):
    """Schema for updating an existing category: all fields optional."""

    name: str | None = Field(None, min_length=1, max_length=120)
    slug: str | None = Field(None, min_length=1, max_length=160)
    description: str | None = None
    display_order: int | None = Field(None, ge=0)
    active: bool | None = None


class CategoryResponse(CamelModel):
    id: str
    name: str
    slug: str
    description: str
    display_order: int
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

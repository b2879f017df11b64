"""Pydantic DTOs (Data Transfer Objects) for the Article feature."""

from datetime import datetime
from typing import Any

import bleach
from pydantic import Field, computed_field, field_validator

from .common import CamelModel

_ALLOWED_TAGS = [
    "a", "b", "i", "em", "strong", "p", "br", "ul", "ol", "li", "h1", "h2", "h3", "h4",
]
_ALLOWED_ATTRIBUTES = {"a": ["href", "target", "rel"]}


def _sanitize_html(value: str | None) -> str | None:
    if value is None:
        return None
    return bleach.clean(value, tags=_ALLOWED_TAGS, attributes=_ALLOWED_ATTRIBUTES, strip=True)


# ── Nested groups ────────────────────────────────────────────────────


class SoilPhSchema(CamelModel):
    min: float | None = Field(None, ge=0, le=14)
    max: float | None = Field(None, ge=0, le=14)
    optimal: float | None = Field(None, ge=0, le=14)

    model_config = {"from_attributes": True}


class CareInfoSchema(CamelModel):
    watering: str | None = None
    sun_exposure: str | None = None
    soil_type: str | None = None
    soil_ph: SoilPhSchema = Field(default_factory=SoilPhSchema)
    fertilizing: str | None = None
    pruning: str | None = None
    extra_care: str | None = None

    model_config = {"from_attributes": True}


class GrowingConditionsSchema(CamelModel):
    hardiness: str | None = None
    ideal_temperature: str | None = None
    humidity: str | None = None
    growth_rate: str | None = None
    difficulty: str | None = None
    indoor_outdoor: str | None = None

    model_config = {"from_attributes": True}


class PestsDiseasesSchema(CamelModel):
    common_pests: list[str] = Field(default_factory=list)
    common_diseases: list[str] = Field(default_factory=list)
    prevention: list[str] = Field(default_factory=list)
    treatments: list[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class PlantTraitsSchema(CamelModel):
    edible: bool = False
    edible_parts: list[str] = Field(default_factory=list)
    toxic_to_humans: bool = False
    toxic_to_animals: bool = False
    invasive: bool = False
    invasive_potential: str | None = None
    bloom_season: str | None = None
    flower_colors: list[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class ArticleImageSchema(CamelModel):
    url: str = Field(..., min_length=1)
    alt_text: str
    primary: bool = False

    model_config = {"from_attributes": True}


class ProductLinkSchema(CamelModel):
    url: str = Field(..., min_length=1)
    description: str
    amazon_affiliate: bool = False

    model_config = {"from_attributes": True}


# ── Requests ─────────────────────────────────────────────────────────


class ArticleCreate(CamelModel):
    """Schema for creating a new article."""

    title: str = Field(..., min_length=1, max_length=255, examples=["Rosa canina"])
    description: str = Field(..., min_length=1, examples=["Wild dog rose, hardy and thorny."])
    content: str | None = None
    slug: str | None = Field(None, max_length=300)
    primary_category_id: str
    secondary_category_ids: list[str] = Field(default_factory=list)
    published: bool = False
    featured: bool = False
    display_order: int = Field(0, ge=0)
    cover_image: str | None = None
    images: list[ArticleImageSchema] = Field(default_factory=list)
    product_links: list[ProductLinkSchema] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)
    care_info: CareInfoSchema = Field(default_factory=CareInfoSchema)
    growing_conditions: GrowingConditionsSchema = Field(default_factory=GrowingConditionsSchema)
    pests_diseases: PestsDiseasesSchema = Field(default_factory=PestsDiseasesSchema)
    plant_traits: PlantTraitsSchema = Field(default_factory=PlantTraitsSchema)

    @field_validator("content")
    @classmethod
    def sanitize_content(cls, v: str | None) -> str | None:
        return _sanitize_html(v)


class ArticleUpdate(CamelModel):
    """Schema for updating an existing article: all fields optional."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, min_length=1)
    content: str | None = None
    slug: str | None = Field(None, min_length=1, max_length=300)
    primary_category_id: str | None = None
    secondary_category_ids: list[str] | None = None
    published: bool | None = None
    featured: bool | None = None
    display_order: int | None = Field(None, ge=0)
    cover_image: str | None = None
    images: list[ArticleImageSchema] | None = None
    product_links: list[ProductLinkSchema] | None = None
    tags: list[str] | None = None
    metadata: dict[str, Any] | None = None
    care_info: CareInfoSchema | None = None
    growing_conditions: GrowingConditionsSchema | None = None
    pests_diseases: PestsDiseasesSchema | None = None
    plant_traits: PlantTraitsSchema | None = None

    @field_validator("content")
    @classmethod
    def sanitize_content(cls, v: str | None) -> str | None:
        return _sanitize_html(v)


class LikeRequest(CamelModel):
    """Anonymous like toggle: the identifier is opaque and caller-chosen."""

    identifier: str = Field(..., min_length=1, max_length=200)
    fingerprint: str | None = Field(None, max_length=500)


# ── Responses ────────────────────────────────────────────────────────


class ArticleResponse(CamelModel):
    """Schema returned to the client. The like ledger itself is never exposed."""

    id: str
    title: str
    description: str
    content: str | None
    slug: str
    primary_category_id: str
    secondary_category_ids: list[str]
    published: bool
    featured: bool
    display_order: int
    cover_image: str | None
    images: list[ArticleImageSchema]
    product_links: list[ProductLinkSchema]
    tags: list[str]
    views: int
    like_count: int
    published_at: datetime | None
    metadata: dict[str, Any]
    care_info: CareInfoSchema
    growing_conditions: GrowingConditionsSchema
    pests_diseases: PestsDiseasesSchema
    plant_traits: PlantTraitsSchema
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def url(self) -> str:
        return f"/articles/{self.slug}"


class LikeResponse(CamelModel):
    liked: bool
    count: int

"""Query value objects for filtered, paginated article and category listings."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ArticleOrdering(str, Enum):
    TITLE_ASC = "title_asc"
    TITLE_DESC = "title_desc"
    DATE_ASC = "date_asc"
    DATE_DESC = "date_desc"
    POPULARITY = "popularity"
    VIEWS = "views"

    @classmethod
    def parse(cls, value: "str | ArticleOrdering | None") -> "ArticleOrdering":
        """Map a raw ordering value; anything unrecognised falls back to DATE_DESC."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.DATE_DESC


@dataclass
class ArticleFilters:
    """Optional article filters, AND-ed together. List filters match any member."""

    published: bool | None = None
    featured: bool | None = None
    primary_category_id: str | None = None
    secondary_category_ids: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    search: str | None = None
    edible: bool | None = None
    invasive: bool | None = None
    toxic_to_humans: bool | None = None
    toxic_to_animals: bool | None = None
    bloom_season: str | None = None
    soil_ph_min: float | None = None
    soil_ph_max: float | None = None
    ordering: ArticleOrdering = ArticleOrdering.DATE_DESC


@dataclass
class Page(Generic[T]):
    """One page of results plus the total match count."""

    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

"""Domain entities: pure Python business objects, no framework dependencies."""

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime, timezone
from typing import Any

from app.domain.entities.engagement import (
    DailyAttemptCounter,
    IdentifierDailyTally,
    LikeLedger,
)
from app.domain.identifiers import new_id
from app.domain.slug import slugify


def _from_dict(cls, raw: dict[str, Any] | None):
    """Build a flat dataclass from a dict, ignoring unknown keys."""
    names = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in (raw or {}).items() if k in names})


@dataclass
class SoilPh:
    min: float | None = None
    max: float | None = None
    optimal: float | None = None


@dataclass
class CareInfo:
    watering: str | None = None
    sun_exposure: str | None = None
    soil_type: str | None = None
    soil_ph: SoilPh = field(default_factory=SoilPh)
    fertilizing: str | None = None
    pruning: str | None = None
    extra_care: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any] | None) -> "CareInfo":
        raw = dict(raw or {})
        soil_ph = _from_dict(SoilPh, raw.pop("soil_ph", None))
        info = _from_dict(cls, raw)
        info.soil_ph = soil_ph
        return info


@dataclass
class GrowingConditions:
    hardiness: str | None = None
    ideal_temperature: str | None = None
    humidity: str | None = None
    growth_rate: str | None = None
    difficulty: str | None = None
    indoor_outdoor: str | None = None


@dataclass
class PestsDiseases:
    common_pests: list[str] = field(default_factory=list)
    common_diseases: list[str] = field(default_factory=list)
    prevention: list[str] = field(default_factory=list)
    treatments: list[str] = field(default_factory=list)


@dataclass
class PlantTraits:
    edible: bool = False
    edible_parts: list[str] = field(default_factory=list)
    toxic_to_humans: bool = False
    toxic_to_animals: bool = False
    invasive: bool = False
    invasive_potential: str | None = None
    bloom_season: str | None = None
    flower_colors: list[str] = field(default_factory=list)


@dataclass
class ArticleImage:
    url: str
    alt_text: str
    primary: bool = False


@dataclass
class ProductLink:
    url: str
    description: str
    amazon_affiliate: bool = False


def _unique(values: list[str]) -> list[str]:
    return list(dict.fromkeys(v for v in values if v))


@dataclass
class Article:
    """Core domain entity representing a plant-care article."""

    title: str
    description: str
    primary_category_id: str
    content: str | None = None
    slug: str = ""
    secondary_category_ids: list[str] = field(default_factory=list)
    published: bool = False
    featured: bool = False
    display_order: int = 0
    cover_image: str | None = None
    images: list[ArticleImage] = field(default_factory=list)
    product_links: list[ProductLink] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    views: int = 0
    like_count: int = 0
    likes: LikeLedger = field(default_factory=LikeLedger)
    like_attempts: DailyAttemptCounter = field(default_factory=DailyAttemptCounter)
    like_tally: IdentifierDailyTally = field(default_factory=IdentifierDailyTally)
    published_at: datetime | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    care_info: CareInfo = field(default_factory=CareInfo)
    growing_conditions: GrowingConditions = field(default_factory=GrowingConditions)
    pests_diseases: PestsDiseases = field(default_factory=PestsDiseases)
    plant_traits: PlantTraits = field(default_factory=PlantTraits)
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.slug:
            self.slug = slugify(self.title)
        self.tags = _unique(self.tags)
        self.secondary_category_ids = _unique(self.secondary_category_ids)
        if self.published and self.published_at is None:
            self.published_at = self.created_at
        self.sync_like_count()

    def sync_like_count(self) -> int:
        """Re-derive like_count from the ledger."""
        self.like_count = len(self.likes)
        return self.like_count

    def set_published(self, published: bool) -> None:
        """Toggle visibility; the publish timestamp is set only the first time."""
        self.published = published
        if published and self.published_at is None:
            self.published_at = datetime.now(timezone.utc)

    def update(self, **changes: Any) -> None:
        """Apply a partial update and refresh the updated_at timestamp.

        Only keys present in *changes* are touched; ``slug`` is replaced
        only when a new one is given explicitly.
        """
        for name, value in changes.items():
            if name == "published":
                self.set_published(bool(value))
            elif name == "slug":
                if value:
                    self.slug = value
            elif name in ("tags", "secondary_category_ids"):
                setattr(self, name, _unique(value or []))
            elif name in _ARTICLE_UPDATABLE:
                setattr(self, name, value)
            else:
                raise AttributeError(f"Article field '{name}' cannot be updated")
        self.updated_at = datetime.now(timezone.utc)

    def nested_as_dict(self, name: str) -> dict[str, Any]:
        """Plain-dict form of a nested attribute group, for persistence."""
        return asdict(getattr(self, name))


_ARTICLE_UPDATABLE = frozenset({
    "title",
    "description",
    "content",
    "primary_category_id",
    "featured",
    "display_order",
    "cover_image",
    "images",
    "product_links",
    "metadata",
    "care_info",
    "growing_conditions",
    "pests_diseases",
    "plant_traits",
})


def growing_conditions_from_dict(raw: dict[str, Any] | None) -> GrowingConditions:
    return _from_dict(GrowingConditions, raw)


def pests_diseases_from_dict(raw: dict[str, Any] | None) -> PestsDiseases:
    return _from_dict(PestsDiseases, raw)


def plant_traits_from_dict(raw: dict[str, Any] | None) -> PlantTraits:
    return _from_dict(PlantTraits, raw)

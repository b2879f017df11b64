"""Domain entity: article grouping with a unique name and slug."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from app.domain.identifiers import new_id
from app.domain.slug import slugify


@dataclass
class Category:
    """A named grouping of articles."""

    name: str
    slug: str = ""
    description: str = ""
    display_order: int = 0
    active: bool = True
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.slug:
            self.slug = slugify(self.name)

    def update(
        self,
        name: str | None = None,
        slug: str | None = None,
        description: str | None = None,
        display_order: int | None = None,
        active: bool | None = None,
    ) -> None:
        """Update category fields and refresh the updated_at timestamp."""
        if name is not None:
            self.name = name
        if slug:
            self.slug = slug
        if description is not None:
            self.description = description
        if display_order is not None:
            self.display_order = display_order
        if active is not None:
            self.active = active
        self.updated_at = datetime.now(timezone.utc)

"""Abstract repository interface (port) for categories."""

from abc import ABC, abstractmethod

from app.domain.entities import Category


class CategoryRepository(ABC):
    """Port for category persistence: implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, category_id: str) -> Category | None:
        ...

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Category | None:
        ...

    @abstractmethod
    async def find_conflict(
        self,
        name: str | None,
        slug: str | None,
        exclude_id: str | None = None,
    ) -> Category | None:
        """Return a category (other than *exclude_id*) holding *name* or *slug*."""
        ...

    @abstractmethod
    async def search(
        self,
        *,
        active: bool | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> list[Category]:
        """Filtered page ordered by display order, then name."""
        ...

    @abstractmethod
    async def count(self, *, active: bool | None = None, search: str | None = None) -> int:
        ...

    @abstractmethod
    async def create(self, category: Category) -> Category:
        ...

    @abstractmethod
    async def update(self, category: Category) -> Category:
        ...

    @abstractmethod
    async def delete(self, category_id: str) -> bool:
        """Delete a category. Returns True if deleted, False if not found."""
        ...

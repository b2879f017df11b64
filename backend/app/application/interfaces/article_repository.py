"""Abstract repository interfaces (ports): define the contract, not the implementation."""

from abc import ABC, abstractmethod

from app.domain.entities import Article, ArticleFilters


class ArticleRepository(ABC):
    """Port for article persistence: implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, article_id: str) -> Article | None:
        """Retrieve a single article by its ID."""
        ...

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Article | None:
        """Retrieve a single article by its slug."""
        ...

    @abstractmethod
    async def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        """True when another article already uses *slug*."""
        ...

    @abstractmethod
    async def search(
        self,
        filters: ArticleFilters,
        skip: int = 0,
        limit: int = 10,
    ) -> list[Article]:
        """Return one page of articles matching *filters*, in ``filters.ordering``."""
        ...

    @abstractmethod
    async def count(self, filters: ArticleFilters) -> int:
        """Count the articles matching *filters*."""
        ...

    @abstractmethod
    async def find_related(self, article: Article, limit: int = 4) -> list[Article]:
        """Published articles sharing a category or tag with *article*, newest first."""
        ...

    @abstractmethod
    async def count_by_category(self, category_id: str) -> int:
        """Count articles using *category_id* as primary or secondary category."""
        ...

    @abstractmethod
    async def increment_views(self, article_id: str) -> None:
        """Atomically add one to the article's view counter."""
        ...

    @abstractmethod
    async def create(self, article: Article) -> Article:
        """Persist a new article and return it."""
        ...

    @abstractmethod
    async def update(self, article: Article) -> Article:
        """Update an existing article."""
        ...

    @abstractmethod
    async def delete(self, article_id: str) -> bool:
        """Delete an article. Returns True if deleted, False if not found."""
        ...

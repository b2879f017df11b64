"""Application service (use case) for Category operations."""

import logging

from app.application.interfaces import ArticleRepository, CategoryRepository
from app.application.schemas import CategoryCreate, CategoryUpdate
from app.domain.entities import Category, Page
from app.domain.exceptions import DuplicateEntityError, EntityInUseError, EntityNotFoundError
from app.domain.identifiers import ensure_valid_id
from app.domain.slug import slugify

logger = logging.getLogger(__name__)


class CategoryService:
    """Orchestrates category CRUD with name/slug uniqueness."""

    def __init__(self, repository: CategoryRepository, articles: ArticleRepository):
        self._repository = repository
        self._articles = articles

    async def get_category(self, category_id: str) -> Category:
        ensure_valid_id(category_id, "category id")
        category = await self._repository.get_by_id(category_id)
        if category is None:
            logger.warning("Category %s not found", category_id)
            raise EntityNotFoundError("Category", category_id)
        return category

    async def get_by_slug(self, slug: str) -> Category:
        category = await self._repository.get_by_slug(slug)
        if category is None:
            logger.warning("Category with slug %s not found", slug)
            raise EntityNotFoundError("Category", slug, field="slug")
        return category

    async def list_categories(
        self,
        page: int = 1,
        limit: int = 10,
        active: bool | None = None,
        search: str | None = None,
    ) -> Page[Category]:
        skip = (page - 1) * limit
        items = await self._repository.search(active=active, search=search, skip=skip, limit=limit)
        total = await self._repository.count(active=active, search=search)
        return Page(items=items, total=total, page=page, limit=limit)

    async def create_category(self, data: CategoryCreate) -> Category:
        logger.info("Creating category: %s", data.name)
        slug = data.slug or slugify(data.name)
        await self._ensure_unique(data.name, slug)

        category = Category(
            name=data.name,
            slug=slug,
            description=data.description,
            display_order=data.display_order,
            active=data.active,
        )
        return await self._repository.create(category)

    async def update_category(self, category_id: str, data: CategoryUpdate) -> Category:
        logger.info("Updating category %s", category_id)
        category = await self.get_category(category_id)
        if data.name or data.slug:
            await self._ensure_unique(data.name, data.slug, exclude_id=category.id)

        category.update(
            name=data.name,
            slug=data.slug,
            description=data.description,
            display_order=data.display_order,
            active=data.active,
        )
        return await self._repository.update(category)

    async def delete_category(self, category_id: str) -> bool:
        logger.info("Deleting category %s", category_id)
        await self.get_category(category_id)
        in_use = await self._articles.count_by_category(category_id)
        if in_use:
            logger.warning("Category %s still used by %d article(s)", category_id, in_use)
            raise EntityInUseError("Category", category_id, in_use)
        deleted = await self._repository.delete(category_id)
        if not deleted:
            logger.warning("Category %s not found for deletion", category_id)
            raise EntityNotFoundError("Category", category_id)
        return deleted

    async def _ensure_unique(
        self,
        name: str | None,
        slug: str | None,
        exclude_id: str | None = None,
    ) -> None:
        existing = await self._repository.find_conflict(name, slug, exclude_id=exclude_id)
        if existing is None:
            return
        if name is not None and existing.name == name:
            raise DuplicateEntityError("Category", "name", name)
        raise DuplicateEntityError("Category", "slug", slug or existing.slug)

"""Application service (use case) for Article operations."""

import logging
from typing import Any

from app.application.interfaces import ArticleRepository, CategoryRepository
from app.application.schemas import ArticleCreate, ArticleUpdate
from app.domain.entities import (
    Article,
    ArticleFilters,
    ArticleImage,
    ArticleOrdering,
    CareInfo,
    Page,
    ProductLink,
)
from app.domain.entities.article import (
    growing_conditions_from_dict,
    pests_diseases_from_dict,
    plant_traits_from_dict,
)
from app.domain.exceptions import DomainError, DuplicateEntityError, EntityNotFoundError
from app.domain.identifiers import ensure_valid_id
from app.domain.like_guard import AnonymousLikeGuard, LikeOutcome
from app.domain.slug import slugify

logger = logging.getLogger(__name__)

_NULLABLE_FIELDS = frozenset({"content", "cover_image"})
_NESTED_BUILDERS = {
    "care_info": CareInfo.from_dict,
    "growing_conditions": growing_conditions_from_dict,
    "pests_diseases": pests_diseases_from_dict,
    "plant_traits": plant_traits_from_dict,
}


def _domain_values(raw: dict[str, Any]) -> dict[str, Any]:
    """Convert dumped DTO values into domain value objects."""
    values = dict(raw)
    for name, build in _NESTED_BUILDERS.items():
        if values.get(name) is not None:
            values[name] = build(values[name])
    if values.get("images") is not None:
        values["images"] = [ArticleImage(**img) for img in values["images"]]
    if values.get("product_links") is not None:
        values["product_links"] = [ProductLink(**link) for link in values["product_links"]]
    return values


class ArticleService:
    """Orchestrates article business logic. Depends on the repository ports (DI)."""

    def __init__(
        self,
        repository: ArticleRepository,
        categories: CategoryRepository,
        like_guard: AnonymousLikeGuard | None = None,
    ):
        self._repository = repository
        self._categories = categories
        self._like_guard = like_guard or AnonymousLikeGuard()

    # ── Reads ────────────────────────────────────────────────────────

    async def get_article(self, article_id: str, published_only: bool = False) -> Article:
        ensure_valid_id(article_id, "article id")
        article = await self._repository.get_by_id(article_id)
        if article is None or (published_only and not article.published):
            logger.warning("Article %s not found", article_id)
            raise EntityNotFoundError("Article", article_id)
        return article

    async def get_by_slug(
        self,
        slug: str,
        increment_views: bool = False,
        published_only: bool = False,
    ) -> Article:
        article = await self._repository.get_by_slug(slug)
        if article is None or (published_only and not article.published):
            logger.warning("Article with slug %s not found", slug)
            raise EntityNotFoundError("Article", slug, field="slug")
        if increment_views:
            await self._repository.increment_views(article.id)
            article.views += 1
        return article

    async def list_articles(
        self,
        page: int = 1,
        limit: int = 10,
        filters: ArticleFilters | None = None,
        is_admin: bool = False,
    ) -> Page[Article]:
        """Filtered, paginated listing. Non-admin callers only ever see published articles."""
        filters = filters or ArticleFilters()
        if not is_admin:
            filters.published = True
        if filters.primary_category_id:
            ensure_valid_id(filters.primary_category_id, "primary category id")
        for category_id in filters.secondary_category_ids:
            ensure_valid_id(category_id, "secondary category id")
        filters.ordering = ArticleOrdering.parse(filters.ordering)

        skip = (page - 1) * limit
        logger.debug(
            "Listing articles page=%d limit=%d admin=%s filters=%s", page, limit, is_admin, filters
        )
        items = await self._repository.search(filters, skip=skip, limit=limit)
        total = await self._repository.count(filters)
        return Page(items=items, total=total, page=page, limit=limit)

    async def featured(self, limit: int = 5) -> list[Article]:
        filters = ArticleFilters(published=True, featured=True)
        return await self._repository.search(filters, limit=limit)

    async def popular(self, limit: int = 5) -> list[Article]:
        filters = ArticleFilters(published=True, ordering=ArticleOrdering.POPULARITY)
        return await self._repository.search(filters, limit=limit)

    async def related(self, article_id: str, limit: int = 4) -> list[Article]:
        article = await self.get_article(article_id)
        return await self._repository.find_related(article, limit=limit)

    async def edible(self, limit: int = 10) -> list[Article]:
        return await self._repository.search(ArticleFilters(published=True, edible=True), limit=limit)

    async def blooming_in(self, season: str, limit: int = 10) -> list[Article]:
        filters = ArticleFilters(published=True, bloom_season=season)
        return await self._repository.search(filters, limit=limit)

    async def pet_safe(self, limit: int = 10) -> list[Article]:
        filters = ArticleFilters(published=True, toxic_to_animals=False)
        return await self._repository.search(filters, limit=limit)

    # ── Writes ───────────────────────────────────────────────────────

    async def create_article(self, data: ArticleCreate) -> Article:
        logger.info("Creating article: %s", data.title)
        values = _domain_values(data.model_dump())
        values["slug"] = data.slug or slugify(data.title)

        await self._ensure_slug_free(values["slug"])
        await self._ensure_categories(values["primary_category_id"], values["secondary_category_ids"])

        article = Article(**values)
        return await self._repository.create(article)

    async def update_article(self, article_id: str, data: ArticleUpdate) -> Article:
        logger.info("Updating article %s", article_id)
        article = await self.get_article(article_id)
        changes = {
            name: value
            for name, value in data.model_dump(exclude_unset=True).items()
            if value is not None or name in _NULLABLE_FIELDS
        }
        changes = _domain_values(changes)

        if changes.get("slug") and changes["slug"] != article.slug:
            await self._ensure_slug_free(changes["slug"], exclude_id=article.id)
        if "primary_category_id" in changes or "secondary_category_ids" in changes:
            await self._ensure_categories(
                changes.get("primary_category_id"),
                changes.get("secondary_category_ids", []),
            )

        article.update(**changes)
        return await self._repository.update(article)

    async def delete_article(self, article_id: str) -> bool:
        logger.info("Deleting article %s", article_id)
        ensure_valid_id(article_id, "article id")
        deleted = await self._repository.delete(article_id)
        if not deleted:
            logger.warning("Article %s not found for deletion", article_id)
            raise EntityNotFoundError("Article", article_id)
        return deleted

    async def toggle_like(
        self,
        article_id: str,
        identifier: str,
        user_agent: str | None,
        fingerprint: str | None = None,
    ) -> LikeOutcome:
        """Like or un-like *article_id* on behalf of an anonymous *identifier*.

        The attempt counter is persisted even when the guard rejects the
        request, so a failed add still leaves its trace in the day bucket.
        """
        article = await self.get_article(article_id)
        try:
            outcome = self._like_guard.toggle(article, identifier, user_agent, fingerprint)
        except DomainError as exc:
            logger.warning("Like rejected for article %s (%s): %s", article_id, identifier, exc)
            await self._repository.update(article)
            raise
        await self._repository.update(article)
        logger.debug(
            "Like toggled on %s by %s: liked=%s count=%d",
            article_id, identifier, outcome.liked, outcome.count,
        )
        return outcome

    # ── Helpers ──────────────────────────────────────────────────────

    async def _ensure_slug_free(self, slug: str, exclude_id: str | None = None) -> None:
        if await self._repository.slug_exists(slug, exclude_id=exclude_id):
            logger.warning("Slug '%s' already in use", slug)
            raise DuplicateEntityError("Article", "slug", slug)

    async def _ensure_categories(self, primary_id: str | None, secondary_ids: list[str]) -> None:
        ids = ([primary_id] if primary_id else []) + list(secondary_ids or [])
        for category_id in ids:
            ensure_valid_id(category_id, "category id")
            if await self._categories.get_by_id(category_id) is None:
                raise EntityNotFoundError("Category", category_id)

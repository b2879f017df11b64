"""Concrete repository implementation backed by SQLAlchemy."""

from sqlalchemy import Select, exists, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import ArticleRepository
from app.domain.entities import (
    Article,
    ArticleFilters,
    ArticleImage,
    ArticleOrdering,
    CareInfo,
    DailyAttemptCounter,
    IdentifierDailyTally,
    LikeLedger,
    ProductLink,
)
from app.domain.entities.article import (
    growing_conditions_from_dict,
    pests_diseases_from_dict,
    plant_traits_from_dict,
)
from app.domain.entities.engagement import DEFAULT_HISTORY_DAYS
from app.infrastructure.database.models import (
    ArticleModel,
    ArticleSecondaryCategoryModel,
    ArticleTagModel,
)

_NESTED_GROUPS = ("care_info", "growing_conditions", "pests_diseases", "plant_traits")


def _has_tag(*tags: str):
    return exists().where(
        ArticleTagModel.article_id == ArticleModel.id,
        ArticleTagModel.tag.in_(tags),
    )


def _has_secondary_category(*category_ids: str):
    return exists().where(
        ArticleSecondaryCategoryModel.article_id == ArticleModel.id,
        ArticleSecondaryCategoryModel.category_id.in_(category_ids),
    )


def _filter_clauses(filters: ArticleFilters) -> list:
    """Translate ArticleFilters into WHERE clauses (AND-ed by the caller)."""
    clauses = []
    if filters.published is not None:
        clauses.append(ArticleModel.published.is_(filters.published))
    if filters.featured is not None:
        clauses.append(ArticleModel.featured.is_(filters.featured))
    if filters.primary_category_id:
        clauses.append(ArticleModel.primary_category_id == filters.primary_category_id)
    if filters.secondary_category_ids:
        clauses.append(_has_secondary_category(*filters.secondary_category_ids))
    if filters.tags:
        clauses.append(_has_tag(*filters.tags))
    if filters.search:
        term = filters.search.strip()
        clauses.append(
            or_(
                ArticleModel.title.icontains(term, autoescape=True),
                ArticleModel.description.icontains(term, autoescape=True),
                exists().where(
                    ArticleTagModel.article_id == ArticleModel.id,
                    ArticleTagModel.tag.icontains(term, autoescape=True),
                ),
            )
        )

    traits = ArticleModel.plant_traits
    for name in ("edible", "invasive", "toxic_to_humans", "toxic_to_animals"):
        value = getattr(filters, name)
        if value is not None:
            clauses.append(traits[name].as_boolean() == value)
    if filters.bloom_season:
        clauses.append(
            func.lower(traits["bloom_season"].as_string()) == filters.bloom_season.lower()
        )

    care = ArticleModel.care_info
    if filters.soil_ph_min is not None:
        clauses.append(care[("soil_ph", "min")].as_float() >= filters.soil_ph_min)
    if filters.soil_ph_max is not None:
        clauses.append(care[("soil_ph", "max")].as_float() <= filters.soil_ph_max)
    return clauses


_ORDERINGS = {
    ArticleOrdering.TITLE_ASC: (ArticleModel.title.asc(),),
    ArticleOrdering.TITLE_DESC: (ArticleModel.title.desc(),),
    # Drafts have no publish date; they trail either direction.
    ArticleOrdering.DATE_ASC: (
        ArticleModel.published_at.asc().nulls_last(),
        ArticleModel.created_at.asc(),
    ),
    ArticleOrdering.DATE_DESC: (
        ArticleModel.published_at.desc().nulls_last(),
        ArticleModel.created_at.desc(),
    ),
    ArticleOrdering.POPULARITY: (ArticleModel.like_count.desc(), ArticleModel.views.desc()),
    ArticleOrdering.VIEWS: (ArticleModel.views.desc(),),
}


def _ordered(stmt: Select, ordering: ArticleOrdering) -> Select:
    columns = _ORDERINGS.get(ordering, _ORDERINGS[ArticleOrdering.DATE_DESC])
    return stmt.order_by(*columns, ArticleModel.id.asc())


class SQLAlchemyArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession, history_days: int = DEFAULT_HISTORY_DAYS):
        self._session = session
        self._history_days = history_days

    def _to_entity(self, model: ArticleModel) -> Article:
        """Map ORM model → domain entity."""
        return Article(
            id=model.id,
            title=model.title,
            slug=model.slug,
            description=model.description,
            content=model.content,
            primary_category_id=model.primary_category_id,
            secondary_category_ids=[link.category_id for link in model.secondary_categories],
            published=model.published,
            featured=model.featured,
            display_order=model.display_order,
            cover_image=model.cover_image,
            images=[ArticleImage(**img) for img in model.images or []],
            product_links=[ProductLink(**link) for link in model.product_links or []],
            tags=[t.tag for t in model.tags],
            views=model.views,
            likes=LikeLedger.from_list(model.likes),
            like_attempts=DailyAttemptCounter(model.like_attempts, max_days=self._history_days),
            like_tally=IdentifierDailyTally(model.like_tally, max_days=self._history_days),
            published_at=model.published_at,
            metadata=dict(model.metadata_ or {}),
            care_info=CareInfo.from_dict(model.care_info),
            growing_conditions=growing_conditions_from_dict(model.growing_conditions),
            pests_diseases=pests_diseases_from_dict(model.pests_diseases),
            plant_traits=plant_traits_from_dict(model.plant_traits),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Article) -> ArticleModel:
        """Map domain entity → ORM model (for creation)."""
        model = ArticleModel(
            id=entity.id,
            created_at=entity.created_at,
            views=entity.views,
            tags=[
                ArticleTagModel(tag=tag, position=index)
                for index, tag in enumerate(entity.tags)
            ],
            secondary_categories=[
                ArticleSecondaryCategoryModel(category_id=category_id, position=index)
                for index, category_id in enumerate(entity.secondary_category_ids)
            ],
        )
        self._copy_fields(entity, model)
        return model

    @staticmethod
    def _copy_fields(entity: Article, model: ArticleModel) -> None:
        """Copy the writable columns from *entity* onto *model*; views are left alone."""
        model.title = entity.title
        model.slug = entity.slug
        model.description = entity.description
        model.content = entity.content
        model.primary_category_id = entity.primary_category_id
        model.published = entity.published
        model.featured = entity.featured
        model.display_order = entity.display_order
        model.cover_image = entity.cover_image
        model.images = [
            {"url": img.url, "alt_text": img.alt_text, "primary": img.primary}
            for img in entity.images
        ]
        model.product_links = [
            {
                "url": link.url,
                "description": link.description,
                "amazon_affiliate": link.amazon_affiliate,
            }
            for link in entity.product_links
        ]
        model.like_count = entity.like_count
        model.likes = entity.likes.to_list()
        model.like_attempts = entity.like_attempts.to_dict()
        model.like_tally = entity.like_tally.to_dict()
        model.published_at = entity.published_at
        model.metadata_ = dict(entity.metadata)
        for group in _NESTED_GROUPS:
            setattr(model, group, entity.nested_as_dict(group))
        model.updated_at = entity.updated_at

    @staticmethod
    def _sync_tags(model: ArticleModel, tags: list[str]) -> None:
        # Keep surviving rows so the flush never re-inserts an existing key.
        wanted = {tag: index for index, tag in enumerate(tags)}
        kept = [row for row in model.tags if row.tag in wanted]
        present = {row.tag for row in kept}
        kept.extend(ArticleTagModel(tag=tag) for tag in tags if tag not in present)
        for row in kept:
            row.position = wanted[row.tag]
        model.tags = sorted(kept, key=lambda row: row.position)

    @staticmethod
    def _sync_secondary_categories(model: ArticleModel, category_ids: list[str]) -> None:
        wanted = {category_id: index for index, category_id in enumerate(category_ids)}
        kept = [row for row in model.secondary_categories if row.category_id in wanted]
        present = {row.category_id for row in kept}
        kept.extend(
            ArticleSecondaryCategoryModel(category_id=category_id)
            for category_id in category_ids
            if category_id not in present
        )
        for row in kept:
            row.position = wanted[row.category_id]
        model.secondary_categories = sorted(kept, key=lambda row: row.position)

    async def get_by_id(self, article_id: str) -> Article | None:
        result = await self._session.get(ArticleModel, article_id)
        return self._to_entity(result) if result else None

    async def get_by_slug(self, slug: str) -> Article | None:
        stmt = select(ArticleModel).where(ArticleModel.slug == slug)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        stmt = select(ArticleModel.id).where(ArticleModel.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(ArticleModel.id != exclude_id)
        result = await self._session.execute(stmt.limit(1))
        return result.first() is not None

    async def search(
        self,
        filters: ArticleFilters,
        skip: int = 0,
        limit: int = 10,
    ) -> list[Article]:
        stmt = select(ArticleModel).where(*_filter_clauses(filters))
        stmt = _ordered(stmt, filters.ordering).offset(skip).limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def count(self, filters: ArticleFilters) -> int:
        stmt = select(func.count()).select_from(ArticleModel).where(*_filter_clauses(filters))
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def find_related(self, article: Article, limit: int = 4) -> list[Article]:
        shared = [
            ArticleModel.primary_category_id == article.primary_category_id,
            _has_secondary_category(article.primary_category_id, *article.secondary_category_ids),
        ]
        if article.tags:
            shared.append(_has_tag(*article.tags))

        stmt = (
            select(ArticleModel)
            .where(
                ArticleModel.published.is_(True),
                ArticleModel.id != article.id,
                or_(*shared),
            )
            .order_by(*_ORDERINGS[ArticleOrdering.DATE_DESC], ArticleModel.id.asc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def count_by_category(self, category_id: str) -> int:
        stmt = (
            select(func.count())
            .select_from(ArticleModel)
            .where(
                or_(
                    ArticleModel.primary_category_id == category_id,
                    _has_secondary_category(category_id),
                )
            )
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def increment_views(self, article_id: str) -> None:
        stmt = (
            update(ArticleModel)
            .where(ArticleModel.id == article_id)
            .values(views=ArticleModel.views + 1)
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(stmt)

    async def create(self, article: Article) -> Article:
        model = self._to_model(article)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, article: Article) -> Article:
        model = await self._session.get(ArticleModel, article.id)
        if model is None:
            raise ValueError(f"Article {article.id} not found in database")
        self._copy_fields(article, model)
        self._sync_tags(model, article.tags)
        self._sync_secondary_categories(model, article.secondary_category_ids)
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, article_id: str) -> bool:
        model = await self._session.get(ArticleModel, article_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

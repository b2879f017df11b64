"""Concrete repository implementation for Category backed by SQLAlchemy."""

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import CategoryRepository
from app.domain.entities import Category
from app.infrastructure.database.models import CategoryModel


def _filter_clauses(active: bool | None, search: str | None) -> list:
    clauses = []
    if active is not None:
        clauses.append(CategoryModel.active.is_(active))
    if search:
        term = search.strip()
        clauses.append(
            or_(
                CategoryModel.name.icontains(term, autoescape=True),
                CategoryModel.description.icontains(term, autoescape=True),
                CategoryModel.slug.icontains(term, autoescape=True),
            )
        )
    return clauses


class SQLAlchemyCategoryRepository(CategoryRepository):
    """Implements the CategoryRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: CategoryModel) -> Category:
        return Category(
            id=model.id,
            name=model.name,
            slug=model.slug,
            description=model.description,
            display_order=model.display_order,
            active=model.active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Category) -> CategoryModel:
        return CategoryModel(
            id=entity.id,
            name=entity.name,
            slug=entity.slug,
            description=entity.description,
            display_order=entity.display_order,
            active=entity.active,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def get_by_id(self, category_id: str) -> Category | None:
        result = await self._session.get(CategoryModel, category_id)
        return self._to_entity(result) if result else None

    async def get_by_slug(self, slug: str) -> Category | None:
        stmt = select(CategoryModel).where(CategoryModel.slug == slug)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_conflict(
        self,
        name: str | None,
        slug: str | None,
        exclude_id: str | None = None,
    ) -> Category | None:
        matches = []
        if name is not None:
            matches.append(CategoryModel.name == name)
        if slug is not None:
            matches.append(CategoryModel.slug == slug)
        if not matches:
            return None

        stmt = select(CategoryModel).where(or_(*matches))
        if exclude_id is not None:
            stmt = stmt.where(CategoryModel.id != exclude_id)
        result = await self._session.execute(stmt.limit(1))
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def search(
        self,
        *,
        active: bool | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> list[Category]:
        stmt = (
            select(CategoryModel)
            .where(*_filter_clauses(active, search))
            .order_by(CategoryModel.display_order.asc(), CategoryModel.name.asc())
            .offset(skip)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def count(self, *, active: bool | None = None, search: str | None = None) -> int:
        stmt = (
            select(func.count())
            .select_from(CategoryModel)
            .where(*_filter_clauses(active, search))
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def create(self, category: Category) -> Category:
        model = self._to_model(category)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, category: Category) -> Category:
        model = await self._session.get(CategoryModel, category.id)
        if model is None:
            raise ValueError(f"Category {category.id} not found in database")
        model.name = category.name
        model.slug = category.slug
        model.description = category.description
        model.display_order = category.display_order
        model.active = category.active
        model.updated_at = category.updated_at
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, category_id: str) -> bool:
        model = await self._session.get(CategoryModel, category_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

"""Concrete repository implementation for User backed by SQLAlchemy."""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import UserRepository
from app.domain.entities import User, UserRole
from app.infrastructure.database.models import UserModel


class SQLAlchemyUserRepository(UserRepository):
    """Implements the UserRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: UserModel) -> User:
        return User(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            name=model.name,
            surname=model.surname,
            role=UserRole(model.role),
            active=model.active,
            last_access_at=model.last_access_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: User) -> UserModel:
        return UserModel(
            id=entity.id,
            email=entity.email,
            password_hash=entity.password_hash,
            name=entity.name,
            surname=entity.surname,
            role=entity.role.value,
            active=entity.active,
            last_access_at=entity.last_access_at,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def get_by_id(self, user_id: str) -> User | None:
        result = await self._session.get(UserModel, user_id)
        return self._to_entity(result) if result else None

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(UserModel).where(UserModel.email == email)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[User]:
        stmt = select(UserModel).offset(skip).limit(limit).order_by(UserModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, user: User) -> User:
        model = self._to_model(user)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, user: User) -> User:
        model = await self._session.get(UserModel, user.id)
        if model is None:
            raise ValueError(f"User {user.id} not found in database")
        model.email = user.email
        model.password_hash = user.password_hash
        model.name = user.name
        model.surname = user.surname
        model.role = user.role.value
        model.active = user.active
        model.last_access_at = user.last_access_at
        model.updated_at = datetime.now(timezone.utc)
        await self._session.flush()
        return self._to_entity(model)

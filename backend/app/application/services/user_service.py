"""Application service for back-office user accounts."""

import logging
import re

from app.application.interfaces import PasswordHasher, UserRepository
from app.application.schemas import PasswordChange, UserCreate, UserUpdate
from app.domain.entities import User, UserRole
from app.domain.exceptions import (
    AuthenticationError,
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidInputError,
)
from app.domain.identifiers import ensure_valid_id

logger = logging.getLogger(__name__)

_PASSWORD_POLICY = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*(\d|\W)).{8,}$")


def check_password_policy(password: str) -> None:
    """At least 8 characters with an upper, a lower and a digit or symbol."""
    if not _PASSWORD_POLICY.match(password):
        raise InvalidInputError(
            "Password must be at least 8 characters and contain an uppercase letter, "
            "a lowercase letter and a number or symbol"
        )


class UserService:
    def __init__(self, repository: UserRepository, hasher: PasswordHasher):
        self._repository = repository
        self._hasher = hasher

    async def get_user(self, user_id: str) -> User:
        ensure_valid_id(user_id, "user id")
        user = await self._repository.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("User", user_id)
        return user

    async def list_users(self, skip: int = 0, limit: int = 100) -> list[User]:
        return await self._repository.get_all(skip=skip, limit=limit)

    async def create_user(self, data: UserCreate) -> User:
        email = data.email.lower()
        logger.info("Creating user %s", email)
        if await self._repository.get_by_email(email) is not None:
            raise DuplicateEntityError("User", "email", email)
        check_password_policy(data.password)

        user = User(
            email=email,
            password_hash=self._hasher.hash(data.password),
            name=data.name,
            surname=data.surname,
            role=data.role,
            active=data.active,
        )
        return await self._repository.create(user)

    async def update_user(self, user_id: str, data: UserUpdate) -> User:
        user = await self.get_user(user_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)

        if "email" in changes:
            email = changes["email"].lower()
            existing = await self._repository.get_by_email(email)
            if existing is not None and existing.id != user.id:
                raise DuplicateEntityError("User", "email", email)
            changes["email"] = email

        for name, value in changes.items():
            setattr(user, name, value)
        logger.info("Updating user %s: %s", user_id, sorted(changes))
        return await self._repository.update(user)

    async def change_password(self, user: User, data: PasswordChange) -> User:
        if not self._hasher.verify(data.current_password, user.password_hash):
            raise AuthenticationError("Current password is incorrect")
        check_password_policy(data.new_password)
        user.password_hash = self._hasher.hash(data.new_password)
        logger.info("Password changed for %s", user.email)
        return await self._repository.update(user)

    async def ensure_admin(self, email: str, password: str, name: str, surname: str) -> User:
        """Create the bootstrap administrator unless an account with *email* exists."""
        email = email.lower()
        existing = await self._repository.get_by_email(email)
        if existing is not None:
            logger.debug("Admin %s already present", email)
            return existing
        user = User(
            email=email,
            password_hash=self._hasher.hash(password),
            name=name,
            surname=surname,
            role=UserRole.ADMIN,
        )
        logger.info("Seeded administrator %s", email)
        return await self._repository.create(user)

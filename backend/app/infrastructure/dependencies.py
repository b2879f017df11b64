"""FastAPI dependency injection: wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.application.services import ArticleService, AuthService, CategoryService, UserService
from app.domain.entities import User
from app.domain.exceptions import AuthenticationError, AuthorizationError
from app.domain.like_guard import AnonymousLikeGuard
from app.infrastructure.database.session import get_db_session
from app.infrastructure.database.repositories import (
    SQLAlchemyArticleRepository,
    SQLAlchemyCategoryRepository,
    SQLAlchemyUserRepository,
)
from app.infrastructure.security import BcryptPasswordHasher, JwtTokenService

_bearer = HTTPBearer(auto_error=False)


def get_password_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher()


def get_token_service() -> JwtTokenService:
    settings = get_settings()
    return JwtTokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_minutes=settings.jwt_expires_minutes,
    )


async def get_article_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ArticleService, None]:
    """Provides an ArticleService with article/category repositories and the like guard."""
    settings = get_settings()
    repository = SQLAlchemyArticleRepository(session, history_days=settings.like_history_days)
    guard = AnonymousLikeGuard(
        daily_limit=settings.like_daily_limit,
        min_user_agent_length=settings.like_min_user_agent_length,
    )
    yield ArticleService(repository, SQLAlchemyCategoryRepository(session), like_guard=guard)


async def get_category_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[CategoryService, None]:
    """Provides a CategoryService instance with its repositories wired up."""
    yield CategoryService(
        SQLAlchemyCategoryRepository(session),
        SQLAlchemyArticleRepository(session),
    )


async def get_auth_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AuthService, None]:
    yield AuthService(
        SQLAlchemyUserRepository(session),
        get_password_hasher(),
        get_token_service(),
    )


async def get_user_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[UserService, None]:
    yield UserService(SQLAlchemyUserRepository(session), get_password_hasher())


# ── Route guards ─────────────────────────────────────────────────────


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    auth: AuthService = Depends(get_auth_service),
) -> User | None:
    """The caller's user, or None for anonymous callers and unusable tokens."""
    if credentials is None:
        return None
    try:
        return await auth.authenticate_token(credentials.credentials)
    except AuthenticationError:
        return None


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """Authenticated user; raises AuthenticationError (401) otherwise."""
    if credentials is None:
        raise AuthenticationError("Missing bearer token")
    return await auth.authenticate_token(credentials.credentials)


async def require_admin(user: User = Depends(get_current_user)) -> User:
    """Authenticated ADMIN user; raises AuthorizationError (403) for other roles."""
    if not user.is_admin:
        raise AuthorizationError("Administrator role required")
    return user

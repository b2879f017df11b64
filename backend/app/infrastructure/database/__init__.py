from .base import Base
from .session import engine, async_session_factory, get_db_session, session_scope
from .models import (
    ArticleModel,
    ArticleSecondaryCategoryModel,
    ArticleTagModel,
    CategoryModel,
    UserModel,
)

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "get_db_session",
    "session_scope",
    "ArticleModel",
    "ArticleSecondaryCategoryModel",
    "ArticleTagModel",
    "CategoryModel",
    "UserModel",
]

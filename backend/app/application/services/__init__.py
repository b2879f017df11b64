from .article_service import ArticleService
from .auth_service import AuthService, LoginResult
from .category_service import CategoryService
from .user_service import UserService

__all__ = [
    "ArticleService",
    "AuthService",
    "CategoryService",
    "LoginResult",
    "UserService",
]

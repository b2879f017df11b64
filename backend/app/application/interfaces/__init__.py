from .article_repository import ArticleRepository
from .category_repository import CategoryRepository
from .user_repository import UserRepository
from .security import PasswordHasher, TokenClaims, TokenService

__all__ = [
    "ArticleRepository",
    "CategoryRepository",
    "UserRepository",
    "PasswordHasher",
    "TokenClaims",
    "TokenService",
]

from .article import ArticleModel, ArticleSecondaryCategoryModel, ArticleTagModel
from .category import CategoryModel
from .user import UserModel

__all__ = [
    "ArticleModel",
    "ArticleSecondaryCategoryModel",
    "ArticleTagModel",
    "CategoryModel",
    "UserModel",
]

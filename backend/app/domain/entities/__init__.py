from .article import (
    Article,
    ArticleImage,
    CareInfo,
    GrowingConditions,
    PestsDiseases,
    PlantTraits,
    ProductLink,
    SoilPh,
)
from .category import Category
from .engagement import (
    DailyAttemptCounter,
    IdentifierDailyTally,
    LikeEntry,
    LikeLedger,
)
from .query import ArticleFilters, ArticleOrdering, Page
from .user import User, UserRole

__all__ = [
    "Article",
    "ArticleImage",
    "CareInfo",
    "GrowingConditions",
    "PestsDiseases",
    "PlantTraits",
    "ProductLink",
    "SoilPh",
    "Category",
    "DailyAttemptCounter",
    "IdentifierDailyTally",
    "LikeEntry",
    "LikeLedger",
    "ArticleFilters",
    "ArticleOrdering",
    "Page",
    "User",
    "UserRole",
]

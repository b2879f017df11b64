from .article import (
    ArticleCreate,
    ArticleUpdate,
    ArticleResponse,
    ArticleImageSchema,
    CareInfoSchema,
    GrowingConditionsSchema,
    LikeRequest,
    LikeResponse,
    PestsDiseasesSchema,
    PlantTraitsSchema,
    ProductLinkSchema,
    SoilPhSchema,
)
from .category import CategoryCreate, CategoryUpdate, CategoryResponse
from .common import ApiResponse, DeletedResponse, PaginatedData
from .user import (
    LoginRequest,
    LoginResponse,
    PasswordChange,
    UserCreate,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "ArticleCreate",
    "ArticleUpdate",
    "ArticleResponse",
    "ArticleImageSchema",
    "CareInfoSchema",
    "GrowingConditionsSchema",
    "LikeRequest",
    "LikeResponse",
    "PestsDiseasesSchema",
    "PlantTraitsSchema",
    "ProductLinkSchema",
    "SoilPhSchema",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "ApiResponse",
    "DeletedResponse",
    "PaginatedData",
    "LoginRequest",
    "LoginResponse",
    "PasswordChange",
    "UserCreate",
    "UserResponse",
    "UserUpdate",
]

"""Article endpoints: public browsing, anonymous likes and admin CRUD."""

from fastapi import APIRouter, Depends, Header, Query, Request, status

from app.application.schemas import (
    ApiResponse,
    ArticleCreate,
    ArticleResponse,
    ArticleUpdate,
    DeletedResponse,
    LikeRequest,
    LikeResponse,
    PaginatedData,
)
from app.application.services import ArticleService
from app.domain.entities import Article, ArticleFilters, ArticleOrdering, User
from app.infrastructure.dependencies import get_article_service, get_optional_user, require_admin
from app.presentation.api.responses import ok, paginated

router = APIRouter(prefix="/articles", tags=["Articles"])


def _to_response(article: Article) -> ArticleResponse:
    return ArticleResponse.model_validate(article, from_attributes=True)


def _split(raw: str | None) -> list[str]:
    """Comma-separated query value → list, blanks dropped."""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


@router.get("", response_model=ApiResponse[PaginatedData[ArticleResponse]])
async def list_articles(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    published: bool | None = Query(None, description="Admin only; ignored for other callers"),
    featured: bool | None = None,
    primary_category_id: str | None = None,
    secondary_category_ids: str | None = Query(None, description="Comma-separated category ids"),
    tags: str | None = Query(None, description="Comma-separated tags"),
    search: str | None = Query(None, max_length=200),
    edible: bool | None = None,
    invasive: bool | None = None,
    toxic_to_humans: bool | None = None,
    toxic_to_animals: bool | None = None,
    bloom_season: str | None = None,
    soil_ph_min: float | None = Query(None, ge=0, le=14),
    soil_ph_max: float | None = Query(None, ge=0, le=14),
    order_by: str | None = Query(None, description="title_asc, title_desc, date_asc, date_desc, popularity, views"),
    user: User | None = Depends(get_optional_user),
    service: ArticleService = Depends(get_article_service),
) -> ApiResponse[PaginatedData[ArticleResponse]]:
    """Filtered, paginated article listing. Drafts are visible to admins only."""
    filters = ArticleFilters(
        published=published,
        featured=featured,
        primary_category_id=primary_category_id,
        secondary_category_ids=_split(secondary_category_ids),
        tags=_split(tags),
        search=search,
        edible=edible,
        invasive=invasive,
        toxic_to_humans=toxic_to_humans,
        toxic_to_animals=toxic_to_animals,
        bloom_season=bloom_season,
        soil_ph_min=soil_ph_min,
        soil_ph_max=soil_ph_max,
        ordering=ArticleOrdering.parse(order_by),
    )
    result = await service.list_articles(
        page=page,
        limit=limit,
        filters=filters,
        is_admin=bool(user and user.is_admin),
    )
    return ok(request, paginated(result, _to_response), "Articles retrieved")


@router.get("/featured", response_model=ApiResponse[list[ArticleResponse]])
async def featured_articles(
    request: Request,
    limit: int = Query(5, ge=1, le=50),
    service: ArticleService = Depends(get_article_service),
) -> ApiResponse[list[ArticleResponse]]:
    articles = await service.featured(limit=limit)
    return ok(request, [_to_response(a) for a in articles], "Featured articles retrieved")


@router.get("/popular", response_model=ApiResponse[list[ArticleResponse]])
async def popular_articles(
    request: Request,
    limit: int = Query(5, ge=1, le=50),
    service: ArticleService = Depends(get_article_service),
) -> ApiResponse[list[ArticleResponse]]:
    articles = await service.popular(limit=limit)
    return ok(request, [_to_response(a) for a in articles], "Popular articles retrieved")


@router.get("/edible", response_model=ApiResponse[list[ArticleResponse]])
async def edible_articles(
    request: Request,
    limit: int = Query(10, ge=1, le=50),
    service: ArticleService = Depends(get_article_service),
) -> ApiResponse[list[ArticleResponse]]:
    articles = await service.edible(limit=limit)
    return ok(request, [_to_response(a) for a in articles], "Edible plants retrieved")


@router.get("/pet-safe", response_model=ApiResponse[list[ArticleResponse]])
async def pet_safe_articles(
    request: Request,
    limit: int = Query(10, ge=1, le=50),
    service: ArticleService = Depends(get_article_service),
) -> ApiResponse[list[ArticleResponse]]:
    articles = await service.pet_safe(limit=limit)
    return ok(request, [_to_response(a) for a in articles], "Pet-safe plants retrieved")


@router.get("/blooming/{season}", response_model=ApiResponse[list[ArticleResponse]])
async def blooming_articles(
    season: str,
    request: Request,
    limit: int = Query(10, ge=1, le=50),
    service: ArticleService = Depends(get_article_service),
) -> ApiResponse[list[ArticleResponse]]:
    articles = await service.blooming_in(season, limit=limit)
    return ok(request, [_to_response(a) for a in articles], f"Plants blooming in {season} retrieved")


@router.get("/related/{article_id}", response_model=ApiResponse[list[ArticleResponse]])
async def related_articles(
    article_id: str,
    request: Request,
    limit: int = Query(4, ge=1, le=20),
    service: ArticleService = Depends(get_article_service),
) -> ApiResponse[list[ArticleResponse]]:
    articles = await service.related(article_id, limit=limit)
    return ok(request, [_to_response(a) for a in articles], "Related articles retrieved")


@router.get("/slug/{slug}", response_model=ApiResponse[ArticleResponse])
async def get_article_by_slug(
    slug: str,
    request: Request,
    increment_views: bool = Query(False, description="Count this read as a page view"),
    user: User | None = Depends(get_optional_user),
    service: ArticleService = Depends(get_article_service),
) -> ApiResponse[ArticleResponse]:
    """Read an article by slug. Admin reads never count as views."""
    is_admin = bool(user and user.is_admin)
    article = await service.get_by_slug(
        slug,
        increment_views=increment_views and not is_admin,
        published_only=not is_admin,
    )
    return ok(request, _to_response(article), "Article retrieved")


@router.get("/{article_id}", response_model=ApiResponse[ArticleResponse])
async def get_article(
    article_id: str,
    request: Request,
    user: User | None = Depends(get_optional_user),
    service: ArticleService = Depends(get_article_service),
) -> ApiResponse[ArticleResponse]:
    article = await service.get_article(
        article_id,
        published_only=not (user and user.is_admin),
    )
    return ok(request, _to_response(article), "Article retrieved")


@router.post("/{article_id}/like", response_model=ApiResponse[LikeResponse])
async def toggle_like(
    article_id: str,
    data: LikeRequest,
    request: Request,
    user_agent: str | None = Header(None),
    service: ArticleService = Depends(get_article_service),
) -> ApiResponse[LikeResponse]:
    """Toggle an anonymous like. A second call with the same identifier removes it."""
    outcome = await service.toggle_like(
        article_id,
        identifier=data.identifier,
        user_agent=user_agent,
        fingerprint=data.fingerprint,
    )
    message = "Article liked" if outcome.liked else "Like removed"
    return ok(request, LikeResponse(liked=outcome.liked, count=outcome.count), message)


@router.post(
    "",
    response_model=ApiResponse[ArticleResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_article(
    data: ArticleCreate,
    request: Request,
    _admin: User = Depends(require_admin),
    service: ArticleService = Depends(get_article_service),
) -> ApiResponse[ArticleResponse]:
    article = await service.create_article(data)
    return ok(request, _to_response(article), "Article created", status.HTTP_201_CREATED)


@router.patch("/{article_id}", response_model=ApiResponse[ArticleResponse])
async def update_article(
    article_id: str,
    data: ArticleUpdate,
    request: Request,
    _admin: User = Depends(require_admin),
    service: ArticleService = Depends(get_article_service),
) -> ApiResponse[ArticleResponse]:
    article = await service.update_article(article_id, data)
    return ok(request, _to_response(article), "Article updated")


@router.delete("/{article_id}", response_model=ApiResponse[DeletedResponse])
async def delete_article(
    article_id: str,
    request: Request,
    _admin: User = Depends(require_admin),
    service: ArticleService = Depends(get_article_service),
) -> ApiResponse[DeletedResponse]:
    await service.delete_article(article_id)
    return ok(request, DeletedResponse(deleted=True, id=article_id), "Article deleted")

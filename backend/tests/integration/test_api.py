"""End-to-end tests for the /api/v1 surface: envelope, auth guards, articles and likes."""

import pytest
import pytest_asyncio

from app.application.schemas import UserCreate
from app.application.services import UserService
from app.infrastructure.database.repositories import SQLAlchemyUserRepository
from app.infrastructure.database.session import session_scope
from app.infrastructure.security import BcryptPasswordHasher

ADMIN_EMAIL = "admin@garden.example.com"
EDITOR_EMAIL = "editor@garden.example.com"
PASSWORD = "Orchidea99"
BROWSER_UA = "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_4) Gecko/20100101 Firefox/125.0"


@pytest_asyncio.fixture
async def accounts(session_factory):
    async with session_scope(session_factory) as session:
        service = UserService(SQLAlchemyUserRepository(session), BcryptPasswordHasher(rounds=4))
        await service.ensure_admin(ADMIN_EMAIL, PASSWORD, "Ada", "Admin")
        await service.create_user(
            UserCreate(email=EDITOR_EMAIL, password=PASSWORD, name="Ed", surname="Editor")
        )


async def _token(client, email: str) -> str:
    response = await client.post("/api/v1/auth/login", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200, response.text
    return response.json()["data"]["token"]


@pytest_asyncio.fixture
async def admin_headers(client, accounts) -> dict[str, str]:
    return {"Authorization": f"Bearer {await _token(client, ADMIN_EMAIL)}"}


@pytest_asyncio.fixture
async def editor_headers(client, accounts) -> dict[str, str]:
    return {"Authorization": f"Bearer {await _token(client, EDITOR_EMAIL)}"}


@pytest_asyncio.fixture
async def category_id(client, admin_headers) -> str:
    response = await client.post(
        "/api/v1/categories", json={"name": "Piante da frutto"}, headers=admin_headers
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["id"]


async def _create_article(client, headers, category_id: str, **fields) -> dict:
    payload = {"title": "Rosa Canina", "description": "Wild rose", "primary_category_id": category_id}
    payload.update(fields)
    response = await client.post("/api/v1/articles", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


# ── Envelope & auth ──────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_login_envelope(client, accounts):
    response = await client.post(
        "/api/v1/auth/login", json={"email": ADMIN_EMAIL, "password": PASSWORD}
    )
    body = response.json()

    assert response.status_code == 200
    assert body["success"] is True
    assert body["statusCode"] == 200
    assert body["error"] is None
    assert body["path"] == "/api/v1/auth/login"
    assert body["timestamp"]
    assert body["data"]["user"]["role"] == "ADMIN"
    assert "password_hash" not in body["data"]["user"]
    assert body["data"]["expiresIn"] == 1440 * 60


@pytest.mark.asyncio
async def test_login_does_not_reveal_which_part_was_wrong(client, accounts):
    wrong_password = await client.post(
        "/api/v1/auth/login", json={"email": ADMIN_EMAIL, "password": "Nope12345"}
    )
    unknown_email = await client.post(
        "/api/v1/auth/login", json={"email": "ghost@garden.example.com", "password": PASSWORD}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json()["error"] == unknown_email.json()["error"] == "Invalid credentials"
    assert wrong_password.json()["success"] is False
    assert wrong_password.json()["data"] is None


@pytest.mark.asyncio
async def test_me_requires_a_token(client, editor_headers):
    assert (await client.get("/api/v1/auth/me")).status_code == 401
    bad = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer broken"})
    assert bad.status_code == 401

    me = await client.get("/api/v1/auth/me", headers=editor_headers)
    assert me.status_code == 200
    assert me.json()["data"]["email"] == EDITOR_EMAIL


@pytest.mark.asyncio
async def test_admin_routes_distinguish_401_and_403(client, editor_headers):
    payload = {"name": "Bulbi"}
    anonymous = await client.post("/api/v1/categories", json=payload)
    standard = await client.post("/api/v1/categories", json=payload, headers=editor_headers)

    assert anonymous.status_code == 401
    assert standard.status_code == 403
    assert standard.json()["success"] is False


@pytest.mark.asyncio
async def test_validation_errors_use_the_envelope(client, admin_headers):
    response = await client.post("/api/v1/categories", json={}, headers=admin_headers)
    body = response.json()

    assert response.status_code == 422
    assert body["success"] is False
    assert body["statusCode"] == 422
    assert "name" in body["error"]


@pytest.mark.asyncio
async def test_unknown_route_is_enveloped(client):
    response = await client.get("/api/v1/nowhere")
    assert response.status_code == 404
    assert response.json()["success"] is False


# ── Categories ───────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_category_crud_and_conflicts(client, admin_headers, category_id):
    duplicate = await client.post(
        "/api/v1/categories", json={"name": "Piante da frutto"}, headers=admin_headers
    )
    assert duplicate.status_code == 409

    by_slug = await client.get("/api/v1/categories/slug/piante-da-frutto")
    assert by_slug.json()["data"]["id"] == category_id

    listing = await client.get("/api/v1/categories")
    assert listing.json()["data"]["total"] == 1
    assert listing.json()["data"]["totalPages"] == 1

    await _create_article(client, admin_headers, category_id)
    in_use = await client.delete(f"/api/v1/categories/{category_id}", headers=admin_headers)
    assert in_use.status_code == 409


@pytest.mark.asyncio
async def test_malformed_category_id_is_bad_request(client):
    response = await client.get("/api/v1/categories/not-a-uuid")
    assert response.status_code == 400


# ── Articles ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_public_listing_hides_drafts(client, admin_headers, category_id):
    await _create_article(client, admin_headers, category_id, title="Bozza")
    await _create_article(client, admin_headers, category_id, title="Pubblicato", published=True)

    public = await client.get("/api/v1/articles", params={"published": "false"})
    data = public.json()["data"]
    assert [a["title"] for a in data["items"]] == ["Pubblicato"]
    assert data["total"] == 1
    assert data["totalPages"] == 1

    drafts = await client.get(
        "/api/v1/articles", params={"published": "false"}, headers=admin_headers
    )
    assert [a["title"] for a in drafts.json()["data"]["items"]] == ["Bozza"]


@pytest.mark.asyncio
async def test_listing_filters_and_pagination(client, admin_headers, category_id):
    for n, tags in enumerate([["sole"], ["ombra"], ["sole", "vaso"]]):
        await _create_article(
            client, admin_headers, category_id,
            title=f"Pianta {n}", published=True, tags=tags,
        )

    tagged = await client.get("/api/v1/articles", params={"tags": "vaso,ombra", "order_by": "title_asc"})
    assert [a["title"] for a in tagged.json()["data"]["items"]] == ["Pianta 1", "Pianta 2"]

    paged = await client.get("/api/v1/articles", params={"limit": 2, "page": 2, "order_by": "title_asc"})
    data = paged.json()["data"]
    assert [a["title"] for a in data["items"]] == ["Pianta 2"]
    assert data["totalPages"] == 2

    bad = await client.get("/api/v1/articles", params={"primary_category_id": "xyz"})
    assert bad.status_code == 400


@pytest.mark.asyncio
async def test_article_read_by_slug_counts_views_on_request(client, admin_headers, category_id):
    article = await _create_article(client, admin_headers, category_id, published=True)
    url = "/api/v1/articles/slug/rosa-canina"

    plain = await client.get(url)
    assert plain.json()["data"]["views"] == 0

    first = await client.get(url, params={"increment_views": "true"})
    second = await client.get(url, params={"increment_views": "true"})
    assert first.json()["data"]["views"] == 1
    assert second.json()["data"]["views"] == 2
    assert second.json()["data"]["url"] == "/articles/rosa-canina"

    admin_read = await client.get(url, params={"increment_views": "true"}, headers=admin_headers)
    assert admin_read.json()["data"]["views"] == 2

    by_id = await client.get(f"/api/v1/articles/{article['id']}")
    assert by_id.json()["data"]["slug"] == "rosa-canina"


@pytest.mark.asyncio
async def test_article_payload_is_camel_case(client, admin_headers, category_id):
    article = await _create_article(
        client, admin_headers, category_id,
        title="Lavanda", published=True,
        displayOrder=3, careInfo={"soilPh": {"min": 6.5, "max": 8.0}},
    )

    assert article["primaryCategoryId"] == category_id
    assert article["displayOrder"] == 3
    assert article["likeCount"] == 0
    assert article["publishedAt"] is not None
    assert article["careInfo"]["soilPh"] == {"min": 6.5, "max": 8.0, "optimal": None}
    assert "primary_category_id" not in article
    assert "like_count" not in article


@pytest.mark.asyncio
async def test_draft_is_hidden_from_public_reads(client, admin_headers, category_id):
    draft = await _create_article(client, admin_headers, category_id)

    assert (await client.get(f"/api/v1/articles/{draft['id']}")).status_code == 404
    assert (await client.get("/api/v1/articles/slug/rosa-canina")).status_code == 404
    admin_view = await client.get(f"/api/v1/articles/{draft['id']}", headers=admin_headers)
    assert admin_view.status_code == 200


@pytest.mark.asyncio
async def test_article_update_and_delete(client, admin_headers, category_id):
    article = await _create_article(client, admin_headers, category_id)

    updated = await client.patch(
        f"/api/v1/articles/{article['id']}",
        json={"title": "Rosa selvatica", "published": True},
        headers=admin_headers,
    )
    data = updated.json()["data"]
    assert data["title"] == "Rosa selvatica"
    assert data["slug"] == "rosa-canina"
    assert data["publishedAt"] is not None

    deleted = await client.delete(f"/api/v1/articles/{article['id']}", headers=admin_headers)
    assert deleted.json()["data"] == {"deleted": True, "id": article["id"]}
    again = await client.delete(f"/api/v1/articles/{article['id']}", headers=admin_headers)
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_article_slug_conflict(client, admin_headers, category_id):
    await _create_article(client, admin_headers, category_id)
    response = await client.post(
        "/api/v1/articles",
        json={"title": "Rosa Canina", "description": "Again", "primary_category_id": category_id},
        headers=admin_headers,
    )
    assert response.status_code == 409


# ── Likes ────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_like_toggle(client, admin_headers, category_id):
    article = await _create_article(client, admin_headers, category_id, published=True)
    url = f"/api/v1/articles/{article['id']}/like"
    headers = {"User-Agent": BROWSER_UA}

    liked = await client.post(url, json={"identifier": "visitor-1"}, headers=headers)
    assert liked.json()["data"] == {"liked": True, "count": 1}

    other = await client.post(url, json={"identifier": "visitor-2"}, headers=headers)
    assert other.json()["data"] == {"liked": True, "count": 2}

    unliked = await client.post(url, json={"identifier": "visitor-1"}, headers=headers)
    assert unliked.json()["data"] == {"liked": False, "count": 1}

    stored = await client.get(f"/api/v1/articles/{article['id']}")
    assert stored.json()["data"]["likeCount"] == 1
    assert "likes" not in stored.json()["data"]


@pytest.mark.asyncio
async def test_like_on_draft_is_accepted(client, admin_headers, category_id):
    draft = await _create_article(client, admin_headers, category_id)
    response = await client.post(
        f"/api/v1/articles/{draft['id']}/like",
        json={"identifier": "visitor-1"},
        headers={"User-Agent": BROWSER_UA},
    )
    assert response.status_code == 200
    assert response.json()["data"] == {"liked": True, "count": 1}


@pytest.mark.asyncio
async def test_like_rejections(client, admin_headers, category_id):
    article = await _create_article(client, admin_headers, category_id, published=True)
    url = f"/api/v1/articles/{article['id']}/like"

    short = await client.post(url, json={"identifier": "v"}, headers={"User-Agent": "tiny"})
    assert short.status_code == 400

    bot = await client.post(
        url,
        json={"identifier": "v"},
        headers={"User-Agent": "Mozilla/5.0 (compatible; Googlebot/2.1; +google)"},
    )
    assert bot.status_code == 403
    assert bot.json()["error"] == "Potential bot detected"

    missing = await client.post(
        "/api/v1/articles/00000000-0000-4000-8000-000000000000/like",
        json={"identifier": "v"},
        headers={"User-Agent": BROWSER_UA},
    )
    assert missing.status_code == 404

    malformed = await client.post(
        "/api/v1/articles/123/like", json={"identifier": "v"}, headers={"User-Agent": BROWSER_UA}
    )
    assert malformed.status_code == 400


@pytest.mark.asyncio
async def test_like_daily_limit(client, admin_headers, category_id):
    article = await _create_article(client, admin_headers, category_id, published=True)
    url = f"/api/v1/articles/{article['id']}/like"
    headers = {"User-Agent": BROWSER_UA}

    for _ in range(10):
        await client.post(url, json={"identifier": "busy"}, headers=headers)
        await client.post(url, json={"identifier": "busy"}, headers=headers)

    limited = await client.post(url, json={"identifier": "busy"}, headers=headers)
    assert limited.status_code == 429
    assert limited.json()["error"] == "Daily interaction limit reached"


# ── Users ────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_user_admin_and_password_change(client, admin_headers, editor_headers):
    created = await client.post(
        "/api/v1/users",
        json={"email": "new@garden.example.com", "password": "Girasole7", "name": "N", "surname": "U"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    assert "password_hash" not in created.json()["data"]

    forbidden = await client.get("/api/v1/users", headers=editor_headers)
    assert forbidden.status_code == 403

    changed = await client.patch(
        "/api/v1/users/me/password",
        json={"current_password": PASSWORD, "new_password": "Camelia123"},
        headers=editor_headers,
    )
    assert changed.status_code == 200
    relogin = await client.post(
        "/api/v1/auth/login", json={"email": EDITOR_EMAIL, "password": "Camelia123"}
    )
    assert relogin.status_code == 200

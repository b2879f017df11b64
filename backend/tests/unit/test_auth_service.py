"""Unit tests for the AuthService."""

import pytest

from fakes import FakeUserRepository
from app.application.services import AuthService
from app.domain.entities import User, UserRole
from app.domain.exceptions import AuthenticationError
from app.infrastructure.security import BcryptPasswordHasher, JwtTokenService

PASSWORD = "Tulipano42"


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def users() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def tokens() -> JwtTokenService:
    return JwtTokenService("auth-service-test-secret-long-enough", expires_minutes=30)


@pytest.fixture
def service(users, hasher, tokens) -> AuthService:
    return AuthService(users, hasher, tokens)


async def _add_user(users, hasher, email="editor@example.com", active=True, role=UserRole.STANDARD):
    return await users.create(
        User(
            email=email,
            password_hash=hasher.hash(PASSWORD),
            name="Eva",
            surname="Verdi",
            role=role,
            active=active,
        )
    )


@pytest.mark.asyncio
async def test_login_success_updates_last_access(service, users, hasher):
    user = await _add_user(users, hasher)
    assert user.last_access_at is None

    result = await service.login("Editor@Example.com", PASSWORD)

    assert result.user.id == user.id
    assert result.user.last_access_at is not None
    assert result.expires_in == 30 * 60
    assert result.token


@pytest.mark.asyncio
async def test_login_failures_share_one_message(service, users, hasher):
    await _add_user(users, hasher)
    await _add_user(users, hasher, email="disabled@example.com", active=False)

    messages = set()
    for email, password in [
        ("editor@example.com", "WrongPass1"),
        ("nobody@example.com", PASSWORD),
        ("disabled@example.com", PASSWORD),
    ]:
        with pytest.raises(AuthenticationError) as exc:
            await service.login(email, password)
        messages.add(str(exc.value))

    assert messages == {"Invalid credentials"}


@pytest.mark.asyncio
async def test_authenticate_token_round_trip(service, users, hasher):
    user = await _add_user(users, hasher, role=UserRole.ADMIN)
    result = await service.login(user.email, PASSWORD)

    resolved = await service.authenticate_token(result.token)
    assert resolved.id == user.id
    assert resolved.is_admin


@pytest.mark.asyncio
async def test_authenticate_token_for_deactivated_user(service, users, hasher):
    user = await _add_user(users, hasher)
    result = await service.login(user.email, PASSWORD)
    user.active = False

    with pytest.raises(AuthenticationError):
        await service.authenticate_token(result.token)


@pytest.mark.asyncio
async def test_logout_is_stateless(service, users, hasher):
    user = await _add_user(users, hasher)
    assert await service.logout(user) is True

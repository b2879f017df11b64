"""Application service for sign-in and bearer-token resolution."""

import logging
from dataclasses import dataclass

from app.application.interfaces import PasswordHasher, TokenService, UserRepository
from app.domain.entities import User
from app.domain.exceptions import AuthenticationError

logger = logging.getLogger("app.auth")

# Every login failure surfaces the same message so callers cannot probe
# which emails exist or which accounts are disabled.
INVALID_CREDENTIALS = "Invalid credentials"


@dataclass(frozen=True)
class LoginResult:
    user: User
    token: str
    expires_in: int


class AuthService:
    """Verifies credentials and maps bearer tokens back to active users."""

    def __init__(self, users: UserRepository, hasher: PasswordHasher, tokens: TokenService):
        self._users = users
        self._hasher = hasher
        self._tokens = tokens

    async def login(self, email: str, password: str) -> LoginResult:
        user = await self._users.get_by_email(email.lower())
        if user is None or not user.active:
            logger.info("Login refused for %s", email)
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not self._hasher.verify(password, user.password_hash):
            logger.info("Login refused for %s: bad password", email)
            raise AuthenticationError(INVALID_CREDENTIALS)

        user.touch_last_access()
        user = await self._users.update(user)
        token = self._tokens.issue(user)
        logger.info("User %s signed in", user.email)
        return LoginResult(user=user, token=token, expires_in=self._tokens.expires_in_seconds)

    async def authenticate_token(self, token: str) -> User:
        """Resolve a bearer token to its active user or raise AuthenticationError."""
        claims = self._tokens.decode(token)
        user = await self._users.get_by_id(claims.subject)
        if user is None or not user.active:
            logger.info("Token subject %s is unknown or disabled", claims.subject)
            raise AuthenticationError("Invalid or expired token")
        return user

    async def logout(self, user: User) -> bool:
        # Tokens are stateless; sign-out only leaves an audit line.
        logger.info("User %s signed out", user.email)
        return True

"""JWT (PyJWT) implementation of the TokenService port."""

import logging
from datetime import datetime, timedelta, timezone

import jwt

from app.application.interfaces import TokenClaims, TokenService
from app.domain.entities import User
from app.domain.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class JwtTokenService(TokenService):
    """Signs ``sub``/``email``/``role`` claims with a shared secret."""

    def __init__(self, secret: str, algorithm: str = "HS256", expires_minutes: int = 1440):
        self._secret = secret
        self._algorithm = algorithm
        self._expires = timedelta(minutes=expires_minutes)

    @property
    def expires_in_seconds(self) -> int:
        return int(self._expires.total_seconds())

    def issue(self, user: User) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user.id,
            "email": user.email,
            "role": user.role.value,
            "iat": now,
            "exp": now + self._expires,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired token")
            raise AuthenticationError("Token expired")
        except jwt.InvalidTokenError as exc:
            logger.info("Rejected invalid token: %s", exc)
            raise AuthenticationError("Invalid or expired token")
        return TokenClaims(
            subject=payload["sub"],
            email=payload.get("email", ""),
            role=payload.get("role", ""),
        )

"""Ports for password hashing and bearer-token handling."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.domain.entities import User


@dataclass(frozen=True)
class TokenClaims:
    """Verified contents of a bearer token."""

    subject: str
    email: str
    role: str


class PasswordHasher(ABC):
    """One-way password hashing."""

    @abstractmethod
    def hash(self, password: str) -> str:
        ...

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        ...


class TokenService(ABC):
    """Issues and verifies signed session tokens."""

    expires_in_seconds: int

    @abstractmethod
    def issue(self, user: User) -> str:
        ...

    @abstractmethod
    def decode(self, token: str) -> TokenClaims:
        """Return the token's claims or raise AuthenticationError."""
        ...

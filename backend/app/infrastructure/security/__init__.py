from .password_hasher import BcryptPasswordHasher
from .token_service import JwtTokenService

__all__ = ["BcryptPasswordHasher", "JwtTokenService"]

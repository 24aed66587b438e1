"""Security module for password hashing and bearer tokens."""

from functools import lru_cache

from app.config.settings import settings

from .password_hasher import PasswordHasher
from .jwt_handler import JWTManager


@lru_cache()
def get_password_hasher() -> PasswordHasher:
    """Process-wide hasher configured from settings."""
    return PasswordHasher(rounds=settings.PASSWORD_BCRYPT_ROUNDS)


@lru_cache()
def get_jwt_manager() -> JWTManager:
    """Process-wide token manager configured from settings."""
    return JWTManager(
        secret_key=settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        access_token_expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )


__all__ = [
    "PasswordHasher",
    "JWTManager",
    "get_password_hasher",
    "get_jwt_manager",
]

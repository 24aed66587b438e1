"""Core application modules: exceptions, security, middleware and notification templates."""

from .security import PasswordHasher, JWTManager

__all__ = ["PasswordHasher", "JWTManager"]

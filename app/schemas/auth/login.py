"""
Login schemas.
Pydantic v2 compliant.
"""

from __future__ import annotations

from pydantic import Field, field_validator

from app.schemas.common.base import BaseCreateSchema, BaseSchema
from app.schemas.user.user_response import UserResponse

__all__ = [
    "LoginRequest",
    "LoginResponse",
]


class LoginRequest(BaseCreateSchema):
    """
    Email/password login request.

    The email is not format-validated here: an unknown or malformed address
    fails the same way as a wrong password.
    """

    email: str = Field(
        ...,
        max_length=255,
        description="User email address",
        examples=["user@college.edu"],
    )
    password: str = Field(
        ...,
        max_length=128,
        description="User password",
    )

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class LoginResponse(BaseSchema):
    """Bearer token plus the authenticated user's profile."""

    token: str = Field(..., description="Bearer access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserResponse = Field(..., description="Authenticated user")

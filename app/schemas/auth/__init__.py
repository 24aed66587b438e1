"""
Authentication schemas package.
Pydantic v2 compliant.

Example:
    from app.schemas.auth import LoginRequest, StudentRegistrationRequest
"""

from app.schemas.auth.login import LoginRequest, LoginResponse
from app.schemas.auth.register import (
    ProfessorRegistrationRequest,
    RegistrationResponse,
    StudentRegistrationRequest,
)

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "ProfessorRegistrationRequest",
    "RegistrationResponse",
    "StudentRegistrationRequest",
]

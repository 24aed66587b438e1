"""
Registration schemas.
Pydantic v2 compliant.
"""

from __future__ import annotations

from pydantic import EmailStr, Field, field_validator

from app.models.base.enums import UserStatus
from app.schemas.common.base import BaseCreateSchema, BaseSchema

__all__ = [
    "StudentRegistrationRequest",
    "ProfessorRegistrationRequest",
    "RegistrationResponse",
]


class _RegistrationBase(BaseCreateSchema):
    """Fields shared by student and professor self-registration."""

    full_name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        validation_alias="name",
        description="Full name",
        examples=["Asha Rao"],
    )
    email: EmailStr = Field(
        ...,
        description="Email address (must be unique)",
        examples=["asha@college.edu"],
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Account password",
    )

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: EmailStr) -> str:
        """Normalize email to lowercase."""
        return str(v).lower().strip()


class StudentRegistrationRequest(_RegistrationBase):
    """Student self-registration; the account starts pending approval."""

    college_id: str = Field(
        ...,
        min_length=1,
        max_length=100,
        validation_alias="collegeId",
        description="College identifier",
    )
    course: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Enrolled course",
        examples=["CS"],
    )


class ProfessorRegistrationRequest(_RegistrationBase):
    """Professor self-registration; the account starts pending approval."""

    professor_id: str = Field(
        ...,
        min_length=1,
        max_length=100,
        validation_alias="professorId",
        description="Staff identifier",
    )
    department: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Department",
        examples=["CS"],
    )


class RegistrationResponse(BaseSchema):
    """Result of a registration."""

    id: str = Field(..., description="New user id")
    status: UserStatus = Field(..., description="Approval status (always pending)")

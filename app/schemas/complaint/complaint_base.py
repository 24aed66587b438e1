"""
Core complaint request schemas.

Field presence is validated here; business rules (non-blank text, role
rules, quota) are enforced by the lifecycle services so every caller gets
the same errors.
"""

from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator

from app.schemas.common.base import BaseCreateSchema

__all__ = [
    "MAX_ATTACHMENTS",
    "ComplaintCreate",
    "ReplyCreate",
    "ComplaintStatusUpdate",
    "ComplaintAssign",
]

MAX_ATTACHMENTS = 10


class ComplaintCreate(BaseCreateSchema):
    """
    Complaint creation payload.

    Students' identity fields are ignored and replaced with their own;
    admins filing on behalf of a student must provide all three.
    """

    topic: str = Field(
        ...,
        max_length=500,
        description="Complaint topic; prefix with '[MEETING REQUEST] ' for a meeting request",
    )
    description: str = Field(
        ...,
        max_length=5000,
        description="Detailed complaint description",
    )
    course: str = Field(
        ...,
        max_length=255,
        description="Course the complaint concerns",
    )
    department: Optional[str] = Field(
        default=None,
        max_length=255,
        description="Routing department (defaults to the course)",
    )
    attachments: List[str] = Field(
        default_factory=list,
        description=f"Attachment references (max {MAX_ATTACHMENTS})",
    )

    # Admin-on-behalf-of fields
    student_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("student_id", "studentId"),
        description="Target student id (admin only)",
    )
    student_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("student_name", "studentName"),
        description="Target student name (admin only)",
    )
    student_email: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("student_email", "studentEmail"),
        description="Target student email (admin only)",
    )

    @field_validator("department", "student_id", "student_name", "student_email")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty optional strings as absent."""
        return v or None


class ReplyCreate(BaseCreateSchema):
    """Reply payload."""

    message: str = Field(
        ...,
        max_length=5000,
        description="Reply text",
    )


class ComplaintStatusUpdate(BaseCreateSchema):
    """Status change payload; the value is checked by the service."""

    status: str = Field(
        ...,
        description="One of submitted, pending, in_progress, solved, rejected",
    )


class ComplaintAssign(BaseCreateSchema):
    """Assignment payload."""

    professor_id: str = Field(
        ...,
        validation_alias=AliasChoices("professor_id", "professorId"),
        description="Approved professor to assign",
    )

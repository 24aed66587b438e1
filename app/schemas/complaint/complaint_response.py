"""
Complaint response schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.models.base.enums import ComplaintStatus, UserRole
from app.schemas.common.base import BaseResponseSchema, BaseSchema

__all__ = [
    "ReplyResponse",
    "ComplaintDetail",
    "WeeklyCountResponse",
    "QuotaStatusResponse",
    "StudentQuotaSummary",
]


class ReplyResponse(BaseResponseSchema):
    """One conversation entry."""

    author_id: str
    author_name: str
    author_role: UserRole
    message: str


class ComplaintDetail(BaseResponseSchema):
    """Complaint with its full conversation."""

    student_id: Optional[str] = Field(default=None, description="Omitted from listings shown to professors")
    student_name: str
    student_email: str

    topic: str
    description: str
    course: str
    department: str
    attachments: List[str] = Field(default_factory=list)

    status: ComplaintStatus
    assigned_professor_id: Optional[str] = None
    assigned_professor_name: Optional[str] = None
    assigned_admin_id: Optional[str] = None
    assigned_admin_name: Optional[str] = None
    solved_by_professor_id: Optional[str] = None
    solved_by_professor_name: Optional[str] = None

    is_meeting_request: bool = False
    replies: List[ReplyResponse] = Field(default_factory=list)
    updated_at: datetime


class WeeklyCountResponse(BaseSchema):
    """Complaints created by a student in the current week."""

    student_id: str
    count: int
    week_start: datetime
    week_end: datetime


class QuotaStatusResponse(BaseSchema):
    """Weekly quota usage for a student."""

    student_id: str
    exceeded: bool = Field(..., description="True when count >= limit")
    count: int
    limit: int
    remaining: int


class StudentQuotaSummary(BaseSchema):
    """A student at or over the weekly limit."""

    student_id: str
    student_name: str
    student_email: str
    count: int
    limit: int

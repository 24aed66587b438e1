"""
User response schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.models.base.enums import UserRole, UserStatus
from app.schemas.common.base import BaseResponseSchema, BaseSchema

__all__ = ["UserResponse", "UserStatsResponse"]


class UserResponse(BaseResponseSchema):
    """Public view of an account; never exposes the password hash."""

    email: str = Field(..., description="Login email")
    full_name: str = Field(..., description="Full name")
    role: UserRole = Field(..., description="Account role")
    status: UserStatus = Field(..., description="Approval status")
    college_id: Optional[str] = Field(default=None, description="Student college identifier")
    course: Optional[str] = Field(default=None, description="Student course")
    professor_id: Optional[str] = Field(default=None, description="Professor staff identifier")
    department: Optional[str] = Field(default=None, description="Professor department")
    updated_at: Optional[datetime] = Field(default=None, description="Last update timestamp")


class UserStatsResponse(BaseSchema):
    """Account counts for the admin dashboard."""

    total_users: int = Field(..., description="All accounts")
    pending_approvals: int = Field(..., description="Accounts awaiting review")
    students: int = Field(..., description="Student accounts in any status")
    professors: int = Field(..., description="Professor accounts in any status")

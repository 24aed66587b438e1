"""
Database enums mirroring schema enums.

Provides SQLAlchemy-compatible enum definitions that are shared by
the Pydantic schemas for consistency.
"""

import enum


class UserRole(str, enum.Enum):
    """User role enumeration."""
    STUDENT = "student"
    PROFESSOR = "professor"
    ADMIN = "admin"


class UserStatus(str, enum.Enum):
    """Account approval status."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ComplaintStatus(str, enum.Enum):
    """Complaint lifecycle status."""
    SUBMITTED = "submitted"
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    SOLVED = "solved"
    REJECTED = "rejected"

    @classmethod
    def parse(cls, value) -> "ComplaintStatus":
        """Resolve a raw value, raising ValueError for anything outside the set."""
        if isinstance(value, cls):
            return value
        return cls(value)

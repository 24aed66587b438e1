"""
Complaint schemas package.

Example:
    from app.schemas.complaint import ComplaintCreate, ComplaintDetail
"""

from app.schemas.complaint.complaint_base import (
    MAX_ATTACHMENTS,
    ComplaintAssign,
    ComplaintCreate,
    ComplaintStatusUpdate,
    ReplyCreate,
)
from app.schemas.complaint.complaint_response import (
    ComplaintDetail,
    QuotaStatusResponse,
    ReplyResponse,
    StudentQuotaSummary,
    WeeklyCountResponse,
)

__all__ = [
    "MAX_ATTACHMENTS",
    "ComplaintAssign",
    "ComplaintCreate",
    "ComplaintStatusUpdate",
    "ReplyCreate",
    "ComplaintDetail",
    "QuotaStatusResponse",
    "ReplyResponse",
    "StudentQuotaSummary",
    "WeeklyCountResponse",
]

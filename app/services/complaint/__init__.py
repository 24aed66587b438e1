"""
Complaint service layer.

- **Lifecycle**: creation, status changes and per-role reads
- **Replies**: conversation entries and meeting-request claims
- **Assignment**: manual professor assignment by admins
- **Quota**: the weekly per-student complaint limit
- **Access**: the shared role and department visibility rules
"""

from app.services.complaint.complaint_access_policy import ComplaintAccessPolicy
from app.services.complaint.complaint_assignment_service import ComplaintAssignmentService
from app.services.complaint.complaint_notifier import ComplaintNotifier
from app.services.complaint.complaint_quota_service import (
    WEEKLY_COMPLAINT_LIMIT,
    ComplaintQuotaService,
    QuotaStatus,
)
from app.services.complaint.complaint_reply_service import ComplaintReplyService
from app.services.complaint.complaint_service import ComplaintService

__all__ = [
    "ComplaintAccessPolicy",
    "ComplaintAssignmentService",
    "ComplaintNotifier",
    "WEEKLY_COMPLAINT_LIMIT",
    "ComplaintQuotaService",
    "QuotaStatus",
    "ComplaintReplyService",
    "ComplaintService",
]

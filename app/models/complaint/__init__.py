"""Complaint models."""

from app.models.complaint.complaint import (
    MEETING_REQUEST_MARKER,
    UNKNOWN_DEPARTMENT,
    Complaint,
)
from app.models.complaint.complaint_reply import ComplaintReply

__all__ = [
    "Complaint",
    "ComplaintReply",
    "MEETING_REQUEST_MARKER",
    "UNKNOWN_DEPARTMENT",
]

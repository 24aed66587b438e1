"""
Complaint repositories package.

Repositories:
    - ComplaintRepository: Complaint creation, listing, window counts and single-row updates
    - ComplaintReplyRepository: Insert-only conversation entries

Example:
    from app.repositories.complaint import ComplaintRepository

    repo = ComplaintRepository(session)
    visible = repo.find_visible_to_professor(professor.id, professor.department)
"""

from app.repositories.complaint.complaint_repository import ComplaintRepository
from app.repositories.complaint.complaint_reply_repository import ComplaintReplyRepository

__all__ = [
    "ComplaintRepository",
    "ComplaintReplyRepository",
]

"""
Complaint reply repository. Replies are insert-only.
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.base.enums import UserRole
from app.models.complaint.complaint_reply import ComplaintReply
from app.repositories.base.base_repository import BaseRepository


class ComplaintReplyRepository(BaseRepository[ComplaintReply]):
    """Append and read complaint conversation entries."""

    def __init__(self, session: Session):
        super().__init__(ComplaintReply, session)

    def append_reply(
        self,
        complaint_id: str,
        author_id: str,
        author_name: str,
        author_role: UserRole,
        message: str,
        commit: bool = True,
    ) -> ComplaintReply:
        """Insert one reply row; never touches existing replies."""
        reply = ComplaintReply(
            complaint_id=complaint_id,
            author_id=author_id,
            author_name=author_name,
            author_role=author_role,
            message=message,
        )
        return self.create(reply, commit=commit)

    def find_by_complaint(self, complaint_id: str) -> List[ComplaintReply]:
        query = (
            select(ComplaintReply)
            .where(ComplaintReply.complaint_id == complaint_id)
            .order_by(ComplaintReply.created_at)
        )
        return list(self.db.execute(query).scalars().all())

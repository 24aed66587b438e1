"""
Complaint reply model.

Replies are stored as their own rows so that appending one is a single
INSERT; concurrent replies to the same complaint never overwrite each other.
Replies are immutable once written.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import BaseModel
from app.models.base.enums import UserRole
from app.models.base.types import UTCDateTime, utc_now
from app.models.user.user import enum_values

if TYPE_CHECKING:
    from app.models.complaint.complaint import Complaint

__all__ = ["ComplaintReply"]


class ComplaintReply(BaseModel):
    """
    One message in a complaint's conversation.

    Attributes:
        complaint_id: Parent complaint
        author_id: User who wrote the reply
        author_name: Author display name at the time of writing
        author_role: Author role at the time of writing
        message: Trimmed reply text
        created_at: Server-assigned timestamp
    """

    __tablename__ = "complaint_replies"
    __table_args__ = (
        Index("ix_complaint_replies_complaint_created", "complaint_id", "created_at"),
    )

    complaint_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("complaints.id", ondelete="CASCADE"),
        nullable=False,
        comment="Parent complaint"
    )
    author_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        comment="Reply author"
    )
    author_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Author name at time of writing"
    )
    author_role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        comment="Author role at time of writing"
    )
    message: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Reply text"
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utc_now,
        comment="Reply timestamp"
    )

    complaint: Mapped["Complaint"] = relationship("Complaint", back_populates="replies")

"""
Core complaint model with status, assignment and meeting-request tracking.

The student identity on a complaint is a snapshot taken at creation time and
is never re-synchronised with the user record.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import JSON, Enum, Index, String, Text, or_
from sqlalchemy.ext.hybrid import hybrid_method
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel
from app.models.base.enums import ComplaintStatus
from app.models.user.user import enum_values

if TYPE_CHECKING:
    from app.models.complaint.complaint_reply import ComplaintReply

__all__ = ["Complaint", "MEETING_REQUEST_MARKER", "UNKNOWN_DEPARTMENT"]

MEETING_REQUEST_MARKER = "[MEETING REQUEST] "
UNKNOWN_DEPARTMENT = "Unknown Department"


class Complaint(TimestampModel):
    """
    Complaint filed by (or on behalf of) a student.

    Attributes:
        student_id: Id of the student the complaint belongs to
        student_name: Student name at creation time
        student_email: Student email at creation time

        topic: Short summary; a leading MEETING_REQUEST_MARKER marks a meeting request
        description: Full complaint text
        course: Course the complaint concerns; drives professor visibility
        department: Routing department, never empty
        attachments: Opaque attachment references, in upload order

        status: Current lifecycle status
        assigned_professor_id: Professor currently responsible
        assigned_professor_name: Display name of that professor
        assigned_admin_id: Admin handling a meeting request
        assigned_admin_name: Display name of that admin
        solved_by_professor_id: Professor who moved the complaint to solved
        solved_by_professor_name: Display name of that professor

        replies: Conversation, oldest first
    """

    __tablename__ = "complaints"
    __table_args__ = (
        Index("ix_complaints_student_created", "student_id", "created_at"),
        Index("ix_complaints_course", "course"),
        Index("ix_complaints_assigned_professor", "assigned_professor_id"),
        Index("ix_complaints_status", "status"),
    )

    # Student snapshot
    student_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        comment="Student user id"
    )
    student_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Student name at creation time"
    )
    student_email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Student email at creation time"
    )

    # Content
    topic: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        comment="Complaint topic"
    )
    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Complaint description"
    )
    course: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Course the complaint concerns"
    )
    department: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default=UNKNOWN_DEPARTMENT,
        comment="Routing department"
    )
    attachments: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Attachment references"
    )

    # Lifecycle
    status: Mapped[ComplaintStatus] = mapped_column(
        Enum(ComplaintStatus, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        default=ComplaintStatus.SUBMITTED,
        comment="Lifecycle status"
    )

    # Assignment
    assigned_professor_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    assigned_professor_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    assigned_admin_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    assigned_admin_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    solved_by_professor_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    solved_by_professor_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    replies: Mapped[List["ComplaintReply"]] = relationship(
        "ComplaintReply",
        back_populates="complaint",
        order_by="ComplaintReply.created_at",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def is_meeting_request(self) -> bool:
        return (self.topic or "").startswith(MEETING_REQUEST_MARKER)

    @hybrid_method
    def visible_to_professor(self, professor_id: str, professor_department: Optional[str]) -> bool:
        """Assigned to the professor, or the professor's department matches the course."""
        if self.assigned_professor_id is not None and self.assigned_professor_id == professor_id:
            return True
        return professor_department is not None and self.course == professor_department

    @visible_to_professor.expression
    def visible_to_professor(cls, professor_id: str, professor_department: Optional[str]):
        assigned = cls.assigned_professor_id == professor_id
        if professor_department is None:
            return assigned
        return or_(assigned, cls.course == professor_department)

    def __repr__(self) -> str:
        return f"<Complaint(id={self.id}, status={self.status}, student_id={self.student_id})>"

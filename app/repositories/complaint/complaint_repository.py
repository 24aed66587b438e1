"""
Core complaint repository.

Handles complaint creation, role-scoped listing, weekly window counts and
the single-row updates used by the lifecycle services.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.complaint.complaint import Complaint
from app.models.base.enums import ComplaintStatus
from app.repositories.base.base_repository import BaseRepository


class ComplaintRepository(BaseRepository[Complaint]):
    """
    Complaint data access.

    Status, assignment and claim changes go through ``update_fields`` so
    each one is a single column-level UPDATE on one row.
    """

    def __init__(self, session: Session):
        """
        Initialize complaint repository.

        Args:
            session: SQLAlchemy database session
        """
        super().__init__(Complaint, session)

    # ==================== CRUD Operations ====================

    def create_complaint(
        self,
        student_id: str,
        student_name: str,
        student_email: str,
        topic: str,
        description: str,
        course: str,
        department: str,
        attachments: Optional[List[str]] = None,
        assigned_professor_id: Optional[str] = None,
        assigned_professor_name: Optional[str] = None,
        assigned_admin_id: Optional[str] = None,
        assigned_admin_name: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> Complaint:
        """
        Create a complaint in ``submitted`` status.

        Args:
            student_id: Owning student id
            student_name: Student name snapshot
            student_email: Student email snapshot
            topic: Complaint topic
            description: Complaint body
            course: Course the complaint concerns
            department: Routing department (already defaulted by the caller)
            attachments: Attachment references
            assigned_professor_id: Auto-assigned professor, if any
            assigned_professor_name: Auto-assigned professor name
            assigned_admin_id: Self-assigned admin for meeting requests
            assigned_admin_name: Self-assigned admin name
            created_at: Override of the creation instant (imports and tests)

        Returns:
            Created complaint
        """
        complaint = Complaint(
            student_id=student_id,
            student_name=student_name,
            student_email=student_email,
            topic=topic,
            description=description,
            course=course,
            department=department,
            attachments=list(attachments or []),
            status=ComplaintStatus.SUBMITTED,
            assigned_professor_id=assigned_professor_id,
            assigned_professor_name=assigned_professor_name,
            assigned_admin_id=assigned_admin_id,
            assigned_admin_name=assigned_admin_name,
        )
        if created_at is not None:
            complaint.created_at = created_at
            complaint.updated_at = created_at
        return self.create(complaint)

    # ==================== Listing ====================

    def find_by_student(self, student_id: str) -> List[Complaint]:
        query = (
            select(Complaint)
            .where(Complaint.student_id == student_id)
            .order_by(Complaint.created_at.desc())
        )
        return list(self.db.execute(query).scalars().all())

    def find_visible_to_professor(
        self,
        professor_id: str,
        professor_department: Optional[str],
    ) -> List[Complaint]:
        """Complaints a professor may see, using the shared visibility predicate."""
        query = (
            select(Complaint)
            .where(Complaint.visible_to_professor(professor_id, professor_department))
            .order_by(Complaint.created_at.desc())
        )
        return list(self.db.execute(query).scalars().all())

    def list_all(self) -> List[Complaint]:
        return self.find_all(order_by=Complaint.created_at.desc())

    # ==================== Weekly Window ====================

    def count_created_between(self, student_id: str, start: datetime, end: datetime) -> int:
        """Count a student's complaints with start <= created_at <= end."""
        query = select(func.count(Complaint.id)).where(
            Complaint.student_id == student_id,
            Complaint.created_at >= start,
            Complaint.created_at <= end,
        )
        return int(self.db.execute(query).scalar_one())

    def find_students_at_or_over(
        self,
        start: datetime,
        end: datetime,
        limit: int,
    ) -> List[Dict[str, Any]]:
        """Students whose complaint count in the window is at least ``limit``."""
        count_column = func.count(Complaint.id).label("count")
        query = (
            select(
                Complaint.student_id,
                func.max(Complaint.student_name).label("student_name"),
                func.max(Complaint.student_email).label("student_email"),
                count_column,
            )
            .where(Complaint.created_at >= start, Complaint.created_at <= end)
            .group_by(Complaint.student_id)
            .having(func.count(Complaint.id) >= limit)
            .order_by(count_column.desc(), Complaint.student_id)
        )
        return [dict(row._mapping) for row in self.db.execute(query).all()]

    # ==================== Single-row Updates ====================

    def set_status(
        self,
        complaint_id: str,
        status: ComplaintStatus,
        solved_by_id: Optional[str] = None,
        solved_by_name: Optional[str] = None,
    ) -> int:
        values: Dict[str, Any] = {"status": status}
        if solved_by_id is not None:
            values["solved_by_professor_id"] = solved_by_id
            values["solved_by_professor_name"] = solved_by_name
        return self.update_fields(complaint_id, values)

    def assign_professor(self, complaint_id: str, professor_id: str, professor_name: str) -> int:
        """Assign a professor and reset triage to ``pending``."""
        return self.update_fields(
            complaint_id,
            {
                "assigned_professor_id": professor_id,
                "assigned_professor_name": professor_name,
                "status": ComplaintStatus.PENDING,
            },
        )

    def claim_for_admin(
        self,
        complaint_id: str,
        admin_id: str,
        admin_name: str,
        commit: bool = True,
    ) -> bool:
        """
        Assign an admin only if none is assigned yet.

        Returns True when this call made the claim.
        """
        updated = self.update_fields(
            complaint_id,
            {"assigned_admin_id": admin_id, "assigned_admin_name": admin_name},
            conditions=[Complaint.assigned_admin_id.is_(None)],
            commit=commit,
        )
        return updated == 1

    def touch(self, complaint_id: str, commit: bool = True) -> int:
        """Bump updated_at only."""
        return self.update_fields(complaint_id, {}, commit=commit)

"""
User repository: account lookups, approval state and role/department queries
used for complaint routing and notification fan-out.
"""

from typing import List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from app.models.base.enums import UserRole, UserStatus
from app.models.user.user import User
from app.repositories.base.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """Data access for portal accounts."""

    def __init__(self, session: Session):
        """
        Initialize user repository.

        Args:
            session: SQLAlchemy database session
        """
        super().__init__(User, session)

    # ==================== Lookups ====================

    def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email, case-insensitively."""
        query = select(User).where(User.email == email.strip().lower())
        return self.db.execute(query).scalar_one_or_none()

    def email_exists(self, email: str) -> bool:
        return self.find_by_email(email) is not None

    def find_approved_professor(self, professor_id: str) -> Optional[User]:
        """Return the user only if it is an approved professor."""
        query = select(User).where(
            User.id == professor_id,
            User.role == UserRole.PROFESSOR,
            User.status == UserStatus.APPROVED,
        )
        return self.db.execute(query).scalar_one_or_none()

    # ==================== Routing Queries ====================

    def find_approved_professors_for_course(self, course: str) -> List[User]:
        """
        Approved professors whose department or course equals the given course,
        oldest account first so the result order is stable.
        """
        query = (
            select(User)
            .where(
                User.role == UserRole.PROFESSOR,
                User.status == UserStatus.APPROVED,
                or_(User.department == course, User.course == course),
            )
            .order_by(User.created_at, User.id)
        )
        return list(self.db.execute(query).scalars().all())

    def find_approved_professors_in_department(self, department: str) -> List[User]:
        query = (
            select(User)
            .where(
                User.role == UserRole.PROFESSOR,
                User.status == UserStatus.APPROVED,
                User.department == department,
            )
            .order_by(User.created_at, User.id)
        )
        return list(self.db.execute(query).scalars().all())

    def find_approved_admins(self) -> List[User]:
        query = (
            select(User)
            .where(User.role == UserRole.ADMIN, User.status == UserStatus.APPROVED)
            .order_by(User.created_at, User.id)
        )
        return list(self.db.execute(query).scalars().all())

    # ==================== Directory ====================

    def list_users(
        self,
        status: Optional[UserStatus] = None,
        role: Optional[UserRole] = None,
    ) -> List[User]:
        """All users, newest first, optionally filtered by approval status and role."""
        query = select(User)
        if status is not None:
            query = query.where(User.status == status)
        if role is not None:
            query = query.where(User.role == role)
        query = query.order_by(User.created_at.desc(), User.id)
        return list(self.db.execute(query).scalars().all())

    def count_by_role_and_status(self) -> List[Tuple[UserRole, UserStatus, int]]:
        """Rows of (role, status, number of accounts)."""
        query = select(User.role, User.status, func.count(User.id)).group_by(User.role, User.status)
        return [(role, status, count) for role, status, count in self.db.execute(query).all()]

    def set_status(self, user_id: str, status: UserStatus) -> int:
        """Change the approval status of one user."""
        return self.update_fields(user_id, {"status": status})

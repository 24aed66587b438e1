"""
User model configuration.
"""
from typing import Optional

from sqlalchemy import Enum, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import TimestampModel
from app.models.base.enums import UserRole, UserStatus


def enum_values(enum_cls):
    """Persist enum members by value (``"student"``) rather than by name."""
    return [member.value for member in enum_cls]


class User(TimestampModel):
    """
    Registered account for a student, professor or administrator.

    Students and professors self-register in ``pending`` status and must be
    approved before they can log in. Administrators are provisioned at
    startup and are never gated on status.

    Attributes:
        email: Unique login email, normalised to lowercase
        password_hash: Bcrypt hash of the password
        full_name: Display name

        role: student, professor or admin
        status: pending, approved or rejected

        college_id: Student college identifier
        course: Student course, used as department for complaint routing
        professor_id: Professor staff identifier
        department: Professor department, matched against complaint department
    """
    __tablename__ = "users"
    __table_args__ = (
        Index("ix_users_role_status", "role", "status"),
        Index("ix_users_department", "department"),
        {"comment": "Portal accounts and approval state"},
    )

    # Authentication & Identity
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="Unique email address (normalized to lowercase)"
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )
    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Full name of the user"
    )

    # Role & Approval
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        comment="Primary user role"
    )
    status: Mapped[UserStatus] = mapped_column(
        Enum(UserStatus, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        default=UserStatus.PENDING,
        comment="Administrator approval state"
    )

    # Student profile
    college_id: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        comment="Student college identifier"
    )
    course: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Student course"
    )

    # Professor profile
    professor_id: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        comment="Professor staff identifier"
    )
    department: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Professor department"
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_approved(self) -> bool:
        return self.status == UserStatus.APPROVED

    @property
    def can_log_in(self) -> bool:
        """Admins bypass the approval gate; everyone else must be approved."""
        return self.is_admin or self.is_approved

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"

"""
Self-registration for students and professors.

New accounts always start in ``pending`` status; administrators are never
created through this path.
"""

from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import EntityAlreadyExistsError
from app.core.security import PasswordHasher, get_password_hasher
from app.models.base.enums import UserRole, UserStatus
from app.models.user.user import User
from app.repositories.user.user_repository import UserRepository
from app.schemas.auth.register import (
    ProfessorRegistrationRequest,
    RegistrationResponse,
    StudentRegistrationRequest,
)
from app.services.base.base_service import BaseService
from app.services.base.service_result import ServiceResult


class RegistrationService(BaseService[User, UserRepository]):
    """
    Public-facing user registration.

    Args:
        db_session: SQLAlchemy database session
        password_hasher: Hasher (process default if omitted)
    """

    def __init__(self, db_session: Session, password_hasher: Optional[PasswordHasher] = None):
        super().__init__(UserRepository(db_session), db_session)
        self.hasher = password_hasher or get_password_hasher()

    def register_student(self, request: StudentRegistrationRequest) -> ServiceResult[RegistrationResponse]:
        return self._register(
            request.email,
            request.password,
            request.full_name,
            UserRole.STUDENT,
            college_id=request.college_id,
            course=request.course,
        )

    def register_professor(self, request: ProfessorRegistrationRequest) -> ServiceResult[RegistrationResponse]:
        return self._register(
            request.email,
            request.password,
            request.full_name,
            UserRole.PROFESSOR,
            professor_id=request.professor_id,
            department=request.department,
        )

    def _register(
        self,
        email: str,
        password: str,
        full_name: str,
        role: UserRole,
        **profile,
    ) -> ServiceResult[RegistrationResponse]:
        email = email.strip().lower()
        if self.repository.email_exists(email):
            return ServiceResult.conflict(
                "An account with this email already exists",
                details={"email": email},
            )

        try:
            user = User(
                email=email,
                password_hash=self.hasher.hash(password),
                full_name=full_name,
                role=role,
                status=UserStatus.PENDING,
                **profile,
            )
            user = self.repository.create(user)
        except EntityAlreadyExistsError:
            # Lost a race with a concurrent registration for the same email.
            return ServiceResult.conflict(
                "An account with this email already exists",
                details={"email": email},
            )
        except Exception as e:
            self._rollback()
            return self._handle_exception(e, f"register {role.value}", email)

        self._log_operation(f"register {role.value}", user.id, {"user_id": user.id})
        return ServiceResult.success(
            RegistrationResponse(id=user.id, status=user.status),
            message="Registration submitted; awaiting administrator approval",
        )

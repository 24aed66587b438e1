"""
Complaint lifecycle service: creation, status changes and reads.

Replies and professor assignment live in their own services; all three
share the access policy and the notifier so permissions and audiences are
decided in one place.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.base.enums import ComplaintStatus, UserRole
from app.models.complaint.complaint import (
    MEETING_REQUEST_MARKER,
    UNKNOWN_DEPARTMENT,
    Complaint,
)
from app.models.user.user import User
from app.repositories.complaint.complaint_repository import ComplaintRepository
from app.repositories.user.user_repository import UserRepository
from app.schemas.complaint.complaint_base import MAX_ATTACHMENTS, ComplaintCreate
from app.schemas.complaint.complaint_response import ComplaintDetail
from app.services.base.base_service import BaseService
from app.services.base.notification_dispatcher import (
    NotificationDispatcher,
    get_notification_dispatcher,
)
from app.services.base.service_result import ServiceResult
from app.services.complaint.complaint_access_policy import ComplaintAccessPolicy
from app.services.complaint.complaint_notifier import ComplaintNotifier
from app.services.complaint.complaint_quota_service import ComplaintQuotaService


class ComplaintService(BaseService[Complaint, ComplaintRepository]):
    """
    Create complaints, change their status and read them per role.

    Args:
        db_session: SQLAlchemy database session
        dispatcher: Notification dispatcher (process default if omitted)
        quota_service: Weekly quota calculator (built from the session if omitted)
        policy: Access policy
    """

    def __init__(
        self,
        db_session: Session,
        dispatcher: Optional[NotificationDispatcher] = None,
        quota_service: Optional[ComplaintQuotaService] = None,
        policy: Optional[ComplaintAccessPolicy] = None,
    ):
        super().__init__(ComplaintRepository(db_session), db_session)
        self.users = UserRepository(db_session)
        self.policy = policy or ComplaintAccessPolicy()
        self.quota = quota_service or ComplaintQuotaService(db_session, self.repository, policy=self.policy)
        self.notifier = ComplaintNotifier(self.users, dispatcher or get_notification_dispatcher())

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    def create(self, actor: User, request: ComplaintCreate) -> ServiceResult[ComplaintDetail]:
        """
        File a complaint.

        Students file for themselves and are held to the weekly quota.
        Admins file on behalf of a named student; a meeting request filed by
        an admin is claimed by that admin immediately.
        """
        if not self.policy.can_create(actor):
            return self._deny("create complaint", actor)

        topic = (request.topic or "").strip()
        description = (request.description or "").strip()
        course = (request.course or "").strip()
        for field, value in (("topic", topic), ("description", description), ("course", course)):
            if not value:
                return ServiceResult.validation_failure(f"{field} must not be empty", field=field)
        if len(request.attachments) > MAX_ATTACHMENTS:
            return ServiceResult.validation_failure(
                f"At most {MAX_ATTACHMENTS} attachments are allowed",
                field="attachments",
                details={"count": len(request.attachments), "limit": MAX_ATTACHMENTS},
            )

        try:
            if actor.role == UserRole.STUDENT:
                student_id, student_name, student_email = actor.id, actor.full_name, actor.email
                quota = self.quota.exceeded(actor.id)
                if quota.exceeded:
                    self._logger.info(
                        f"Weekly quota reached for student {actor.id}",
                        extra={"user_id": actor.id, "count": quota.count},
                    )
                    return ServiceResult.quota_exceeded(quota.count, quota.limit)
            else:
                student_id = request.student_id
                student_name = request.student_name
                student_email = request.student_email
                if not (student_id and student_name and student_email):
                    return ServiceResult.validation_failure(
                        "student_id, student_name and student_email are required when an admin files a complaint",
                        field="student_id",
                    )

            department = request.department or course or UNKNOWN_DEPARTMENT

            professors = self.users.find_approved_professors_for_course(course)
            professor = professors[0] if professors else None

            admin_id = admin_name = None
            if actor.role == UserRole.ADMIN and topic.startswith(MEETING_REQUEST_MARKER):
                admin_id, admin_name = actor.id, actor.full_name

            complaint = self.repository.create_complaint(
                student_id=student_id,
                student_name=student_name,
                student_email=student_email,
                topic=topic,
                description=description,
                course=course,
                department=department,
                attachments=request.attachments,
                assigned_professor_id=professor.id if professor else None,
                assigned_professor_name=professor.full_name if professor else None,
                assigned_admin_id=admin_id,
                assigned_admin_name=admin_name,
            )

            self._log_operation(
                "create complaint",
                complaint.id,
                {
                    "complaint_id": complaint.id,
                    "user_id": actor.id,
                    "assigned_professor_id": complaint.assigned_professor_id,
                },
            )

            detail = ComplaintDetail.model_validate(complaint)
            self.notifier.complaint_created(complaint)

            return ServiceResult.success(
                detail,
                message="Complaint submitted",
            )
        except Exception as e:
            self._rollback()
            return self._handle_exception(e, "create complaint", actor.id)

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    def update_status(self, actor: User, complaint_id: str, status: str) -> ServiceResult[ComplaintDetail]:
        """
        Move a complaint to a new status.

        Setting the current status again succeeds without writing or
        notifying. Only admins may reject; a professor marking a complaint
        solved is recorded as the solver.
        """
        complaint = self.repository.find_by_id(complaint_id)
        if complaint is None:
            return ServiceResult.not_found("Complaint", complaint_id)

        try:
            new_status = ComplaintStatus.parse(status)
        except ValueError as e:
            return ServiceResult.validation_failure(str(e), field="status")

        if not self.policy.can_update_status(actor, complaint, new_status):
            return self._deny(f"set status {new_status.value}", actor, resource=complaint_id)

        old_status = complaint.status
        if old_status == new_status:
            return ServiceResult.success(
                ComplaintDetail.model_validate(complaint),
                message="Status unchanged",
                metadata={"changed": False},
            )

        try:
            solver_id = solver_name = None
            if new_status == ComplaintStatus.SOLVED and actor.role == UserRole.PROFESSOR:
                solver_id, solver_name = actor.id, actor.full_name

            self.repository.set_status(complaint_id, new_status, solver_id, solver_name)
            complaint = self.repository.reload(complaint)

            self._log_operation(
                "update complaint status",
                complaint_id,
                {
                    "complaint_id": complaint_id,
                    "user_id": actor.id,
                    "old_status": old_status.value,
                    "new_status": new_status.value,
                },
            )

            detail = ComplaintDetail.model_validate(complaint)
            self.notifier.status_changed(complaint, old_status, new_status, actor)

            return ServiceResult.success(
                detail,
                message=f"Status changed to {new_status.value}",
                metadata={"changed": True},
            )
        except Exception as e:
            self._rollback()
            return self._handle_exception(e, "update complaint status", complaint_id)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_detail(self, actor: User, complaint_id: str) -> ServiceResult[ComplaintDetail]:
        complaint = self.repository.find_by_id(complaint_id)
        if complaint is None:
            return ServiceResult.not_found("Complaint", complaint_id)
        if not self.policy.can_view(actor, complaint):
            return self._deny("view complaint", actor, resource=complaint_id)
        return ServiceResult.success(ComplaintDetail.model_validate(complaint))

    def list_for_actor(self, actor: User) -> ServiceResult[List[ComplaintDetail]]:
        """
        Complaints visible to the caller, newest first.

        Admins see everything, professors see what the shared visibility
        predicate allows and students see their own.
        """
        try:
            if actor.role == UserRole.ADMIN:
                complaints = self.repository.list_all()
            elif actor.role == UserRole.PROFESSOR:
                complaints = self.repository.find_visible_to_professor(actor.id, actor.department)
            else:
                complaints = self.repository.find_by_student(actor.id)
            items = self._listing(actor, complaints)
            return ServiceResult.success(items, metadata={"count": len(items)})
        except Exception as e:
            return self._handle_exception(e, "list complaints", actor.id)

    def list_for_student(self, actor: User, student_id: str) -> ServiceResult[List[ComplaintDetail]]:
        if not self.policy.can_read_student(actor, student_id):
            return self._deny("list student complaints", actor, resource=student_id)
        try:
            items = self._listing(actor, self.repository.find_by_student(student_id))
            return ServiceResult.success(items, metadata={"count": len(items)})
        except Exception as e:
            return self._handle_exception(e, "list student complaints", student_id)

    def list_for_professor(self, actor: User, professor_id: str) -> ServiceResult[List[ComplaintDetail]]:
        """
        Complaints a given professor can see: assigned to them or filed in
        their department. Open to admins and to the professor themselves.
        """
        if not self.policy.can_read_professor(actor, professor_id):
            return self._deny("list professor complaints", actor, resource=professor_id)

        professor = self.users.find_by_id(professor_id)
        if professor is None or professor.role != UserRole.PROFESSOR:
            return ServiceResult.not_found("Professor", professor_id)

        try:
            complaints = self.repository.find_visible_to_professor(professor.id, professor.department)
            items = self._listing(actor, complaints)
            return ServiceResult.success(items, metadata={"count": len(items)})
        except Exception as e:
            return self._handle_exception(e, "list professor complaints", professor_id)

    def _listing(self, actor: User, complaints: List[Complaint]) -> List[ComplaintDetail]:
        """Listings shown to professors leave out the student's account id."""
        items = [ComplaintDetail.model_validate(c) for c in complaints]
        if actor.role == UserRole.PROFESSOR:
            items = [item.model_copy(update={"student_id": None}) for item in items]
        return items

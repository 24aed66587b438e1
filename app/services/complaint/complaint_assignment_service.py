"""
Manual professor assignment by administrators.
"""

from typing import Optional

from sqlalchemy.orm import Session

from app.models.complaint.complaint import Complaint
from app.models.user.user import User
from app.repositories.complaint.complaint_repository import ComplaintRepository
from app.repositories.user.user_repository import UserRepository
from app.schemas.complaint.complaint_response import ComplaintDetail
from app.services.base.base_service import BaseService
from app.services.base.notification_dispatcher import (
    NotificationDispatcher,
    get_notification_dispatcher,
)
from app.services.base.service_result import ServiceResult
from app.services.complaint.complaint_access_policy import ComplaintAccessPolicy
from app.services.complaint.complaint_notifier import ComplaintNotifier


class ComplaintAssignmentService(BaseService[Complaint, ComplaintRepository]):
    """Assign or reassign the handling professor of a complaint."""

    def __init__(
        self,
        db_session: Session,
        dispatcher: Optional[NotificationDispatcher] = None,
        policy: Optional[ComplaintAccessPolicy] = None,
    ):
        super().__init__(ComplaintRepository(db_session), db_session)
        self.users = UserRepository(db_session)
        self.policy = policy or ComplaintAccessPolicy()
        self.notifier = ComplaintNotifier(self.users, dispatcher or get_notification_dispatcher())

    def assign(self, actor: User, complaint_id: str, professor_id: str) -> ServiceResult[ComplaintDetail]:
        """
        Point a complaint at an approved professor and reset it to ``pending``.

        The previous assignee, if different, is told about the handover.
        """
        if not self.policy.can_assign(actor):
            return self._deny("assign complaint", actor, resource=complaint_id)

        complaint = self.repository.find_by_id(complaint_id)
        if complaint is None:
            return ServiceResult.not_found("Complaint", complaint_id)

        professor = self.users.find_approved_professor(professor_id)
        if professor is None:
            return ServiceResult.not_found("Approved professor", professor_id)

        try:
            previous_id = complaint.assigned_professor_id
            previous = None
            if previous_id and previous_id != professor.id:
                previous = self.users.find_by_id(previous_id)

            self.repository.assign_professor(complaint_id, professor.id, professor.full_name)
            complaint = self.repository.reload(complaint)

            self._log_operation(
                "assign complaint",
                complaint_id,
                {
                    "complaint_id": complaint_id,
                    "user_id": actor.id,
                    "professor_id": professor.id,
                    "previous_professor_id": previous_id,
                },
            )

            detail = ComplaintDetail.model_validate(complaint)
            self.notifier.complaint_assigned(complaint, professor, previous)

            return ServiceResult.success(
                detail,
                message=f"Complaint assigned to {professor.full_name}",
            )
        except Exception as e:
            self._rollback()
            return self._handle_exception(e, "assign complaint", complaint_id)

"""
Complaint reply service.

A reply is one INSERT plus column-level updates on the complaint row, all in
a single transaction, so concurrent replies and status changes never lose
each other's writes.
"""

from typing import Optional

from sqlalchemy.orm import Session

from app.models.base.enums import UserRole
from app.models.complaint.complaint import Complaint
from app.models.user.user import User
from app.repositories.complaint.complaint_reply_repository import ComplaintReplyRepository
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


class ComplaintReplyService(BaseService[Complaint, ComplaintRepository]):
    """Append replies to complaint conversations."""

    def __init__(
        self,
        db_session: Session,
        dispatcher: Optional[NotificationDispatcher] = None,
        policy: Optional[ComplaintAccessPolicy] = None,
    ):
        super().__init__(ComplaintRepository(db_session), db_session)
        self.replies = ComplaintReplyRepository(db_session)
        self.users = UserRepository(db_session)
        self.policy = policy or ComplaintAccessPolicy()
        self.notifier = ComplaintNotifier(self.users, dispatcher or get_notification_dispatcher())

    def add_reply(self, actor: User, complaint_id: str, message: str) -> ServiceResult[ComplaintDetail]:
        """
        Append a reply authored by ``actor``.

        The first admin to reply to an unclaimed meeting request becomes its
        assigned admin; later replies never change the claim.
        """
        text = (message or "").strip()
        if not text:
            return ServiceResult.validation_failure("message must not be empty", field="message")

        complaint = self.repository.find_by_id(complaint_id)
        if complaint is None:
            return ServiceResult.not_found("Complaint", complaint_id)

        if not self.policy.can_reply(actor, complaint):
            return self._deny("reply to complaint", actor, resource=complaint_id)

        try:
            claimed = False
            with self.transaction():
                reply = self.replies.append_reply(
                    complaint_id=complaint_id,
                    author_id=actor.id,
                    author_name=actor.full_name,
                    author_role=actor.role,
                    message=text,
                    commit=False,
                )
                if (
                    complaint.is_meeting_request
                    and actor.role == UserRole.ADMIN
                    and complaint.assigned_admin_id is None
                ):
                    claimed = self.repository.claim_for_admin(
                        complaint_id, actor.id, actor.full_name, commit=False,
                    )
                self.repository.touch(complaint_id, commit=False)

            complaint = self.repository.reload(complaint)

            self._log_operation(
                "reply to complaint",
                complaint_id,
                {
                    "complaint_id": complaint_id,
                    "user_id": actor.id,
                    "reply_id": reply.id,
                    "claimed_meeting": claimed,
                },
            )

            detail = ComplaintDetail.model_validate(complaint)
            self.notifier.complaint_replied(complaint, reply)

            return ServiceResult.success(
                detail,
                message="Reply added",
                metadata={"reply_id": reply.id, "claimed": claimed},
            )
        except Exception as e:
            self._rollback()
            return self._handle_exception(e, "reply to complaint", complaint_id)

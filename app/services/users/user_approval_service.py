"""
Administrator review of self-registered accounts.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.base.enums import UserRole, UserStatus
from app.models.user.user import User
from app.repositories.user.user_repository import UserRepository
from app.schemas.user.user_response import UserResponse, UserStatsResponse
from app.services.base.base_service import BaseService
from app.services.base.notification_dispatcher import (
    NotificationDispatcher,
    NotificationEvent,
    Recipient,
    get_notification_dispatcher,
)
from app.services.base.service_result import ServiceResult


class UserApprovalService(BaseService[User, UserRepository]):
    """
    Approve, reject and list accounts. Every operation is admin-only.

    Approval and rejection are plain status writes: any status may move to
    any other, and repeating the current status is a successful no-op.
    """

    def __init__(self, db_session: Session, dispatcher: Optional[NotificationDispatcher] = None):
        super().__init__(UserRepository(db_session), db_session)
        self.dispatcher = dispatcher or get_notification_dispatcher()

    def approve_user(self, actor: User, user_id: str) -> ServiceResult[UserResponse]:
        return self._set_status(actor, user_id, UserStatus.APPROVED, NotificationEvent.USER_APPROVED)

    def reject_user(self, actor: User, user_id: str) -> ServiceResult[UserResponse]:
        return self._set_status(actor, user_id, UserStatus.REJECTED, NotificationEvent.USER_REJECTED)

    def list_users(
        self,
        actor: User,
        status: Optional[UserStatus] = None,
        role: Optional[UserRole] = None,
    ) -> ServiceResult[List[UserResponse]]:
        if actor.role != UserRole.ADMIN:
            return self._deny("list users", actor)
        items = [UserResponse.model_validate(u) for u in self.repository.list_users(status, role)]
        return ServiceResult.success(items, metadata={"count": len(items)})

    def list_pending(self, actor: User) -> ServiceResult[List[UserResponse]]:
        return self.list_users(actor, UserStatus.PENDING)

    def get_user_stats(self, actor: User) -> ServiceResult[UserStatsResponse]:
        """Totals by role plus the size of the approval queue."""
        if actor.role != UserRole.ADMIN:
            return self._deny("read user stats", actor)
        try:
            rows = self.repository.count_by_role_and_status()
            stats = UserStatsResponse(
                total_users=sum(count for _, _, count in rows),
                pending_approvals=sum(count for _, status, count in rows if status == UserStatus.PENDING),
                students=sum(count for role, _, count in rows if role == UserRole.STUDENT),
                professors=sum(count for role, _, count in rows if role == UserRole.PROFESSOR),
            )
            return ServiceResult.success(stats)
        except Exception as e:
            return self._handle_exception(e, "read user stats")

    def _set_status(
        self,
        actor: User,
        user_id: str,
        status: UserStatus,
        event: NotificationEvent,
    ) -> ServiceResult[UserResponse]:
        action = "approve user" if status == UserStatus.APPROVED else "reject user"
        if actor.role != UserRole.ADMIN:
            return self._deny(action, actor, resource=user_id)

        user = self.repository.find_by_id(user_id)
        if user is None:
            return ServiceResult.not_found("User", user_id)

        if user.status == status:
            return ServiceResult.success(
                UserResponse.model_validate(user),
                message=f"User already {status.value}",
                metadata={"changed": False},
            )

        try:
            self.repository.set_status(user_id, status)
            user = self.repository.reload(user)
        except Exception as e:
            self._rollback()
            return self._handle_exception(e, action, user_id)

        self._log_operation(action, user_id, {"user_id": user_id, "actor_id": actor.id})
        self.dispatcher.notify(
            event,
            [Recipient.from_user(user)],
            {"user_id": user.id, "role": user.role.value, "audience": "user"},
        )
        return ServiceResult.success(
            UserResponse.model_validate(user),
            message=f"User {status.value}",
            metadata={"changed": True},
        )

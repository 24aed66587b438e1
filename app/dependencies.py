# app/dependencies.py
from __future__ import annotations

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.exceptions import AuthenticationError, BaseAppException
from app.db.session import get_db
from app.models.user.user import User
from app.services.auth import AuthenticationService, RegistrationService
from app.services.base.notification_dispatcher import (
    NotificationDispatcher,
    get_notification_dispatcher,
)
from app.services.complaint import (
    ComplaintAssignmentService,
    ComplaintQuotaService,
    ComplaintReplyService,
    ComplaintService,
)
from app.services.users import UserApprovalService


bearer_scheme = HTTPBearer(auto_error=False)


# ------------------------------------------------------------------ #
# Infrastructure
# ------------------------------------------------------------------ #
def get_dispatcher() -> NotificationDispatcher:
    """Notification dispatcher; tests override this to record deliveries."""
    return get_notification_dispatcher()


# ------------------------------------------------------------------ #
# Service factories
# ------------------------------------------------------------------ #
def get_authentication_service(db: Session = Depends(get_db)) -> AuthenticationService:
    return AuthenticationService(db)


def get_registration_service(db: Session = Depends(get_db)) -> RegistrationService:
    return RegistrationService(db)


def get_user_approval_service(
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> UserApprovalService:
    return UserApprovalService(db, dispatcher=dispatcher)


def get_quota_service(db: Session = Depends(get_db)) -> ComplaintQuotaService:
    return ComplaintQuotaService(db)


def get_complaint_service(
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    quota_service: ComplaintQuotaService = Depends(get_quota_service),
) -> ComplaintService:
    return ComplaintService(db, dispatcher=dispatcher, quota_service=quota_service)


def get_reply_service(
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> ComplaintReplyService:
    return ComplaintReplyService(db, dispatcher=dispatcher)


def get_assignment_service(
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> ComplaintAssignmentService:
    return ComplaintAssignmentService(db, dispatcher=dispatcher)


# ------------------------------------------------------------------ #
# Current user
# ------------------------------------------------------------------ #
def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_service: AuthenticationService = Depends(get_authentication_service),
) -> User:
    """
    Resolve the bearer token to the live user.

    Raises AuthenticationError (401) for a missing or invalid token and
    PendingApprovalError (403) when the account is no longer approved.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Missing bearer token")

    result = auth_service.resolve_token(credentials.credentials)
    if not result.is_success:
        raise BaseAppException.from_service_error(result.error)
    return result.data


__all__ = [
    "bearer_scheme",
    "get_db",
    "get_dispatcher",
    "get_authentication_service",
    "get_registration_service",
    "get_user_approval_service",
    "get_quota_service",
    "get_complaint_service",
    "get_reply_service",
    "get_assignment_service",
    "get_current_user",
]

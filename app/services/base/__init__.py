"""
Base services module for the complaint portal.

This module provides foundational service layer components:
- Base service class with logging, error handling and transactions
- ServiceResult success/failure pattern
- Fire-and-forget notification dispatch
"""

from app.services.base.base_service import BaseService
from app.services.base.notification_dispatcher import (
    NotificationDispatcher,
    NotificationEvent,
    Recipient,
    get_notification_dispatcher,
)
from app.services.base.service_result import (
    ErrorCode,
    ErrorSeverity,
    ServiceError,
    ServiceResult,
)

__all__ = [
    "BaseService",
    "NotificationDispatcher",
    "NotificationEvent",
    "Recipient",
    "get_notification_dispatcher",
    "ErrorCode",
    "ErrorSeverity",
    "ServiceError",
    "ServiceResult",
]

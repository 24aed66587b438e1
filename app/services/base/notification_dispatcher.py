"""
Notification dispatcher for fire-and-forget delivery of lifecycle events.

``notify`` never raises and never touches application state: every sender
and recipient failure is logged and swallowed so a committed mutation can
never fail because of delivery.
"""

from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Optional, Sequence

from app.config.logging import get_logger
from app.config.settings import settings
from app.core.notifications import TemplateEngine
from app.utils.email import EmailConfig, EmailMessage, send_email

logger = get_logger(__name__)


class NotificationEvent(str, Enum):
    """Events emitted by the lifecycle and approval services."""

    COMPLAINT_CREATED = "complaint.created"
    COMPLAINT_REPLIED = "complaint.replied"
    COMPLAINT_STATUS_CHANGED = "complaint.status_changed"
    COMPLAINT_ASSIGNED = "complaint.assigned"
    USER_APPROVED = "user.approved"
    USER_REJECTED = "user.rejected"


@dataclass(frozen=True)
class Recipient:
    """Addressable notification target."""

    user_id: Optional[str]
    email: Optional[str]
    name: str = ""

    @classmethod
    def from_user(cls, user) -> "Recipient":
        return cls(user_id=user.id, email=user.email, name=user.full_name)

    @property
    def key(self) -> str:
        if self.email:
            return self.email.strip().lower()
        return f"id:{self.user_id}"


def unique_recipients(recipients: Iterable[Optional[Recipient]]) -> List[Recipient]:
    """Drop empty entries and duplicates, keeping first-seen order."""
    seen = set()
    result = []
    for recipient in recipients:
        if recipient is None or recipient.key in seen:
            continue
        seen.add(recipient.key)
        result.append(recipient)
    return result


# -------------------------------------------------------------------------
# Senders
# -------------------------------------------------------------------------

class NotificationSender(ABC):
    """One delivery channel."""

    name = "sender"

    @abstractmethod
    def send(self, event_type: str, recipient: Recipient, payload: Dict[str, Any]) -> None:
        """Deliver one notification; may raise."""


class LoggingNotificationSender(NotificationSender):
    """Writes each notification to the application log."""

    name = "log"

    def send(self, event_type: str, recipient: Recipient, payload: Dict[str, Any]) -> None:
        logger.info(
            f"Notification {event_type} -> {recipient.email or recipient.user_id}",
            extra={
                "event_type": event_type,
                "user_id": recipient.user_id,
                "audience": payload.get("audience"),
                "complaint_id": payload.get("complaint_id"),
            },
        )


class EmailNotificationSender(NotificationSender):
    """Renders the event templates and sends them over SMTP."""

    name = "email"

    def __init__(
        self,
        config: Optional[EmailConfig] = None,
        template_engine: Optional[TemplateEngine] = None,
    ):
        self.config = config or EmailConfig.from_settings()
        self.template_engine = template_engine or TemplateEngine()

    def send(self, event_type: str, recipient: Recipient, payload: Dict[str, Any]) -> None:
        if not recipient.email:
            return
        context = dict(payload)
        context["recipient_name"] = recipient.name or recipient.email
        rendered = self.template_engine.render(event_type, context)
        send_email(
            EmailMessage(
                subject=rendered["subject"],
                to=[recipient.email],
                body_text=rendered["body"],
            ),
            self.config,
        )


# -------------------------------------------------------------------------
# Dispatcher
# -------------------------------------------------------------------------

class NotificationDispatcher:
    """
    Fan a notification out to every recipient through every sender.

    With an executor, delivery happens on a worker thread and ``notify``
    returns immediately.
    """

    def __init__(
        self,
        senders: Optional[Sequence[NotificationSender]] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self.senders: List[NotificationSender] = list(senders or [LoggingNotificationSender()])
        self.executor = executor

    def notify(
        self,
        event_type: NotificationEvent,
        recipients: Iterable[Optional[Recipient]],
        payload: Dict[str, Any],
    ) -> None:
        """Queue or perform delivery. Never raises."""
        try:
            event_name = NotificationEvent(event_type).value
            targets = unique_recipients(recipients)
            if not targets:
                return
            snapshot = dict(payload)
            snapshot.setdefault("audience", "all")
            snapshot["event_type"] = event_name

            if self.executor is not None:
                self.executor.submit(self._deliver, event_name, targets, snapshot)
            else:
                self._deliver(event_name, targets, snapshot)
        except Exception:
            logger.exception(f"Failed to dispatch notification {event_type}")

    def _deliver(self, event_type: str, recipients: List[Recipient], payload: Dict[str, Any]) -> None:
        for recipient in recipients:
            for sender in self.senders:
                try:
                    sender.send(event_type, recipient, payload)
                except Exception:
                    logger.exception(
                        f"{sender.name} delivery of {event_type} to {recipient.key} failed",
                        extra={"event_type": event_type, "user_id": recipient.user_id},
                    )

    def shutdown(self, wait: bool = True) -> None:
        if self.executor is not None:
            self.executor.shutdown(wait=wait)


@lru_cache()
def get_notification_dispatcher() -> NotificationDispatcher:
    """Process-wide dispatcher configured from settings."""
    senders: List[NotificationSender] = [LoggingNotificationSender()]
    if settings.email_enabled():
        senders.append(EmailNotificationSender())

    executor = None
    if settings.NOTIFICATIONS_ASYNC:
        executor = ThreadPoolExecutor(
            max_workers=settings.NOTIFICATION_WORKERS,
            thread_name_prefix="notify",
        )
    logger.info(
        f"Notification dispatcher ready with senders: {[s.name for s in senders]}",
    )
    return NotificationDispatcher(senders=senders, executor=executor)

"""
Audience resolution for complaint lifecycle notifications.

Each audience group is a separate ``notify`` call so the payload's
``audience`` tells the recipient why they were contacted. Calls happen
only after the mutation has been committed.
"""

import functools
from typing import Iterable, List, Optional

from app.config.logging import get_logger
from app.models.base.enums import ComplaintStatus
from app.models.complaint.complaint import Complaint
from app.models.complaint.complaint_reply import ComplaintReply
from app.models.user.user import User
from app.repositories.user.user_repository import UserRepository
from app.services.base.notification_dispatcher import (
    NotificationDispatcher,
    NotificationEvent,
    Recipient,
)

logger = get_logger(__name__)


def student_recipient(complaint: Complaint) -> Recipient:
    """The complaint's student, from the snapshot taken at creation."""
    return Recipient(
        user_id=complaint.student_id,
        email=complaint.student_email,
        name=complaint.student_name,
    )


def _never_raises(method):
    """Log and drop any error raised while building or sending a notification."""

    @functools.wraps(method)
    def wrapper(self, complaint, *args, **kwargs):
        try:
            method(self, complaint, *args, **kwargs)
        except Exception:
            logger.exception(
                f"Failed to notify {method.__name__} for complaint {complaint.id}",
                extra={"complaint_id": complaint.id},
            )

    return wrapper


def _users_except(users: Iterable[User], excluded_id: Optional[str]) -> List[Recipient]:
    return [Recipient.from_user(user) for user in users if user.id != excluded_id]


class ComplaintNotifier:
    """Builds recipient groups and payloads for each lifecycle event."""

    def __init__(self, user_repository: UserRepository, dispatcher: NotificationDispatcher):
        self.users = user_repository
        self.dispatcher = dispatcher

    def _base_payload(self, complaint: Complaint) -> dict:
        return {
            "complaint_id": complaint.id,
            "topic": complaint.topic,
            "status": complaint.status.value,
        }

    def _assigned_professor(self, complaint: Complaint) -> Optional[User]:
        if not complaint.assigned_professor_id:
            return None
        return self.users.find_by_id(complaint.assigned_professor_id)

    @_never_raises
    def complaint_created(self, complaint: Complaint) -> None:
        payload = self._base_payload(complaint)
        payload.update(
            department=complaint.department,
            course=complaint.course,
            student_name=complaint.student_name,
            is_meeting_request=complaint.is_meeting_request,
        )
        event = NotificationEvent.COMPLAINT_CREATED

        admins = [Recipient.from_user(u) for u in self.users.find_approved_admins()]
        self.dispatcher.notify(event, admins, {**payload, "audience": "admin"})

        department = [
            Recipient.from_user(u)
            for u in self.users.find_approved_professors_in_department(complaint.department)
        ]
        self.dispatcher.notify(event, department, {**payload, "audience": "department"})

        professor = self._assigned_professor(complaint)
        if professor is not None:
            self.dispatcher.notify(
                event, [Recipient.from_user(professor)], {**payload, "audience": "assigned_professor"},
            )

        if complaint.assigned_admin_id:
            admin = self.users.find_by_id(complaint.assigned_admin_id)
            if admin is not None:
                self.dispatcher.notify(
                    event, [Recipient.from_user(admin)], {**payload, "audience": "assigned_admin"},
                )

    @_never_raises
    def complaint_replied(self, complaint: Complaint, reply: ComplaintReply) -> None:
        payload = self._base_payload(complaint)
        payload.update(
            reply_id=reply.id,
            author_id=reply.author_id,
            author_name=reply.author_name,
            author_role=reply.author_role.value,
            message=reply.message,
        )
        event = NotificationEvent.COMPLAINT_REPLIED
        author_id = reply.author_id

        if complaint.student_id != author_id:
            self.dispatcher.notify(
                event, [student_recipient(complaint)], {**payload, "audience": "student"},
            )

        admins = [Recipient.from_user(u) for u in self.users.find_approved_admins()]
        self.dispatcher.notify(event, admins, {**payload, "audience": "admin"})

        professor = self._assigned_professor(complaint)
        if professor is not None and professor.id != author_id:
            self.dispatcher.notify(
                event, [Recipient.from_user(professor)], {**payload, "audience": "assigned_professor"},
            )

        department = _users_except(
            self.users.find_approved_professors_in_department(complaint.department), author_id,
        )
        self.dispatcher.notify(event, department, {**payload, "audience": "department"})

    @_never_raises
    def status_changed(
        self,
        complaint: Complaint,
        old_status: ComplaintStatus,
        new_status: ComplaintStatus,
        actor: User,
    ) -> None:
        payload = self._base_payload(complaint)
        payload.update(
            old_status=old_status.value,
            new_status=new_status.value,
            actor_id=actor.id,
            actor_name=actor.full_name,
        )
        event = NotificationEvent.COMPLAINT_STATUS_CHANGED

        self.dispatcher.notify(event, [student_recipient(complaint)], {**payload, "audience": "student"})

        admins = [Recipient.from_user(u) for u in self.users.find_approved_admins()]
        self.dispatcher.notify(event, admins, {**payload, "audience": "admin"})

        professor = self._assigned_professor(complaint)
        if professor is not None and professor.id != actor.id:
            self.dispatcher.notify(
                event, [Recipient.from_user(professor)], {**payload, "audience": "assigned_professor"},
            )

    @_never_raises
    def complaint_assigned(
        self,
        complaint: Complaint,
        professor: User,
        previous_professor: Optional[User],
    ) -> None:
        payload = self._base_payload(complaint)
        payload.update(
            professor_id=professor.id,
            professor_name=professor.full_name,
            student_name=complaint.student_name,
        )
        event = NotificationEvent.COMPLAINT_ASSIGNED

        self.dispatcher.notify(event, [Recipient.from_user(professor)], {**payload, "audience": "assignee"})
        self.dispatcher.notify(event, [student_recipient(complaint)], {**payload, "audience": "student"})

        if previous_professor is not None and previous_professor.id != professor.id:
            self.dispatcher.notify(
                event,
                [Recipient.from_user(previous_professor)],
                {**payload, "audience": "previous_assignee"},
            )

"""
Notification templates.

Subjects and plain-text bodies for every notification event, rendered with
Jinja2. Templates are addressed as ``<event>/subject`` and ``<event>/body``;
the ``audience`` key of the payload selects audience-specific wording.
"""

import logging
from typing import Any, Dict

import jinja2
from jinja2 import DictLoader, Environment, StrictUndefined

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """Raised when a notification cannot be rendered or delivered."""


DEFAULT_TEMPLATES: Dict[str, str] = {
    # complaint.created
    "complaint.created/subject": (
        "{% if audience == 'assigned_professor' %}Complaint assigned to you: {{ topic }}"
        "{% elif audience == 'assigned_admin' %}Meeting request opened: {{ topic }}"
        "{% else %}New complaint in {{ department }}: {{ topic }}{% endif %}"
    ),
    "complaint.created/body": (
        "Hello {{ recipient_name }},\n\n"
        "{% if audience == 'assigned_professor' %}"
        "A new complaint has been specifically assigned to you. You are the primary "
        "handler for this complaint in department {{ department }}.\n"
        "{% elif audience == 'department' %}"
        "A new complaint has been submitted in your department ({{ department }}). "
        "It is visible to all professors in the department.\n"
        "{% else %}"
        "A new complaint has been submitted by {{ student_name }} in department {{ department }}.\n"
        "{% endif %}\n"
        "Topic: {{ topic }}\n"
        "Course: {{ course }}\n"
    ),
    # complaint.replied
    "complaint.replied/subject": "New reply on complaint: {{ topic }}",
    "complaint.replied/body": (
        "Hello {{ recipient_name }},\n\n"
        "{{ author_name }} ({{ author_role }}) replied to the complaint \"{{ topic }}\":\n\n"
        "{{ message }}\n"
    ),
    # complaint.status_changed
    "complaint.status_changed/subject": "Complaint status updated: {{ topic }}",
    "complaint.status_changed/body": (
        "Hello {{ recipient_name }},\n\n"
        "The status of the complaint \"{{ topic }}\" changed from {{ old_status }} "
        "to {{ new_status }} (updated by {{ actor_name }}).\n"
    ),
    # complaint.assigned
    "complaint.assigned/subject": (
        "{% if audience == 'previous_assignee' %}Complaint reassigned: {{ topic }}"
        "{% else %}Complaint assigned: {{ topic }}{% endif %}"
    ),
    "complaint.assigned/body": (
        "Hello {{ recipient_name }},\n\n"
        "{% if audience == 'assignee' %}"
        "The complaint \"{{ topic }}\" from {{ student_name }} has been assigned to you.\n"
        "{% elif audience == 'previous_assignee' %}"
        "The complaint \"{{ topic }}\" has been reassigned to {{ professor_name }}.\n"
        "{% else %}"
        "Your complaint \"{{ topic }}\" has been assigned to {{ professor_name }}.\n"
        "{% endif %}"
    ),
    # user.approved / user.rejected
    "user.approved/subject": "Your account has been approved",
    "user.approved/body": (
        "Hello {{ recipient_name }},\n\n"
        "Your {{ role }} account has been approved. You can now log in.\n"
    ),
    "user.rejected/subject": "Your account registration was rejected",
    "user.rejected/body": (
        "Hello {{ recipient_name }},\n\n"
        "Your {{ role }} account registration was rejected by an administrator.\n"
    ),
}


class TemplateEngine:
    """Notification template engine"""

    def __init__(self, templates: Dict[str, str] = None):
        self.env = Environment(
            loader=DictLoader(templates or DEFAULT_TEMPLATES),
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
        )

    def render(self, event_type: str, context: Dict[str, Any]) -> Dict[str, str]:
        """Render the subject and body for an event."""
        try:
            subject = self.env.get_template(f"{event_type}/subject").render(**context)
            body = self.env.get_template(f"{event_type}/body").render(**context)
        except jinja2.TemplateError as e:
            logger.error(f"Template rendering failed for {event_type}: {str(e)}")
            raise NotificationError(f"Template rendering failed: {str(e)}") from e
        return {"subject": subject.strip(), "body": body}

"""
Utility package initialization and exports
"""

from .date_utils import current_week_window, end_of_day, start_of_day, week_window
from .email import EmailConfig, EmailError, EmailMessage, send_email

__all__ = [
    "current_week_window",
    "end_of_day",
    "start_of_day",
    "week_window",
    "EmailConfig",
    "EmailError",
    "EmailMessage",
    "send_email",
]

"""
User administration services.

- UserApprovalService:
    Admin approval and rejection of pending accounts, plus user listings.
"""

from app.services.users.user_approval_service import UserApprovalService

__all__ = ["UserApprovalService"]

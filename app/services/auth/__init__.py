"""
Authentication service layer.

- Self-registration for students and professors (pending approval)
- Email/password login issuing bearer tokens
- Token resolution with the approval gate re-applied on every request
"""

from app.services.auth.authentication_service import AuthenticationService
from app.services.auth.registration_service import RegistrationService

__all__ = [
    "AuthenticationService",
    "RegistrationService",
]

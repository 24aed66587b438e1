"""
Login and bearer-token resolution.
"""

from typing import Optional

import jwt
from sqlalchemy.orm import Session

from app.core.security import JWTManager, PasswordHasher, get_jwt_manager, get_password_hasher
from app.models.user.user import User
from app.repositories.user.user_repository import UserRepository
from app.schemas.auth.login import LoginResponse
from app.schemas.user.user_response import UserResponse
from app.services.base.base_service import BaseService
from app.services.base.service_result import ErrorCode, ErrorSeverity, ServiceError, ServiceResult


class AuthenticationService(BaseService[User, UserRepository]):
    """
    Credential checks and token issuance.

    The approval gate is applied both at login and on every token
    resolution, so a rejected account loses access immediately.
    """

    def __init__(
        self,
        db_session: Session,
        password_hasher: Optional[PasswordHasher] = None,
        jwt_manager: Optional[JWTManager] = None,
    ):
        super().__init__(UserRepository(db_session), db_session)
        self.hasher = password_hasher or get_password_hasher()
        self.jwt = jwt_manager or get_jwt_manager()

    def login(self, email: str, password: str) -> ServiceResult[LoginResponse]:
        """
        Exchange credentials for a bearer token.

        Unknown email and wrong password fail identically.
        """
        user = self.repository.find_by_email(email or "")
        if user is None or not self.hasher.verify(password or "", user.password_hash):
            self._logger.info("Login failed", extra={"event_type": "auth.login_failed"})
            return ServiceResult.invalid_credentials()

        if not user.can_log_in:
            self._logger.info(
                f"Login blocked for {user.status.value} account",
                extra={"user_id": user.id, "event_type": "auth.login_blocked"},
            )
            return ServiceResult.pending_approval(user.status.value)

        token = self.jwt.create_access_token(
            user.id,
            additional_claims={"role": user.role.value, "email": user.email},
        )
        self._log_operation("login", user.id, {"user_id": user.id})
        return ServiceResult.success(
            LoginResponse(
                token=token,
                expires_in=self.jwt.access_token_expire_minutes * 60,
                user=UserResponse.model_validate(user),
            ),
            message="Login successful",
        )

    def resolve_token(self, token: str) -> ServiceResult[User]:
        """Return the live user behind a bearer token."""
        try:
            claims = self.jwt.verify_token(token)
        except jwt.PyJWTError as e:
            return ServiceResult.failure(
                ServiceError(
                    code=ErrorCode.AUTHENTICATION_FAILED,
                    message="Invalid or expired token",
                    severity=ErrorSeverity.WARNING,
                    details={"reason": type(e).__name__},
                )
            )

        user = self.repository.find_by_id(claims.get("sub", ""))
        if user is None:
            return ServiceResult.failure(
                ServiceError(
                    code=ErrorCode.AUTHENTICATION_FAILED,
                    message="Invalid or expired token",
                    severity=ErrorSeverity.WARNING,
                )
            )
        if not user.can_log_in:
            return ServiceResult.pending_approval(user.status.value)
        return ServiceResult.success(user)

    def get_profile(self, user: User) -> ServiceResult[UserResponse]:
        return ServiceResult.success(UserResponse.model_validate(user))

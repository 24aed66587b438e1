"""
Custom Exceptions for the Complaint Portal

This module defines the error codes shared by services and the HTTP layer,
and the exception classes raised at the API boundary and by repositories.
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # Authentication & Authorization
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"
    PENDING_APPROVAL = "PENDING_APPROVAL"

    # Business rules
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"


HTTP_STATUS_BY_CODE: Dict[ErrorCode, int] = {
    ErrorCode.INTERNAL_ERROR: 500,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.CONFLICT: 409,
    ErrorCode.AUTHENTICATION_FAILED: 401,
    ErrorCode.INSUFFICIENT_PERMISSIONS: 403,
    ErrorCode.PENDING_APPROVAL: 403,
    ErrorCode.QUOTA_EXCEEDED: 429,
}


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code or HTTP_STATUS_BY_CODE.get(error_code, 500)
        super().__init__(self.message)

    @classmethod
    def from_service_error(cls, error) -> "BaseAppException":
        """Build the boundary exception matching a failed ServiceResult's error"""
        exc_class = _EXCEPTION_BY_CODE.get(error.code, BaseAppException)
        return exc_class(
            message=error.message,
            error_code=error.code,
            details=error.details,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# Boundary Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when request data is malformed"""

    def __init__(
        self,
        message: str = "Validation failed",
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message, error_code, details, status_code)


class AuthenticationError(BaseAppException):
    """Exception raised for bad credentials or an invalid bearer token"""

    def __init__(
        self,
        message: str = "Authentication failed",
        error_code: ErrorCode = ErrorCode.AUTHENTICATION_FAILED,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message, error_code, details, status_code)


class PendingApprovalError(BaseAppException):
    """Exception raised when a non-admin account has not been approved"""

    def __init__(
        self,
        message: str = "Account is awaiting administrator approval",
        error_code: ErrorCode = ErrorCode.PENDING_APPROVAL,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message, error_code, details, status_code)


class AuthorizationError(BaseAppException):
    """Exception raised when the caller's role forbids the operation"""

    def __init__(
        self,
        message: str = "Access denied",
        error_code: ErrorCode = ErrorCode.INSUFFICIENT_PERMISSIONS,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message, error_code, details, status_code)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a referenced record does not exist"""

    def __init__(
        self,
        message: str = "Resource not found",
        error_code: ErrorCode = ErrorCode.NOT_FOUND,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message, error_code, details, status_code)


class ConflictError(BaseAppException):
    """Exception raised on uniqueness conflicts"""

    def __init__(
        self,
        message: str = "Resource already exists",
        error_code: ErrorCode = ErrorCode.CONFLICT,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message, error_code, details, status_code)


class QuotaExceededError(BaseAppException):
    """Exception raised when a student has used up the weekly complaint quota"""

    def __init__(
        self,
        message: str = "Weekly complaint limit reached",
        error_code: ErrorCode = ErrorCode.QUOTA_EXCEEDED,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message, error_code, details, status_code)


_EXCEPTION_BY_CODE = {
    ErrorCode.VALIDATION_ERROR: ValidationError,
    ErrorCode.AUTHENTICATION_FAILED: AuthenticationError,
    ErrorCode.PENDING_APPROVAL: PendingApprovalError,
    ErrorCode.INSUFFICIENT_PERMISSIONS: AuthorizationError,
    ErrorCode.NOT_FOUND: ResourceNotFoundError,
    ErrorCode.CONFLICT: ConflictError,
    ErrorCode.QUOTA_EXCEEDED: QuotaExceededError,
}


# ========================================
# Repository Exceptions
# ========================================

class RepositoryError(Exception):
    """Raised when a database operation fails"""


class EntityAlreadyExistsError(RepositoryError):
    """Raised when an insert violates a uniqueness constraint"""

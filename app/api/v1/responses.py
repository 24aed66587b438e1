"""
Helpers turning ServiceResult values into HTTP responses.
"""

from typing import TypeVar

from app.core.exceptions import BaseAppException
from app.services.base.service_result import ServiceResult

T = TypeVar("T")


def unwrap_result(result: ServiceResult[T]) -> T:
    """Return the result data, or raise the boundary exception for its error."""
    if not result.is_success:
        raise BaseAppException.from_service_error(result.error)
    return result.data

"""User schemas."""

from app.schemas.user.user_response import UserResponse, UserStatsResponse

__all__ = ["UserResponse", "UserStatsResponse"]

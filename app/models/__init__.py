# models/__init__.py
from .base import Base, BaseModel, TimestampModel
from .base.enums import ComplaintStatus, UserRole, UserStatus
from .user import User
from .complaint import Complaint, ComplaintReply

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "ComplaintStatus",
    "UserRole",
    "UserStatus",
    "User",
    "Complaint",
    "ComplaintReply",
]

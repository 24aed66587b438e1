"""
Base models package.

Provides base classes, custom types and enums for all database models.
"""

from app.models.base.base_model import (
    Base,
    BaseModel,
    TimestampModel,
)
from app.models.base.enums import (
    ComplaintStatus,
    UserRole,
    UserStatus,
)
from app.models.base.types import UTCDateTime, utc_now

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "ComplaintStatus",
    "UserRole",
    "UserStatus",
    "UTCDateTime",
    "utc_now",
]

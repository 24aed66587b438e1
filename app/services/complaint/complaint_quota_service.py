"""
Weekly complaint quota.

A student may file at most WEEKLY_COMPLAINT_LIMIT complaints per Monday to
Sunday week of the configured (or server local) time zone. The window is
recomputed on every call; nothing is cached.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from app.config.settings import settings
from app.models.complaint.complaint import Complaint
from app.models.user.user import User
from app.repositories.complaint.complaint_repository import ComplaintRepository
from app.schemas.complaint.complaint_response import (
    QuotaStatusResponse,
    StudentQuotaSummary,
    WeeklyCountResponse,
)
from app.services.base.base_service import BaseService
from app.services.base.service_result import ServiceResult
from app.services.complaint.complaint_access_policy import ComplaintAccessPolicy
from app.utils.date_utils import Clock, current_week_window, to_utc

WEEKLY_COMPLAINT_LIMIT = 10


@dataclass(frozen=True)
class QuotaStatus:
    exceeded: bool
    count: int
    limit: int

    @property
    def remaining(self) -> int:
        return max(self.limit - self.count, 0)


class ComplaintQuotaService(BaseService[Complaint, ComplaintRepository]):
    """
    Counts a student's complaints in the current week.

    Args:
        db_session: SQLAlchemy database session
        repository: Complaint repository (built from the session if omitted)
        clock: Source of "now"; naive values are taken as server local time
        tz_name: IANA zone defining the week; None uses the server local zone
        limit: Weekly cap
    """

    def __init__(
        self,
        db_session: Session,
        repository: Optional[ComplaintRepository] = None,
        clock: Optional[Clock] = None,
        tz_name: Optional[str] = settings.TIMEZONE,
        limit: int = WEEKLY_COMPLAINT_LIMIT,
        policy: Optional[ComplaintAccessPolicy] = None,
    ):
        super().__init__(repository or ComplaintRepository(db_session), db_session)
        self.clock = clock
        self.tz_name = tz_name
        self.limit = limit
        self.policy = policy or ComplaintAccessPolicy()

    # -------------------------------------------------------------------------
    # Calculator
    # -------------------------------------------------------------------------

    def current_window(self) -> Tuple[datetime, datetime]:
        """Inclusive [Monday 00:00, Sunday 23:59:59.999999] of this week."""
        return current_week_window(self.tz_name, self.clock)

    def count_complaints_this_week(self, student_id: str) -> int:
        start, end = self.current_window()
        return self.repository.count_created_between(student_id, to_utc(start), to_utc(end))

    def exceeded(self, student_id: str) -> QuotaStatus:
        count = self.count_complaints_this_week(student_id)
        return QuotaStatus(exceeded=count >= self.limit, count=count, limit=self.limit)

    # -------------------------------------------------------------------------
    # Read operations
    # -------------------------------------------------------------------------

    def get_weekly_count(self, actor: User, student_id: str) -> ServiceResult[WeeklyCountResponse]:
        """Current-week complaint count for a student (admin or the student)."""
        if not self.policy.can_read_student(actor, student_id):
            return self._deny("read weekly count", actor, resource=student_id)
        try:
            start, end = self.current_window()
            count = self.repository.count_created_between(student_id, to_utc(start), to_utc(end))
            return ServiceResult.success(
                WeeklyCountResponse(student_id=student_id, count=count, week_start=start, week_end=end),
            )
        except Exception as e:
            return self._handle_exception(e, "count weekly complaints", student_id)

    def get_quota_status(self, actor: User, student_id: str) -> ServiceResult[QuotaStatusResponse]:
        """Quota usage for a student (admin or the student)."""
        if not self.policy.can_read_student(actor, student_id):
            return self._deny("read quota status", actor, resource=student_id)
        try:
            status = self.exceeded(student_id)
            return ServiceResult.success(
                QuotaStatusResponse(
                    student_id=student_id,
                    exceeded=status.exceeded,
                    count=status.count,
                    limit=status.limit,
                    remaining=status.remaining,
                ),
            )
        except Exception as e:
            return self._handle_exception(e, "read quota status", student_id)

    def list_students_over_limit(self, actor: User) -> ServiceResult[List[StudentQuotaSummary]]:
        """Students at or over the weekly limit; the queue for meeting requests."""
        if not self.policy.can_assign(actor):
            return self._deny("list students over limit", actor)
        try:
            start, end = self.current_window()
            rows = self.repository.find_students_at_or_over(to_utc(start), to_utc(end), self.limit)
            summaries = [StudentQuotaSummary(limit=self.limit, **row) for row in rows]
            return ServiceResult.success(
                summaries,
                metadata={"count": len(summaries), "week_start": start.isoformat()},
            )
        except Exception as e:
            return self._handle_exception(e, "list students over limit")

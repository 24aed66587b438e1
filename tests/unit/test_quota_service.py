"""
Unit tests for the weekly complaint quota.
"""
from datetime import datetime, timedelta, timezone

from app.models.base.enums import UserRole
from app.repositories.complaint import ComplaintRepository
from app.services.base.service_result import ErrorCode
from app.services.complaint import WEEKLY_COMPLAINT_LIMIT, ComplaintQuotaService

# Wednesday 15 May 2024, 12:00 UTC; week is Mon 13 .. Sun 19 May
NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)
MONDAY = datetime(2024, 5, 13, 0, 0, tzinfo=timezone.utc)


def _file(repo: ComplaintRepository, student, created_at: datetime, n: int = 1) -> None:
    for i in range(n):
        repo.create_complaint(
            student_id=student.id,
            student_name=student.full_name,
            student_email=student.email,
            topic=f'Topic {i}',
            description='Description',
            course='CS',
            department='CS',
            created_at=created_at,
        )


def _service(db_session, now: datetime = NOW) -> ComplaintQuotaService:
    return ComplaintQuotaService(db_session, clock=lambda: now, tz_name='UTC')


class TestWeeklyCount:
    """Counting within the Monday-Sunday window"""

    def test_counts_only_current_week(self, db_session, student):
        repo = ComplaintRepository(db_session)
        _file(repo, student, MONDAY, n=2)
        _file(repo, student, MONDAY - timedelta(microseconds=1))
        _file(repo, student, MONDAY + timedelta(days=7))

        assert _service(db_session).count_complaints_this_week(student.id) == 2

    def test_bounds_are_inclusive(self, db_session, student):
        repo = ComplaintRepository(db_session)
        _file(repo, student, MONDAY)
        _file(repo, student, MONDAY + timedelta(days=7) - timedelta(microseconds=1))

        assert _service(db_session).count_complaints_this_week(student.id) == 2

    def test_other_students_not_counted(self, db_session, student, other_student):
        _file(ComplaintRepository(db_session), other_student, NOW, n=3)

        assert _service(db_session).count_complaints_this_week(student.id) == 0

    def test_week_rolls_over_on_monday(self, db_session, student):
        _file(ComplaintRepository(db_session), student, NOW, n=WEEKLY_COMPLAINT_LIMIT)
        next_monday = MONDAY + timedelta(days=7)

        assert _service(db_session).exceeded(student.id).exceeded
        assert not _service(db_session, next_monday).exceeded(student.id).exceeded


class TestExceeded:

    def test_limit_is_reached_at_ten(self, db_session, student):
        repo = ComplaintRepository(db_session)
        _file(repo, student, NOW, n=WEEKLY_COMPLAINT_LIMIT - 1)
        service = _service(db_session)

        status = service.exceeded(student.id)
        assert not status.exceeded
        assert status.remaining == 1

        _file(repo, student, NOW)
        status = service.exceeded(student.id)
        assert status.exceeded
        assert status.count == WEEKLY_COMPLAINT_LIMIT
        assert status.limit == WEEKLY_COMPLAINT_LIMIT
        assert status.remaining == 0


class TestQuotaReads:
    """Permission checks on the read operations"""

    def test_student_reads_own_count(self, db_session, student):
        _file(ComplaintRepository(db_session), student, NOW, n=3)
        result = _service(db_session).get_weekly_count(student, student.id)

        assert result.is_success
        assert result.data.count == 3
        assert result.data.week_start == MONDAY

    def test_student_cannot_read_other_student(self, db_session, student, other_student):
        result = _service(db_session).get_quota_status(student, other_student.id)

        assert not result.is_success
        assert result.error_code == ErrorCode.INSUFFICIENT_PERMISSIONS

    def test_professor_cannot_read_quota(self, db_session, student, professor):
        result = _service(db_session).get_weekly_count(professor, student.id)

        assert result.error_code == ErrorCode.INSUFFICIENT_PERMISSIONS

    def test_admin_lists_students_over_limit(self, db_session, admin, student, other_student):
        repo = ComplaintRepository(db_session)
        _file(repo, student, NOW, n=WEEKLY_COMPLAINT_LIMIT)
        _file(repo, other_student, NOW, n=2)

        result = _service(db_session).list_students_over_limit(admin)

        assert result.is_success
        assert [s.student_id for s in result.data] == [student.id]
        assert result.data[0].count == WEEKLY_COMPLAINT_LIMIT

    def test_only_admin_lists_students_over_limit(self, db_session, student):
        result = _service(db_session).list_students_over_limit(student)

        assert result.error_code == ErrorCode.INSUFFICIENT_PERMISSIONS

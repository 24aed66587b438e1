"""
Unit tests for registration, login, token resolution and approval.
"""
import pytest

from app.core.security import get_jwt_manager, get_password_hasher
from app.db.init_db import ensure_bootstrap_admin
from app.repositories.user.user_repository import UserRepository
from app.models.base.enums import UserRole, UserStatus
from app.schemas.auth import ProfessorRegistrationRequest, StudentRegistrationRequest
from app.services.auth import AuthenticationService, RegistrationService
from app.services.base.service_result import ErrorCode
from app.services.users import UserApprovalService
from tests.conftest import DEFAULT_PASSWORD


def _student_request(**fields) -> StudentRegistrationRequest:
    values = {
        'name': 'Asha Rao',
        'email': 'Asha@College.edu',
        'password': 'pw-123456',
        'collegeId': 'COL-1',
        'course': 'CS',
    }
    values.update(fields)
    return StudentRegistrationRequest(**values)


class TestRegistration:

    def test_student_starts_pending(self, db_session):
        result = RegistrationService(db_session).register_student(_student_request())

        assert result.is_success
        assert result.data.status == UserStatus.PENDING

    def test_email_is_normalized(self, db_session):
        RegistrationService(db_session).register_student(_student_request())

        user = UserRepository(db_session).find_by_email('asha@college.edu')
        assert user is not None
        assert user.role == UserRole.STUDENT
        assert user.password_hash != 'pw-123456'

    def test_duplicate_email_conflicts(self, db_session):
        service = RegistrationService(db_session)
        service.register_student(_student_request())

        result = service.register_student(_student_request(email='asha@college.edu'))

        assert result.error_code == ErrorCode.CONFLICT

    def test_professor_registration(self, db_session):
        request = ProfessorRegistrationRequest(
            name='Dr. Iyer', email='iyer@college.edu', password='pw', professorId='P-7', department='CS',
        )
        result = RegistrationService(db_session).register_professor(request)

        assert result.is_success
        assert result.data.status == UserStatus.PENDING


class TestLogin:

    def test_approved_user_gets_token(self, db_session, student):
        result = AuthenticationService(db_session).login(student.email, DEFAULT_PASSWORD)

        assert result.is_success
        assert result.data.user.id == student.id
        claims = get_jwt_manager().verify_token(result.data.token)
        assert claims['sub'] == student.id
        assert claims['role'] == 'student'

    def test_wrong_password_and_unknown_email_look_the_same(self, db_session, student):
        service = AuthenticationService(db_session)
        wrong = service.login(student.email, 'nope')
        unknown = service.login('ghost@x.edu', 'nope')

        assert wrong.error_code == unknown.error_code == ErrorCode.AUTHENTICATION_FAILED
        assert wrong.error.message == unknown.error.message

    @pytest.mark.parametrize('status', [UserStatus.PENDING, UserStatus.REJECTED])
    def test_unapproved_user_blocked(self, db_session, make_user, status):
        user = make_user(UserRole.STUDENT, status=status)

        result = AuthenticationService(db_session).login(user.email, DEFAULT_PASSWORD)

        assert result.error_code == ErrorCode.PENDING_APPROVAL
        assert result.error.details == {'status': status.value}

    def test_admin_bypasses_approval_gate(self, db_session, make_user):
        admin = make_user(UserRole.ADMIN, status=UserStatus.PENDING)

        assert AuthenticationService(db_session).login(admin.email, DEFAULT_PASSWORD).is_success

    def test_login_email_case_insensitive(self, db_session, student):
        assert AuthenticationService(db_session).login(student.email.upper(), DEFAULT_PASSWORD).is_success


class TestResolveToken:

    def test_token_resolves_live_user(self, db_session, student):
        service = AuthenticationService(db_session)
        token = service.login(student.email, DEFAULT_PASSWORD).data.token

        assert service.resolve_token(token).data.id == student.id

    def test_garbage_token(self, db_session):
        assert AuthenticationService(db_session).resolve_token('not-a-jwt').error_code == ErrorCode.AUTHENTICATION_FAILED

    def test_rejected_after_login_loses_access(self, db_session, admin, student):
        auth = AuthenticationService(db_session)
        token = auth.login(student.email, DEFAULT_PASSWORD).data.token

        UserApprovalService(db_session).reject_user(admin, student.id)

        assert auth.resolve_token(token).error_code == ErrorCode.PENDING_APPROVAL


class TestApproval:

    @pytest.fixture
    def approvals(self, db_session, dispatcher) -> UserApprovalService:
        return UserApprovalService(db_session, dispatcher=dispatcher)

    def test_admin_approves(self, approvals, recorder, make_user, admin):
        pending = make_user(UserRole.STUDENT, status=UserStatus.PENDING)

        result = approvals.approve_user(admin, pending.id)

        assert result.data.status == UserStatus.APPROVED
        assert recorder.audiences_for(pending.id, 'user.approved') == ['user']

    def test_admin_rejects(self, approvals, recorder, make_user, admin):
        pending = make_user(UserRole.PROFESSOR, status=UserStatus.PENDING)

        result = approvals.reject_user(admin, pending.id)

        assert result.data.status == UserStatus.REJECTED
        assert recorder.recipient_ids('user.rejected') == [pending.id]

    def test_rejected_user_can_be_approved_later(self, approvals, make_user, admin):
        user = make_user(UserRole.STUDENT, status=UserStatus.REJECTED)

        assert approvals.approve_user(admin, user.id).data.status == UserStatus.APPROVED

    def test_repeat_approval_is_a_quiet_no_op(self, approvals, recorder, admin, student):
        result = approvals.approve_user(admin, student.id)

        assert result.is_success
        assert result.metadata['changed'] is False
        assert recorder.sent == []

    def test_non_admin_forbidden(self, approvals, professor, make_user):
        pending = make_user(UserRole.STUDENT, status=UserStatus.PENDING)

        assert approvals.approve_user(professor, pending.id).error_code == ErrorCode.INSUFFICIENT_PERMISSIONS

    def test_unknown_user(self, approvals, admin):
        assert approvals.approve_user(admin, 'missing').error_code == ErrorCode.NOT_FOUND

    def test_list_pending(self, approvals, make_user, admin, student):
        pending = make_user(UserRole.STUDENT, status=UserStatus.PENDING)

        result = approvals.list_pending(admin)

        assert [u.id for u in result.data] == [pending.id]

    def test_list_by_role(self, approvals, admin, student, professor):
        result = approvals.list_users(admin, role=UserRole.PROFESSOR)

        assert [u.id for u in result.data] == [professor.id]

    def test_list_by_role_and_status(self, approvals, make_user, admin, student):
        pending = make_user(UserRole.STUDENT, status=UserStatus.PENDING)

        result = approvals.list_users(admin, status=UserStatus.APPROVED, role=UserRole.STUDENT)

        assert [u.id for u in result.data] == [student.id]
        assert pending.id not in [u.id for u in result.data]

    def test_user_stats(self, approvals, make_user, admin, student, professor):
        make_user(UserRole.STUDENT, status=UserStatus.PENDING)
        make_user(UserRole.PROFESSOR, status=UserStatus.PENDING)
        make_user(UserRole.PROFESSOR, status=UserStatus.REJECTED)

        stats = approvals.get_user_stats(admin).data

        assert stats.total_users == 6
        assert stats.pending_approvals == 2
        assert stats.students == 2
        assert stats.professors == 3

    def test_user_stats_admin_only(self, approvals, professor):
        assert approvals.get_user_stats(professor).error_code == ErrorCode.INSUFFICIENT_PERMISSIONS


class TestBootstrapAdmin:

    def test_creates_approved_admin(self, db_session):
        admin = ensure_bootstrap_admin(db_session, email='Root@College.edu', password='rootpass123')

        assert admin.email == 'root@college.edu'
        assert admin.role == UserRole.ADMIN
        assert admin.status == UserStatus.APPROVED
        assert get_password_hasher().verify('rootpass123', admin.password_hash)

    def test_existing_account_is_promoted(self, db_session, make_user):
        user = make_user(UserRole.STUDENT, status=UserStatus.REJECTED, email='root@college.edu')

        admin = ensure_bootstrap_admin(db_session, email='root@college.edu', password='rootpass123')

        assert admin.id == user.id
        assert admin.role == UserRole.ADMIN
        assert admin.status == UserStatus.APPROVED

    def test_bootstrap_admin_can_log_in(self, db_session):
        ensure_bootstrap_admin(db_session, email='root@college.edu', password='rootpass123')

        result = AuthenticationService(db_session).login('root@college.edu', 'rootpass123')

        assert result.is_success

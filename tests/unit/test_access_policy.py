"""
Unit tests for complaint access rules and the professor visibility predicate.
"""
from app.models.base.enums import ComplaintStatus, UserRole
from app.models.complaint.complaint import Complaint
from app.models.user.user import User
from app.services.complaint import ComplaintAccessPolicy


def _user(role: UserRole, user_id: str = 'u1', department=None) -> User:
    return User(id=user_id, role=role, department=department, email=f'{user_id}@x.edu', full_name=user_id)


def _complaint(**fields) -> Complaint:
    values = {
        'id': 'c1',
        'student_id': 's1',
        'course': 'CS',
        'department': 'CS',
        'status': ComplaintStatus.SUBMITTED,
        'assigned_professor_id': None,
    }
    values.update(fields)
    return Complaint(**values)


class TestVisibilityPredicate:
    """Complaint.visible_to_professor"""

    def test_assigned_professor_sees_complaint(self):
        complaint = _complaint(course='MATH', assigned_professor_id='p1')

        assert complaint.visible_to_professor('p1', 'CS')

    def test_professor_sees_own_department_course(self):
        assert _complaint(course='CS').visible_to_professor('p1', 'CS')

    def test_professor_without_department_sees_only_assigned(self):
        assert not _complaint(course='CS').visible_to_professor('p1', None)

    def test_other_department_hidden(self):
        assert not _complaint(course='MATH').visible_to_professor('p1', 'CS')


class TestComplaintAccessPolicy:

    def setup_method(self):
        self.policy = ComplaintAccessPolicy()

    def test_create_roles(self):
        assert self.policy.can_create(_user(UserRole.STUDENT))
        assert self.policy.can_create(_user(UserRole.ADMIN))
        assert not self.policy.can_create(_user(UserRole.PROFESSOR))

    def test_student_owns_complaint(self):
        complaint = _complaint(student_id='s1')

        assert self.policy.can_view(_user(UserRole.STUDENT, 's1'), complaint)
        assert not self.policy.can_view(_user(UserRole.STUDENT, 's2'), complaint)

    def test_admin_sees_everything(self):
        assert self.policy.can_reply(_user(UserRole.ADMIN), _complaint(course='ANY'))

    def test_professor_rule_matches_predicate(self):
        professor = _user(UserRole.PROFESSOR, 'p1', department='CS')

        assert self.policy.can_reply(professor, _complaint(course='CS'))
        assert not self.policy.can_reply(professor, _complaint(course='MATH'))
        assert self.policy.can_reply(professor, _complaint(course='MATH', assigned_professor_id='p1'))

    def test_only_admin_may_reject(self):
        complaint = _complaint(student_id='s1', assigned_professor_id='p1')
        professor = _user(UserRole.PROFESSOR, 'p1', department='CS')

        assert not self.policy.can_update_status(professor, complaint, ComplaintStatus.REJECTED)
        assert not self.policy.can_update_status(_user(UserRole.STUDENT, 's1'), complaint, ComplaintStatus.REJECTED)
        assert self.policy.can_update_status(_user(UserRole.ADMIN), complaint, ComplaintStatus.REJECTED)
        assert self.policy.can_update_status(professor, complaint, ComplaintStatus.SOLVED)

    def test_assign_is_admin_only(self):
        assert self.policy.can_assign(_user(UserRole.ADMIN))
        assert not self.policy.can_assign(_user(UserRole.PROFESSOR))

    def test_student_reads_only_own_quota(self):
        assert self.policy.can_read_student(_user(UserRole.STUDENT, 's1'), 's1')
        assert not self.policy.can_read_student(_user(UserRole.STUDENT, 's1'), 's2')
        assert not self.policy.can_read_student(_user(UserRole.PROFESSOR, 'p1'), 's1')
        assert self.policy.can_read_student(_user(UserRole.ADMIN), 's1')

    def test_professor_list_admin_or_self(self):
        assert self.policy.can_read_professor(_user(UserRole.PROFESSOR, 'p1'), 'p1')
        assert not self.policy.can_read_professor(_user(UserRole.PROFESSOR, 'p1'), 'p2')
        assert not self.policy.can_read_professor(_user(UserRole.STUDENT, 'p1'), 'p1')
        assert self.policy.can_read_professor(_user(UserRole.ADMIN), 'p1')

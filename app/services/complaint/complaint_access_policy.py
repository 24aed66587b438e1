"""
Role-based access rules for complaints.

Every read and write check resolves through the same per-role rule table,
and the professor rule is the model's ``visible_to_professor`` predicate,
so list filtering and write permissions cannot drift apart.
"""

from typing import Callable, Dict

from app.models.base.enums import ComplaintStatus, UserRole
from app.models.complaint.complaint import Complaint
from app.models.user.user import User

AccessRule = Callable[[User, Complaint], bool]


def _admin_rule(actor: User, complaint: Complaint) -> bool:
    return True


def _professor_rule(actor: User, complaint: Complaint) -> bool:
    return complaint.visible_to_professor(actor.id, actor.department)


def _student_rule(actor: User, complaint: Complaint) -> bool:
    return complaint.student_id == actor.id


class ComplaintAccessPolicy:
    """Answers "may this actor do X to this complaint" for each operation."""

    ACCESS_RULES: Dict[UserRole, AccessRule] = {
        UserRole.ADMIN: _admin_rule,
        UserRole.PROFESSOR: _professor_rule,
        UserRole.STUDENT: _student_rule,
    }

    CREATOR_ROLES = frozenset({UserRole.STUDENT, UserRole.ADMIN})

    def can_access(self, actor: User, complaint: Complaint) -> bool:
        rule = self.ACCESS_RULES.get(actor.role)
        return rule is not None and rule(actor, complaint)

    def can_create(self, actor: User) -> bool:
        return actor.role in self.CREATOR_ROLES

    def can_view(self, actor: User, complaint: Complaint) -> bool:
        return self.can_access(actor, complaint)

    def can_reply(self, actor: User, complaint: Complaint) -> bool:
        return self.can_access(actor, complaint)

    def can_update_status(self, actor: User, complaint: Complaint, new_status: ComplaintStatus) -> bool:
        """Access rule plus the admin-only ``rejected`` carve-out."""
        if new_status == ComplaintStatus.REJECTED and actor.role != UserRole.ADMIN:
            return False
        return self.can_access(actor, complaint)

    def can_assign(self, actor: User) -> bool:
        return actor.role == UserRole.ADMIN

    def can_read_student(self, actor: User, student_id: str) -> bool:
        """Per-student complaint lists and quota figures: admin or the student."""
        if actor.role == UserRole.ADMIN:
            return True
        return actor.role == UserRole.STUDENT and actor.id == student_id

    def can_read_professor(self, actor: User, professor_id: str) -> bool:
        """Per-professor complaint lists: admin or the professor."""
        if actor.role == UserRole.ADMIN:
            return True
        return actor.role == UserRole.PROFESSOR and actor.id == professor_id

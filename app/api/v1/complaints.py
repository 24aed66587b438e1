"""
Complaints API

Lifecycle endpoints for complaints and the weekly quota views. Static
paths (``/quota/...``, ``/students/...``, ``/professors/...``) are
declared before ``/{complaint_id}``.
"""
from typing import List

from fastapi import APIRouter, Depends, status

from app.api.v1.responses import unwrap_result
from app.dependencies import (
    get_assignment_service,
    get_complaint_service,
    get_current_user,
    get_quota_service,
    get_reply_service,
)
from app.models.user.user import User
from app.schemas.complaint import (
    ComplaintAssign,
    ComplaintCreate,
    ComplaintDetail,
    ComplaintStatusUpdate,
    QuotaStatusResponse,
    ReplyCreate,
    StudentQuotaSummary,
    WeeklyCountResponse,
)
from app.services.complaint import (
    ComplaintAssignmentService,
    ComplaintQuotaService,
    ComplaintReplyService,
    ComplaintService,
)

router = APIRouter(prefix="/complaints", tags=["Complaint Management"])


# ==================== Collection ====================

@router.post("", response_model=ComplaintDetail, status_code=status.HTTP_201_CREATED)
def create_complaint(
    payload: ComplaintCreate,
    current_user: User = Depends(get_current_user),
    service: ComplaintService = Depends(get_complaint_service),
):
    """
    File a complaint.

    Students are limited to 10 complaints per Monday-Sunday week; the 11th
    is refused with 429 and ``details.count`` / ``details.limit``.
    """
    return unwrap_result(service.create(current_user, payload))


@router.get("", response_model=List[ComplaintDetail])
def list_complaints(
    current_user: User = Depends(get_current_user),
    service: ComplaintService = Depends(get_complaint_service),
):
    """Complaints visible to the caller, newest first."""
    return unwrap_result(service.list_for_actor(current_user))


# ==================== Quota ====================

@router.get("/quota/exceeded", response_model=List[StudentQuotaSummary])
def list_students_over_limit(
    current_user: User = Depends(get_current_user),
    service: ComplaintQuotaService = Depends(get_quota_service),
):
    return unwrap_result(service.list_students_over_limit(current_user))


@router.get("/students/{student_id}", response_model=List[ComplaintDetail])
def list_student_complaints(
    student_id: str,
    current_user: User = Depends(get_current_user),
    service: ComplaintService = Depends(get_complaint_service),
):
    return unwrap_result(service.list_for_student(current_user, student_id))


@router.get("/professors/{professor_id}", response_model=List[ComplaintDetail])
def list_professor_complaints(
    professor_id: str,
    current_user: User = Depends(get_current_user),
    service: ComplaintService = Depends(get_complaint_service),
):
    """Complaints assigned to a professor or filed in their department (admin or self)."""
    return unwrap_result(service.list_for_professor(current_user, professor_id))


@router.get("/students/{student_id}/weekly-count", response_model=WeeklyCountResponse)
def get_weekly_count(
    student_id: str,
    current_user: User = Depends(get_current_user),
    service: ComplaintQuotaService = Depends(get_quota_service),
):
    return unwrap_result(service.get_weekly_count(current_user, student_id))


@router.get("/students/{student_id}/quota", response_model=QuotaStatusResponse)
def get_quota_status(
    student_id: str,
    current_user: User = Depends(get_current_user),
    service: ComplaintQuotaService = Depends(get_quota_service),
):
    return unwrap_result(service.get_quota_status(current_user, student_id))


# ==================== Single complaint ====================

@router.get("/{complaint_id}", response_model=ComplaintDetail)
def get_complaint(
    complaint_id: str,
    current_user: User = Depends(get_current_user),
    service: ComplaintService = Depends(get_complaint_service),
):
    return unwrap_result(service.get_detail(current_user, complaint_id))


@router.post("/{complaint_id}/replies", response_model=ComplaintDetail)
def add_reply(
    complaint_id: str,
    payload: ReplyCreate,
    current_user: User = Depends(get_current_user),
    service: ComplaintReplyService = Depends(get_reply_service),
):
    return unwrap_result(service.add_reply(current_user, complaint_id, payload.message))


@router.patch("/{complaint_id}/status", response_model=ComplaintDetail)
def update_status(
    complaint_id: str,
    payload: ComplaintStatusUpdate,
    current_user: User = Depends(get_current_user),
    service: ComplaintService = Depends(get_complaint_service),
):
    return unwrap_result(service.update_status(current_user, complaint_id, payload.status))


@router.patch("/{complaint_id}/assign", response_model=ComplaintDetail)
def assign_professor(
    complaint_id: str,
    payload: ComplaintAssign,
    current_user: User = Depends(get_current_user),
    service: ComplaintAssignmentService = Depends(get_assignment_service),
):
    return unwrap_result(service.assign(current_user, complaint_id, payload.professor_id))

"""
Users API

Administrator review of registrations and the user directory.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.api.v1.responses import unwrap_result
from app.dependencies import get_current_user, get_user_approval_service
from app.models.base.enums import UserRole, UserStatus
from app.models.user.user import User
from app.schemas.user import UserResponse, UserStatsResponse
from app.services.users import UserApprovalService

router = APIRouter(prefix="/users", tags=["User Management"])


@router.get("", response_model=List[UserResponse])
def list_users(
    status: Optional[UserStatus] = Query(None, description="Filter by approval status"),
    role: Optional[UserRole] = Query(None, description="Filter by role"),
    current_user: User = Depends(get_current_user),
    service: UserApprovalService = Depends(get_user_approval_service),
):
    return unwrap_result(service.list_users(current_user, status, role))


@router.get("/stats", response_model=UserStatsResponse)
def get_user_stats(
    current_user: User = Depends(get_current_user),
    service: UserApprovalService = Depends(get_user_approval_service),
):
    """Account totals and pending approvals for the admin dashboard."""
    return unwrap_result(service.get_user_stats(current_user))


@router.get("/pending", response_model=List[UserResponse])
def list_pending_users(
    current_user: User = Depends(get_current_user),
    service: UserApprovalService = Depends(get_user_approval_service),
):
    return unwrap_result(service.list_pending(current_user))


@router.patch("/{user_id}/approve", response_model=UserResponse)
def approve_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    service: UserApprovalService = Depends(get_user_approval_service),
):
    return unwrap_result(service.approve_user(current_user, user_id))


@router.patch("/{user_id}/reject", response_model=UserResponse)
def reject_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    service: UserApprovalService = Depends(get_user_approval_service),
):
    return unwrap_result(service.reject_user(current_user, user_id))

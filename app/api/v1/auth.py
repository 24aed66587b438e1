"""
Authentication API

Self-registration, login and the current user's profile.
"""
from fastapi import APIRouter, Depends, status

from app.api.v1.responses import unwrap_result
from app.dependencies import (
    get_authentication_service,
    get_current_user,
    get_registration_service,
)
from app.models.user.user import User
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    ProfessorRegistrationRequest,
    RegistrationResponse,
    StudentRegistrationRequest,
)
from app.schemas.user import UserResponse
from app.services.auth import AuthenticationService, RegistrationService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register/student",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
)
def register_student(
    payload: StudentRegistrationRequest,
    service: RegistrationService = Depends(get_registration_service),
):
    """Register a student account; it stays pending until an admin approves it."""
    return unwrap_result(service.register_student(payload))


@router.post(
    "/register/professor",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
)
def register_professor(
    payload: ProfessorRegistrationRequest,
    service: RegistrationService = Depends(get_registration_service),
):
    """Register a professor account; it stays pending until an admin approves it."""
    return unwrap_result(service.register_professor(payload))


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    service: AuthenticationService = Depends(get_authentication_service),
):
    return unwrap_result(service.login(payload.email, payload.password))


@router.get("/me", response_model=UserResponse)
def read_me(
    current_user: User = Depends(get_current_user),
    service: AuthenticationService = Depends(get_authentication_service),
):
    return unwrap_result(service.get_profile(current_user))

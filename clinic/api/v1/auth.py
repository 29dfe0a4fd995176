from fastapi import APIRouter, Depends

from ...api.deps import get_auth_service, get_current_user_token, rate_limit_check
from ...core.security import TokenPayload
from ...services.auth_service import AuthService
from ...schemas.auth import AdminLogin, TokenResponse, UserLogin

router = APIRouter(prefix="/auth", tags=["Authentication"])

@router.post("/admin/login", response_model=TokenResponse)
async def admin_login(
    login_data: AdminLogin,
    auth_service: AuthService = Depends(get_auth_service),
    _: None = Depends(rate_limit_check)
):
    """Authenticate an admin and return an access token."""
    return auth_service.authenticate_admin(login_data)

@router.post("/doctor/login", response_model=TokenResponse)
async def doctor_login(
    login_data: UserLogin,
    auth_service: AuthService = Depends(get_auth_service),
    _: None = Depends(rate_limit_check)
):
    """Authenticate a doctor and return an access token."""
    return auth_service.authenticate_doctor(login_data)

@router.post("/patient/login", response_model=TokenResponse)
async def patient_login(
    login_data: UserLogin,
    auth_service: AuthService = Depends(get_auth_service),
    _: None = Depends(rate_limit_check)
):
    """Authenticate a patient and return an access token."""
    return auth_service.authenticate_patient(login_data)

@router.post("/verify-token")
async def verify_token_endpoint(
    token_payload: TokenPayload = Depends(get_current_user_token)
):
    """Verify if token is valid."""
    return {
        "valid": True,
        "user_id": token_payload.uid,
        "subject": token_payload.sub,
        "role": token_payload.role,
        "expires": token_payload.exp
    }

from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.database import get_db, get_redis
from ..core.security import (
    security, AuthenticationError, AuthorizationError,
    TokenPayload, TokenService, UserRole
)
from ..models.admin import Admin
from ..models.doctor import Doctor
from ..models.patient import Patient
from ..repositories import (
    AdminRepository, AppointmentRepository, DoctorRepository,
    PatientRepository, PrescriptionRepository
)
from ..services.appointment_service import AppointmentService
from ..services.auth_service import AuthService
from ..services.availability_service import AvailabilityService
from ..services.booking_service import BookingValidator
from ..services.doctor_service import DoctorFilter, DoctorService
from ..services.patient_service import PatientService
from ..services.prescription_service import PrescriptionService

def get_token_service() -> TokenService:
    """Token service shared by login and authentication dependencies."""
    return TokenService()

# Service assembly: every service gets its storage handles explicitly
def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    return AvailabilityService(DoctorRepository(db), AppointmentRepository(db))

def get_appointment_service(
    db: Session = Depends(get_db),
    availability: AvailabilityService = Depends(get_availability_service),
) -> AppointmentService:
    validator = BookingValidator(DoctorRepository(db), availability)
    return AppointmentService(AppointmentRepository(db), validator)

def get_doctor_service(db: Session = Depends(get_db)) -> DoctorService:
    return DoctorService(DoctorRepository(db), AppointmentRepository(db))

def get_doctor_filter(db: Session = Depends(get_db)) -> DoctorFilter:
    return DoctorFilter(DoctorRepository(db))

def get_patient_service(db: Session = Depends(get_db)) -> PatientService:
    return PatientService(PatientRepository(db), AppointmentRepository(db))

def get_prescription_service(
    db: Session = Depends(get_db),
    appointment_service: AppointmentService = Depends(get_appointment_service),
) -> PrescriptionService:
    return PrescriptionService(PrescriptionRepository(db), appointment_service)

def get_auth_service(
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(
        AdminRepository(db), DoctorRepository(db), PatientRepository(db), token_service
    )

async def get_current_user_token(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    token_service: TokenService = Depends(get_token_service),
) -> TokenPayload:
    """Extract and verify JWT token from Authorization header."""
    token_payload = token_service.decode(credentials.credentials)
    if not token_payload:
        raise AuthenticationError("Invalid or expired token")
    return token_payload

# Role-based access control dependencies
def require_role(required_role: UserRole):
    """Create a dependency that requires a specific user role."""
    async def role_checker(
        credentials: HTTPAuthorizationCredentials = Depends(security),
        token_service: TokenService = Depends(get_token_service),
        token_payload: TokenPayload = Depends(get_current_user_token),
    ) -> TokenPayload:
        if not token_service.verify(credentials.credentials, required_role):
            raise AuthorizationError(
                f"Access denied. Required role: {required_role.value}"
            )
        return token_payload

    return role_checker

async def get_current_admin(
    token_payload: TokenPayload = Depends(require_role(UserRole.ADMIN)),
    db: Session = Depends(get_db)
) -> Admin:
    """Require admin role."""
    admin = AdminRepository(db).get_by_username(token_payload.sub)
    if not admin:
        raise AuthenticationError("Admin not found")
    return admin

async def get_current_doctor(
    token_payload: TokenPayload = Depends(require_role(UserRole.DOCTOR)),
    db: Session = Depends(get_db)
) -> Doctor:
    """Require doctor role."""
    doctor = DoctorRepository(db).get_by_email(token_payload.sub)
    if not doctor:
        raise AuthenticationError("Doctor not found")
    return doctor

async def get_current_patient(
    token_payload: TokenPayload = Depends(require_role(UserRole.PATIENT)),
    db: Session = Depends(get_db)
) -> Patient:
    """Require patient role."""
    patient = PatientRepository(db).get_by_email(token_payload.sub)
    if not patient:
        raise AuthenticationError("Patient not found")
    return patient

# Rate limiting dependency
async def rate_limit_check(
    request: Request,
    redis_client = Depends(get_redis)
) -> None:
    """Basic rate limiting for login and registration endpoints."""
    client_ip = request.client.host if request.client else "unknown"
    key = f"rate_limit:{client_ip}"

    current_requests = redis_client.get(key)
    if current_requests is None:
        redis_client.setex(key, settings.RATE_LIMIT_WINDOW_SECONDS, 1)
    else:
        if int(current_requests) >= settings.RATE_LIMIT_MAX_REQUESTS:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="Too many requests. Please try again later."
            )
        redis_client.incr(key)

from fastapi import HTTPException, status
import logging

from ..core.security import TokenService, UserRole, verify_password
from ..repositories.admin import AdminRepository
from ..repositories.doctor import DoctorRepository
from ..repositories.patient import PatientRepository
from ..schemas.auth import AdminLogin, TokenResponse, UserLogin

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(
        self,
        admins: AdminRepository,
        doctors: DoctorRepository,
        patients: PatientRepository,
        token_service: TokenService,
    ):
        self.admins = admins
        self.doctors = doctors
        self.patients = patients
        self.token_service = token_service

    def authenticate_admin(self, login_data: AdminLogin) -> TokenResponse:
        """Authenticate an admin by username and return an access token."""
        admin = self.admins.get_by_username(login_data.username)
        if not admin or not verify_password(login_data.password, admin.password_hash):
            self._reject("admin", login_data.username)
        return self._token(admin.id, admin.username, UserRole.ADMIN)

    def authenticate_doctor(self, login_data: UserLogin) -> TokenResponse:
        """Authenticate a doctor by email and return an access token."""
        doctor = self.doctors.get_by_email(login_data.email)
        if not doctor or not verify_password(login_data.password, doctor.password_hash):
            self._reject("doctor", login_data.email)
        return self._token(doctor.id, doctor.email, UserRole.DOCTOR)

    def authenticate_patient(self, login_data: UserLogin) -> TokenResponse:
        """Authenticate a patient by email and return an access token."""
        patient = self.patients.get_by_email(login_data.email)
        if not patient or not verify_password(login_data.password, patient.password_hash):
            self._reject("patient", login_data.email)
        return self._token(patient.id, patient.email, UserRole.PATIENT)

    def _token(self, subject_id: int, subject_key: str, role: UserRole) -> TokenResponse:
        token = self.token_service.issue(subject_id, subject_key, role)
        return TokenResponse(
            access_token=token.access_token,
            token_type=token.token_type,
            expires_in=token.expires_in,
            role=role.value,
            user_id=subject_id,
        )

    def _reject(self, kind: str, identity: str):
        logger.info(f"Failed {kind} login for {identity}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

from typing import List, Optional
import logging

from fastapi import HTTPException, status

from ..core.security import get_password_hash
from ..models.appointment import Appointment, AppointmentStatus
from ..models.patient import Patient
from ..repositories.appointment import AppointmentRepository
from ..repositories.patient import PatientRepository
from ..schemas.patient import PatientRegister

logger = logging.getLogger(__name__)

# "past" appointments are the prescribed ones, "future" the still scheduled
CONDITION_STATUS = {
    "past": AppointmentStatus.COMPLETED.value,
    "future": AppointmentStatus.SCHEDULED.value,
}


class PatientService:
    def __init__(self, patients: PatientRepository, appointments: AppointmentRepository):
        self.patients = patients
        self.appointments = appointments

    def register_patient(self, patient_data: PatientRegister) -> Patient:
        """Register a new patient; email and phone must both be unused."""
        if self.patients.get_by_email_or_phone(patient_data.email, patient_data.phone):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Patient with this email or phone already exists"
            )

        patient = Patient(
            name=patient_data.name,
            email=patient_data.email,
            password_hash=get_password_hash(patient_data.password),
            phone=patient_data.phone,
            address=patient_data.address,
        )
        self.patients.add(patient)
        logger.info(f"Registered patient {patient.id}")
        return patient

    def filter_appointments(
        self,
        patient_id: int,
        condition: Optional[str] = None,
        doctor_name: Optional[str] = None,
    ) -> List[Appointment]:
        status_code = None
        if condition and condition.strip():
            status_code = CONDITION_STATUS.get(condition.strip().lower())
            if status_code is None:
                return []

        doctor_name = doctor_name.strip() if doctor_name else None
        return self.appointments.find_by_patient(patient_id, status=status_code, doctor_name=doctor_name)

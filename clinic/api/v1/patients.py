from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ...api.deps import get_current_patient, get_patient_service, rate_limit_check
from ...models.patient import Patient
from ...schemas.appointment import AppointmentResponse
from ...schemas.patient import PatientRegister, PatientResponse
from ...services.patient_service import PatientService

router = APIRouter(prefix="/patients", tags=["Patients"])

@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def register(
    patient_data: PatientRegister,
    patient_service: PatientService = Depends(get_patient_service),
    _: None = Depends(rate_limit_check)
):
    """Register a new patient."""
    return patient_service.register_patient(patient_data)

@router.get("/me", response_model=PatientResponse)
async def get_current_patient_info(current_patient: Patient = Depends(get_current_patient)):
    """Get the logged-in patient's profile."""
    return current_patient

@router.get("/me/appointments", response_model=List[AppointmentResponse])
async def list_my_appointments(
    condition: Optional[str] = Query(default=None, description="past or future"),
    doctor_name: Optional[str] = Query(default=None),
    current_patient: Patient = Depends(get_current_patient),
    patient_service: PatientService = Depends(get_patient_service)
):
    """List the patient's own appointments, optionally filtered."""
    appointments = patient_service.filter_appointments(
        current_patient.id, condition=condition, doctor_name=doctor_name
    )
    return [AppointmentResponse.from_appointment(appointment) for appointment in appointments]

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from ...api.deps import get_appointment_service, get_current_doctor, get_current_patient
from ...models.doctor import Doctor
from ...models.patient import Patient
from ...schemas.appointment import (
    AppointmentCreate, AppointmentResponse, AppointmentStatusUpdate, AppointmentUpdate
)
from ...services.appointment_service import AppointmentService
from ...services.outcomes import AppointmentOutcome

router = APIRouter(prefix="/appointments", tags=["Appointments"])

def outcome_response(outcome: AppointmentOutcome, message: str, success_status: int = status.HTTP_200_OK):
    """Translate a lifecycle outcome into the JSON body and status code."""
    if outcome.ok:
        return JSONResponse(
            status_code=success_status,
            content={"status": "success", "message": message}
        )
    return JSONResponse(
        status_code=outcome.http_status,
        content={"status": "error", "message": outcome.message}
    )

@router.post("", status_code=status.HTTP_201_CREATED)
async def book_appointment(
    appointment_data: AppointmentCreate,
    current_patient: Patient = Depends(get_current_patient),
    appointment_service: AppointmentService = Depends(get_appointment_service)
):
    """Book a free slot with a doctor."""
    outcome, appointment = appointment_service.request_booking(
        appointment_data.doctor_id,
        current_patient.id,
        appointment_data.appointment_time
    )
    if not outcome.ok:
        return outcome_response(outcome, "")

    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={
            "status": "success",
            "message": "Appointment booked successfully.",
            "appointment": AppointmentResponse.from_appointment(appointment).model_dump(mode="json")
        }
    )

@router.put("/{appointment_id}")
async def update_appointment(
    appointment_id: int,
    changes: AppointmentUpdate,
    current_patient: Patient = Depends(get_current_patient),
    appointment_service: AppointmentService = Depends(get_appointment_service)
):
    """Reschedule one of the patient's appointments."""
    outcome = appointment_service.update(appointment_id, changes, current_patient.id)
    return outcome_response(outcome, "Appointment updated successfully.")

@router.delete("/{appointment_id}")
async def cancel_appointment(
    appointment_id: int,
    current_patient: Patient = Depends(get_current_patient),
    appointment_service: AppointmentService = Depends(get_appointment_service)
):
    """Cancel one of the patient's appointments."""
    outcome = appointment_service.cancel(appointment_id, current_patient.id)
    return outcome_response(outcome, "Appointment cancelled successfully.")

@router.get("/doctor", response_model=List[AppointmentResponse])
async def list_doctor_appointments(
    day: date = Query(..., alias="date"),
    patient_name: Optional[str] = Query(default=None),
    current_doctor: Doctor = Depends(get_current_doctor),
    appointment_service: AppointmentService = Depends(get_appointment_service)
):
    """The logged-in doctor's appointments for a day."""
    appointments = appointment_service.get_doctor_appointments(current_doctor.id, day, patient_name)
    return [AppointmentResponse.from_appointment(appointment) for appointment in appointments]

@router.patch("/{appointment_id}/status")
async def change_appointment_status(
    appointment_id: int,
    status_data: AppointmentStatusUpdate,
    _: Doctor = Depends(get_current_doctor),
    appointment_service: AppointmentService = Depends(get_appointment_service)
):
    """Overwrite an appointment's status code (doctor only)."""
    outcome = appointment_service.change_status(appointment_id, status_data.status)
    return outcome_response(outcome, "Status updated successfully.")

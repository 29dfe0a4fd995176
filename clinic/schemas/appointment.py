from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..models.appointment import Appointment, AppointmentStatus
from ..services.slots import to_local_naive


class AppointmentCreate(BaseModel):
    doctor_id: int
    appointment_time: datetime

    @field_validator("appointment_time")
    @classmethod
    def normalize_time(cls, value: datetime) -> datetime:
        return to_local_naive(value)


class AppointmentUpdate(BaseModel):
    doctor_id: int
    appointment_time: datetime
    status: int = AppointmentStatus.SCHEDULED.value

    @field_validator("appointment_time")
    @classmethod
    def normalize_time(cls, value: datetime) -> datetime:
        return to_local_naive(value)


class AppointmentStatusUpdate(BaseModel):
    status: int = Field(..., ge=0)


class AppointmentResponse(BaseModel):
    id: int
    doctor_id: int
    doctor_name: Optional[str] = None
    patient_id: int
    patient_name: Optional[str] = None
    appointment_time: datetime
    end_time: datetime
    status: int

    @classmethod
    def from_appointment(cls, appointment: Appointment) -> "AppointmentResponse":
        return cls(
            id=appointment.id,
            doctor_id=appointment.doctor_id,
            doctor_name=appointment.doctor.name if appointment.doctor else None,
            patient_id=appointment.patient_id,
            patient_name=appointment.patient.name if appointment.patient else None,
            appointment_time=appointment.appointment_time,
            end_time=appointment.appointment_time + timedelta(hours=1),
            status=appointment.status,
        )


class OutcomeResponse(BaseModel):
    status: str
    message: str

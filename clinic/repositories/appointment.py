from datetime import datetime
from typing import List, Optional

from .base import SQLAlchemyRepository
from ..models.appointment import Appointment
from ..models.doctor import Doctor
from ..models.patient import Patient


class AppointmentRepository(SQLAlchemyRepository):

    def get(self, appointment_id: int) -> Optional[Appointment]:
        return self.db.query(Appointment).filter(Appointment.id == appointment_id).first()

    def find_by_doctor_and_range(
        self, doctor_id: int, start: datetime, end: datetime
    ) -> List[Appointment]:
        """Appointments of a doctor with ``start <= time <= end``."""
        return self.db.query(Appointment).filter(
            Appointment.doctor_id == doctor_id,
            Appointment.appointment_time >= start,
            Appointment.appointment_time <= end,
        ).order_by(Appointment.appointment_time.asc()).all()

    def find_by_doctor_patient_name_and_range(
        self, doctor_id: int, patient_name: str, start: datetime, end: datetime
    ) -> List[Appointment]:
        return self.db.query(Appointment).join(Patient).filter(
            Appointment.doctor_id == doctor_id,
            Patient.name.ilike(f"%{patient_name}%"),
            Appointment.appointment_time >= start,
            Appointment.appointment_time <= end,
        ).order_by(Appointment.appointment_time.asc()).all()

    def find_by_patient(
        self,
        patient_id: int,
        status: Optional[int] = None,
        doctor_name: Optional[str] = None,
    ) -> List[Appointment]:
        query = self.db.query(Appointment).filter(Appointment.patient_id == patient_id)
        if status is not None:
            query = query.filter(Appointment.status == status)
        if doctor_name:
            query = query.join(Doctor).filter(Doctor.name.ilike(f"%{doctor_name}%"))
        return query.order_by(Appointment.appointment_time.asc()).all()

    def add(self, appointment: Appointment) -> Appointment:
        self.db.add(appointment)
        self.db.commit()
        self.db.refresh(appointment)
        return appointment

    def save(self, appointment: Appointment) -> Appointment:
        self.db.commit()
        self.db.refresh(appointment)
        return appointment

    def delete(self, appointment: Appointment) -> None:
        self.db.delete(appointment)
        self.db.commit()

    def update_status(self, appointment_id: int, status: int) -> int:
        """Overwrite the status column; returns the number of rows touched."""
        updated = self.db.query(Appointment).filter(
            Appointment.id == appointment_id
        ).update({"status": status}, synchronize_session="fetch")
        self.db.commit()
        return updated

    def delete_by_doctor(self, doctor_id: int) -> int:
        deleted = self.db.query(Appointment).filter(
            Appointment.doctor_id == doctor_id
        ).delete(synchronize_session="fetch")
        return deleted

from sqlalchemy import Column, Integer, ForeignKey, DateTime, UniqueConstraint, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, validates
import enum

from ..core.database import Base

class AppointmentStatus(enum.IntEnum):
    SCHEDULED = 0
    COMPLETED = 1

class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)

    # Relationships
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=False)

    # Appointment details; every appointment lasts one hour
    appointment_time = Column(DateTime, nullable=False, index=True)
    # Start of the hour the appointment occupies; kept in step with appointment_time
    appointment_hour = Column(DateTime, nullable=False)
    # Integer code, other values are reserved
    status = Column(Integer, nullable=False, default=AppointmentStatus.SCHEDULED.value)

    # Tracking
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    patient = relationship("Patient", back_populates="appointments")
    doctor = relationship("Doctor", back_populates="appointments")

    __table_args__ = (
        UniqueConstraint("doctor_id", "appointment_hour", name="_doctor_appointment_hour_uc"),
        Index("idx_doctor_appointment_time", "doctor_id", "appointment_time"),
    )

    @validates("appointment_time")
    def _sync_hour(self, key, value):
        self.appointment_hour = value.replace(minute=0, second=0, microsecond=0) if value else None
        return value

    def __repr__(self):
        return f"<Appointment(id={self.id}, patient_id={self.patient_id}, doctor_id={self.doctor_id}, time='{self.appointment_time}')>"

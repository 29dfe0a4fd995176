from datetime import date, datetime
from typing import Callable, List, Optional, Tuple
import logging

from sqlalchemy.exc import SQLAlchemyError

from .availability_service import day_bounds
from .booking_service import BookingValidation, BookingValidator
from .outcomes import AppointmentOutcome, PersistenceFailure
from .slots import to_local_naive, truncate_to_hour
from ..models.appointment import Appointment, AppointmentStatus
from ..repositories.appointment import AppointmentRepository
from ..schemas.appointment import AppointmentUpdate

logger = logging.getLogger(__name__)


class AppointmentService:
    """Owns the appointment lifecycle.

    Scheduled appointments can be rescheduled, cancelled (deleted) or
    completed through a status change. Completed appointments are final.
    Every operation reports an ``AppointmentOutcome``; storage errors are
    rolled back, logged and reported as ``PERSISTENCE_FAILURE``.
    """

    def __init__(
        self,
        appointments: AppointmentRepository,
        validator: BookingValidator,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.appointments = appointments
        self.validator = validator
        self.clock = clock

    def book(self, appointment: Appointment) -> AppointmentOutcome:
        """Persist a new scheduled appointment without re-validating it."""
        appointment.status = AppointmentStatus.SCHEDULED.value
        try:
            self.appointments.add(appointment)
        except SQLAlchemyError:
            self.appointments.rollback()
            logger.exception(
                f"Failed to book appointment for doctor {appointment.doctor_id} "
                f"at {appointment.appointment_time}"
            )
            return AppointmentOutcome.PERSISTENCE_FAILURE

        logger.info(f"Booked appointment {appointment.id} for doctor {appointment.doctor_id}")
        return AppointmentOutcome.SUCCESS

    def request_booking(
        self, doctor_id: int, patient_id: int, appointment_time: datetime
    ) -> Tuple[AppointmentOutcome, Optional[Appointment]]:
        """Validate a patient's booking request against free slots, then book it."""
        appointment_time = to_local_naive(appointment_time)
        if appointment_time <= self.clock():
            return AppointmentOutcome.PAST_TIME, None

        try:
            validation = self.validator.validate(
                doctor_id, appointment_time.date(), appointment_time.time()
            )
        except PersistenceFailure:
            return AppointmentOutcome.PERSISTENCE_FAILURE, None

        if validation is BookingValidation.DOCTOR_NOT_FOUND:
            return AppointmentOutcome.DOCTOR_NOT_FOUND, None
        if validation is BookingValidation.INVALID:
            return AppointmentOutcome.UNAVAILABLE, None

        appointment = Appointment(
            doctor_id=doctor_id,
            patient_id=patient_id,
            appointment_time=appointment_time,
        )
        outcome = self.book(appointment)
        return outcome, appointment if outcome.ok else None

    def update(
        self, appointment_id: int, changes: AppointmentUpdate, patient_id: int
    ) -> AppointmentOutcome:
        try:
            existing = self.appointments.get(appointment_id)
            if existing is None:
                return AppointmentOutcome.NOT_FOUND
            if existing.patient_id != patient_id:
                return AppointmentOutcome.UNAUTHORIZED
            if existing.status != AppointmentStatus.SCHEDULED.value:
                return AppointmentOutcome.INVALID_TRANSITION

            new_time = to_local_naive(changes.appointment_time)
            if not self.validator.is_doctor_available(changes.doctor_id, new_time):
                return AppointmentOutcome.UNAVAILABLE
            if self._hour_taken(changes.doctor_id, new_time, exclude_id=existing.id):
                return AppointmentOutcome.UNAVAILABLE

            existing.appointment_time = new_time
            existing.doctor_id = changes.doctor_id
            existing.status = changes.status
            self.appointments.save(existing)
        except (SQLAlchemyError, PersistenceFailure):
            self.appointments.rollback()
            logger.exception(f"Failed to update appointment {appointment_id}")
            return AppointmentOutcome.PERSISTENCE_FAILURE

        logger.info(f"Updated appointment {appointment_id}")
        return AppointmentOutcome.SUCCESS

    def cancel(self, appointment_id: int, patient_id: int) -> AppointmentOutcome:
        try:
            appointment = self.appointments.get(appointment_id)
            if appointment is None:
                return AppointmentOutcome.NOT_FOUND
            if appointment.patient_id != patient_id:
                return AppointmentOutcome.UNAUTHORIZED
            if appointment.status != AppointmentStatus.SCHEDULED.value:
                return AppointmentOutcome.INVALID_TRANSITION

            self.appointments.delete(appointment)
        except SQLAlchemyError:
            self.appointments.rollback()
            logger.exception(f"Failed to cancel appointment {appointment_id}")
            return AppointmentOutcome.PERSISTENCE_FAILURE

        logger.info(f"Cancelled appointment {appointment_id}")
        return AppointmentOutcome.SUCCESS

    def change_status(self, appointment_id: int, status: int) -> AppointmentOutcome:
        """Overwrite the status code of an appointment."""
        try:
            updated = self.appointments.update_status(appointment_id, int(status))
        except SQLAlchemyError:
            self.appointments.rollback()
            logger.exception(f"Failed to change status of appointment {appointment_id}")
            return AppointmentOutcome.PERSISTENCE_FAILURE

        if not updated:
            return AppointmentOutcome.NOT_FOUND
        return AppointmentOutcome.SUCCESS

    def get_doctor_appointments(
        self, doctor_id: int, day: date, patient_name: Optional[str] = None
    ) -> List[Appointment]:
        start, end = day_bounds(day)
        try:
            if patient_name and patient_name.strip():
                return self.appointments.find_by_doctor_patient_name_and_range(
                    doctor_id, patient_name.strip(), start, end
                )
            return self.appointments.find_by_doctor_and_range(doctor_id, start, end)
        except SQLAlchemyError as exc:
            self.appointments.rollback()
            logger.exception(f"Failed to list appointments of doctor {doctor_id} on {day}")
            raise PersistenceFailure("Could not load appointments") from exc

    def _hour_taken(self, doctor_id: int, moment: datetime, exclude_id: int) -> bool:
        start, end = day_bounds(moment.date())
        hour = truncate_to_hour(moment.time())
        return any(
            other.id != exclude_id and truncate_to_hour(other.appointment_time.time()) == hour
            for other in self.appointments.find_by_doctor_and_range(doctor_id, start, end)
        )

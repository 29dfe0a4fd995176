from datetime import date, datetime, time
from enum import Enum
import logging

from sqlalchemy.exc import SQLAlchemyError

from .availability_service import AvailabilityService
from .outcomes import PersistenceFailure
from .slots import parse_windows
from ..repositories.doctor import DoctorRepository

logger = logging.getLogger(__name__)


class BookingValidation(str, Enum):
    VALID = "valid"
    INVALID = "invalid"
    DOCTOR_NOT_FOUND = "doctor_not_found"


class BookingValidator:
    """Decides whether a doctor can take an appointment at a given moment.

    Two checks exist. ``validate`` is used for new bookings and requires the
    requested time to equal the start of a free slot. ``is_doctor_available``
    is used when rescheduling and only requires the time of day to lie inside
    one of the doctor's windows, end included.
    """

    def __init__(self, doctors: DoctorRepository, availability: AvailabilityService):
        self.doctors = doctors
        self.availability = availability

    def validate(self, doctor_id: int, day: date, requested_time: time) -> BookingValidation:
        if self._load_doctor(doctor_id) is None:
            return BookingValidation.DOCTOR_NOT_FOUND

        for slot in self.availability.get_doctor_availability(doctor_id, day):
            try:
                slot_time = datetime.strptime(slot, "%H:%M").time()
            except ValueError:
                continue
            if slot_time == requested_time:
                return BookingValidation.VALID

        return BookingValidation.INVALID

    def is_doctor_available(self, doctor_id: int, at: datetime) -> bool:
        doctor = self._load_doctor(doctor_id)
        if doctor is None:
            return False

        moment = at.time()
        return any(window.contains(moment) for window in parse_windows(doctor.available_times))

    def _load_doctor(self, doctor_id: int):
        try:
            return self.doctors.get(doctor_id)
        except SQLAlchemyError as exc:
            self.doctors.rollback()
            logger.exception(f"Failed to load doctor {doctor_id}")
            raise PersistenceFailure("Could not load doctor") from exc

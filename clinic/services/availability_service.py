from datetime import date, datetime, time
from typing import Iterable, List, Optional, Tuple
import logging

from sqlalchemy.exc import SQLAlchemyError

from .outcomes import PersistenceFailure
from .slots import format_slot, parse_windows, truncate_to_hour
from ..repositories.appointment import AppointmentRepository
from ..repositories.doctor import DoctorRepository

logger = logging.getLogger(__name__)


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def compute_free_slots(
    raw_windows: Optional[Iterable[str]],
    booked_times: Iterable[datetime],
) -> List[str]:
    """Hourly slots of the parseable windows minus the booked hours.

    Slots generated by overlapping windows are reported once, in ascending
    order.
    """
    booked_hours = {truncate_to_hour(booked.time()) for booked in booked_times}

    free = set()
    for window in parse_windows(raw_windows):
        for slot in window.hourly_slots():
            if truncate_to_hour(slot) not in booked_hours:
                free.add(slot)

    return [format_slot(slot) for slot in sorted(free)]


class AvailabilityService:
    def __init__(self, doctors: DoctorRepository, appointments: AppointmentRepository):
        self.doctors = doctors
        self.appointments = appointments

    def get_doctor_availability(self, doctor_id: int, day: date) -> List[str]:
        """Free hour strings for a doctor on a day; empty when nothing is bookable."""
        try:
            doctor = self.doctors.get(doctor_id)
            if doctor is None or not doctor.available_times:
                return []

            start, end = day_bounds(day)
            booked = self.appointments.find_by_doctor_and_range(doctor_id, start, end)
        except SQLAlchemyError as exc:
            self.doctors.rollback()
            logger.exception(f"Failed to load availability for doctor {doctor_id} on {day}")
            raise PersistenceFailure("Could not load doctor availability") from exc

        return compute_free_slots(
            doctor.available_times,
            (appointment.appointment_time for appointment in booked),
        )

from typing import Callable, Dict, List, Optional, Tuple
import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from .outcomes import PersistenceFailure
from .slots import Period, any_window_in_period
from ..core.security import get_password_hash
from ..models.doctor import Doctor
from ..repositories.appointment import AppointmentRepository
from ..repositories.doctor import DoctorRepository
from ..schemas.doctor import DoctorCreate, DoctorUpdate

logger = logging.getLogger(__name__)

FilterKey = Tuple[bool, bool, bool]


def filter_by_period(doctors: List[Doctor], period: Optional[str]) -> List[Doctor]:
    """Keep doctors with at least one window in the AM or PM period."""
    parsed = Period.parse(period)
    return [doctor for doctor in doctors if any_window_in_period(doctor.available_times, parsed)]


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


class DoctorFilter:
    """Picks one lookup strategy per combination of name, specialty and period."""

    def __init__(self, doctors: DoctorRepository):
        self.doctors = doctors
        self._strategies: Dict[FilterKey, Callable[[str, str, str], List[Doctor]]] = {
            (True, True, True): lambda n, s, p: filter_by_period(self.doctors.find_by_name_and_specialty(n, s), p),
            (True, True, False): lambda n, s, p: self.doctors.find_by_name_and_specialty(n, s),
            (True, False, True): lambda n, s, p: filter_by_period(self.doctors.find_by_name(n), p),
            (False, True, True): lambda n, s, p: filter_by_period(self.doctors.find_by_specialty(s), p),
            (True, False, False): lambda n, s, p: self.doctors.find_by_name(n),
            (False, True, False): lambda n, s, p: self.doctors.find_by_specialty(s),
            (False, False, True): lambda n, s, p: filter_by_period(self.doctors.list_all(), p),
            (False, False, False): lambda n, s, p: self.doctors.list_all(),
        }

    def filter_doctors(
        self,
        name: Optional[str] = None,
        specialty: Optional[str] = None,
        period: Optional[str] = None,
    ) -> List[Doctor]:
        name, specialty, period = _clean(name), _clean(specialty), _clean(period)
        strategy = self._strategies[(name is not None, specialty is not None, period is not None)]
        try:
            return strategy(name, specialty, period)
        except SQLAlchemyError as exc:
            self.doctors.rollback()
            logger.exception("Failed to filter doctors")
            raise PersistenceFailure("Could not load doctors") from exc


class DoctorService:
    def __init__(self, doctors: DoctorRepository, appointments: AppointmentRepository):
        self.doctors = doctors
        self.appointments = appointments

    def get_doctor(self, doctor_id: int) -> Doctor:
        doctor = self.doctors.get(doctor_id)
        if not doctor:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Doctor not found"
            )
        return doctor

    def create_doctor(self, doctor_data: DoctorCreate) -> Doctor:
        """Create a doctor account."""
        if self.doctors.get_by_email(doctor_data.email):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Doctor already exists"
            )

        doctor = Doctor(
            name=doctor_data.name,
            email=doctor_data.email,
            password_hash=get_password_hash(doctor_data.password),
            specialty=doctor_data.specialty,
            phone=doctor_data.phone,
            available_times=list(doctor_data.available_times),
        )
        self.doctors.add(doctor)
        logger.info(f"Created doctor {doctor.id} ({doctor.specialty})")
        return doctor

    def update_doctor(self, doctor_id: int, doctor_data: DoctorUpdate) -> Doctor:
        """Replace a doctor's profile, including the whole availability list."""
        doctor = self.get_doctor(doctor_id)

        other = self.doctors.get_by_email(doctor_data.email)
        if other and other.id != doctor.id:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Email already used by another doctor"
            )

        doctor.name = doctor_data.name
        doctor.email = doctor_data.email
        doctor.specialty = doctor_data.specialty
        doctor.phone = doctor_data.phone
        doctor.available_times = list(doctor_data.available_times)
        if doctor_data.password:
            doctor.password_hash = get_password_hash(doctor_data.password)

        return self.doctors.save(doctor)

    def delete_doctor(self, doctor_id: int) -> None:
        """Delete a doctor together with every appointment booked with them."""
        doctor = self.get_doctor(doctor_id)
        removed = self.appointments.delete_by_doctor(doctor_id)
        self.doctors.delete(doctor)
        logger.info(f"Deleted doctor {doctor_id} and {removed} appointment(s)")

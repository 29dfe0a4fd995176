from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import SQLAlchemyError

from clinic.repositories import AppointmentRepository, DoctorRepository
from clinic.services.availability_service import AvailabilityService, compute_free_slots
from clinic.services.outcomes import PersistenceFailure

from .conftest import FUTURE_DAY


def at(hour, minute=0, day=FUTURE_DAY):
    return datetime.combine(day, datetime.min.time()).replace(hour=hour, minute=minute)


class TestComputeFreeSlots:

    def test_window_without_bookings(self):
        """Every hour of the window except the trailing one is free."""
        assert compute_free_slots(["09:00-12:00"], []) == ["09:00", "10:00", "11:00"]

    def test_booked_hour_is_removed(self):
        assert compute_free_slots(["09:00-12:00"], [at(10)]) == ["09:00", "11:00"]

    def test_booking_inside_an_hour_blocks_that_hour(self):
        """Bookings compare by their truncated hour."""
        assert compute_free_slots(["09:00-12:00"], [at(10, 30)]) == ["09:00", "11:00"]

    def test_unaligned_slot_blocked_by_same_hour(self):
        assert compute_free_slots(["09:30-12:00"], [at(9)]) == ["10:30"]

    def test_overlapping_windows_are_deduplicated_and_sorted(self):
        slots = compute_free_slots(["14:00-16:00", "09:00-11:00", "10:00-12:00"], [])
        assert slots == ["09:00", "10:00", "11:00", "14:00", "15:00"]

    def test_malformed_windows_contribute_nothing(self):
        assert compute_free_slots(["bogus", "13:00-15:00"], []) == ["13:00", "14:00"]

    def test_no_windows(self):
        assert compute_free_slots([], [at(9)]) == []
        assert compute_free_slots(None, []) == []

    def test_fully_booked_window(self):
        assert compute_free_slots(["09:00-11:00"], [at(9), at(10)]) == []


class TestAvailabilityService:

    def _service(self, db):
        return AvailabilityService(DoctorRepository(db), AppointmentRepository(db))

    def test_unknown_doctor_has_no_availability(self, db):
        """A missing doctor yields an empty list, not an error."""
        assert self._service(db).get_doctor_availability(999, FUTURE_DAY) == []

    def test_doctor_without_windows(self, db, make_doctor):
        doctor = make_doctor(available_times=[])
        assert self._service(db).get_doctor_availability(doctor.id, FUTURE_DAY) == []

    def test_subtracts_bookings_on_that_date(self, db, make_doctor, make_patient, make_appointment):
        doctor = make_doctor(available_times=["09:00-12:00"])
        patient = make_patient()
        make_appointment(doctor, patient, at(10))

        assert self._service(db).get_doctor_availability(doctor.id, FUTURE_DAY) == ["09:00", "11:00"]

    def test_ignores_bookings_on_other_dates(self, db, make_doctor, make_patient, make_appointment):
        doctor = make_doctor(available_times=["09:00-12:00"])
        patient = make_patient()
        make_appointment(doctor, patient, at(10, day=FUTURE_DAY + timedelta(days=1)))

        assert self._service(db).get_doctor_availability(doctor.id, FUTURE_DAY) == ["09:00", "10:00", "11:00"]

    def test_ignores_bookings_of_other_doctors(self, db, make_doctor, make_patient, make_appointment):
        doctor = make_doctor(available_times=["09:00-12:00"])
        other = make_doctor(available_times=["09:00-12:00"])
        make_appointment(other, make_patient(), at(9))

        assert self._service(db).get_doctor_availability(doctor.id, FUTURE_DAY) == ["09:00", "10:00", "11:00"]

    def test_late_evening_booking_counts_for_that_day(self, db, make_doctor, make_patient, make_appointment):
        doctor = make_doctor(available_times=["22:00-24:00", "22:00-23:59"])
        make_appointment(doctor, make_patient(), at(22, 15))

        assert self._service(db).get_doctor_availability(doctor.id, FUTURE_DAY) == []

    def test_storage_error_becomes_persistence_failure(self, db):
        class BrokenDoctors(DoctorRepository):
            def get(self, doctor_id):
                raise SQLAlchemyError("connection lost")

        service = AvailabilityService(BrokenDoctors(db), AppointmentRepository(db))
        with pytest.raises(PersistenceFailure):
            service.get_doctor_availability(1, FUTURE_DAY)

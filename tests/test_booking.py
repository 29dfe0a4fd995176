from datetime import datetime, time

from clinic.repositories import AppointmentRepository, DoctorRepository
from clinic.services.availability_service import AvailabilityService
from clinic.services.booking_service import BookingValidation, BookingValidator

from .conftest import FUTURE_DAY


def make_validator(db):
    doctors = DoctorRepository(db)
    availability = AvailabilityService(doctors, AppointmentRepository(db))
    return BookingValidator(doctors, availability)


class TestValidate:

    def test_unknown_doctor(self, db):
        assert make_validator(db).validate(42, FUTURE_DAY, time(9)) is BookingValidation.DOCTOR_NOT_FOUND

    def test_time_on_free_slot_is_valid(self, db, make_doctor):
        doctor = make_doctor(available_times=["09:00-12:00"])
        assert make_validator(db).validate(doctor.id, FUTURE_DAY, time(10)) is BookingValidation.VALID

    def test_time_between_slot_starts_is_invalid(self, db, make_doctor):
        """Only exact slot starts are bookable."""
        doctor = make_doctor(available_times=["09:00-12:00"])
        assert make_validator(db).validate(doctor.id, FUTURE_DAY, time(10, 30)) is BookingValidation.INVALID

    def test_trailing_hour_is_invalid(self, db, make_doctor):
        doctor = make_doctor(available_times=["09:00-12:00"])
        assert make_validator(db).validate(doctor.id, FUTURE_DAY, time(12)) is BookingValidation.INVALID

    def test_booked_slot_is_invalid(self, db, make_doctor, make_patient, make_appointment):
        doctor = make_doctor(available_times=["09:00-12:00"])
        make_appointment(doctor, make_patient(), datetime.combine(FUTURE_DAY, time(11)))
        assert make_validator(db).validate(doctor.id, FUTURE_DAY, time(11)) is BookingValidation.INVALID

    def test_doctor_without_windows_is_invalid(self, db, make_doctor):
        doctor = make_doctor(available_times=[])
        assert make_validator(db).validate(doctor.id, FUTURE_DAY, time(9)) is BookingValidation.INVALID


class TestRangeContainment:

    def test_time_inside_window(self, db, make_doctor):
        doctor = make_doctor(available_times=["09:00-12:00"])
        assert make_validator(db).is_doctor_available(doctor.id, datetime.combine(FUTURE_DAY, time(10, 30)))

    def test_window_end_is_included(self, db, make_doctor):
        """Containment is looser than slot matching: the end boundary counts."""
        doctor = make_doctor(available_times=["09:00-12:00"])
        assert make_validator(db).is_doctor_available(doctor.id, datetime.combine(FUTURE_DAY, time(12)))

    def test_time_outside_every_window(self, db, make_doctor):
        doctor = make_doctor(available_times=["09:00-12:00", "bad-entry"])
        assert not make_validator(db).is_doctor_available(doctor.id, datetime.combine(FUTURE_DAY, time(13)))

    def test_unknown_doctor_is_unavailable(self, db):
        assert not make_validator(db).is_doctor_available(7, datetime.combine(FUTURE_DAY, time(10)))

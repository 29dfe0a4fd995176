from datetime import datetime, time

import pytest
from sqlalchemy.exc import SQLAlchemyError

from clinic.models import Appointment, Doctor
from clinic.repositories import AppointmentRepository, DoctorRepository
from clinic.services.doctor_service import DoctorFilter, DoctorService, filter_by_period
from clinic.services.outcomes import PersistenceFailure

from .conftest import FUTURE_DAY


@pytest.fixture
def roster(make_doctor):
    """Three doctors covering morning, afternoon and a window across noon."""
    return {
        "morning": make_doctor(["08:00-11:00"], name="Alice Morning", specialty="Cardiology"),
        "afternoon": make_doctor(["13:00-17:00"], name="Bob Afternoon", specialty="Dermatology"),
        "noon": make_doctor(["11:00-14:00"], name="Alice Noon", specialty="Dermatology"),
    }


def names(doctors):
    return sorted(doctor.name for doctor in doctors)


class TestFilterByPeriod:

    def test_am_and_pm(self, roster):
        doctors = list(roster.values())
        assert names(filter_by_period(doctors, "AM")) == ["Alice Morning", "Alice Noon"]
        assert names(filter_by_period(doctors, "PM")) == ["Alice Noon", "Bob Afternoon"]

    def test_period_is_case_insensitive(self, roster):
        assert names(filter_by_period(list(roster.values()), "pm")) == ["Alice Noon", "Bob Afternoon"]

    def test_unknown_period_matches_nothing(self, roster):
        assert filter_by_period(list(roster.values()), "evening") == []

    def test_doctor_without_windows_never_matches(self, make_doctor):
        assert filter_by_period([make_doctor([])], "AM") == []


class TestDoctorFilter:

    def _filter(self, db):
        return DoctorFilter(DoctorRepository(db))

    def test_no_criteria_returns_everyone(self, db, roster):
        assert len(self._filter(db).filter_doctors()) == 3

    def test_blank_criteria_count_as_absent(self, db, roster):
        assert len(self._filter(db).filter_doctors(name="  ", specialty="", period=" ")) == 3

    def test_name_only(self, db, roster):
        assert names(self._filter(db).filter_doctors(name="alice")) == ["Alice Morning", "Alice Noon"]

    def test_specialty_only(self, db, roster):
        result = self._filter(db).filter_doctors(specialty="dermatology")
        assert names(result) == ["Alice Noon", "Bob Afternoon"]

    def test_period_only(self, db, roster):
        assert names(self._filter(db).filter_doctors(period="AM")) == ["Alice Morning", "Alice Noon"]

    def test_name_and_specialty(self, db, roster):
        result = self._filter(db).filter_doctors(name="Alice", specialty="Dermatology")
        assert names(result) == ["Alice Noon"]

    def test_name_and_period(self, db, roster):
        assert names(self._filter(db).filter_doctors(name="Alice", period="PM")) == ["Alice Noon"]

    def test_specialty_and_period(self, db, roster):
        result = self._filter(db).filter_doctors(specialty="Dermatology", period="AM")
        assert names(result) == ["Alice Noon"]

    def test_all_three(self, db, roster):
        assert names(self._filter(db).filter_doctors("Bob", "Dermatology", "PM")) == ["Bob Afternoon"]
        assert self._filter(db).filter_doctors("Bob", "Dermatology", "AM") == []

    def test_unmatched_name(self, db, roster):
        assert self._filter(db).filter_doctors(name="Zed") == []

    def test_storage_failure(self, db):
        class BrokenDoctors(DoctorRepository):
            def list_all(self):
                raise SQLAlchemyError("gone")

        with pytest.raises(PersistenceFailure):
            DoctorFilter(BrokenDoctors(db)).filter_doctors()


class TestDeleteDoctor:

    def test_delete_removes_appointments(self, db, make_doctor, make_patient, make_appointment):
        doctor, other = make_doctor(["09:00-12:00"]), make_doctor(["09:00-12:00"])
        patient = make_patient()
        make_appointment(doctor, patient, datetime.combine(FUTURE_DAY, time(9)))
        make_appointment(other, patient, datetime.combine(FUTURE_DAY, time(10)))

        DoctorService(DoctorRepository(db), AppointmentRepository(db)).delete_doctor(doctor.id)

        assert db.query(Doctor).count() == 1
        assert [a.doctor_id for a in db.query(Appointment).all()] == [other.id]

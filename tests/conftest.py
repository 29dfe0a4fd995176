import os
from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set testing environment before the application is imported
os.environ["TESTING"] = "1"
os.environ.setdefault("TEST_DATABASE_URL", "sqlite://")

from clinic.core.database import Base, get_db, get_redis  # noqa: E402
from clinic.core.security import get_password_hash  # noqa: E402
from clinic.main import app  # noqa: E402
from clinic.models import Admin, Appointment, Doctor, Patient  # noqa: E402

# Far enough ahead that every slot on this day lies in the future
FUTURE_DAY = date(2099, 3, 9)
PASSWORD = "Secret123"
PASSWORD_HASH = get_password_hash(PASSWORD)

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeRedis:
    """In-memory stand-in for the handful of Redis commands the rate limiter uses."""

    def __init__(self):
        self.data = {}

    def setex(self, key, seconds, value):
        self.data[key] = str(value)
        return True

    def get(self, key):
        return self.data.get(key)

    def incr(self, key):
        self.data[key] = str(int(self.data.get(key, 0)) + 1)
        return int(self.data[key])


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def client(db, fake_redis):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis] = lambda: fake_redis
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_doctor(db):
    counter = {"n": 0}

    def _make_doctor(available_times=None, name="Gregory House", specialty="Cardiology", email=None):
        counter["n"] += 1
        doctor = Doctor(
            name=name,
            email=email or f"doctor{counter['n']}@example.com",
            password_hash=PASSWORD_HASH,
            specialty=specialty,
            phone="5550000000",
            available_times=list(available_times or []),
        )
        db.add(doctor)
        db.commit()
        db.refresh(doctor)
        return doctor

    return _make_doctor


@pytest.fixture
def make_patient(db):
    counter = {"n": 0}

    def _make_patient(name="Jane Doe", email=None):
        counter["n"] += 1
        patient = Patient(
            name=name,
            email=email or f"patient{counter['n']}@example.com",
            password_hash=PASSWORD_HASH,
            phone=f"555123{counter['n']:04d}",
            address="1 Main Street",
        )
        db.add(patient)
        db.commit()
        db.refresh(patient)
        return patient

    return _make_patient


@pytest.fixture
def make_appointment(db):
    def _make_appointment(doctor, patient, when: datetime, status: int = 0):
        appointment = Appointment(
            doctor_id=doctor.id,
            patient_id=patient.id,
            appointment_time=when,
            status=status,
        )
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    return _make_appointment


@pytest.fixture
def admin(db):
    admin = Admin(username="root", password_hash=PASSWORD_HASH)
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin

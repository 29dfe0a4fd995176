from .admin import AdminRepository
from .appointment import AppointmentRepository
from .doctor import DoctorRepository
from .patient import PatientRepository
from .prescription import PrescriptionRepository

__all__ = [
    "AdminRepository",
    "AppointmentRepository",
    "DoctorRepository",
    "PatientRepository",
    "PrescriptionRepository",
]

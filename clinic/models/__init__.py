from .admin import Admin
from .appointment import Appointment, AppointmentStatus
from .doctor import Doctor
from .patient import Patient
from .prescription import Prescription

__all__ = ["Admin", "Appointment", "AppointmentStatus", "Doctor", "Patient", "Prescription"]

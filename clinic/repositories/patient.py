from typing import Optional

from sqlalchemy import or_

from .base import SQLAlchemyRepository
from ..models.patient import Patient


class PatientRepository(SQLAlchemyRepository):

    def get(self, patient_id: int) -> Optional[Patient]:
        return self.db.query(Patient).filter(Patient.id == patient_id).first()

    def get_by_email(self, email: str) -> Optional[Patient]:
        return self.db.query(Patient).filter(Patient.email == email).first()

    def get_by_email_or_phone(self, email: str, phone: str) -> Optional[Patient]:
        return self.db.query(Patient).filter(
            or_(Patient.email == email, Patient.phone == phone)
        ).first()

    def add(self, patient: Patient) -> Patient:
        self.db.add(patient)
        self.db.commit()
        self.db.refresh(patient)
        return patient

from typing import List

from .base import SQLAlchemyRepository
from ..models.prescription import Prescription


class PrescriptionRepository(SQLAlchemyRepository):

    def find_by_appointment(self, appointment_id: int) -> List[Prescription]:
        return self.db.query(Prescription).filter(
            Prescription.appointment_id == appointment_id
        ).order_by(Prescription.id).all()

    def add(self, prescription: Prescription) -> Prescription:
        self.db.add(prescription)
        self.db.commit()
        self.db.refresh(prescription)
        return prescription

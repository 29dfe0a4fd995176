from typing import List, Optional

from sqlalchemy import func

from .base import SQLAlchemyRepository
from ..models.doctor import Doctor


class DoctorRepository(SQLAlchemyRepository):

    def get(self, doctor_id: int) -> Optional[Doctor]:
        return self.db.query(Doctor).filter(Doctor.id == doctor_id).first()

    def get_by_email(self, email: str) -> Optional[Doctor]:
        return self.db.query(Doctor).filter(Doctor.email == email).first()

    def list_all(self) -> List[Doctor]:
        return self.db.query(Doctor).order_by(Doctor.id).all()

    def find_by_name(self, name: str) -> List[Doctor]:
        """Case-insensitive substring match on the doctor's name."""
        return self.db.query(Doctor).filter(
            Doctor.name.ilike(f"%{name}%")
        ).order_by(Doctor.id).all()

    def find_by_specialty(self, specialty: str) -> List[Doctor]:
        return self.db.query(Doctor).filter(
            func.lower(Doctor.specialty) == specialty.lower()
        ).order_by(Doctor.id).all()

    def find_by_name_and_specialty(self, name: str, specialty: str) -> List[Doctor]:
        return self.db.query(Doctor).filter(
            Doctor.name.ilike(f"%{name}%"),
            func.lower(Doctor.specialty) == specialty.lower()
        ).order_by(Doctor.id).all()

    def add(self, doctor: Doctor) -> Doctor:
        self.db.add(doctor)
        self.db.commit()
        self.db.refresh(doctor)
        return doctor

    def save(self, doctor: Doctor) -> Doctor:
        self.db.commit()
        self.db.refresh(doctor)
        return doctor

    def delete(self, doctor: Doctor) -> None:
        self.db.delete(doctor)
        self.db.commit()

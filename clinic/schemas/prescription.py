from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PrescriptionCreate(BaseModel):
    appointment_id: int
    patient_name: str = Field(..., min_length=3, max_length=100)
    medication: str = Field(..., min_length=3, max_length=100)
    dosage: str = Field(..., min_length=1, max_length=100)
    doctor_notes: Optional[str] = Field(default=None, max_length=200)


class PrescriptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    appointment_id: int
    patient_name: str
    medication: str
    dosage: str
    doctor_notes: Optional[str] = None


class PrescriptionSaveResponse(BaseModel):
    status: str
    message: str
    prescription: PrescriptionResponse
    appointment_completed: bool


class PrescriptionListResponse(BaseModel):
    prescriptions: List[PrescriptionResponse]

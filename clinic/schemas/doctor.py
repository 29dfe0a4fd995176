from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class DoctorBase(BaseModel):
    name: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    specialty: str = Field(..., min_length=3, max_length=50)
    phone: Optional[str] = Field(default=None, pattern=r"^[0-9]{10}$")
    available_times: List[str] = Field(default_factory=list)

    @field_validator("available_times")
    @classmethod
    def strip_windows(cls, value: List[str]) -> List[str]:
        # Malformed windows are kept; they simply produce no slots
        return [window.strip() for window in value if window and window.strip()]


class DoctorCreate(DoctorBase):
    password: str = Field(..., min_length=6)


class DoctorUpdate(DoctorBase):
    password: Optional[str] = Field(default=None, min_length=6)


class DoctorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    specialty: str
    phone: Optional[str] = None
    available_times: List[str]
    created_at: Optional[datetime] = None


class DoctorAvailabilityResponse(BaseModel):
    doctor_id: int
    date: str
    available_times: List[str]

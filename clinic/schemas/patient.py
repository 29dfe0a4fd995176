from pydantic import BaseModel, ConfigDict, EmailStr, Field


class PatientRegister(BaseModel):
    name: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)
    phone: str = Field(..., pattern=r"^[0-9]{10}$")
    address: str = Field(..., max_length=255)


class PatientResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: str
    address: str

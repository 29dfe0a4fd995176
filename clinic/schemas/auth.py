from pydantic import BaseModel, EmailStr

from ..core.security import Token


class AdminLogin(BaseModel):
    username: str
    password: str


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(Token):
    role: str
    user_id: int

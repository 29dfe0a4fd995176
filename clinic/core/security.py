from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import HTTPException, status
from fastapi.security import HTTPBearer
from pydantic import BaseModel
from enum import Enum

from .config import settings

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# JWT Security
security = HTTPBearer()

class UserRole(str, Enum):
    ADMIN = "admin"
    DOCTOR = "doctor"
    PATIENT = "patient"

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int

class TokenPayload(BaseModel):
    sub: Optional[str] = None
    uid: Optional[int] = None
    role: Optional[str] = None
    exp: Optional[int] = None
    token_type: Optional[str] = None

# Password utilities
def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """Generate password hash."""
    return pwd_context.hash(password)

# JWT utilities
def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create JWT access token."""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode.update({
        "exp": expire,
        "token_type": "access"
    })

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )

def verify_token(token: str) -> Optional[TokenPayload]:
    """Verify and decode JWT token."""
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )

        return TokenPayload(**payload)

    except JWTError:
        return None

class TokenService:
    """Issues and checks the access tokens handed to admins, doctors and patients.

    The subject key is the login identity: an email for doctors and patients,
    the username for admins.
    """

    def __init__(self, expires_delta: Optional[timedelta] = None):
        self.expires_delta = expires_delta

    def issue(self, subject_id: int, subject_key: str, role: UserRole) -> Token:
        access_token = create_access_token(
            {"sub": subject_key, "uid": subject_id, "role": role.value},
            self.expires_delta,
        )
        expires_in = (
            int(self.expires_delta.total_seconds())
            if self.expires_delta
            else settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
        )
        return Token(access_token=access_token, expires_in=expires_in)

    def decode(self, token: str) -> Optional[TokenPayload]:
        payload = verify_token(token)
        if not payload or payload.token_type != "access" or not payload.sub:
            return None
        return payload

    def verify(self, token: str, required_role: UserRole) -> bool:
        payload = self.decode(token)
        return payload is not None and payload.role == required_role.value

    def subject_email(self, token: str) -> Optional[str]:
        payload = self.decode(token)
        return payload.sub if payload else None

# Security exceptions
class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

class AuthorizationError(HTTPException):
    def __init__(self, detail: str = "Not enough permissions"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )

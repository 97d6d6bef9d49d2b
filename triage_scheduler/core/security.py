from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel
from enum import Enum
import secrets

from .config import settings

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

class UserRole(str, Enum):
    ADMIN = "ADMIN"
    DOCTOR = "DOCTOR"
    PATIENT = "PATIENT"

class TokenPayload(BaseModel):
    sub: Optional[int] = None
    username: Optional[str] = None
    role: Optional[UserRole] = None
    jti: Optional[str] = None
    exp: Optional[int] = None
    token_type: Optional[str] = None

@dataclass(frozen=True)
class CallerContext:
    """Authenticated identity of the request, handed to every service call."""
    user_id: int
    role: UserRole
    username: Optional[str] = None
    session_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

# Password utilities
def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """Generate password hash."""
    return pwd_context.hash(password)

def generate_session_id() -> str:
    """Generate an unguessable session identifier."""
    return secrets.token_urlsafe(32)

# JWT utilities
def create_access_token(
    user_id: int,
    username: str,
    role: UserRole,
    session_id: str,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create a signed access token bound to a server-side session."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta

    to_encode = {
        # python-jose requires a string subject
        "sub": str(user_id),
        "username": username,
        "role": role.value,
        "jti": session_id,
        "exp": expire,
        "token_type": "access",
    }

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

    except (JWTError, ValueError):
        return None

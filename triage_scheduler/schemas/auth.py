from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from ..core.security import UserRole


class UserRegister(BaseModel):
    username: EmailStr
    password: str = Field(..., min_length=1)
    role: UserRole


class UserLogin(BaseModel):
    username: str
    password: str


class UserResponse(BaseModel):
    id: int
    username: str
    role: UserRole
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse


class CurrentUserResponse(BaseModel):
    user_id: int
    username: Optional[str] = None
    role: UserRole

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ...core.config import settings
from ...core.database import get_db
from ...core.security import CallerContext
from ...core.sessions import SessionStore
from ...api.deps import get_caller_context, get_session_store
from ...services.auth_service import AuthService
from ...schemas.auth import (
    UserLogin, UserRegister, TokenResponse, UserResponse, CurrentUserResponse
)

router = APIRouter(prefix="/auth", tags=["Authentication"])

@router.post("/register", response_model=UserResponse)
async def register(
    user_data: UserRegister,
    db: Session = Depends(get_db)
):
    """Register a new user."""
    auth_service = AuthService(db)
    user = auth_service.register(user_data.username, user_data.password, user_data.role)
    return UserResponse.model_validate(user)

@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: UserLogin,
    db: Session = Depends(get_db),
    sessions: SessionStore = Depends(get_session_store)
):
    """Authenticate user and open a session."""
    auth_service = AuthService(db)
    user = auth_service.login(login_data.username, login_data.password)

    access_token = sessions.open(user.id, user.username, user.role)

    return TokenResponse(
        access_token=access_token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=UserResponse.model_validate(user)
    )

@router.post("/logout")
async def logout(
    caller: CallerContext = Depends(get_caller_context),
    sessions: SessionStore = Depends(get_session_store)
):
    """Destroy the caller's session."""
    sessions.close(caller.session_id)
    return {"message": "Logged out successfully"}

@router.get("/me", response_model=CurrentUserResponse)
async def get_current_user_info(
    caller: CallerContext = Depends(get_caller_context)
):
    """Get the identity bound to the current session."""
    return CurrentUserResponse(
        user_id=caller.user_id,
        username=caller.username,
        role=caller.role
    )

# Admin routes
@router.get("/users", response_model=List[UserResponse])
async def list_users(
    skip: int = 0,
    limit: int = 10,
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(get_caller_context)
):
    """List all users (admin only)."""
    auth_service = AuthService(db)
    users = auth_service.list_users(caller, skip=skip, limit=limit)
    return [UserResponse.model_validate(user) for user in users]

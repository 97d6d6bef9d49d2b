from sqlalchemy.orm import Session
from typing import List
import logging

from ..models.user import User
from ..core.exceptions import DuplicateUsername, UserNotFound, InvalidCredentials, Forbidden
from ..core.security import CallerContext, UserRole, verify_password, get_password_hash

logger = logging.getLogger(__name__)

class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def register(self, username: str, raw_password: str, role: UserRole) -> User:
        """Register a new user."""
        if self.username_exists(username):
            raise DuplicateUsername(f"Username already exists: {username}")

        new_user = User(
            username=username,
            password_hash=get_password_hash(raw_password),
            role=role,
        )

        self.db.add(new_user)
        self.db.commit()
        self.db.refresh(new_user)

        logger.info(f"Registered user {new_user.id} with role {role.value}")
        return new_user

    def login(self, username: str, raw_password: str) -> User:
        """Check credentials and return the stored user."""
        user = self.find_by_username(username)

        if not verify_password(raw_password, user.password_hash):
            logger.warning(f"Failed login for user {user.id}")
            raise InvalidCredentials("Invalid password")

        return user

    def find_by_username(self, username: str) -> User:
        user = self.db.query(User).filter(User.username == username).first()
        if not user:
            raise UserNotFound("User not found")
        return user

    def username_exists(self, username: str) -> bool:
        return self.db.query(User.id).filter(User.username == username).first() is not None

    def get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if not user:
            raise UserNotFound(f"User not found with id: {user_id}")
        return user

    def list_users(self, caller: CallerContext, skip: int = 0, limit: int = 10) -> List[User]:
        """List all users (admin only)."""
        if not caller.is_admin:
            raise Forbidden("Admin access required")

        return self.db.query(User).order_by(User.id).offset(skip).limit(limit).all()

"""
Server-side login sessions.

A login opens a Redis entry ``session:<jti>`` holding the user id; the signed
access token carries the same ``jti``. Logout deletes the entry, so a token
stops working as soon as its session is gone even if it has not expired.
"""
import logging
from typing import Optional

from .config import settings
from .exceptions import Unauthenticated
from .security import (
    CallerContext, TokenPayload, UserRole,
    create_access_token, generate_session_id, verify_token
)

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, redis_client, ttl_seconds: Optional[int] = None):
        self.redis = redis_client
        self.ttl_seconds = ttl_seconds or settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    def _key(self, session_id: str) -> str:
        return f"{settings.SESSION_KEY_PREFIX}{session_id}"

    def open(self, user_id: int, username: str, role: UserRole) -> str:
        """Start a session and return the access token that names it."""
        session_id = generate_session_id()
        self.redis.setex(self._key(session_id), self.ttl_seconds, str(user_id))
        logger.info(f"Opened session for user {user_id}")
        return create_access_token(user_id, username, role, session_id)

    def resolve(self, token: str) -> CallerContext:
        """Turn a bearer token into the caller context of a live session."""
        payload = verify_token(token)
        if not payload:
            raise Unauthenticated("Invalid or expired token")

        if payload.token_type != "access":
            raise Unauthenticated("Invalid token type")

        if not payload.sub or not payload.role or not payload.jti:
            raise Unauthenticated("Invalid token payload")

        stored_user_id = self.redis.get(self._key(payload.jti))
        if stored_user_id is None or str(stored_user_id) != str(payload.sub):
            raise Unauthenticated("Session expired or logged out")

        return self._to_context(payload)

    def close(self, session_id: str) -> bool:
        """Destroy a session. Returns False if it was already gone."""
        removed = self.redis.delete(self._key(session_id))
        return bool(removed)

    @staticmethod
    def _to_context(payload: TokenPayload) -> CallerContext:
        return CallerContext(
            user_id=payload.sub,
            role=payload.role,
            username=payload.username,
            session_id=payload.jti,
        )

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional

from ..core.database import get_redis
from ..core.exceptions import Unauthenticated
from ..core.security import CallerContext
from ..core.sessions import SessionStore

# Missing credentials are reported by get_caller_context, not by HTTPBearer
security = HTTPBearer(auto_error=False)

def get_session_store(redis_client = Depends(get_redis)) -> SessionStore:
    """Session store over the shared Redis client."""
    return SessionStore(redis_client)

async def get_caller_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    sessions: SessionStore = Depends(get_session_store)
) -> CallerContext:
    """Resolve the bearer token of the request to a live session."""
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()

    return sessions.resolve(credentials.credentials)

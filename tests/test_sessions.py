from datetime import timedelta

import pytest
from jose import jwt

from triage_scheduler.core.exceptions import Unauthenticated
from triage_scheduler.core.security import UserRole, create_access_token
from triage_scheduler.core.sessions import SessionStore


def test_open_and_resolve(fake_redis):
    sessions = SessionStore(fake_redis)
    token = sessions.open(7, "bob@x.com", UserRole.DOCTOR)

    caller = sessions.resolve(token)

    assert caller.user_id == 7
    assert caller.role == UserRole.DOCTOR
    assert caller.username == "bob@x.com"
    assert caller.session_id


def test_closed_session_is_rejected(fake_redis):
    sessions = SessionStore(fake_redis)
    token = sessions.open(7, "bob@x.com", UserRole.DOCTOR)
    caller = sessions.resolve(token)

    assert sessions.close(caller.session_id) is True
    assert sessions.close(caller.session_id) is False

    with pytest.raises(Unauthenticated):
        sessions.resolve(token)


def test_token_signed_with_other_key_is_rejected(fake_redis):
    sessions = SessionStore(fake_redis)
    fake_redis.setex("session:sid", 60, "7")
    forged = jwt.encode(
        {"sub": "7", "role": "ADMIN", "jti": "sid", "token_type": "access"},
        "not-the-secret",
        algorithm="HS256"
    )

    with pytest.raises(Unauthenticated):
        sessions.resolve(forged)


def test_expired_token_is_rejected(fake_redis):
    sessions = SessionStore(fake_redis)
    token = create_access_token(
        7, "bob@x.com", UserRole.DOCTOR, "sid", expires_delta=timedelta(minutes=-1)
    )
    fake_redis.setex("session:sid", 60, "7")

    with pytest.raises(Unauthenticated):
        sessions.resolve(token)


def test_token_for_unknown_session_is_rejected(fake_redis):
    sessions = SessionStore(fake_redis)
    token = create_access_token(7, "bob@x.com", UserRole.DOCTOR, "never-opened")

    with pytest.raises(Unauthenticated):
        sessions.resolve(token)

import os
from functools import lru_cache
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Set testing environment before the application reads its settings
os.environ["TESTING"] = "1"
os.environ["TEST_DATABASE_URL"] = "sqlite:///./test.db"

from triage_scheduler.main import app
from triage_scheduler.core.database import Base, get_db, get_redis
from triage_scheduler.core.security import CallerContext, UserRole, get_password_hash
from triage_scheduler.models.user import User

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeRedis:
    """In-memory stand-in for the few Redis commands the session store uses."""

    def __init__(self):
        self.data = {}

    def setex(self, key, time, value):
        self.data[key] = str(value)
        return True

    def get(self, key):
        return self.data.get(key)

    def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
        return removed


@lru_cache(maxsize=None)
def hashed(password: str) -> str:
    return get_password_hash(password)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def test_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(test_db):
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def client(test_db, fake_redis):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis] = lambda: fake_redis
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def future_time():
    """Tomorrow at a whole second, naive UTC."""
    now = datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)
    return now + timedelta(days=1)


@pytest.fixture
def make_user(db):
    """Insert a user straight into the database and return it."""
    def _make_user(username: str, role: UserRole, password: str = "secret") -> User:
        user = User(username=username, password_hash=hashed(password), role=role)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def login_as(client):
    """Register through the API, log in, and return (user_id, auth headers)."""
    def _login_as(username: str, role: str, password: str = "pw-123"):
        response = client.post(
            "/api/v1/auth/register",
            json={"username": username, "password": password, "role": role}
        )
        assert response.status_code == 200, response.text
        user_id = response.json()["id"]

        response = client.post(
            "/api/v1/auth/login",
            json={"username": username, "password": password}
        )
        assert response.status_code == 200, response.text
        token = response.json()["access_token"]
        return user_id, {"Authorization": f"Bearer {token}"}
    return _login_as


def caller_for(user: User) -> CallerContext:
    return CallerContext(user_id=user.id, role=user.role, username=user.username)

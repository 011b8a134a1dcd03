import os

# Must be set before config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_COURSE_CATALOG"] = "false"
os.environ["AUTH_JWT_SECRET"] = "test-secret"
os.environ["AUTH_JWT_ALGORITHM"] = "HS256"
os.environ.pop("AUTH_JWT_AUDIENCE", None)
os.environ["AI_PROVIDER"] = "qwen"
os.environ.pop("QWEN_API_KEY", None)

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from models.base import Base
from schemas.user import UserClaims
from utils.ai_backends import CompletionBackend
from utils.ai_proxy import AIProxyService


class FakeBackend(CompletionBackend):
    """Scripted completion backend; records every call."""

    provider = "qwen"
    model = "fake-model"

    def __init__(self, replies=None, error=None):
        self.replies = list(replies or [])
        self.error = error
        self.calls = []

    def complete(self, messages, temperature, max_tokens):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        if self.replies:
            return self.replies.pop(0)
        return "fake reply"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def make_user(db):
    from utils.user_manager import UserManager

    def _make_user(sub, **claims):
        return UserManager(db).get_or_create_user(UserClaims(sub=sub, **claims))

    return _make_user


@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture
def ai_proxy(fake_backend):
    return AIProxyService(
        "qwen",
        api_key="test-key",
        backend_factory=lambda provider, api_key, model: fake_backend,
    )


@pytest.fixture
def client(session_factory, ai_proxy):
    from app import app
    from core.database import get_db
    from core.dependencies import get_ai_proxy

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ai_proxy] = lambda: ai_proxy
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _auth_headers(sub="user-1", **claims):
        token = jwt.encode({"sub": sub, **claims}, "test-secret", algorithm="HS256")
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers

import os
import tempfile

# app.core.config 가 import 되기 전에 테스트용 환경변수 설정
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("CONNECTION_STRING", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="uploads-"))
os.environ.setdefault("MAIL_SUPPRESS_SEND", "true")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings
from app.db.db_session import get_db_session
from app.main import app
from app.models.base import Base
from app.services.notify_email_service import get_email_sender
from app.services.storage_service import LocalFileStorage, get_file_storage
from tests.helpers import RecordingEmailSender


@pytest.fixture(autouse=True)
def verification_settings(monkeypatch):
    monkeypatch.setattr(settings, "EMAIL_VERIFICATION_ENABLED", True)
    monkeypatch.setattr(settings, "EXPOSE_VERIFICATION_CODE", True)


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def mailer():
    return RecordingEmailSender()


@pytest.fixture
def storage(tmp_path):
    return LocalFileStorage(str(tmp_path / "uploads"))


@pytest.fixture
async def client(session_factory, mailer, storage):
    async def override_get_db_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_email_sender] = lambda: mailer
    app.dependency_overrides[get_file_storage] = lambda: storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    """Register, verify and log in a user; returns ``(user, token)``."""

    async def _make_user(name, email, password="secret-pw", role=None):
        form = {"name": name, "email": email, "password": password}
        if role:
            form["role"] = role
        res = await client.post("/register", data=form)
        assert res.status_code == 201, res.text
        body = res.json()

        res = await client.post("/verify-otp", json={"email": email, "otp": body["verification_code"]})
        assert res.status_code == 200, res.text

        res = await client.post("/login", json={"email": email, "password": password})
        assert res.status_code == 200, res.text
        login = res.json()
        return login["user"], login["access_token"]

    return _make_user

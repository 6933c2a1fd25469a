from sqlalchemy import select

import app.main as main_module
from app.core.config import settings
from app.core.security import verify_password
from app.models import User


async def test_startup_creates_tables_and_default_admin(session_factory, monkeypatch):
    created = []

    async def record_create_tables():
        created.append(True)

    monkeypatch.setattr(main_module, "AsyncSessionLocal", session_factory)
    monkeypatch.setattr(main_module, "create_db_and_tables", record_create_tables)
    monkeypatch.setattr(settings, "AUTO_CREATE_TABLES", True)
    monkeypatch.setattr(settings, "ADMIN_EMAIL", "root@x.com")
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", "root-pw")

    async with main_module.lifespan(main_module.app):
        pass
    # 두 번째 시작에서는 관리자를 중복 생성하지 않음
    async with main_module.lifespan(main_module.app):
        pass

    assert created == [True, True]
    async with session_factory() as db:
        admins = (await db.execute(select(User).where(User.email == "root@x.com"))).scalars().all()
    assert len(admins) == 1
    assert admins[0].role == "ADMIN"
    assert admins[0].is_verified is True
    assert verify_password("root-pw", admins[0].password)


async def test_startup_without_admin_settings_creates_no_users(session_factory, monkeypatch):
    monkeypatch.setattr(main_module, "AsyncSessionLocal", session_factory)
    monkeypatch.setattr(settings, "AUTO_CREATE_TABLES", False)
    monkeypatch.setattr(settings, "ADMIN_EMAIL", None)

    async with main_module.lifespan(main_module.app):
        pass

    async with session_factory() as db:
        assert (await db.execute(select(User))).scalars().all() == []

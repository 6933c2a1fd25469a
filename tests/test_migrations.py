from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from app.core.config import settings

ROOT = Path(__file__).resolve().parents[1]


def test_upgrade_creates_tables_and_downgrade_drops_them(tmp_path, monkeypatch):
    db_path = tmp_path / "migrated.db"
    monkeypatch.setattr(settings, "CONNECTION_STRING", f"sqlite+aiosqlite:///{db_path}")
    config = Config(str(ROOT / "alembic.ini"))

    command.upgrade(config, "head")

    engine = create_engine(f"sqlite:///{db_path}")
    try:
        inspector = inspect(engine)
        assert {"users", "meeting", "participant"} <= set(inspector.get_table_names())
        user_columns = {c["name"] for c in inspector.get_columns("users")}
        assert {"email", "password", "is_verified", "verification_code"} <= user_columns
        unique_email = [ix for ix in inspector.get_indexes("users") if ix["column_names"] == ["email"]]
        assert unique_email and unique_email[0]["unique"]
    finally:
        engine.dispose()

    command.downgrade(config, "base")

    engine = create_engine(f"sqlite:///{db_path}")
    try:
        assert "users" not in inspect(engine).get_table_names()
    finally:
        engine.dispose()

from studyai.core.config import Settings


def test_database_url_override_wins(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./local.db")
    assert Settings().database_url == "sqlite+aiosqlite:///./local.db"


def test_database_url_falls_back_to_postgres_group(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("POSTGRES_HOST", "db.internal")
    monkeypatch.setenv("POSTGRES_DB_NAME", "study")

    url = Settings().database_url

    assert url.startswith("postgresql+asyncpg://")
    assert "@db.internal:5432/study" in url

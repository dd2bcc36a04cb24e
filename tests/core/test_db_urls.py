from app.core.db import to_async_url, to_sync_url


def test_async_url_uses_asyncpg_and_drops_psycopg_params() -> None:
    url = "postgresql://u:p@db.example.com/salon?sslmode=require&channel_binding=require&application_name=api"
    assert to_async_url(url) == "postgresql+asyncpg://u:p@db.example.com/salon?application_name=api"


def test_async_url_keeps_explicit_driver() -> None:
    assert to_async_url("sqlite+aiosqlite:///salon.db") == "sqlite+aiosqlite:///salon.db"


def test_sync_url_for_migrations() -> None:
    assert to_sync_url("postgresql+asyncpg://u:p@localhost/salon") == "postgresql://u:p@localhost/salon"
    assert to_sync_url("postgresql://u:p@localhost/salon?sslmode=require") == (
        "postgresql://u:p@localhost/salon?sslmode=require"
    )

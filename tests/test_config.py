from council_portal.config import AppConfig, DatabaseConfig


def test_database_url_is_upgraded_to_async_drivers() -> None:
    postgres = DatabaseConfig(DATABASE_URL="postgresql://user:pw@db:5432/portal")
    sqlite = DatabaseConfig(DATABASE_URL="sqlite:///portal.db")

    assert postgres.connection_string == "postgresql+asyncpg://user:pw@db:5432/portal"
    assert sqlite.connection_string == "sqlite+aiosqlite:///portal.db"


def test_connection_string_from_parts() -> None:
    config = DatabaseConfig(DATABASE_URL=None, host="db", port=5433, database="portal", username="app", password="secret")

    assert config.connection_string == "postgresql+asyncpg://app:secret@db:5433/portal"


def test_cors_origins_accept_comma_separated_values() -> None:
    config = AppConfig(cors_origins="https://a.example, https://b.example")

    assert config.cors_origins == ["https://a.example", "https://b.example"]

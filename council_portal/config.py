"""
Configuration management for Council Portal.

Each concern reads its own environment prefix (``APP_``, ``DB_``,
``STORAGE_``, ``AUTH_``); ``DATABASE_URL`` overrides the ``DB_*`` parts.

Responsibility: Centralized configuration and environment management
"""

from enum import Enum
from typing import List, Optional
import json

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Plain driver schemes -> async driver schemes
_ASYNC_SCHEMES = {
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
    "sqlite:///": "sqlite+aiosqlite:///",
}


class Environment(str, Enum):
    """Deployment environment"""
    LOCAL = "local"
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class DatabaseConfig(BaseSettings):
    """Document tables in PostgreSQL (production) or a SQLite file (local, tests)"""

    database_url: Optional[str] = Field(default=None, alias="DATABASE_URL")
    driver: str = Field(default="postgresql+asyncpg")
    host: str = Field(default="localhost")
    port: Optional[int] = Field(default=5432)
    database: str = Field(default="council_portal")
    username: Optional[str] = Field(default=None)
    password: Optional[str] = Field(default=None)

    # PostgreSQL pool
    pool_size: int = Field(default=5)
    max_overflow: int = Field(default=10)
    pool_timeout: int = Field(default=30)
    pool_recycle: int = Field(default=3600)

    echo: bool = Field(default=False)
    echo_pool: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True
    )

    @property
    def connection_string(self) -> str:
        """SQLAlchemy URL with an async driver."""
        if self.database_url:
            for scheme, async_scheme in _ASYNC_SCHEMES.items():
                if self.database_url.startswith(scheme):
                    return async_scheme + self.database_url[len(scheme):]
            return self.database_url

        if self.driver.startswith("sqlite"):
            return f"{self.driver}:///{self.database}.db"

        credentials = ""
        if self.username:
            credentials = self.username
            if self.password:
                credentials += f":{self.password}"
            credentials += "@"
        location = f"{self.host}:{self.port}" if self.port else self.host
        return f"{self.driver}://{credentials}{location}/{self.database}"


class StorageConfig(BaseSettings):
    """Blob store for uploaded images and news thumbnails"""

    backend: str = Field(default="memory", description="'memory' or 's3'")
    bucket: Optional[str] = Field(default=None)
    region: Optional[str] = Field(default=None)
    endpoint: Optional[str] = Field(default=None)
    access_key_id: Optional[str] = Field(default=None)
    secret_access_key: Optional[str] = Field(default=None)

    # Seconds a presigned URL stays valid
    presign_ttl: int = Field(default=3600)

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        case_sensitive=False,
        extra="ignore"
    )


class AuthConfig(BaseSettings):
    """Bearer token lifetime"""

    token_ttl_days: int = Field(default=30)

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        case_sensitive=False,
        extra="ignore"
    )


class AppConfig(BaseSettings):
    """HTTP service and logging"""

    environment: Environment = Field(default=Environment.LOCAL)
    debug: bool = Field(default=True)

    app_name: str = Field(default="Council Portal")
    app_version: str = Field(default="1.0.0")
    log_level: str = Field(default="INFO")

    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)
    public_base_url: str = Field(default="http://localhost:8000")

    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="JSON list or comma-separated origins"
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Accept a JSON list or a comma-separated string"""
        if not isinstance(v, str):
            return v
        v = v.strip().strip("'\"")
        if v.startswith("["):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        return [origin.strip() for origin in v.split(",") if origin.strip()]


class Settings(BaseSettings):
    """
    Global settings container.

    Values come from the environment, then ``.env``, then the defaults.

    Example:
        # Local SQLite file and in-memory storage
        settings = Settings(db=DatabaseConfig(driver="sqlite+aiosqlite"))
    """

    app: AppConfig = Field(default_factory=AppConfig)
    db: DatabaseConfig = Field(default_factory=DatabaseConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()

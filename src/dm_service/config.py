from __future__ import annotations

from typing import Literal

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    STORE_BACKEND: Literal["memory", "sqlite", "postgres"] = "sqlite"

    SQLITE_PATH: str = "dm_service.db"

    POSTGRES_USER: str = "dm"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "dm"
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432

    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_RECYCLE: int = 300
    DB_CREATE_TABLES: bool = False

    JWT_SECRET: str = ""
    JWT_VERIFY_MODE: Literal["hs256", "jwks"] = "hs256"
    JWT_ALGORITHM: str = "HS256"
    JWKS_URL: str | None = None

    CORS_ORIGINS: list[str] = ["*"]

    MESSAGE_MAX_LENGTH: int = 5000
    STUB_MESSAGE_TEXT: str = "Start a conversation now"

    CLIENT_BASE_URL: str = "http://localhost:8000"
    CLIENT_LIST_POLL_SECONDS: float = 15.0
    CLIENT_THREAD_POLL_SECONDS: float = 3.0
    CLIENT_TIMEOUT_SECONDS: float = 10.0

    @property
    def database_url(self) -> str:
        if self.STORE_BACKEND == "sqlite":
            return f"sqlite+aiosqlite:///{self.SQLITE_PATH}"
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.POSTGRES_DB}"
        )

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()  # type: ignore[call-arg]

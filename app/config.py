import structlog
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=True,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # App Settings
    ENVIRONMENT: str = "local"
    LOG_LEVEL: str = "INFO"

    # API Settings
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Classroom"

    # PostgreSQL Settings
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "classroom"
    POSTGRES_PORT: str = "5432"

    # Full URL override, e.g. sqlite+aiosqlite:// for tests
    DATABASE_URL: str | None = None
    DB_ECHO_QUERIES: bool = False
    DB_CREATE_TABLES: bool = False

    # Classes
    INVITE_CODE_MAX_ATTEMPTS: int = 5

    @property
    def DATABASE_URI(self) -> str:
        """Builds database URI dynamically."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT in ("prod", "production")

    @classmethod
    def load_from_env_file(cls):
        """Load settings from .env file in local development."""
        from pathlib import Path

        from dotenv import load_dotenv

        env_file = Path(".env")
        if env_file.exists():
            load_dotenv(env_file, override=True)

        return cls()


settings = Settings.load_from_env_file()

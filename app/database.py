import ssl
from typing import Any, AsyncGenerator

import structlog
from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from app.config import Settings

logger = structlog.get_logger()


class Base(DeclarativeBase):
    pass


def get_connect_args(settings: Settings) -> dict[str, Any]:
    """Get asyncpg connection arguments"""
    if not settings.DATABASE_URI.startswith("postgresql+asyncpg"):
        return {}

    connect_args: dict[str, Any] = {
        "timeout": 30,
        "command_timeout": 30,
    }

    if settings.is_production:
        ssl_context = ssl.create_default_context()
        ssl_context.check_hostname = False
        ssl_context.verify_mode = ssl.CERT_NONE
        connect_args.update(
            {
                "ssl": ssl_context,
                "server_settings": {
                    "application_name": "classroom_api",
                    "client_encoding": "utf8",
                },
            }
        )

    return connect_args


def register_models() -> None:
    """Import every model module so its table is on Base.metadata."""
    from app.models import (  # noqa: F401
        class_model,
        department_model,
        enrollment_model,
        subject_model,
        user_model,
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and session factory for the lifetime of the process.

    One instance is created at startup and kept on ``app.state.database``;
    request handlers get sessions from it through :func:`get_db`.
    """

    def __init__(self, url: str, echo: bool = False, **engine_kwargs: Any):
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.DATABASE_URI,
            echo=settings.DB_ECHO_QUERIES,
            poolclass=NullPool,
            connect_args=get_connect_args(settings),
        )

    async def create_tables(self) -> None:
        register_models()

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error("Database session rolled back", error=str(e))
            raise

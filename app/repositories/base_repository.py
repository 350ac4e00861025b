from typing import Any, ClassVar

import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base
from app.exceptions import ConflictError, NotFoundError, classify_integrity_error

logger = structlog.get_logger()


class BaseRepository:
    """Persistence operations shared by every aggregate.

    Writes flush immediately so storage constraint violations surface here,
    where a concurrent duplicate becomes a ConflictError instead of a 500.
    Committing is left to the caller.
    """

    model: ClassVar[type[Base]]

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, instance: Any, conflict_message: str) -> Any:
        self.db.add(instance)
        await self._flush(conflict_message)
        return instance

    async def update(
        self, instance: Any, values: dict[str, Any], conflict_message: str
    ) -> Any:
        for field, value in values.items():
            setattr(instance, field, value)
        await self._flush(conflict_message)
        return instance

    async def delete_by_id(self, record_id: Any, in_use_message: str) -> bool:
        """Delete a row by primary key.

        Returns:
            True if a row was deleted, False if none matched

        Raises:
            ConflictError: If other rows still reference this one
        """
        try:
            result = await self.db.execute(
                delete(self.model).where(self.model.id == record_id)
            )
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(
                "Delete blocked by integrity constraint",
                table=self.model.__tablename__,
                record_id=record_id,
                error=str(e.orig),
            )
            raise ConflictError(in_use_message) from e
        return result.rowcount > 0

    async def count(self, *conditions: Any) -> int:
        statement = select(func.count()).select_from(self.model).where(*conditions)
        return (await self.db.execute(statement)).scalar_one()

    async def _flush(self, conflict_message: str) -> None:
        try:
            await self.db.flush()
        except IntegrityError as e:
            await self.db.rollback()
            kind = classify_integrity_error(e)
            logger.warning(
                "Write rejected by integrity constraint",
                table=self.model.__tablename__,
                kind=kind,
                error=str(e.orig),
            )
            if kind == "unique":
                raise ConflictError(conflict_message) from e
            if kind == "foreign_key":
                raise NotFoundError("Referenced record does not exist") from e
            raise

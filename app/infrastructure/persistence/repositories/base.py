"""Base repository: generic CRUD shared by the ORM repositories."""

from collections.abc import Callable
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.post_commit import run_after_commit


class BaseRepository[ModelType: Base]:
    """Base repository with get_model, create, delete and after-commit hooks.

    Subclasses expose DTO-returning methods; the ORM instances never leave
    the repository.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_model(self, entity_id: str, *options: Any) -> ModelType | None:
        """Return a single ORM record by primary key, or None."""
        model: Any = self.model
        stmt = select(self.model).where(model.id == entity_id)
        if options:
            stmt = stmt.options(*options)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and load server defaults."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Delete the record."""
        await self.db.delete(obj)
        await self.db.flush()

    def after_commit(self, callback: Callable[[], None]) -> None:
        """Run callback once this session's transaction commits (never on rollback)."""
        run_after_commit(self.db, callback)

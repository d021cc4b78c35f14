"""Base repository with common CRUD operations."""

from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from signoff.db.base import Base
from signoff.errors.exceptions import StorageError

T = TypeVar("T", bound=Base)


class BaseRepository:
    """Generic async repository for tenant-scoped SQLAlchemy models.

    Every query method takes ``org_id`` explicitly; there is no ambient
    tenant context.
    """

    def __init__(self, session: AsyncSession, model_class: type[T]):
        self.session = session
        self.model_class = model_class

    async def execute(self, stmt):
        """Execute a statement, surfacing driver failures as StorageError."""
        try:
            return await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise StorageError(f"{self.model_class.__tablename__}: {exc}") from exc

    async def flush(self) -> None:
        try:
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise StorageError(f"{self.model_class.__tablename__}: {exc}") from exc

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            raise StorageError(f"{self.model_class.__tablename__}: {exc}") from exc

    async def get_by_id(self, org_id: str, pk_field: str, pk_value: str) -> T | None:
        """Get a single record by primary key within an organization."""
        stmt = select(self.model_class).where(
            getattr(self.model_class, pk_field) == pk_value,
            self.model_class.org_id == org_id,
        )
        result = await self.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, **kwargs: Any) -> T:
        """Create and persist a new record."""
        row = self.model_class(**kwargs)
        self.session.add(row)
        await self.flush()
        return row

    async def update(self, row: T, **kwargs: Any) -> T:
        """Update an existing record."""
        for key, value in kwargs.items():
            setattr(row, key, value)
        await self.flush()
        return row

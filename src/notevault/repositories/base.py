"""SQLAlchemy implementation of the resource adapter contract."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any, ClassVar, Generic
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.connection import get_async_session
from ..dbmodels import Base
from ..errors import NotFoundError
from ..lifecycle.adapter import RecordT, ResourceKind
from ..schemas import validate_input

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


class SqlAlchemyRepository(Generic[RecordT]):
    """Owner-scoped CRUD over one resource table.

    Each call runs in its own session, committed when the call returns.
    Rows are converted to records before the session closes.
    """

    model: ClassVar[type[Base]]
    record_type: ClassVar[type[Any]]
    create_schema: ClassVar[type[BaseModel]]
    update_schema: ClassVar[type[BaseModel]]
    kind: ClassVar[ResourceKind]
    not_found_error: ClassVar[type[NotFoundError]]

    def __init__(self, session_factory: SessionFactory | None = None):
        self._session_factory = session_factory or get_async_session

    @property
    def name_field(self) -> str:
        return self.record_type.name_field

    def _to_record(self, row: Any) -> RecordT:
        return self.record_type.model_validate(row)

    async def find_by_id(self, id: UUID, owner_id: UUID) -> RecordT | None:
        async with self._session_factory() as session:
            stmt = select(self.model).where(
                self.model.id == id,
                self.model.user_id == owner_id,
            )
            row = (await session.execute(stmt)).scalar_one_or_none()
            return self._to_record(row) if row is not None else None

    async def find_by_name(self, name: str, owner_id: UUID) -> RecordT | None:
        async with self._session_factory() as session:
            stmt = select(self.model).where(
                getattr(self.model, self.name_field) == name,
                self.model.user_id == owner_id,
            )
            row = (await session.execute(stmt)).scalar_one_or_none()
            return self._to_record(row) if row is not None else None

    async def list(
        self,
        owner_id: UUID,
        *,
        is_deleted: bool | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> list[RecordT]:
        async with self._session_factory() as session:
            stmt = select(self.model).where(self.model.user_id == owner_id)
            if is_deleted is not None:
                stmt = stmt.where(self.model.is_deleted == is_deleted)
            stmt = (
                stmt.order_by(self.model.updated_at.desc(), self.model.id)
                .offset(offset)
                .limit(limit)
            )
            rows = (await session.execute(stmt)).scalars().all()
            return [self._to_record(row) for row in rows]

    async def insert(self, fields: dict[str, Any]) -> RecordT:
        async with self._session_factory() as session:
            row = self.model(**fields)
            session.add(row)
            await session.flush()
            return self._to_record(row)

    async def patch(self, id: UUID, fields: dict[str, Any]) -> RecordT:
        async with self._session_factory() as session:
            row = await session.get(self.model, id)
            if row is None:
                raise self.not_found_error(meta={"id": str(id), "kind": self.kind.value})
            for key, value in fields.items():
                setattr(row, key, value)
            await session.flush()
            return self._to_record(row)

    async def remove(self, id: UUID) -> None:
        async with self._session_factory() as session:
            await session.execute(delete(self.model).where(self.model.id == id))

    def validate(self, data: dict[str, Any], *, partial: bool) -> dict[str, Any]:
        if partial:
            model = validate_input(self.update_schema, data)
            return model.model_dump(exclude_unset=True, exclude_none=True)
        return validate_input(self.create_schema, data).model_dump()

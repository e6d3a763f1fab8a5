"""
Shared pytest fixtures and configuration for all tests.
"""

import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Add src directory to path so imports work without an install
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from notevault.auth.session import ANONYMOUS, Session  # noqa: E402
from notevault.dbmodels import Base, utcnow  # noqa: E402
from notevault.errors import (  # noqa: E402
    NoteNotFoundError,
    NotFoundError,
    PasswordNotFoundError,
    TodoNotFoundError,
)
from notevault.lifecycle import LifecycleEngine, ResourceKind  # noqa: E402
from notevault.schemas import (  # noqa: E402
    NoteCreate,
    NoteRecord,
    NoteUpdate,
    PasswordCreate,
    PasswordRecord,
    PasswordUpdate,
    TodoCreate,
    TodoRecord,
    TodoUpdate,
    validate_input,
)

WRITE_CALLS = frozenset({"insert", "patch", "remove"})


class InMemoryAdapter:
    """Resource adapter backed by a dict.

    Every call is recorded in ``calls`` so tests can assert what touched the
    store. Inserts enforce (owner, name) uniqueness the way the database
    constraint does, by raising ``IntegrityError``.
    """

    def __init__(
        self,
        kind: ResourceKind,
        record_type: type,
        create_schema: type,
        update_schema: type,
        not_found_error: type[NotFoundError],
    ):
        self.kind = kind
        self.record_type = record_type
        self.create_schema = create_schema
        self.update_schema = update_schema
        self.not_found_error = not_found_error
        self.rows: dict[UUID, Any] = {}
        self.calls: list[str] = []

    @property
    def name_field(self) -> str:
        return self.record_type.name_field

    @property
    def writes(self) -> list[str]:
        return [call for call in self.calls if call in WRITE_CALLS]

    def seed(self, owner_id: UUID, **fields: Any) -> Any:
        """Store a record directly, bypassing the engine and the call log."""
        now = utcnow()
        values = {
            "id": uuid4(),
            "user_id": owner_id,
            "is_deleted": False,
            "deleted_at": None,
            "created_at": now,
            "updated_at": now,
        }
        values.update(fields)
        record = self.record_type(**values)
        self.rows[record.id] = record
        return record

    async def find_by_id(self, id: UUID, owner_id: UUID) -> Any:
        self.calls.append("find_by_id")
        record = self.rows.get(id)
        if record is None or record.user_id != owner_id:
            return None
        return record

    async def find_by_name(self, name: str, owner_id: UUID) -> Any:
        self.calls.append("find_by_name")
        for record in self.rows.values():
            if record.user_id == owner_id and record.name == name:
                return record
        return None

    async def list(
        self,
        owner_id: UUID,
        *,
        is_deleted: bool | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> list[Any]:
        self.calls.append("list")
        records = [
            r
            for r in self.rows.values()
            if r.user_id == owner_id and (is_deleted is None or r.is_deleted == is_deleted)
        ]
        records.sort(key=lambda r: r.updated_at, reverse=True)
        return records[offset : offset + limit]

    async def insert(self, fields: dict[str, Any]) -> Any:
        self.calls.append("insert")
        name = fields[self.name_field]
        if any(
            r.user_id == fields["user_id"] and r.name == name for r in self.rows.values()
        ):
            raise IntegrityError(
                "INSERT", {}, Exception(f"UNIQUE constraint failed: {self.name_field}")
            )
        now = utcnow()
        record = self.record_type(id=uuid4(), created_at=now, updated_at=now, **fields)
        self.rows[record.id] = record
        return record

    async def patch(self, id: UUID, fields: dict[str, Any]) -> Any:
        self.calls.append("patch")
        if id not in self.rows:
            raise self.not_found_error(meta={"id": str(id)})
        record = self.rows[id].model_copy(update=fields)
        self.rows[id] = record
        return record

    async def remove(self, id: UUID) -> None:
        self.calls.append("remove")
        self.rows.pop(id, None)

    def validate(self, data: dict[str, Any], *, partial: bool) -> dict[str, Any]:
        if partial:
            model = validate_input(self.update_schema, data)
            return model.model_dump(exclude_unset=True, exclude_none=True)
        return validate_input(self.create_schema, data).model_dump()


@pytest.fixture
def owner_id() -> UUID:
    return uuid4()


@pytest.fixture
def session(owner_id: UUID) -> Session:
    """An authenticated session for ``owner_id``."""
    return Session(session_id="test-session", user_id=owner_id)


@pytest.fixture
def anonymous_session() -> Session:
    return ANONYMOUS


@pytest.fixture
def note_adapter() -> InMemoryAdapter:
    return InMemoryAdapter(
        ResourceKind.NOTE, NoteRecord, NoteCreate, NoteUpdate, NoteNotFoundError
    )


@pytest.fixture
def todo_adapter() -> InMemoryAdapter:
    return InMemoryAdapter(
        ResourceKind.TODO, TodoRecord, TodoCreate, TodoUpdate, TodoNotFoundError
    )


@pytest.fixture
def password_adapter() -> InMemoryAdapter:
    return InMemoryAdapter(
        ResourceKind.PASSWORD,
        PasswordRecord,
        PasswordCreate,
        PasswordUpdate,
        PasswordNotFoundError,
    )


@pytest.fixture
def note_engine(note_adapter: InMemoryAdapter) -> LifecycleEngine[NoteRecord]:
    return LifecycleEngine(note_adapter, max_title_attempts=100, rename_policy="allow")


@pytest.fixture
def todo_engine(todo_adapter: InMemoryAdapter) -> LifecycleEngine[TodoRecord]:
    return LifecycleEngine(todo_adapter, max_title_attempts=100, rename_policy="allow")


@pytest.fixture
def password_engine(password_adapter: InMemoryAdapter) -> LifecycleEngine[PasswordRecord]:
    return LifecycleEngine(password_adapter, max_title_attempts=100, rename_policy="allow")


@pytest_asyncio.fixture
async def session_factory():
    """Session factory over a fresh in-memory SQLite database.

    Mirrors ``get_async_session``: commits when the block exits cleanly and
    rolls back on error.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    @asynccontextmanager
    async def factory():
        async with maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    yield factory
    await engine.dispose()

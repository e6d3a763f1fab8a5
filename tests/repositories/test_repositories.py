"""
Tests for the SQLAlchemy resource repositories against in-memory SQLite
"""

from datetime import UTC, datetime
from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy.exc import IntegrityError

from notevault.auth.session import Session
from notevault.dbmodels import Users
from notevault.errors import ConflictError, NoteNotFoundError, ValidationError
from notevault.lifecycle import LifecycleEngine
from notevault.repositories import NoteRepository, PasswordRepository, TodoRepository


@pytest_asyncio.fixture
async def user_id(session_factory):
    async with session_factory() as db:
        user = Users(email="alice@example.com", username="alice", password_hash="x")
        db.add(user)
        await db.flush()
        return user.id


def note_fields(user_id, title, **extra):
    fields = {"user_id": user_id, "title": title, "body": None, "is_deleted": False, "deleted_at": None}
    fields.update(extra)
    return fields


class TestNoteRepository:
    @pytest.mark.asyncio
    async def test_insert_and_find(self, session_factory, user_id):
        repo = NoteRepository(session_factory)

        note = await repo.insert(note_fields(user_id, "Trip", body="Pack"))

        assert (await repo.find_by_id(note.id, user_id)).body == "Pack"
        assert (await repo.find_by_name("Trip", user_id)).id == note.id

    @pytest.mark.asyncio
    async def test_lookups_are_owner_scoped(self, session_factory, user_id):
        repo = NoteRepository(session_factory)
        note = await repo.insert(note_fields(user_id, "Trip"))

        assert await repo.find_by_id(note.id, uuid4()) is None
        assert await repo.find_by_name("Trip", uuid4()) is None

    @pytest.mark.asyncio
    async def test_unique_constraint_rejects_duplicate_name(self, session_factory, user_id):
        repo = NoteRepository(session_factory)
        await repo.insert(note_fields(user_id, "Trip"))

        with pytest.raises(IntegrityError):
            await repo.insert(note_fields(user_id, "Trip"))

    @pytest.mark.asyncio
    async def test_patch_and_remove(self, session_factory, user_id):
        repo = NoteRepository(session_factory)
        note = await repo.insert(note_fields(user_id, "Trip"))
        deleted_at = datetime(2026, 3, 1, tzinfo=UTC)

        patched = await repo.patch(note.id, {"is_deleted": True, "deleted_at": deleted_at})
        assert patched.is_deleted is True

        await repo.remove(note.id)
        assert await repo.find_by_id(note.id, user_id) is None

    @pytest.mark.asyncio
    async def test_patch_missing_row_is_not_found(self, session_factory):
        repo = NoteRepository(session_factory)

        with pytest.raises(NoteNotFoundError):
            await repo.patch(uuid4(), {"body": "x"})

    @pytest.mark.asyncio
    async def test_list_filters_deleted(self, session_factory, user_id):
        repo = NoteRepository(session_factory)
        await repo.insert(note_fields(user_id, "Live"))
        await repo.insert(
            note_fields(user_id, "Gone", is_deleted=True, deleted_at=datetime.now(UTC))
        )

        trashed = await repo.list(user_id, is_deleted=True)
        everything = await repo.list(user_id)

        assert [n.title for n in trashed] == ["Gone"]
        assert len(everything) == 2

    def test_validate_partial_drops_unset_fields(self):
        repo = NoteRepository()

        assert repo.validate({"body": "x"}, partial=True) == {"body": "x"}
        with pytest.raises(ValidationError):
            repo.validate({"body": "x"}, partial=False)


class TestEngineOverSqlite:
    @pytest.mark.asyncio
    async def test_trip_names_allocate_against_database(self, session_factory, user_id):
        engine = LifecycleEngine(NoteRepository(session_factory))
        session = Session(session_id="s", user_id=user_id)

        first = await engine.create({"title": "Trip"}, session)
        second = await engine.create({"title": "Trip"}, session)

        assert (first.title, second.title) == ("Trip", "Trip_1")

    @pytest.mark.asyncio
    async def test_rename_onto_taken_name_is_conflict(self, session_factory, user_id):
        engine = LifecycleEngine(NoteRepository(session_factory), rename_policy="allow")
        session = Session(session_id="s", user_id=user_id)
        await engine.create({"title": "Budget"}, session)
        trip = await engine.create({"title": "Trip"}, session)

        with pytest.raises(ConflictError):
            await engine.update(trip.id, {"title": "Budget"}, session)

    @pytest.mark.asyncio
    async def test_todo_and_password_round_trip(self, session_factory, user_id):
        session = Session(session_id="s", user_id=user_id)
        todos = LifecycleEngine(TodoRepository(session_factory))
        passwords = LifecycleEngine(PasswordRepository(session_factory))

        todo = await todos.create({"title": "Laundry", "priority": "HIGH"}, session)
        entry = await passwords.create({"fieldname": "bank", "password": "pw"}, session)

        assert (await todos.get(todo.id, session)).priority.value == "HIGH"
        assert (await passwords.get(entry.id, session)).fieldname == "bank"

"""
Tests for GraphQL queries and mutations, executed directly against the schema
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from notevault.auth.session import ANONYMOUS, Session, SessionStore
from notevault.graphql.context import Services
from notevault.graphql.schema import schema
from notevault.schemas import UserRecord
from notevault.services import UserService

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def user_service():
    return AsyncMock(spec=UserService)


@pytest.fixture
def services(note_engine, todo_engine, password_engine, user_service):
    return Services(
        notes=note_engine,
        todos=todo_engine,
        passwords=password_engine,
        users=user_service,
        session_store=AsyncMock(spec=SessionStore),
    )


@pytest.fixture
def context(services, session):
    return {"session": session, "services": services, "response": MagicMock()}


@pytest.fixture
def anonymous_context(services):
    return {"session": ANONYMOUS, "services": services, "response": MagicMock()}


def user_record(user_id) -> UserRecord:
    return UserRecord(
        id=user_id,
        email="alice@example.com",
        username="alice",
        created_at=NOW,
        updated_at=NOW,
    )


class TestNoteOperations:
    """Note queries and mutations."""

    @pytest.mark.asyncio
    async def test_create_note(self, context):
        mutation = """
            mutation {
                createNote(input: {title: "Trip", body: "Pack"}) {
                    id title body isDeleted deletedAt
                }
            }
        """

        result = await schema.execute(mutation, context_value=context)

        assert result.errors is None
        note = result.data["createNote"]
        assert note["title"] == "Trip"
        assert note["isDeleted"] is False
        assert note["deletedAt"] is None

    @pytest.mark.asyncio
    async def test_duplicate_title_gets_suffix(self, context, note_adapter, owner_id):
        note_adapter.seed(owner_id, title="Trip")

        result = await schema.execute(
            'mutation { createNote(input: {title: "Trip"}) { title } }',
            context_value=context,
        )

        assert result.data["createNote"]["title"] == "Trip_1"

    @pytest.mark.asyncio
    async def test_soft_delete_restore_and_delete(self, context, note_adapter, owner_id):
        note = note_adapter.seed(owner_id, title="Trip")
        variables = {"id": str(note.id)}

        deleted = await schema.execute(
            "mutation ($id: UUID!) { softDeleteNote(id: $id) { isDeleted deletedAt } }",
            variable_values=variables,
            context_value=context,
        )
        restored = await schema.execute(
            "mutation ($id: UUID!) { restoreNote(id: $id) { isDeleted deletedAt } }",
            variable_values=variables,
            context_value=context,
        )
        removed = await schema.execute(
            "mutation ($id: UUID!) { deleteNote(id: $id) { id title } }",
            variable_values=variables,
            context_value=context,
        )

        assert deleted.data["softDeleteNote"]["isDeleted"] is True
        assert deleted.data["softDeleteNote"]["deletedAt"] is not None
        assert restored.data["restoreNote"] == {"isDeleted": False, "deletedAt": None}
        assert removed.data["deleteNote"] == {"id": str(note.id), "title": "Trip"}
        assert note.id not in note_adapter.rows

    @pytest.mark.asyncio
    async def test_update_note_merges_fields(self, context, note_adapter, owner_id):
        note = note_adapter.seed(owner_id, title="Trip", body="Pack")

        result = await schema.execute(
            "mutation ($id: UUID!) { updateNote(input: {id: $id, title: \"Holiday\"}) { title body } }",
            variable_values={"id": str(note.id)},
            context_value=context,
        )

        assert result.data["updateNote"] == {"title": "Holiday", "body": "Pack"}

    @pytest.mark.asyncio
    async def test_unauthenticated_mutation_exposes_error_extensions(
        self, anonymous_context, note_adapter
    ):
        result = await schema.execute(
            'mutation { createNote(input: {title: "Trip"}) { id } }',
            context_value=anonymous_context,
        )

        assert result.data is None
        [error] = result.errors
        assert error.message == "Not authenticated"
        assert error.extensions == {
            "code": "NOT_AUTHENTICATED",
            "statusCode": 401,
            "isOperational": True,
            "meta": {"session_id": None},
        }
        assert note_adapter.calls == []

    @pytest.mark.asyncio
    async def test_missing_note_is_not_found(self, context):
        result = await schema.execute(
            "query ($id: UUID!) { note(id: $id) { id } }",
            variable_values={"id": str(uuid4())},
            context_value=context,
        )

        [error] = result.errors
        assert error.extensions["code"] == "NOTE_NOT_FOUND"
        assert error.extensions["statusCode"] == 404

    @pytest.mark.asyncio
    async def test_list_notes_filters_deleted(self, context, note_adapter, owner_id):
        note_adapter.seed(owner_id, title="Live")
        note_adapter.seed(owner_id, title="Gone", is_deleted=True, deleted_at=NOW)

        result = await schema.execute(
            "query { notes(isDeleted: true) { title } }", context_value=context
        )

        assert result.data["notes"] == [{"title": "Gone"}]

    @pytest.mark.asyncio
    async def test_note_owner_resolves_to_caller(self, context, note_adapter, owner_id, user_service):
        note = note_adapter.seed(owner_id, title="Trip")
        user_service.get_user.return_value = user_record(owner_id)

        result = await schema.execute(
            "query ($id: UUID!) { note(id: $id) { user { username } } }",
            variable_values={"id": str(note.id)},
            context_value=context,
        )

        assert result.data["note"]["user"] == {"username": "alice"}


class TestTodoAndPasswordOperations:
    @pytest.mark.asyncio
    async def test_create_todo_with_priority(self, context):
        result = await schema.execute(
            'mutation { createTodo(input: {title: "Laundry", priority: HIGH}) { title priority } }',
            context_value=context,
        )

        assert result.errors is None
        assert result.data["createTodo"] == {"title": "Laundry", "priority": "HIGH"}

    @pytest.mark.asyncio
    async def test_create_password_entry(self, context, password_adapter, owner_id):
        password_adapter.seed(owner_id, fieldname="bank")

        result = await schema.execute(
            'mutation { createPassword(input: {fieldname: "bank", password: "hunter22"}) '
            "{ fieldname password priority } }",
            context_value=context,
        )

        assert result.data["createPassword"] == {
            "fieldname": "bank_1",
            "password": "hunter22",
            "priority": "LOW",
        }

    @pytest.mark.asyncio
    async def test_validation_error_lists_fields(self, context):
        result = await schema.execute(
            'mutation { createTodo(input: {title: ""}) { id } }', context_value=context
        )

        [error] = result.errors
        assert error.extensions["code"] == "VALIDATION_FAILED"
        assert error.extensions["meta"]["validation_errors"][0]["field"] == "title"


class TestAccountOperations:
    @pytest.mark.asyncio
    async def test_hello(self, anonymous_context):
        result = await schema.execute("query { hello }", context_value=anonymous_context)

        assert result.data == {"hello": "Hello world"}

    @pytest.mark.asyncio
    async def test_me_is_null_when_anonymous(self, anonymous_context, user_service):
        user_service.current_user.return_value = None

        result = await schema.execute("query { me { id } }", context_value=anonymous_context)

        assert result.data == {"me": None}

    @pytest.mark.asyncio
    async def test_login_sets_session_cookie(self, anonymous_context, user_service):
        user_id = uuid4()
        new_session = Session(session_id="fresh-session", user_id=user_id)
        user_service.login.return_value = (user_record(user_id), new_session)

        result = await schema.execute(
            'mutation { loginUser(input: {username: "alice", password: "secret1"}) { username } }',
            context_value=anonymous_context,
        )

        assert result.data["loginUser"] == {"username": "alice"}
        user_service.login.assert_awaited_once_with(
            {"username": "alice", "password": "secret1"}, ANONYMOUS
        )
        anonymous_context["response"].set_cookie.assert_called_once()
        assert anonymous_context["response"].set_cookie.call_args.args[1] == "fresh-session"
        assert anonymous_context["session"] == new_session

    @pytest.mark.asyncio
    async def test_logout_clears_cookie(self, context, user_service):
        user_service.logout.return_value = True

        result = await schema.execute("mutation { logoutUser }", context_value=context)

        assert result.data == {"logoutUser": True}
        context["response"].delete_cookie.assert_called_once()
        assert context["session"] == ANONYMOUS

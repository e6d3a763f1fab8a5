"""
Tests for account registration, login and deletion
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
import pytest_asyncio

from notevault.auth.session import ANONYMOUS, Session, SessionStore
from notevault.dbmodels import Users
from notevault.errors import AuthenticationError, ConflictError, ValidationError
from notevault.services import UserService

REGISTRATION = {"username": "alice", "email": "Alice@example.com", "password": "secret1"}


@pytest.fixture
def session_store():
    store = AsyncMock(spec=SessionStore)
    store.create.side_effect = lambda user_id: Session(session_id=f"sid-{user_id}", user_id=user_id)
    return store


@pytest.fixture
def service(session_store, session_factory):
    return UserService(session_store, session_factory)


@pytest_asyncio.fixture
async def registered(service):
    user, session = await service.register(dict(REGISTRATION), ANONYMOUS)
    return user, session


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_creates_user_and_session(self, registered, session_store):
        user, session = registered

        assert user.username == "alice"
        assert session.user_id == user.id
        session_store.create.assert_awaited_once_with(user.id)

    @pytest.mark.asyncio
    async def test_password_is_stored_hashed(self, registered, session_factory):
        user, _ = registered

        async with session_factory() as db:
            row = await db.get(Users, user.id)

        assert row.password_hash != "secret1"

    @pytest.mark.asyncio
    async def test_taken_email_or_username_is_conflict_ignoring_case(self, registered, service):
        with pytest.raises(ConflictError) as exc_info:
            await service.register(
                {"username": "ALICE", "email": "alice@EXAMPLE.com", "password": "secret1"},
                ANONYMOUS,
            )

        assert exc_info.value.meta["fields"] == ["email", "username"]

    @pytest.mark.asyncio
    async def test_invalid_payload_is_validation_error(self, service, session_store):
        with pytest.raises(ValidationError):
            await service.register({"username": "al", "email": "x", "password": "1"}, ANONYMOUS)

        session_store.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_existing_session_is_replaced(self, service, session_store):
        previous = Session(session_id="old")

        await service.register(dict(REGISTRATION), previous)

        session_store.destroy.assert_awaited_once_with(previous)


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_with_correct_password(self, registered, service):
        user, _ = registered

        logged_in, session = await service.login(
            {"username": "alice", "password": "secret1"}, ANONYMOUS
        )

        assert logged_in.id == user.id
        assert session.user_id == user.id

    @pytest.mark.asyncio
    async def test_username_match_ignores_case(self, registered, service):
        user, _ = registered

        logged_in, _ = await service.login({"username": "Alice", "password": "secret1"}, ANONYMOUS)

        assert logged_in.id == user.id

    @pytest.mark.asyncio
    async def test_wrong_password_is_rejected(self, registered, service):
        with pytest.raises(AuthenticationError) as exc_info:
            await service.login({"username": "alice", "password": "wrong-pw"}, ANONYMOUS)

        assert exc_info.value.code == "INVALID_CREDENTIALS"
        assert "password" not in exc_info.value.meta

    @pytest.mark.asyncio
    async def test_unknown_user_is_rejected_the_same_way(self, service):
        with pytest.raises(AuthenticationError) as exc_info:
            await service.login({"username": "nobody", "password": "secret1"}, ANONYMOUS)

        assert exc_info.value.code == "INVALID_CREDENTIALS"


class TestAccount:
    @pytest.mark.asyncio
    async def test_logout_destroys_session(self, registered, service, session_store):
        _, session = registered

        assert await service.logout(session) is True
        session_store.destroy.assert_awaited_with(session)

    @pytest.mark.asyncio
    async def test_logout_requires_authentication(self, service, session_store):
        with pytest.raises(AuthenticationError):
            await service.logout(ANONYMOUS)

        session_store.destroy.assert_not_called()

    @pytest.mark.asyncio
    async def test_change_password(self, registered, service):
        _, session = registered

        await service.change_password({"password": "newsecret"}, session)
        user, _ = await service.login({"username": "alice", "password": "newsecret"}, ANONYMOUS)

        assert user.username == "alice"

    @pytest.mark.asyncio
    async def test_delete_account(self, registered, service, session_store):
        user, session = registered

        assert await service.delete_account(session) is True

        assert await service.get_user(user.id) is None
        session_store.destroy.assert_awaited_with(session)

    @pytest.mark.asyncio
    async def test_current_user(self, registered, service):
        user, session = registered

        assert (await service.current_user(session)).id == user.id
        assert await service.current_user(ANONYMOUS) is None
        assert await service.current_user(Session(session_id="s", user_id=uuid4())) is None

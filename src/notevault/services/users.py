"""
User accounts: registration, login, logout, password change and deletion.

These are the only operations that write to the session store. Registration
and login always start a fresh session id and discard the one presented.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import delete, func, or_, select

from ..auth.guard import authorize
from ..auth.passwords import hash_password, verify_password
from ..auth.session import Session, SessionStore
from ..database.connection import get_async_session
from ..dbmodels import Users
from ..errors import (
    INVALID_CREDENTIALS,
    AuthenticationError,
    BaseError,
    ConflictError,
    UserNotFoundError,
    classify_error,
)
from ..logging import error_boundary, get_logger, log_request
from ..repositories.base import SessionFactory
from ..schemas import PasswordChange, UserCreate, UserLogin, UserRecord, validate_input

logger = get_logger(__name__)


class UserService:
    """Account operations against the users table and the session store."""

    def __init__(
        self,
        session_store: SessionStore,
        session_factory: SessionFactory | None = None,
    ):
        self.session_store = session_store
        self._session_factory = session_factory or get_async_session

    async def register(
        self, data: dict[str, Any], session: Session
    ) -> tuple[UserRecord, Session]:
        """Create an account and sign it in.

        Raises:
            ValidationError: If username, email or password are malformed
            ConflictError: If the email or username is taken, ignoring case
        """
        log_request("createUser")
        with error_boundary("createUser", session.user_id):
            payload = validate_input(UserCreate, data)

            try:
                async with self._session_factory() as db:
                    taken = await self._taken_fields(db, payload.email, payload.username)
                    if taken:
                        raise ConflictError(meta={"fields": taken})

                    user = Users(
                        email=payload.email,
                        username=payload.username,
                        password_hash=hash_password(payload.password),
                    )
                    db.add(user)
                    await db.flush()
                    record = UserRecord.model_validate(user)
            except BaseError:
                raise
            except Exception as e:
                raise classify_error(e, {"call": "users.insert"}) from e

            new_session = await self._rotate(session, record.id)
            logger.info("User registered", user_id=str(record.id))
            return record, new_session

    async def login(self, data: dict[str, Any], session: Session) -> tuple[UserRecord, Session]:
        """Check credentials and start a session.

        Raises:
            AuthenticationError: If the username is unknown or the password is wrong
        """
        log_request("loginUser")
        with error_boundary("loginUser", session.user_id):
            payload = validate_input(UserLogin, data)

            try:
                async with self._session_factory() as db:
                    stmt = select(Users).where(
                        func.lower(Users.username) == payload.username.lower()
                    )
                    user = (await db.execute(stmt)).scalar_one_or_none()
                    record = UserRecord.model_validate(user) if user is not None else None
                    password_hash = user.password_hash if user is not None else None
            except Exception as e:
                raise classify_error(e, {"call": "users.find_by_username"}) from e

            if record is None or not verify_password(payload.password, password_hash or ""):
                raise AuthenticationError(
                    "Invalid credentials",
                    meta={"username": payload.username},
                    code=INVALID_CREDENTIALS,
                )

            new_session = await self._rotate(session, record.id)
            logger.info("User logged in", user_id=str(record.id))
            return record, new_session

    async def logout(self, session: Session) -> bool:
        log_request("logoutUser", session.user_id)
        with error_boundary("logoutUser", session.user_id):
            user_id = authorize(session)
            await self.session_store.destroy(session)
            logger.info("User logged out", user_id=str(user_id))
            return True

    async def change_password(self, data: dict[str, Any], session: Session) -> bool:
        """Replace the caller's password."""
        log_request("updateUser", session.user_id)
        with error_boundary("updateUser", session.user_id):
            user_id = authorize(session)
            payload = validate_input(PasswordChange, data)

            try:
                async with self._session_factory() as db:
                    user = await db.get(Users, user_id)
                    if user is None:
                        raise UserNotFoundError(meta={"id": str(user_id)})
                    user.password_hash = hash_password(payload.password)
            except BaseError:
                raise
            except Exception as e:
                raise classify_error(e, {"call": "users.update"}) from e

            logger.info("User password changed", user_id=str(user_id))
            return True

    async def delete_account(self, session: Session) -> bool:
        """Delete the caller's account, everything it owns, and its session."""
        log_request("deleteUser", session.user_id)
        with error_boundary("deleteUser", session.user_id):
            user_id = authorize(session)

            try:
                async with self._session_factory() as db:
                    result = await db.execute(delete(Users).where(Users.id == user_id))
                    deleted = result.rowcount
            except Exception as e:
                raise classify_error(e, {"call": "users.remove"}) from e

            if not deleted:
                raise UserNotFoundError(meta={"id": str(user_id)})

            await self.session_store.destroy(session)
            logger.info("User deleted", user_id=str(user_id))
            return True

    async def current_user(self, session: Session) -> UserRecord | None:
        """The signed-in user, or None for anonymous sessions."""
        if session.user_id is None:
            return None
        with error_boundary("me", session.user_id):
            return await self.get_user(session.user_id)

    async def get_user(self, user_id: UUID) -> UserRecord | None:
        try:
            async with self._session_factory() as db:
                user = await db.get(Users, user_id)
                return UserRecord.model_validate(user) if user is not None else None
        except Exception as e:
            raise classify_error(e, {"call": "users.get"}) from e

    async def _taken_fields(self, db: Any, email: str, username: str) -> list[str]:
        stmt = select(Users.email, Users.username).where(
            or_(
                func.lower(Users.email) == email.lower(),
                func.lower(Users.username) == username.lower(),
            )
        )
        taken: set[str] = set()
        for row in (await db.execute(stmt)).all():
            if row.email.lower() == email.lower():
                taken.add("email")
            if row.username.lower() == username.lower():
                taken.add("username")
        return sorted(taken)

    async def _rotate(self, session: Session, user_id: UUID) -> Session:
        if session.session_id:
            await self.session_store.destroy(session)
        return await self.session_store.create(user_id)

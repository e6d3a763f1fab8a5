"""Identity guard: turn a session into the id of the calling user."""

from __future__ import annotations

from uuid import UUID

from ..errors import AuthenticationError
from .session import Session


def authorize(session: Session | None) -> UUID:
    """Return the session's user id, or raise if the session is unauthenticated.

    Pure: performs no I/O and never mutates the session.

    Raises:
        AuthenticationError: If the session carries no user id
    """
    if session is None or session.user_id is None:
        raise AuthenticationError(
            meta={"session_id": session.session_id if session else None},
        )
    return session.user_id

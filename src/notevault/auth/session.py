"""Redis-backed session store.

A session is keyed by an opaque identifier carried in a cookie. The stored
value records which user, if any, the session belongs to.
"""

from __future__ import annotations

import json
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

import redis.asyncio as redis
from redis.exceptions import RedisError

from ..config import settings
from ..errors import classify_error
from ..logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Session:
    """Request-scoped view of a stored session."""

    session_id: str | None
    user_id: UUID | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


ANONYMOUS = Session(session_id=None)


def generate_session_id() -> str:
    return secrets.token_urlsafe(32)


class SessionStore:
    """Create, load and destroy sessions in Redis."""

    def __init__(
        self,
        client: redis.Redis | None = None,
        *,
        prefix: str | None = None,
        ttl_seconds: int | None = None,
    ):
        self._client = client
        self.prefix = prefix or settings.session_key_prefix
        self.ttl_seconds = settings.session_ttl_seconds if ttl_seconds is None else ttl_seconds

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            from ..redis_pool import get_redis_client

            self._client = get_redis_client()
        return self._client

    def _key(self, session_id: str) -> str:
        return f"{self.prefix}:{session_id}"

    async def load(self, session_id: str | None) -> Session:
        """Load a session by id.

        Unknown or expired ids yield an unauthenticated session that keeps the
        presented id, so it can still be reported in error metadata.
        """
        if not session_id:
            return ANONYMOUS

        try:
            raw = await self.client.get(self._key(session_id))
        except RedisError as e:
            raise classify_error(e, {"operation": "session.load"}) from e

        if raw is None:
            return Session(session_id=session_id)

        try:
            data = json.loads(raw)
            user_id = UUID(data["user_id"]) if data.get("user_id") else None
        except (ValueError, KeyError, TypeError):
            logger.warning("Discarding malformed session payload", session_id=session_id)
            return Session(session_id=session_id)

        return Session(session_id=session_id, user_id=user_id)

    async def create(self, user_id: UUID) -> Session:
        """Start a new session for a user."""
        session_id = generate_session_id()
        payload = json.dumps(
            {
                "user_id": str(user_id),
                "created_at": datetime.now(UTC).isoformat(),
            }
        )
        try:
            await self.client.set(self._key(session_id), payload, ex=self.ttl_seconds)
        except RedisError as e:
            raise classify_error(e, {"operation": "session.create"}) from e

        logger.info("Session created", user_id=str(user_id))
        return Session(session_id=session_id, user_id=user_id)

    async def destroy(self, session: Session) -> None:
        """Delete a session. Destroying an unknown session is a no-op."""
        if not session.session_id:
            return
        try:
            await self.client.delete(self._key(session.session_id))
        except RedisError as e:
            raise classify_error(e, {"operation": "session.destroy"}) from e

        logger.info(
            "Session destroyed",
            user_id=str(session.user_id) if session.user_id else None,
        )

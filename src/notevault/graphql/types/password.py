"""
Password entry GraphQL type definitions

Stored credential fields are returned to their owner only; lookups are
always scoped to the calling user.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated
from uuid import UUID

import strawberry

from .common import Priority

if TYPE_CHECKING:
    from ...schemas import PasswordRecord
    from .user import User


@strawberry.type
class PasswordEntry:
    """Password entry type for GraphQL API."""

    id: UUID
    user_id: UUID
    fieldname: str
    email: str | None
    username: str | None
    password: str | None
    priority: Priority
    is_deleted: bool
    deleted_at: datetime | None
    created_at: datetime
    updated_at: datetime

    @strawberry.field
    async def user(
        self, info: strawberry.Info
    ) -> Annotated["User", strawberry.lazy(".user")] | None:
        """Get the owner of this entry."""
        from ..resolvers.user import resolve_user_by_id

        return await resolve_user_by_id(info, self.user_id)

    @classmethod
    def from_record(cls, record: "PasswordRecord") -> "PasswordEntry":
        return cls(
            id=record.id,
            user_id=record.user_id,
            fieldname=record.fieldname,
            email=record.email,
            username=record.username,
            password=record.password,
            priority=Priority(record.priority.value),
            is_deleted=record.is_deleted,
            deleted_at=record.deleted_at,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

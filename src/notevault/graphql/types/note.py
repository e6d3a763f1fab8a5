"""
Note GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated
from uuid import UUID

import strawberry

if TYPE_CHECKING:
    from ...schemas import NoteRecord
    from .user import User


@strawberry.type
class Note:
    """Note type for GraphQL API."""

    id: UUID
    user_id: UUID
    title: str
    body: str | None
    is_deleted: bool
    deleted_at: datetime | None
    created_at: datetime
    updated_at: datetime

    @strawberry.field
    async def user(
        self, info: strawberry.Info
    ) -> Annotated["User", strawberry.lazy(".user")] | None:
        """Get the owner of this note."""
        from ..resolvers.user import resolve_user_by_id

        return await resolve_user_by_id(info, self.user_id)

    @classmethod
    def from_record(cls, record: "NoteRecord") -> "Note":
        return cls(
            id=record.id,
            user_id=record.user_id,
            title=record.title,
            body=record.body,
            is_deleted=record.is_deleted,
            deleted_at=record.deleted_at,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

"""
Todo GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated
from uuid import UUID

import strawberry

from .common import Priority

if TYPE_CHECKING:
    from ...schemas import TodoRecord
    from .user import User


@strawberry.type
class Todo:
    """Todo type for GraphQL API."""

    id: UUID
    user_id: UUID
    title: str
    body: str | None
    priority: Priority
    due_date: datetime
    is_deleted: bool
    deleted_at: datetime | None
    created_at: datetime
    updated_at: datetime

    @strawberry.field
    async def user(
        self, info: strawberry.Info
    ) -> Annotated["User", strawberry.lazy(".user")] | None:
        """Get the owner of this todo."""
        from ..resolvers.user import resolve_user_by_id

        return await resolve_user_by_id(info, self.user_id)

    @classmethod
    def from_record(cls, record: "TodoRecord") -> "Todo":
        return cls(
            id=record.id,
            user_id=record.user_id,
            title=record.title,
            body=record.body,
            priority=Priority(record.priority.value),
            due_date=record.due_date,
            is_deleted=record.is_deleted,
            deleted_at=record.deleted_at,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

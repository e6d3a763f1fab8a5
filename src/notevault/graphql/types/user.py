"""
User GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

import strawberry

if TYPE_CHECKING:
    from ...schemas import UserRecord


@strawberry.type
class User:
    """User type for GraphQL API."""

    id: UUID
    email: str
    username: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: "UserRecord") -> "User":
        return cls(
            id=record.id,
            email=record.email,
            username=record.username,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

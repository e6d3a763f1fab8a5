"""
Root GraphQL query definitions
"""

from uuid import UUID

import strawberry

from ..types.note import Note
from ..types.password import PasswordEntry
from ..types.todo import Todo
from ..types.user import User


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    def hello(self) -> str:
        return "Hello world"

    @strawberry.field
    async def me(self, info: strawberry.Info) -> User | None:
        """Get the current authenticated user."""
        from ..resolvers.user import resolve_current_user

        return await resolve_current_user(info)

    @strawberry.field
    async def notes(
        self, info: strawberry.Info, is_deleted: bool | None = None, cursor: int | None = 0
    ) -> list[Note]:
        """Get a page of the caller's notes, newest first."""
        from ..resolvers.note import note_resolvers

        return await note_resolvers.list(info, is_deleted, cursor or 0)

    @strawberry.field
    async def note(self, info: strawberry.Info, id: UUID) -> Note:
        from ..resolvers.note import note_resolvers

        return await note_resolvers.get(info, id)

    @strawberry.field
    async def todos(
        self, info: strawberry.Info, is_deleted: bool | None = None, cursor: int | None = 0
    ) -> list[Todo]:
        """Get a page of the caller's todos, newest first."""
        from ..resolvers.todo import todo_resolvers

        return await todo_resolvers.list(info, is_deleted, cursor or 0)

    @strawberry.field
    async def todo(self, info: strawberry.Info, id: UUID) -> Todo:
        from ..resolvers.todo import todo_resolvers

        return await todo_resolvers.get(info, id)

    @strawberry.field
    async def passwords(
        self, info: strawberry.Info, is_deleted: bool | None = None, cursor: int | None = 0
    ) -> list[PasswordEntry]:
        """Get a page of the caller's password entries, newest first."""
        from ..resolvers.password import password_resolvers

        return await password_resolvers.list(info, is_deleted, cursor or 0)

    @strawberry.field
    async def password(self, info: strawberry.Info, id: UUID) -> PasswordEntry:
        from ..resolvers.password import password_resolvers

        return await password_resolvers.get(info, id)

"""
Root GraphQL mutation definitions
"""

from datetime import datetime
from uuid import UUID

import strawberry

from ..types.common import Priority
from ..types.note import Note
from ..types.password import PasswordEntry
from ..types.todo import Todo
from ..types.user import User


# Input types for mutations
@strawberry.input
class CreateNoteInput:
    """Input for creating a note."""

    title: str
    body: str | None = None


@strawberry.input
class UpdateNoteInput:
    """Input for updating a note. Omitted fields are left unchanged."""

    id: UUID
    title: str | None = None
    body: str | None = None


@strawberry.input
class CreateTodoInput:
    """Input for creating a todo."""

    title: str
    body: str | None = None
    priority: Priority | None = None
    due_date: datetime | None = None


@strawberry.input
class UpdateTodoInput:
    """Input for updating a todo. Omitted fields are left unchanged."""

    id: UUID
    title: str | None = None
    body: str | None = None
    priority: Priority | None = None
    due_date: datetime | None = None


@strawberry.input
class CreatePasswordInput:
    """Input for creating a password entry."""

    fieldname: str
    email: str | None = None
    username: str | None = None
    password: str | None = None
    priority: Priority | None = None


@strawberry.input
class UpdatePasswordInput:
    """Input for updating a password entry. Omitted fields are left unchanged."""

    id: UUID
    fieldname: str | None = None
    email: str | None = None
    username: str | None = None
    password: str | None = None
    priority: Priority | None = None


@strawberry.input
class CreateUserInput:
    username: str
    email: str
    password: str


@strawberry.input
class LoginUserInput:
    username: str
    password: str


@strawberry.input
class UpdateUserInput:
    password: str


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # Note mutations
    @strawberry.mutation(name="createNote")
    async def create_note(self, info: strawberry.Info, input: CreateNoteInput) -> Note:
        """Create a note. A taken title gets a numeric suffix."""
        from ..resolvers.note import note_resolvers

        return await note_resolvers.create(info, input)

    @strawberry.mutation(name="updateNote")
    async def update_note(self, info: strawberry.Info, input: UpdateNoteInput) -> Note:
        from ..resolvers.note import note_resolvers

        return await note_resolvers.update(info, input)

    @strawberry.mutation(name="softDeleteNote")
    async def soft_delete_note(self, info: strawberry.Info, id: UUID) -> Note:
        """Move a note to the trash."""
        from ..resolvers.note import note_resolvers

        return await note_resolvers.soft_delete(info, id)

    @strawberry.mutation(name="restoreNote")
    async def restore_note(self, info: strawberry.Info, id: UUID) -> Note:
        """Bring a note back from the trash."""
        from ..resolvers.note import note_resolvers

        return await note_resolvers.restore(info, id)

    @strawberry.mutation(name="deleteNote")
    async def delete_note(self, info: strawberry.Info, id: UUID) -> Note:
        """Delete a note permanently. Returns its last state."""
        from ..resolvers.note import note_resolvers

        return await note_resolvers.hard_delete(info, id)

    # Todo mutations
    @strawberry.mutation(name="createTodo")
    async def create_todo(self, info: strawberry.Info, input: CreateTodoInput) -> Todo:
        """Create a todo. A taken title gets a numeric suffix."""
        from ..resolvers.todo import todo_resolvers

        return await todo_resolvers.create(info, input)

    @strawberry.mutation(name="updateTodo")
    async def update_todo(self, info: strawberry.Info, input: UpdateTodoInput) -> Todo:
        from ..resolvers.todo import todo_resolvers

        return await todo_resolvers.update(info, input)

    @strawberry.mutation(name="softDeleteTodo")
    async def soft_delete_todo(self, info: strawberry.Info, id: UUID) -> Todo:
        from ..resolvers.todo import todo_resolvers

        return await todo_resolvers.soft_delete(info, id)

    @strawberry.mutation(name="restoreTodo")
    async def restore_todo(self, info: strawberry.Info, id: UUID) -> Todo:
        from ..resolvers.todo import todo_resolvers

        return await todo_resolvers.restore(info, id)

    @strawberry.mutation(name="deleteTodo")
    async def delete_todo(self, info: strawberry.Info, id: UUID) -> Todo:
        from ..resolvers.todo import todo_resolvers

        return await todo_resolvers.hard_delete(info, id)

    # Password mutations
    @strawberry.mutation(name="createPassword")
    async def create_password(
        self, info: strawberry.Info, input: CreatePasswordInput
    ) -> PasswordEntry:
        """Create a password entry. A taken fieldname gets a numeric suffix."""
        from ..resolvers.password import password_resolvers

        return await password_resolvers.create(info, input)

    @strawberry.mutation(name="updatePassword")
    async def update_password(
        self, info: strawberry.Info, input: UpdatePasswordInput
    ) -> PasswordEntry:
        from ..resolvers.password import password_resolvers

        return await password_resolvers.update(info, input)

    @strawberry.mutation(name="softDeletePassword")
    async def soft_delete_password(self, info: strawberry.Info, id: UUID) -> PasswordEntry:
        from ..resolvers.password import password_resolvers

        return await password_resolvers.soft_delete(info, id)

    @strawberry.mutation(name="restorePassword")
    async def restore_password(self, info: strawberry.Info, id: UUID) -> PasswordEntry:
        from ..resolvers.password import password_resolvers

        return await password_resolvers.restore(info, id)

    @strawberry.mutation(name="deletePassword")
    async def delete_password(self, info: strawberry.Info, id: UUID) -> PasswordEntry:
        from ..resolvers.password import password_resolvers

        return await password_resolvers.hard_delete(info, id)

    # Account mutations
    @strawberry.mutation(name="createUser")
    async def create_user(self, info: strawberry.Info, input: CreateUserInput) -> User:
        """Register an account and sign it in."""
        from ..resolvers.user import create_user

        return await create_user(info, input)

    @strawberry.mutation(name="loginUser")
    async def login_user(self, info: strawberry.Info, input: LoginUserInput) -> User:
        from ..resolvers.user import login_user

        return await login_user(info, input)

    @strawberry.mutation(name="logoutUser")
    async def logout_user(self, info: strawberry.Info) -> bool:
        from ..resolvers.user import logout_user

        return await logout_user(info)

    @strawberry.mutation(name="updateUser")
    async def update_user(self, info: strawberry.Info, input: UpdateUserInput) -> bool:
        """Change the caller's password."""
        from ..resolvers.user import update_user

        return await update_user(info, input)

    @strawberry.mutation(name="deleteUser")
    async def delete_user(self, info: strawberry.Info) -> bool:
        """Delete the caller's account and everything it owns."""
        from ..resolvers.user import delete_user

        return await delete_user(info)

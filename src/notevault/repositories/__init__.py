"""SQLAlchemy-backed resource adapters."""

from .base import SqlAlchemyRepository
from .note import NoteRepository
from .password import PasswordRepository
from .todo import TodoRepository

__all__ = ["NoteRepository", "PasswordRepository", "SqlAlchemyRepository", "TodoRepository"]

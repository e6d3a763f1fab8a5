"""Input validation and record models."""

from .resources import (
    NoteCreate,
    NoteRecord,
    NoteUpdate,
    PasswordCreate,
    PasswordRecord,
    PasswordUpdate,
    Priority,
    ResourceRecord,
    TodoCreate,
    TodoRecord,
    TodoUpdate,
)
from .users import PasswordChange, UserCreate, UserLogin, UserRecord
from .validation import validate_input, validation_issues

__all__ = [
    "NoteCreate",
    "NoteRecord",
    "NoteUpdate",
    "PasswordChange",
    "PasswordCreate",
    "PasswordRecord",
    "PasswordUpdate",
    "Priority",
    "ResourceRecord",
    "TodoCreate",
    "TodoRecord",
    "TodoUpdate",
    "UserCreate",
    "UserLogin",
    "UserRecord",
    "validate_input",
    "validation_issues",
]

"""
Payload and record models for notes, todos and password entries.

Create models require the name field; update models make every field
optional so that only supplied fields are merged. Lifecycle fields
(is_deleted, deleted_at) and ownership are never accepted as input.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import ClassVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ..dbmodels import utcnow

NAME_MAX_LENGTH = 255


class Priority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class _Input(BaseModel):
    model_config = ConfigDict(extra="forbid", use_enum_values=True, validate_default=True)


# Notes


class NoteCreate(_Input):
    title: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    body: str | None = None


class NoteUpdate(_Input):
    title: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    body: str | None = None


# Todos


class TodoCreate(_Input):
    title: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    body: str | None = None
    priority: Priority = Priority.LOW
    due_date: datetime = Field(default_factory=utcnow)


class TodoUpdate(_Input):
    title: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    body: str | None = None
    priority: Priority | None = None
    due_date: datetime | None = None


# Password entries


class PasswordCreate(_Input):
    fieldname: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    email: str | None = Field(default=None, max_length=255)
    username: str | None = Field(default=None, max_length=255)
    password: str | None = None
    priority: Priority = Priority.LOW


class PasswordUpdate(_Input):
    fieldname: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    email: str | None = Field(default=None, max_length=255)
    username: str | None = Field(default=None, max_length=255)
    password: str | None = None
    priority: Priority | None = None


# Records read back from storage


class ResourceRecord(BaseModel):
    """Stored state shared by every resource kind."""

    model_config = ConfigDict(from_attributes=True)

    name_field: ClassVar[str] = "title"

    id: UUID
    user_id: UUID
    is_deleted: bool = False
    deleted_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    @property
    def owner_id(self) -> UUID:
        return self.user_id

    @property
    def name(self) -> str:
        return getattr(self, self.name_field)

    @property
    def is_soft_deleted(self) -> bool:
        return self.is_deleted and self.deleted_at is not None


class NoteRecord(ResourceRecord):
    title: str
    body: str | None = None


class TodoRecord(ResourceRecord):
    title: str
    body: str | None = None
    priority: Priority = Priority.LOW
    due_date: datetime


class PasswordRecord(ResourceRecord):
    name_field: ClassVar[str] = "fieldname"

    fieldname: str
    email: str | None = None
    username: str | None = None
    password: str | None = None
    priority: Priority = Priority.LOW

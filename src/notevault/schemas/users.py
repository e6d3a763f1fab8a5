"""User account payloads."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    username: str = Field(min_length=5, max_length=255)
    email: EmailStr
    password: str = Field(min_length=5, max_length=20)


class UserLogin(BaseModel):
    username: str = Field(min_length=5, max_length=255)
    password: str = Field(min_length=5, max_length=20)


class PasswordChange(BaseModel):
    password: str = Field(min_length=5, max_length=20)


class UserRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    username: str
    created_at: datetime
    updated_at: datetime

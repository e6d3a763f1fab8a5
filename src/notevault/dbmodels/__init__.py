"""
Database models for Notevault (authoritative ORM definitions).

This module defines the SQLAlchemy Base with a naming convention for stable
Alembic autogenerate diffs, and exposes `target_metadata` for Alembic.

Every resource table carries a unique constraint on (user_id, <name column>):
the unique-name allocator picks free names, the constraint settles races
between concurrent creates.
"""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKeyConstraint,
    Index,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# Naming convention for deterministic constraint/index names in Alembic diffs
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all database models with type checking support."""

    metadata = MetaData(naming_convention=naming_convention)


class Users(Base):
    __tablename__ = "users"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="users_pkey"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(True), default=utcnow, onupdate=utcnow)

    notes: Mapped[list["Notes"]] = relationship(
        "Notes", uselist=True, back_populates="user", passive_deletes=True
    )
    todos: Mapped[list["Todos"]] = relationship(
        "Todos", uselist=True, back_populates="user", passive_deletes=True
    )
    passwords: Mapped[list["Passwords"]] = relationship(
        "Passwords", uselist=True, back_populates="user", passive_deletes=True
    )


class Notes(Base):
    __tablename__ = "notes"
    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            ondelete="CASCADE",
            name="notes_user_id_fkey",
        ),
        PrimaryKeyConstraint("id", name="notes_pkey"),
        UniqueConstraint("user_id", "title", name="notes_user_id_title_key"),
        Index("idx_notes_user_deleted", "user_id", "is_deleted"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    body: Mapped[str | None] = mapped_column(Text)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(True))
    created_at: Mapped[datetime] = mapped_column(DateTime(True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(True), default=utcnow, onupdate=utcnow)

    user: Mapped["Users"] = relationship("Users", back_populates="notes")


class Todos(Base):
    __tablename__ = "todos"
    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            ondelete="CASCADE",
            name="todos_user_id_fkey",
        ),
        PrimaryKeyConstraint("id", name="todos_pkey"),
        UniqueConstraint("user_id", "title", name="todos_user_id_title_key"),
        Index("idx_todos_user_deleted", "user_id", "is_deleted"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    body: Mapped[str | None] = mapped_column(Text)
    priority: Mapped[str] = mapped_column(String(16), nullable=False, default="LOW")
    due_date: Mapped[datetime] = mapped_column(DateTime(True), default=utcnow)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(True))
    created_at: Mapped[datetime] = mapped_column(DateTime(True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(True), default=utcnow, onupdate=utcnow)

    user: Mapped["Users"] = relationship("Users", back_populates="todos")


class Passwords(Base):
    __tablename__ = "passwords"
    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            ondelete="CASCADE",
            name="passwords_user_id_fkey",
        ),
        PrimaryKeyConstraint("id", name="passwords_pkey"),
        UniqueConstraint("user_id", "fieldname", name="passwords_user_id_fieldname_key"),
        Index("idx_passwords_user_deleted", "user_id", "is_deleted"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    fieldname: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255))
    username: Mapped[str | None] = mapped_column(String(255))
    password: Mapped[str | None] = mapped_column(Text)
    priority: Mapped[str] = mapped_column(String(16), nullable=False, default="LOW")
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(True))
    created_at: Mapped[datetime] = mapped_column(DateTime(True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(True), default=utcnow, onupdate=utcnow)

    user: Mapped["Users"] = relationship("Users", back_populates="passwords")


# Email and username are unique regardless of case
Index("users_email_lower_key", func.lower(Users.email), unique=True)
Index("users_username_lower_key", func.lower(Users.username), unique=True)


# Alembic target metadata
target_metadata = Base.metadata

__all__ = [
    "Base",
    "Users",
    "Notes",
    "Todos",
    "Passwords",
    "target_metadata",
    "utcnow",
]

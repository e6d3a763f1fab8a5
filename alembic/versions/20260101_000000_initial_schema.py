"""
Initial schema: users, notes, todos and password entries.

Revision ID: 20260101_000000_initial_schema
Revises:
Create Date: 2026-01-01 00:00:00
"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "20260101_000000_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    ]


def _soft_delete_columns() -> list[sa.Column]:
    return [
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    # users
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="users_pkey"),
    )
    op.create_index(
        "users_email_lower_key", "users", [sa.text("lower(email)")], unique=True
    )
    op.create_index(
        "users_username_lower_key", "users", [sa.text("lower(username)")], unique=True
    )

    # notes
    op.create_table(
        "notes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("body", sa.Text(), nullable=True),
        *_soft_delete_columns(),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], ondelete="CASCADE", name="notes_user_id_fkey"
        ),
        sa.PrimaryKeyConstraint("id", name="notes_pkey"),
        sa.UniqueConstraint("user_id", "title", name="notes_user_id_title_key"),
    )
    op.create_index("idx_notes_user_deleted", "notes", ["user_id", "is_deleted"])

    # todos
    op.create_table(
        "todos",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("body", sa.Text(), nullable=True),
        sa.Column("priority", sa.String(length=16), nullable=False, server_default="LOW"),
        sa.Column(
            "due_date",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        *_soft_delete_columns(),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], ondelete="CASCADE", name="todos_user_id_fkey"
        ),
        sa.PrimaryKeyConstraint("id", name="todos_pkey"),
        sa.UniqueConstraint("user_id", "title", name="todos_user_id_title_key"),
    )
    op.create_index("idx_todos_user_deleted", "todos", ["user_id", "is_deleted"])

    # passwords
    op.create_table(
        "passwords",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("fieldname", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("username", sa.String(length=255), nullable=True),
        sa.Column("password", sa.Text(), nullable=True),
        sa.Column("priority", sa.String(length=16), nullable=False, server_default="LOW"),
        *_soft_delete_columns(),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], ondelete="CASCADE", name="passwords_user_id_fkey"
        ),
        sa.PrimaryKeyConstraint("id", name="passwords_pkey"),
        sa.UniqueConstraint("user_id", "fieldname", name="passwords_user_id_fieldname_key"),
    )
    op.create_index("idx_passwords_user_deleted", "passwords", ["user_id", "is_deleted"])


def downgrade() -> None:
    # drop in reverse dependency order
    op.drop_index("idx_passwords_user_deleted", table_name="passwords")
    op.drop_table("passwords")

    op.drop_index("idx_todos_user_deleted", table_name="todos")
    op.drop_table("todos")

    op.drop_index("idx_notes_user_deleted", table_name="notes")
    op.drop_table("notes")

    op.drop_index("users_username_lower_key", table_name="users")
    op.drop_index("users_email_lower_key", table_name="users")
    op.drop_table("users")

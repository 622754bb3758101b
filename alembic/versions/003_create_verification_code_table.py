"""Create verification_code table

Revision ID: 003
Revises: 002
Create Date: 2026-10-17

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "003"
down_revision: str | None = "002"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "verification_code",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("user_id", sa.String(length=32), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_verification_code_user_id"), "verification_code", ["user_id"], unique=False)
    op.create_index(op.f("ix_verification_code_expires_at"), "verification_code", ["expires_at"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_verification_code_expires_at"), table_name="verification_code")
    op.drop_index(op.f("ix_verification_code_user_id"), table_name="verification_code")
    op.drop_table("verification_code")

"""communities and profiles

Revision ID: a1c3e5f70b21
Revises:
Create Date: 2026-10-17 09:12:44.518302

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "a1c3e5f70b21"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the community and user_profile tables."""
    op.create_table(
        "community",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("invitation_code", sa.String(length=64), nullable=True),
        sa.Column("members", sa.JSON(), nullable=True),
        sa.Column("confirmed_attendees", sa.JSON(), nullable=True),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("cover_image", sa.Text(), nullable=True),
        sa.Column("event_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_by", sa.String(length=320), nullable=True),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_community_invitation_code", "community", ["invitation_code"])
    op.create_index("ix_community_created_by", "community", ["created_by"])

    op.create_table(
        "user_profile",
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("full_name", sa.Text(), nullable=True),
        sa.Column("phone_number", sa.String(length=64), nullable=True),
        sa.Column("allergies", sa.JSON(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("email"),
    )


def downgrade() -> None:
    """Drop the community and user_profile tables."""
    op.drop_table("user_profile")
    op.drop_index("ix_community_created_by", table_name="community")
    op.drop_index("ix_community_invitation_code", table_name="community")
    op.drop_table("community")

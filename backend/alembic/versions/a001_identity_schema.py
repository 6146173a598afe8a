"""Identity schema - users and identity_blacklist tables.

Revision ID: 001_identity
Revises:
Create Date: 2026-10-19

"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision = "001_identity"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Users table, one row per (provider, provider_id)
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("provider", sa.String(16), nullable=False),
        sa.Column("provider_id", sa.String(512), nullable=False),
        sa.Column("date_of_birth", sa.String(32), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("links", postgresql.JSON(astext_type=sa.Text()), nullable=False, server_default="[]"),
        sa.Column("contact_email", sa.String(320), nullable=True),
        sa.Column("contact_facebook_url", sa.Text(), nullable=True),
        sa.Column("phone_number", sa.String(64), nullable=True),
        sa.Column("cv_file_path", sa.Text(), nullable=True),
        sa.Column("portfolio_file_path", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("provider", "provider_id", name="uq_users_provider_identity"),
    )
    op.create_index("ix_users_name", "users", ["name"])

    # Revoked identifiers, provider-agnostic
    op.create_table(
        "identity_blacklist",
        sa.Column("identifier", sa.String(512), primary_key=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("identity_blacklist")
    op.drop_index("ix_users_name", table_name="users")
    op.drop_table("users")

"""Initial schema — accounts and offers.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("newsletter", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("avatar", sa.JSON, nullable=True),
        sa.Column("password_salt", sa.String(128), nullable=False),
        sa.Column("password_hash", sa.String(64), nullable=False),
        sa.Column("auth_token", sa.String(128), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("email", name="uq_accounts_email"),
    )
    op.create_index("ix_accounts_auth_token", "accounts", ["auth_token"], unique=True)

    op.create_table(
        "offers",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("price", sa.Float, nullable=False),
        sa.Column("details", sa.JSON, nullable=False),
        sa.Column("image", sa.JSON, nullable=True),
        sa.Column("owner_id", UUID(as_uuid=True), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_offers_price", "offers", ["price"])
    op.create_index("ix_offers_created_at", "offers", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_offers_created_at", table_name="offers")
    op.drop_index("ix_offers_price", table_name="offers")
    op.drop_table("offers")
    op.drop_index("ix_accounts_auth_token", table_name="accounts")
    op.drop_table("accounts")

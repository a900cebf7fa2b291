"""Account ORM — persists a marketplace user and their credential triple.

Invariants:
    - email is unique (store-level index; check-then-insert alone is racy)
    - (password_salt, password_hash, auth_token) set once at creation, never updated
    - auth_token is unique and indexed: the bearer lookup path

Design Decisions:
    - avatar as JSON: opaque upload-service metadata, null until set
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, JSON, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from marketplace.db.base import Base


class Account(Base):
    """Account entity — owns offers."""
    __tablename__ = "accounts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True,
    )
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    newsletter: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    avatar: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    password_salt: Mapped[str] = mapped_column(String(128), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    auth_token: Mapped[str] = mapped_column(
        String(128), nullable=False, unique=True, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

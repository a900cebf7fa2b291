"""Offer ORM — persists a listing published by an account.

Invariants:
    - owner_id is set once at creation from the authenticated caller
    - details is an ordered list of single-key mappings (display order matters)
    - image holds the full upload-service response, or null

Design Decisions:
    - owner loaded with selectin: every read path projects the owner
    - created_at indexed: it is the storage order and the sort tie-breaker
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, ForeignKey, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from marketplace.db.base import Base


class Offer(Base):
    """Offer entity — a listing with price, details and optional image."""
    __tablename__ = "offers"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[float] = mapped_column(Float, nullable=False, index=True)
    details: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    image: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("accounts.id"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    owner: Mapped["Account"] = relationship(
        "Account", lazy="selectin",
    )

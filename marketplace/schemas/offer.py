"""Offer Schemas — public offer representation and search envelope.

Invariants:
    - OwnerSummary projects username and avatar only; credential fields cannot leak
    - OfferSearchResponse.count is the total match count, not the page length
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class OwnerSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    username: str
    avatar: dict | None = None


class OfferResponse(BaseModel):
    """Offer as returned by publish, search, and single fetch."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    price: float
    details: list[dict[str, str | None]]
    image: dict | None = None
    owner: OwnerSummary
    created_at: datetime


class OfferSearchResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    count: int
    matched_offers: list[OfferResponse] = Field(alias="matchedOffers")

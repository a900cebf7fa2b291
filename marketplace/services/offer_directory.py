"""Offer Directory — publish, search, and single-offer lookup.

Invariants:
    - publish() uploads the picture before writing; an upload failure writes nothing
    - publish() sets the owner from the authenticated principal only
    - search() returns (page, total) where total ignores pagination
    - find_by_id() returns None for unknown or malformed ids
"""

import logging
import math
from dataclasses import dataclass

from marketplace.core.domain_types import OfferId, build_offer_details
from marketplace.core.errors import ValidationError
from marketplace.core.offer_query import OfferQuery
from marketplace.core.repository_protocols import (
    AccountLike, AssetUploader, OfferLike, OfferRepository,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OfferDraft:
    """Publish form fields, before validation."""
    title: str | None
    description: str | None
    price: float | None
    condition: str | None = None
    city: str | None = None
    brand: str | None = None
    size: str | None = None
    color: str | None = None


@dataclass(frozen=True)
class Picture:
    data: bytes
    mime_type: str


class OfferDirectory:
    """Owns offer records behind an OfferRepository."""

    def __init__(self, offers: OfferRepository, uploader: AssetUploader | None = None):
        self.offers = offers
        self.uploader = uploader

    async def publish(
        self,
        owner: AccountLike,
        draft: OfferDraft,
        picture: Picture | None = None,
    ) -> OfferLike:
        _validate_draft(draft)

        image = None
        if picture is not None:
            if self.uploader is None:
                raise RuntimeError("Asset uploader not configured")
            image = await self.uploader.upload(picture.data, picture.mime_type)

        offer = await self.offers.add(
            owner=owner,
            title=draft.title,
            description=draft.description or "",
            price=draft.price,
            details=build_offer_details(
                brand=draft.brand,
                size=draft.size,
                condition=draft.condition,
                color=draft.color,
                city=draft.city,
            ),
            image=image,
        )
        logger.info(
            "Offer published",
            extra={"offer_id": str(offer.id), "account_id": str(owner.id)},
        )
        return offer

    async def search(self, query: OfferQuery) -> tuple[list[OfferLike], int]:
        return await self.offers.search(query)

    async def find_by_id(self, offer_id: OfferId | str) -> OfferLike | None:
        return await self.offers.find_by_id(offer_id)


def _validate_draft(draft: OfferDraft) -> None:
    if not draft.title:
        raise ValidationError("Missing required fields: title", field="title")
    if draft.price is None:
        raise ValidationError("Missing required fields: price", field="price")
    if not math.isfinite(draft.price) or draft.price < 0:
        raise ValidationError("Price must be a non-negative number", field="price")

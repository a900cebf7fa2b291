"""Offer Routes — publish (protected), search, and single-offer fetch.

Invariants:
    - /offer/publish resolves the principal before reading the picture or writing
    - /offers never rejects a request for malformed filter parameters
    - /offers/{offer_id} answers 404 for unknown or malformed ids
"""

import logging

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status

from marketplace.api.deps import (
    get_current_account, get_offer_directory, get_publishing_directory,
)
from marketplace.core.errors import NotFoundError
from marketplace.core.offer_query import build_offer_query
from marketplace.core.repository_protocols import AccountLike
from marketplace.schemas.offer import OfferResponse, OfferSearchResponse
from marketplace.services.offer_directory import OfferDirectory, OfferDraft, Picture

logger = logging.getLogger(__name__)
router = APIRouter(tags=["offers"])


@router.post(
    "/offer/publish", response_model=OfferResponse,
    status_code=status.HTTP_201_CREATED,
)
async def publish_offer(
    account: AccountLike = Depends(get_current_account),
    title: str | None = Form(None),
    description: str | None = Form(None),
    price: float | None = Form(None),
    condition: str | None = Form(None),
    city: str | None = Form(None),
    brand: str | None = Form(None),
    size: str | None = Form(None),
    color: str | None = Form(None),
    picture: UploadFile | None = File(None),
    offers: OfferDirectory = Depends(get_publishing_directory),
):
    """Publish an offer owned by the caller, with an optional picture."""
    draft = OfferDraft(
        title=title, description=description, price=price,
        condition=condition, city=city, brand=brand, size=size, color=color,
    )
    upload = None
    if picture is not None:
        upload = Picture(
            data=await picture.read(),
            mime_type=picture.content_type or "application/octet-stream",
        )
    offer = await offers.publish(account, draft, upload)
    return OfferResponse.model_validate(offer)


@router.get("/offers", response_model=OfferSearchResponse)
async def search_offers(
    request: Request,
    offers: OfferDirectory = Depends(get_offer_directory),
):
    """Filter by title/price, sort by price, paginate; count covers all pages."""
    query = build_offer_query(request.query_params)
    matched, total = await offers.search(query)
    return OfferSearchResponse(
        count=total,
        matched_offers=[OfferResponse.model_validate(o) for o in matched],
    )


@router.get("/offers/{offer_id}", response_model=OfferResponse)
async def get_offer(
    offer_id: str,
    offers: OfferDirectory = Depends(get_offer_directory),
):
    """Fetch one offer with its owner projection."""
    offer = await offers.find_by_id(offer_id)
    if offer is None:
        raise NotFoundError("Offer", offer_id)
    return OfferResponse.model_validate(offer)

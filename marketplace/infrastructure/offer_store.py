"""Offer Store — SQLAlchemy implementation of OfferRepository.

Invariants:
    - search() counts matches with the same WHERE clause as the page query,
      before skip/limit, so count covers every page
    - Ordering always ends with (created_at, id): pages partition the match set
    - Title filter is an escaped ILIKE: the client pattern is matched literally
    - find_by_id() treats a malformed id as absent
"""

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.domain_types import OfferId, SortDirection
from marketplace.core.offer_query import OfferQuery
from marketplace.models.account import Account
from marketplace.models.offer import Offer

logger = logging.getLogger(__name__)

_LIKE_ESCAPE = "\\"


def escape_like(pattern: str) -> str:
    """Escape LIKE wildcards so the pattern matches literally."""
    return (
        pattern.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


def offer_conditions(query: OfferQuery) -> list:
    """WHERE clauses equivalent to OfferQuery.matches()."""
    conditions = []
    if query.title_pattern is not None:
        conditions.append(
            Offer.title.ilike(
                f"%{escape_like(query.title_pattern)}%", escape=_LIKE_ESCAPE,
            ),
        )
    if query.price_min is not None:
        conditions.append(Offer.price >= query.price_min)
    if query.price_max is not None:
        conditions.append(Offer.price <= query.price_max)
    return conditions


def offer_ordering(query: OfferQuery) -> list:
    """ORDER BY clauses equivalent to OfferQuery.sort_key() plus tie-breakers."""
    ordering = []
    if query.sort_direction is SortDirection.ASC:
        ordering.append(Offer.price.asc())
    elif query.sort_direction is SortDirection.DESC:
        ordering.append(Offer.price.desc())
    ordering.extend([Offer.created_at.asc(), Offer.id.asc()])
    return ordering


class SqlOfferStore:
    """Offer persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def add(
        self,
        *,
        owner: Account,
        title: str,
        description: str,
        price: float,
        details: list,
        image: dict | None,
    ) -> Offer:
        offer = Offer(
            title=title,
            description=description,
            price=price,
            details=details,
            image=image,
            owner=owner,
        )
        self._db.add(offer)
        await self._db.commit()
        return offer

    async def search(self, query: OfferQuery) -> tuple[list[Offer], int]:
        conditions = offer_conditions(query)
        page_stmt = (
            select(Offer)
            .where(*conditions)
            .order_by(*offer_ordering(query))
            .offset(query.offset)
            .limit(query.page_size)
        )
        count_stmt = select(func.count(Offer.id)).where(*conditions)

        offers = list((await self._db.execute(page_stmt)).scalars().all())
        total = (await self._db.execute(count_stmt)).scalar_one()
        logger.debug(
            f"Offer search returned {len(offers)} of {total} matches",
        )
        return offers, int(total)

    async def find_by_id(self, offer_id: OfferId | str) -> Offer | None:
        try:
            key = offer_id if isinstance(offer_id, uuid.UUID) else uuid.UUID(str(offer_id))
        except ValueError:
            return None
        result = await self._db.execute(select(Offer).where(Offer.id == key))
        return result.scalar_one_or_none()
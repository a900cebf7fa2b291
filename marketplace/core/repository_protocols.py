"""Boundary Protocols — contracts between the directories and their collaborators.

Invariants:
    - Services depend on these Protocols, never on SQLAlchemy or httpx directly
    - Lookups return None on no match; absence is never an error here
    - add() persists a record durably or raises; no partial writes

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Records are the ORM objects themselves (AccountLike/OfferLike describe the
      attributes services read), keeping the stores thin
"""

from typing import Any, Protocol

from marketplace.core.domain_types import OfferId
from marketplace.core.offer_query import OfferQuery


class AccountLike(Protocol):
    """Structural contract for account records handed to services and routes."""
    id: Any
    email: str
    username: str
    newsletter: bool
    avatar: dict | None
    password_salt: str
    password_hash: str
    auth_token: str


class OfferLike(Protocol):
    """Structural contract for offer records."""
    id: Any
    title: str
    description: str
    price: float
    details: list
    image: dict | None
    owner: Any


class AccountRepository(Protocol):
    """Contract for account persistence — implemented by infrastructure/account_store.py."""
    async def find_by_email(self, email: str) -> AccountLike | None: ...
    async def find_by_token(self, token: str) -> AccountLike | None: ...
    async def add(
        self,
        *,
        email: str,
        username: str,
        newsletter: bool,
        password_salt: str,
        password_hash: str,
        auth_token: str,
    ) -> AccountLike: ...


class OfferRepository(Protocol):
    """Contract for offer persistence — implemented by infrastructure/offer_store.py."""
    async def add(
        self,
        *,
        owner: AccountLike,
        title: str,
        description: str,
        price: float,
        details: list,
        image: dict | None,
    ) -> OfferLike: ...
    async def search(self, query: OfferQuery) -> tuple[list[OfferLike], int]: ...
    async def find_by_id(self, offer_id: OfferId) -> OfferLike | None: ...


class AssetUploader(Protocol):
    """Contract for the image hosting service — implemented by infrastructure/asset_uploader.py."""
    async def upload(self, data: bytes, mime_type: str) -> dict: ...

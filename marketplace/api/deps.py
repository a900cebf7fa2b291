"""Request Dependencies — directories per request and the authentication gate.

Invariants:
    - One AsyncSession per request, shared by every dependency below (FastAPI caches get_db)
    - get_current_account runs before the route body: no protected write happens unauthenticated
    - The principal is returned to the route, never stored on the request object
    - Only the publish path depends on the asset uploader
"""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.config import get_settings
from marketplace.core.repository_protocols import AccountLike
from marketplace.infrastructure.account_store import SqlAccountStore
from marketplace.infrastructure.asset_uploader import CloudinaryUploader, get_uploader
from marketplace.infrastructure.database import get_db
from marketplace.infrastructure.offer_store import SqlOfferStore
from marketplace.services.account_directory import AccountDirectory
from marketplace.services.offer_directory import OfferDirectory


def get_account_directory(db: AsyncSession = Depends(get_db)) -> AccountDirectory:
    settings = get_settings()
    return AccountDirectory(
        SqlAccountStore(db),
        salt_bytes=settings.salt_bytes,
        token_bytes=settings.token_bytes,
    )


def get_offer_directory(db: AsyncSession = Depends(get_db)) -> OfferDirectory:
    """Read-only offer access; no uploader required."""
    return OfferDirectory(SqlOfferStore(db))


def get_publishing_directory(
    db: AsyncSession = Depends(get_db),
    uploader: CloudinaryUploader = Depends(get_uploader),
) -> OfferDirectory:
    return OfferDirectory(SqlOfferStore(db), uploader)


async def get_current_account(
    authorization: str | None = Header(None),
    accounts: AccountDirectory = Depends(get_account_directory),
) -> AccountLike:
    """Authentication gate: resolve `Authorization: Bearer <token>` to an account."""
    return await accounts.authenticate(authorization)

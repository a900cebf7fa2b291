"""Account Store — SQLAlchemy implementation of AccountRepository.

Invariants:
    - add() commits exactly one row or rolls back and raises
    - A unique-index violation on insert surfaces as ConflictError, never StoreError
    - Lookups return None on no match

Design Decisions:
    - Relies on the accounts.email unique index to close the check-then-insert race
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.errors import ConflictError
from marketplace.models.account import Account

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "Email already in use"


class SqlAccountStore:
    """Account persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def find_by_email(self, email: str) -> Account | None:
        result = await self._db.execute(
            select(Account).where(Account.email == email),
        )
        return result.scalar_one_or_none()

    async def find_by_token(self, token: str) -> Account | None:
        result = await self._db.execute(
            select(Account).where(Account.auth_token == token),
        )
        return result.scalar_one_or_none()

    async def add(
        self,
        *,
        email: str,
        username: str,
        newsletter: bool,
        password_salt: str,
        password_hash: str,
        auth_token: str,
    ) -> Account:
        account = Account(
            email=email,
            username=username,
            newsletter=newsletter,
            avatar=None,
            password_salt=password_salt,
            password_hash=password_hash,
            auth_token=auth_token,
        )
        self._db.add(account)
        try:
            await self._db.commit()
        except IntegrityError:
            await self._db.rollback()
            logger.warning("Concurrent signup rejected by unique index")
            raise ConflictError(EMAIL_TAKEN)
        await self._db.refresh(account)
        return account

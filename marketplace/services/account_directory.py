"""Account Directory — signup, credential login, and bearer token resolution.

Invariants:
    - create() validates input, then rejects a taken email, before any write
    - The (salt, hash, token) triple is generated once in create() and never touched again
    - login() returns the stored token unchanged; it never issues a new one
    - Unknown email and wrong password fail with the same UnauthorizedError message
    - authenticate() yields exactly the account whose auth_token matched
"""

import logging

from marketplace.core.authenticate import INVALID_TOKEN, extract_bearer_token
from marketplace.core.credentials import (
    AUTH_TOKEN_BYTES, SALT_BYTES,
    compute_hash, generate_random_token, verify_password,
)
from marketplace.core.errors import ConflictError, UnauthorizedError, ValidationError
from marketplace.core.repository_protocols import AccountLike, AccountRepository

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Missing required fields"
EMAIL_TAKEN = "Email already in use"
BAD_CREDENTIALS = "Invalid email or password"


def _require(**fields: str | None) -> None:
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise ValidationError(
            f"{MISSING_FIELDS}: {', '.join(missing)}", field=missing[0],
        )


class AccountDirectory:
    """Owns account records behind an AccountRepository."""

    def __init__(
        self,
        accounts: AccountRepository,
        salt_bytes: int = SALT_BYTES,
        token_bytes: int = AUTH_TOKEN_BYTES,
    ):
        self.accounts = accounts
        self.salt_bytes = salt_bytes
        self.token_bytes = token_bytes

    async def find_by_email(self, email: str) -> AccountLike | None:
        return await self.accounts.find_by_email(email)

    async def find_by_token(self, token: str) -> AccountLike | None:
        return await self.accounts.find_by_token(token)

    async def create(
        self,
        email: str | None,
        username: str | None,
        password: str | None,
        newsletter: bool = False,
    ) -> AccountLike:
        _require(email=email, username=username, password=password)

        if await self.accounts.find_by_email(email) is not None:
            raise ConflictError(EMAIL_TAKEN)

        salt = generate_random_token(self.salt_bytes)
        account = await self.accounts.add(
            email=email,
            username=username,
            newsletter=bool(newsletter),
            password_salt=salt,
            password_hash=compute_hash(password, salt),
            auth_token=generate_random_token(self.token_bytes),
        )
        logger.info("Account created", extra={"account_id": str(account.id)})
        return account

    async def login(self, email: str | None, password: str | None) -> AccountLike:
        _require(email=email, password=password)

        account = await self.accounts.find_by_email(email)
        if account is None:
            raise UnauthorizedError(BAD_CREDENTIALS)
        if not verify_password(password, account.password_salt, account.password_hash):
            logger.info("Login rejected", extra={"account_id": str(account.id)})
            raise UnauthorizedError(BAD_CREDENTIALS)
        return account

    async def authenticate(self, authorization: str | None) -> AccountLike:
        """Resolve an Authorization header to the calling account."""
        token = extract_bearer_token(authorization)
        account = await self.accounts.find_by_token(token) if token else None
        if account is None:
            raise UnauthorizedError(INVALID_TOKEN)
        return account
